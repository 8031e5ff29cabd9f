from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict

from fastapi import Depends, FastAPI, HTTPException

from config import load_settings
from storage import PostgresSnapshotStore

# ---------- Конфигурация и логирование ----------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("afcon_snapshot_api")

settings = load_settings()


# ---------- FastAPI-приложение ----------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Хранилище создаётся один раз на процесс, коннект — на запрос."""
    logger.info("Startup: хранилище снапшотов %s", settings.db_host)
    app.state.store = PostgresSnapshotStore(settings.conninfo)
    yield
    logger.info("Shutdown")


app = FastAPI(
    title="AFCON Snapshot API",
    description="Группы, матчи и сетка плей-офф турнира из последнего снапшота",
    version="1.0.0",
    lifespan=lifespan,
)


def get_store():
    store = getattr(app.state, "store", None)
    if store is None:
        store = PostgresSnapshotStore(settings.conninfo)
        app.state.store = store
    return store


def _load_document(store) -> Dict[str, Any]:
    try:
        document = store.load(settings.tournament_id)
    except Exception as e:
        logger.error(f"Ошибка при чтении снапшота {settings.tournament_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail="Внутренняя ошибка сервера при чтении снапшота",
        )

    if document is None:
        raise HTTPException(status_code=404, detail="Снапшот ещё не собран")
    return document


# ---------- Endpoints ----------

@app.get("/snapshot")
def snapshot(store=Depends(get_store)):
    """Документ целиком, как он лежит в базе."""
    return _load_document(store)


@app.get("/standings")
def standings(store=Depends(get_store)):
    document = _load_document(store)
    return {
        "last_updated": document.get("last_updated"),
        "standings": document.get("standings", []),
    }


@app.get("/games")
def games(store=Depends(get_store)):
    document = _load_document(store)
    items = document.get("games", [])
    return {
        "last_updated": document.get("last_updated"),
        "games": items,
        "total": len(items),
    }


@app.get("/bracket")
def bracket(store=Depends(get_store)):
    document = _load_document(store)
    return {
        "last_updated": document.get("last_updated"),
        "bracket": document.get("bracket", []),
    }


@app.get("/health")
def health_check(store=Depends(get_store)):
    """Проверка здоровья API и подключения к БД."""
    try:
        store.ping()
        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.now().isoformat(),
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
            "timestamp": datetime.now().isoformat(),
        }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=False,
    )
