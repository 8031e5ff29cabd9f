"""
storage.py — хранилище снапшотов турнира.

Один документ на турнир (JSONB в PostgreSQL). Запись — upsert по полям
верхнего уровня через `document || EXCLUDED.document`: поля, которых нет
в новом документе, остаются от прошлых проходов.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional

import psycopg
from psycopg.types.json import Jsonb

from snapshot import merge_fields

logger = logging.getLogger(__name__)

SNAPSHOTS_TABLE = "tournament_snapshots"


class PostgresSnapshotStore:
    def __init__(self, conninfo: str):
        self.conninfo = conninfo

    def _connect(self) -> psycopg.Connection:
        return psycopg.connect(self.conninfo)

    def ensure_schema(self) -> None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(f"""
                    CREATE TABLE IF NOT EXISTS public.{SNAPSHOTS_TABLE} (
                        tournament_id TEXT PRIMARY KEY,
                        document      JSONB NOT NULL DEFAULT '{{}}'::jsonb,

                        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                    );
                """)
            conn.commit()

    def load(self, tournament_id: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT document FROM public.{SNAPSHOTS_TABLE} WHERE tournament_id = %s;",
                    (tournament_id,),
                )
                row = cur.fetchone()
        return row[0] if row else None

    def save(self, tournament_id: str, document: Dict[str, Any]) -> None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO public.{SNAPSHOTS_TABLE} (tournament_id, document)
                    VALUES (%s, %s)
                    ON CONFLICT (tournament_id) DO UPDATE
                    SET document   = public.{SNAPSHOTS_TABLE}.document || EXCLUDED.document,
                        updated_at = now();
                    """,
                    (tournament_id, Jsonb(document)),
                )
            conn.commit()
        logger.info(
            "Снапшот %s сохранён: поля %s", tournament_id, ", ".join(sorted(document))
        )

    def ping(self) -> None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()


class MemorySnapshotStore:
    """Тот же интерфейс в памяти процесса: --dry-run и тесты."""

    def __init__(self, documents: Optional[Dict[str, Dict[str, Any]]] = None):
        self.documents: Dict[str, Dict[str, Any]] = documents or {}

    def ensure_schema(self) -> None:
        pass

    def load(self, tournament_id: str) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(tournament_id)
        return copy.deepcopy(doc) if doc is not None else None

    def save(self, tournament_id: str, document: Dict[str, Any]) -> None:
        prior = self.documents.get(tournament_id)
        self.documents[tournament_id] = merge_fields(prior, copy.deepcopy(document))

    def ping(self) -> None:
        pass
