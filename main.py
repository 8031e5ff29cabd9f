#!/usr/bin/env python3
"""
main.py — воркер снапшота турнира со страницы Википедии.

Один проход:
  1) скачиваем HTML страницы турнира;
  2) разбираем таблицы групп;
  3) разбираем матчи (карточки или сводную таблицу + календарь слотов);
  4) просим Gemini разобрать сетку плей-офф (может не получиться — не страшно);
  5) собираем документ, сортируем матчи по времени;
  6) upsert по полям в хранилище.

Падение скачивания или записи обрывает проход: в базе остаётся прошлый снапшот.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup

from bracket import GeminiBracketExtractor, extract_bracket
from config import Settings, load_settings
from games_parser import parse_games
from snapshot import Snapshot, build_snapshot
from standings_parser import parse_standings
from storage import MemorySnapshotStore, PostgresSnapshotStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ЛОГИ
# ---------------------------------------------------------------------------

def setup_logging(settings: Settings) -> None:
    os.makedirs(settings.log_dir, exist_ok=True)
    log_file = os.path.join(settings.log_dir, "snapshot.log")

    # Консоль + файл с ротацией: макс 10MB на файл, хранить 5 бэкапов
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(),
            RotatingFileHandler(
                log_file,
                maxBytes=10_000_000,
                backupCount=5,
                encoding="utf-8",
            ),
        ],
    )


def log_event(event: dict) -> None:
    """Log structured event as JSON."""
    event["time"] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    logger.info(json.dumps(event, ensure_ascii=False))


# ---------------------------------------------------------------------------
# СЕТЬ
# ---------------------------------------------------------------------------

def fetch_html(settings: Settings) -> str:
    # без User-Agent и Accept Википедия отдаёт урезанную страницу или 403
    resp = requests.get(
        settings.source_url,
        headers=settings.http_headers,
        timeout=settings.http_timeout,
    )
    resp.raise_for_status()
    return resp.text


def make_extractor(settings: Settings, enabled: bool = True) -> Optional[GeminiBracketExtractor]:
    if not enabled:
        return None
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY не задан — сетка плей-офф обновляться не будет")
        return None
    return GeminiBracketExtractor(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.gemini_timeout,
    )


# ---------------------------------------------------------------------------
# ПАЙПЛАЙН
# ---------------------------------------------------------------------------

def scrape_snapshot(
    html: str,
    extractor: Optional[GeminiBracketExtractor],
    bracket_max_bytes: int = 30_000,
    now: Optional[datetime] = None,
) -> Snapshot:
    soup = BeautifulSoup(html, "lxml")

    standings = parse_standings(soup)
    games = parse_games(soup)
    bracket = extract_bracket(extractor, soup, bracket_max_bytes)

    return build_snapshot(standings, games, bracket, now=now)


def worker_once(
    settings: Settings,
    store,
    extractor: Optional[GeminiBracketExtractor] = None,
    fetch: Callable[[Settings], str] = fetch_html,
) -> Snapshot:
    """
    Один проход. Ошибки сети и базы пробрасываются наверх:
    частичный снапшот не пишем.
    """
    log_event({"level": "info", "msg": "worker_once_start", "url": settings.source_url})
    start_ts = time.time()

    try:
        html = fetch(settings)
    except requests.RequestException as e:
        log_event({"level": "error", "msg": "fetch_failed", "error": str(e)})
        raise

    snapshot = scrape_snapshot(html, extractor, settings.bracket_max_bytes)
    if snapshot.bracket is None:
        log_event({"level": "warning", "msg": "bracket_not_updated"})

    store.save(settings.tournament_id, snapshot.to_document())

    log_event(
        {
            "level": "info",
            "msg": "worker_once_finished",
            "metrics": {
                "groups": len(snapshot.standings),
                "games": len(snapshot.games),
                "played": sum(1 for g in snapshot.games if g.played),
                "bracket_rounds": None if snapshot.bracket is None else len(snapshot.bracket),
                "elapsed_sec": round(time.time() - start_ts, 2),
            },
        }
    )
    return snapshot


def worker_loop(
    settings: Settings,
    store,
    extractor: Optional[GeminiBracketExtractor] = None,
) -> None:
    """
    Бесконечный цикл опроса страницы.
    """
    while True:
        try:
            worker_once(settings, store, extractor)
        except Exception as e:
            log_event(
                {
                    "level": "error",
                    "msg": "worker_loop_exception",
                    "error": str(e),
                }
            )
            logger.exception("Ошибка в worker_loop: %s", e)
        time.sleep(settings.scrape_interval_seconds)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Снапшот турнира (группы, матчи, сетка) с Википедии")
    parser.add_argument("--loop", action="store_true", help="опрашивать страницу бесконечно")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="не писать в базу, вывести документ в stdout",
    )
    parser.add_argument(
        "--no-bracket",
        action="store_true",
        help="не вызывать Gemini; поле bracket в этот проход не пишется",
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(settings)

    extractor = make_extractor(settings, enabled=not args.no_bracket)

    if args.dry_run:
        store = MemorySnapshotStore()
    else:
        store = PostgresSnapshotStore(settings.conninfo)
        store.ensure_schema()

    if args.loop:
        worker_loop(settings, store, extractor)
        return 0

    try:
        worker_once(settings, store, extractor)
    except Exception as e:
        logger.error("Проход завершился с ошибкой: %s", e)
        return 1

    if args.dry_run:
        document = store.load(settings.tournament_id)
        print(json.dumps(document, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
