"""
snapshot.py — сборка итогового документа турнира.

Документ пишется в хранилище как upsert по полям верхнего уровня:
чего нет в документе этого прохода, то в базе не трогается.
Поэтому bracket=None (сетку не пересчитали) просто не попадает в документ,
а пустой список [] — осознанная перезапись.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from games_parser import MatchRecord
from standings_parser import StandingsGroup

DATE_FORMAT = "%d-%m-%Y"
TIME_FORMAT = "%H:%M"


@dataclass
class Snapshot:
    last_updated: str
    standings: List[StandingsGroup] = field(default_factory=list)
    games: List[MatchRecord] = field(default_factory=list)
    bracket: Optional[List[Any]] = None

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "last_updated": self.last_updated,
            "standings": [g.to_dict() for g in self.standings],
            "games": [g.to_dict() for g in self.games],
        }
        if self.bracket is not None:
            doc["bracket"] = self.bracket
        return doc


def _parse_time(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, TIME_FORMAT)
    except (TypeError, ValueError):
        return None


def game_sort_key(game: MatchRecord) -> datetime:
    """
    Дата DD-MM-YYYY + время начала по расписанию.
    Для сыгранных матчей ("Full time") берём kickoff, а не показываемую строку.
    Непонятная дата — в конец списка.
    """
    try:
        day = datetime.strptime(game.date, DATE_FORMAT)
    except (TypeError, ValueError):
        return datetime.max

    kickoff = _parse_time(game.kickoff) or _parse_time(game.time)
    if kickoff is None:
        return day
    return day.replace(hour=kickoff.hour, minute=kickoff.minute)


def sort_games(games: Iterable[MatchRecord]) -> List[MatchRecord]:
    # sorted() стабилен: одинаковые слоты сохраняют порядок документа
    return sorted(games, key=game_sort_key)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 в UTC с миллисекундами и суффиксом Z."""
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_snapshot(
    standings: List[StandingsGroup],
    games: Iterable[MatchRecord],
    bracket: Optional[List[Any]],
    now: Optional[datetime] = None,
) -> Snapshot:
    return Snapshot(
        last_updated=utc_timestamp(now),
        standings=list(standings),
        games=sort_games(games),
        bracket=bracket,
    )


def merge_fields(prior: Optional[Dict[str, Any]], update: Dict[str, Any]) -> Dict[str, Any]:
    """
    Upsert по полям верхнего уровня: ключи update перезаписывают,
    остальные ключи prior сохраняются. То же делает `jsonb || jsonb`.
    """
    merged = dict(prior or {})
    merged.update(update)
    return merged
