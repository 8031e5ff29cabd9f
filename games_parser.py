"""
games_parser.py — карточки матчей / строки таблицы результатов → MatchRecord.

Счёт вида "2–1" (en-dash) или "2-1" означает, что матч сыгран: время
заменяется на "Full time". Без счёта оба значения — "-".
Серия пенальти дописывается в скобках: "1 (4)" / "1 (3)".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from codes import flag_image
from locator import BlockKind, find_match_blocks, flat_text, row_cells
from schedule import AFCON_2025_SLOTS, ScheduleSlot, iter_slots

logger = logging.getLogger(__name__)

FULL_TIME = "Full time"
NOT_PLAYED = "-"
DEFAULT_KICKOFF = "00:00"

MONTHS: dict[str, str] = {
    "January": "01",
    "February": "02",
    "March": "03",
    "April": "04",
    "May": "05",
    "June": "06",
    "July": "07",
    "August": "08",
    "September": "09",
    "October": "10",
    "November": "11",
    "December": "12",
}

SCORE_RE = re.compile(r"(\d+)\s*[\-–]\s*(\d+)")
_SHOOTOUT_RE = re.compile(r"Penalties\s*:?\s*(\d+)\s*[\-–]\s*(\d+)", re.IGNORECASE)
_PEN_SUFFIX_RE = re.compile(
    r"\(\s*(\d+)\s*[\-–]\s*(\d+)\s*(?:p|pen\.?|a\.?p\.?)\s*\)", re.IGNORECASE
)
_DATE_RE = re.compile(r"(\d+)\s+([A-Za-z]+)\s+(\d{4})")
_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})")
_FOOTNOTE_RE = re.compile(r"\[[^\]]*\]")


@dataclass
class ParticipantRecord:
    name: str
    image: str
    score: str

    def to_dict(self) -> dict:
        return {"name": self.name, "image": self.image, "score": self.score}


@dataclass
class MatchRecord:
    teams: Tuple[ParticipantRecord, ParticipantRecord]
    date: str
    time: str
    kickoff: str  # время по расписанию; в документ не пишется, нужно для сортировки

    @property
    def played(self) -> bool:
        return self.time == FULL_TIME

    def to_dict(self) -> dict:
        return {
            "team": [t.to_dict() for t in self.teams],
            "info": {"date": self.date, "time": self.time},
        }


# ---------------------------------------------------------------------------
# УТИЛИТЫ
# ---------------------------------------------------------------------------

def clean_team_name(text: Optional[str]) -> str:
    """Убираем сноски вида [a]/[1], переводы строк и лишние пробелы."""
    if not text:
        return ""
    text = _FOOTNOTE_RE.sub("", text)
    text = text.replace("\n", " ").replace("\xa0", " ")
    return " ".join(text.split())


def parse_score(text: Optional[str]) -> Tuple[str, str, bool]:
    """
    "2–1" / "2-1" -> ("2", "1", True)
    "", "v", "Match 12" -> ("-", "-", False)
    """
    m = SCORE_RE.search(text or "")
    if not m:
        return NOT_PLAYED, NOT_PLAYED, False
    return m.group(1), m.group(2), True


def parse_penalties(text: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Счёт серии пенальти, если он есть:
      "... Penalties 4–3 ..." -> ("4", "3")
      "1–1 (4–3 p)"           -> ("4", "3")
    """
    if not text:
        return None
    m = _SHOOTOUT_RE.search(text) or _PEN_SUFFIX_RE.search(text)
    if not m:
        return None
    return m.group(1), m.group(2)


def _month_number(name: str) -> str:
    name = name.lower()
    for month, number in MONTHS.items():
        if month.lower().startswith(name):
            return number
    return "00"


def parse_wiki_date(raw: Optional[str]) -> str:
    """
    "21 December 2025 (2025-12-21)" -> "21-12-2025"
    "5 Jan 2026"                    -> "05-01-2026"
    Непонятный формат отдаём как есть (после strip).
    """
    if not raw:
        return ""
    m = _DATE_RE.search(raw)
    if not m:
        return raw.strip()

    day, month_name, year = m.groups()
    return f"{day.zfill(2)}-{_month_number(month_name)}-{year}"


def parse_kickoff(raw: Optional[str]) -> str:
    """"20:00 WAT (UTC+1)" -> "20:00"; пусто -> "00:00"."""
    raw = (raw or "").strip()
    if not raw:
        return DEFAULT_KICKOFF
    m = _TIME_RE.search(raw)
    if not m:
        return raw
    return f"{m.group(1).zfill(2)}:{m.group(2)}"


def _participants(
    home: str, away: str, score_text: str, pens: Optional[Tuple[str, str]]
) -> Tuple[Tuple[ParticipantRecord, ParticipantRecord], bool]:
    home_score, away_score, played = parse_score(score_text)

    if played:
        if pens:
            home_score = f"{home_score} ({pens[0]})"
            away_score = f"{away_score} ({pens[1]})"

    teams = (
        ParticipantRecord(name=home, image=flag_image(home), score=home_score),
        ParticipantRecord(name=away, image=flag_image(away), score=away_score),
    )
    return teams, played


def shootout_score(box: Tag) -> Optional[Tuple[str, str]]:
    """
    Счёт серии пенальти из карточки матча.

    В карточке под строкой-заголовком "Penalties" идёт строка
    "пенальтисты хозяев | счёт серии | пенальтисты гостей",
    счёт стоит в <th> посередине.
    """
    for cell in box.find_all(["th", "td"]):
        if not flat_text(cell).lower().startswith("penalties"):
            continue
        row = cell.find_parent("tr")
        shootout_row = row.find_next_sibling("tr") if row is not None else None
        if shootout_row is None:
            break
        for score_cell in shootout_row.find_all("th"):
            m = SCORE_RE.search(flat_text(score_cell))
            if m:
                return m.group(1), m.group(2)
        m = SCORE_RE.search(flat_text(shootout_row))
        if m:
            return m.group(1), m.group(2)
        break

    # запасной вариант: счёт прямо в тексте ("Penalties 4–3", "(4–3 p)")
    return parse_penalties(flat_text(box))


def _slot_text(tag: Tag, cls: str) -> str:
    el = tag.find(class_=cls)
    return el.get_text(" ") if el is not None else ""


# ---------------------------------------------------------------------------
# РАЗБОР
# ---------------------------------------------------------------------------

def parse_match_box(box: Tag) -> Optional[MatchRecord]:
    home = clean_team_name(_slot_text(box, "fhome"))
    away = clean_team_name(_slot_text(box, "faway"))
    if not home or not away:
        logger.debug("Карточка матча без команд пропущена")
        return None

    score_text = clean_team_name(_slot_text(box, "fscore"))
    teams, played = _participants(home, away, score_text, shootout_score(box))

    kickoff = parse_kickoff(_slot_text(box, "ftime"))
    return MatchRecord(
        teams=teams,
        date=parse_wiki_date(_slot_text(box, "fdate")),
        time=FULL_TIME if played else kickoff,
        kickoff=kickoff,
    )


def parse_results_row(
    row: Tag, offset: int, slots: Iterator[ScheduleSlot]
) -> Optional[MatchRecord]:
    """
    Строка сводной таблицы: [стадия], хозяева, счёт, гости, ...
    Даты и времени в строке нет — берём следующий слот календаря.
    Слот расходуется только принятыми строками.
    """
    cells = row_cells(row)
    if len(cells) < offset + 3:
        return None

    home = clean_team_name(cells[offset].get_text(" "))
    away = clean_team_name(cells[offset + 2].get_text(" "))
    if not home or not away:
        return None

    score_text = clean_team_name(cells[offset + 1].get_text(" "))
    teams, played = _participants(home, away, score_text, parse_penalties(score_text))

    slot = next(slots)
    return MatchRecord(
        teams=teams,
        date=slot.date,
        time=FULL_TIME if played else slot.time,
        kickoff=slot.time,
    )


def parse_games(
    soup: BeautifulSoup, slots: Sequence[ScheduleSlot] = AFCON_2025_SLOTS
) -> List[MatchRecord]:
    """Все матчи страницы в порядке документа (без сортировки)."""
    games: List[MatchRecord] = []
    slot_iter = iter_slots(slots)

    for block in find_match_blocks(soup):
        if block.kind is BlockKind.MATCH_BOX:
            record = parse_match_box(block.tag)
        else:
            record = parse_results_row(block.tag, block.offset, slot_iter)
        if record is not None:
            games.append(record)

    played = sum(1 for g in games if g.played)
    logger.info("Матчей разобрано: %d (сыграно: %d)", len(games), played)
    return games
