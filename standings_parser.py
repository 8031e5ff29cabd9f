"""
standings_parser.py — таблицы групп → список StandingsGroup.

Стандартная таблица Википедии: Pos, Team, Pld, W, D, L, GF, GA, GD, Pts, ...
Колонку команды ищем по заголовку, W/D/L берём сразу за Pld.
Значения W/D/L не приводим к числам: кладём строку как есть (после strip).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List

from bs4 import BeautifulSoup, Tag

from codes import flag_url, resolve_code
from locator import GROUP_LABELS, find_standings_blocks, flat_text, is_header_row, row_cells

logger = logging.getLogger(__name__)

DEFAULT_NAME_INDEX = 1
# от колонки команды: Pld, W, D, L, GF, GA -> минимум ещё 6 ячеек
MIN_CELLS_AFTER_NAME = 6

_HOST_RE = re.compile(r"\(H\)")
_PAREN_RE = re.compile(r"\(.*\)")
_FOOTNOTE_RE = re.compile(r"\[[^\]]*\]")


@dataclass
class TeamRecord:
    name: str
    code: str
    win: str
    draw: str
    lose: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "image": flag_url(self.code),
            "info": {"win": self.win, "draw": self.draw, "lose": self.lose},
        }


@dataclass
class StandingsGroup:
    group: str
    team: List[TeamRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"group": self.group, "team": [t.to_dict() for t in self.team]}


def _cell_text(cell: Tag) -> str:
    return cell.get_text(strip=True)


def extract_team_name(cell: Tag) -> str:
    """
    Имя команды из ячейки:
    - сначала текст первой ссылки (не картинки флага и не сноски);
    - иначе текст ячейки без "(H)", скобок и сносок.
    """
    for a in cell.find_all("a"):
        if "image" in (a.get("class") or []) or a.find("img") is not None:
            continue
        if a.find_parent("sup") is not None:
            continue
        text = a.get_text(strip=True)
        if text:
            return text

    text = cell.get_text(" ")
    text = _HOST_RE.sub("", text)
    text = _PAREN_RE.sub("", text)
    text = _FOOTNOTE_RE.sub("", text)
    return " ".join(text.split())


def detect_name_index(table: Tag) -> int:
    """Индекс колонки "Team" в строке заголовка (по умолчанию 1)."""
    for row in table.find_all("tr"):
        if not is_header_row(row):
            continue
        for idx, cell in enumerate(row_cells(row)):
            if flat_text(cell).startswith("Team"):
                return idx
        break
    return DEFAULT_NAME_INDEX


def parse_standings_table(table: Tag, group_label: str) -> StandingsGroup:
    name_idx = detect_name_index(table)
    min_cells = name_idx + 1 + MIN_CELLS_AFTER_NAME

    group = StandingsGroup(group=group_label)

    # первая строка — заголовок
    for row in table.find_all("tr")[1:]:
        if is_header_row(row):
            continue

        cells = row_cells(row)
        if len(cells) < min_cells:
            logger.debug(
                "Группа %s: строка пропущена, ячеек %d < %d",
                group_label,
                len(cells),
                min_cells,
            )
            continue

        name = extract_team_name(cells[name_idx])
        if not name:
            continue

        group.team.append(
            TeamRecord(
                name=name,
                code=resolve_code(name),
                win=_cell_text(cells[name_idx + 2]),
                draw=_cell_text(cells[name_idx + 3]),
                lose=_cell_text(cells[name_idx + 4]),
            )
        )

    return group


def parse_standings(soup: BeautifulSoup) -> List[StandingsGroup]:
    groups: List[StandingsGroup] = []
    for label, table in zip(GROUP_LABELS, find_standings_blocks(soup)):
        groups.append(parse_standings_table(table, label))
    logger.info("Таблиц групп разобрано: %d", len(groups))
    return groups
