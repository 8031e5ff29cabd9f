"""
locator.py — поиск нужных блоков в разобранной странице турнира.

Вместо "ищем любой узел с нужным текстом" каждый вид блока описан
отдельным предикатом-сигнатурой, а classify_block() сводит их в один
тегированный результат (BlockKind). Предикаты чистые — их удобно
тестировать по одному.

Поддерживаются две раскладки матчей:
  - отдельные карточки матчей (div.footballbox с .fhome/.fscore/.faway);
  - одна сводная таблица результатов (Home / Score / Away), иногда
    с ведущей колонкой стадии, которая сдвигает все колонки на одну.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

GROUP_LABELS = "ABCDEF"
GROUP_COUNT = len(GROUP_LABELS)

STANDINGS_MARKERS = ("Pos", "Team", "Pts")
RESULTS_MARKERS = ("Home", "Score", "Away")
STAGE_HEADERS = ("Stage", "Round", "Group", "Matchday")
MATCH_BOX_CLASS = "footballbox"
MATCH_SLOT_CLASSES = ("fhome", "faway", "fscore")

# home, score, away
MIN_MATCH_CELLS = 3

_SEPARATOR_RE = re.compile(r"advances?\s+to", re.IGNORECASE)


class BlockKind(Enum):
    STANDINGS = "standings"
    MATCH_BOX = "match_box"
    RESULTS_TABLE = "results_table"
    BRACKET = "bracket"
    UNRECOGNIZED = "unrecognized"


@dataclass
class MatchBlock:
    kind: BlockKind
    tag: Tag
    offset: int = 0  # сдвиг колонок для строки сводной таблицы


# ---------------------------------------------------------------------------
# УТИЛИТЫ
# ---------------------------------------------------------------------------

def flat_text(tag: Optional[Tag]) -> str:
    if tag is None:
        return ""
    return " ".join(tag.get_text(" ").split())


def row_cells(row: Tag) -> List[Tag]:
    return row.find_all(["th", "td"], recursive=False)


def _has_class(tag: Tag, cls: str) -> bool:
    return cls in (tag.get("class") or [])


def _is_innermost_table(tag: Tag) -> bool:
    return tag.name == "table" and tag.find("table") is None


def _header_texts(table: Tag) -> List[str]:
    """Тексты ячеек первой строки таблицы, в которой есть <th>."""
    for row in table.find_all("tr"):
        cells = row_cells(row)
        if any(c.name == "th" for c in cells):
            return [flat_text(c) for c in cells]
    return []


def is_header_row(row: Tag) -> bool:
    cells = row_cells(row)
    return bool(cells) and all(c.name == "th" for c in cells)


def is_separator_row(row: Tag) -> bool:
    """Служебная строка вида "Winner advances to ..." — не данные."""
    return bool(_SEPARATOR_RE.search(flat_text(row)))


# ---------------------------------------------------------------------------
# СИГНАТУРЫ БЛОКОВ
# ---------------------------------------------------------------------------

def is_standings_table(tag: Tag) -> bool:
    if not isinstance(tag, Tag) or not _is_innermost_table(tag):
        return False
    text = flat_text(tag)
    return all(marker in text for marker in STANDINGS_MARKERS)


def is_match_box(tag: Tag) -> bool:
    if not isinstance(tag, Tag) or not _has_class(tag, MATCH_BOX_CLASS):
        return False
    return all(tag.find(class_=cls) is not None for cls in MATCH_SLOT_CLASSES)


def is_results_table(tag: Tag) -> bool:
    if not isinstance(tag, Tag) or not _is_innermost_table(tag):
        return False
    header = " ".join(_header_texts(tag))
    return all(marker in header for marker in RESULTS_MARKERS)


def is_bracket_table(tag: Tag) -> bool:
    if not isinstance(tag, Tag) or tag.name != "table":
        return False
    text = flat_text(tag)
    return "Round of 16" in text and ("Quarter-finals" in text or "Quarterfinals" in text)


def classify_block(tag: Tag) -> BlockKind:
    # порядок важен: сетка плей-офф тоже бывает похожа на таблицу результатов
    if is_match_box(tag):
        return BlockKind.MATCH_BOX
    if is_standings_table(tag):
        return BlockKind.STANDINGS
    if is_bracket_table(tag):
        return BlockKind.BRACKET
    if is_results_table(tag):
        return BlockKind.RESULTS_TABLE
    return BlockKind.UNRECOGNIZED


def stage_offset(table: Tag) -> int:
    """1, если первая колонка таблицы результатов — стадия турнира."""
    header = _header_texts(table)
    if header and header[0].startswith(STAGE_HEADERS):
        return 1
    return 0


# ---------------------------------------------------------------------------
# ПОИСК
# ---------------------------------------------------------------------------

def find_standings_blocks(soup: BeautifulSoup, limit: int = GROUP_COUNT) -> Iterator[Tag]:
    """
    Таблицы групп в порядке документа, не больше limit штук.
    Лишние кандидаты просто игнорируются.
    """
    found = 0
    for table in soup.find_all("table"):
        if found >= limit:
            return
        if classify_block(table) is BlockKind.STANDINGS:
            found += 1
            yield table


def _iter_results_rows(table: Tag) -> Iterator[MatchBlock]:
    offset = stage_offset(table)
    width = len(_header_texts(table))

    for row in table.find_all("tr"):
        if is_header_row(row) or is_separator_row(row):
            continue
        cells = row_cells(row)
        # строки-продолжения под rowspan колонки стадии приходят без неё
        row_offset = offset if len(cells) >= width else 0
        if len(cells) < MIN_MATCH_CELLS + row_offset:
            logger.debug("Строка результатов отброшена: %d ячеек", len(cells))
            continue
        yield MatchBlock(BlockKind.RESULTS_TABLE, row, row_offset)


def find_match_blocks(soup: BeautifulSoup) -> Iterator[MatchBlock]:
    """
    Матчи в порядке документа.

    Карточки матчей приоритетнее: если их на странице нет совсем,
    берём строки первой сводной таблицы результатов.
    """
    boxes = 0
    for tag in soup.find_all(class_=MATCH_BOX_CLASS):
        if is_separator_row(tag):
            continue
        if classify_block(tag) is BlockKind.MATCH_BOX:
            boxes += 1
            yield MatchBlock(BlockKind.MATCH_BOX, tag)

    if boxes:
        return

    for table in soup.find_all("table"):
        if classify_block(table) is BlockKind.RESULTS_TABLE:
            yield from _iter_results_rows(table)
            return


def find_bracket_block(soup: BeautifulSoup) -> Optional[Tag]:
    for table in soup.find_all("table"):
        if classify_block(table) is BlockKind.BRACKET:
            return table
    return None
