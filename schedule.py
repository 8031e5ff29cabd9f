"""
schedule.py — восстановление даты/времени матча по его порядковому номеру.

Нужен только для раскладки "одна сводная таблица результатов", где у строк
нет своих даты и времени. Календарь турнира известен заранее (AFCON_2025_SLOTS),
матчи разбирают слоты по порядку:

  [0, 24)   — первые два тура группы: один матч = один слот;
  [24, 36)  — третий тур: два матча играются одновременно, пара делит слот;
  [36, ...) — плей-офф: снова один матч = один слот.

Курсор — не общий счётчик, а чистая функция next_slot(cursor, index).
Если матчей больше, чем слотов, остаёмся на последнем слоте.
Время слота — только плейсхолдер до начала матча: сыгранный матч
всё равно показывается как "Full time".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

SINGLE_SLOT_MATCHES = 24
SHARED_SLOT_END = 36


@dataclass(frozen=True)
class ScheduleSlot:
    date: str  # DD-MM-YYYY
    time: str  # HH:MM


EMPTY_SLOT = ScheduleSlot("", "")

_AFCON_2025 = [
    # 1-й тур
    ("21-12-2025", "20:00"),
    ("22-12-2025", "15:00"),
    ("22-12-2025", "18:00"),
    ("22-12-2025", "21:00"),
    ("23-12-2025", "13:30"),
    ("23-12-2025", "16:00"),
    ("23-12-2025", "18:30"),
    ("23-12-2025", "21:00"),
    ("24-12-2025", "13:30"),
    ("24-12-2025", "16:00"),
    ("24-12-2025", "18:30"),
    ("24-12-2025", "21:00"),
    # 2-й тур
    ("26-12-2025", "13:30"),
    ("26-12-2025", "16:00"),
    ("26-12-2025", "18:30"),
    ("26-12-2025", "21:00"),
    ("27-12-2025", "13:30"),
    ("27-12-2025", "16:00"),
    ("27-12-2025", "18:30"),
    ("27-12-2025", "21:00"),
    ("28-12-2025", "13:30"),
    ("28-12-2025", "16:00"),
    ("28-12-2025", "18:30"),
    ("28-12-2025", "21:00"),
    # 3-й тур, матчи группы одновременно
    ("29-12-2025", "17:00"),
    ("29-12-2025", "20:00"),
    ("30-12-2025", "17:00"),
    ("30-12-2025", "20:00"),
    ("31-12-2025", "17:00"),
    ("31-12-2025", "20:00"),
    # 1/8 финала
    ("03-01-2026", "17:00"),
    ("03-01-2026", "20:00"),
    ("04-01-2026", "17:00"),
    ("04-01-2026", "20:00"),
    ("05-01-2026", "17:00"),
    ("05-01-2026", "20:00"),
    ("06-01-2026", "17:00"),
    ("06-01-2026", "20:00"),
    # 1/4 финала
    ("09-01-2026", "17:00"),
    ("09-01-2026", "20:00"),
    ("10-01-2026", "17:00"),
    ("10-01-2026", "20:00"),
    # 1/2 финала
    ("14-01-2026", "18:00"),
    ("14-01-2026", "21:00"),
    # матч за 3-е место, финал
    ("17-01-2026", "17:00"),
    ("18-01-2026", "20:00"),
]

AFCON_2025_SLOTS: Tuple[ScheduleSlot, ...] = tuple(ScheduleSlot(d, t) for d, t in _AFCON_2025)


def advances_after(match_index: int) -> bool:
    """Сдвигается ли курсор после матча с этим порядковым номером."""
    if SINGLE_SLOT_MATCHES <= match_index < SHARED_SLOT_END:
        # второй матч пары
        return (match_index - SINGLE_SLOT_MATCHES) % 2 == 1
    return True


def _clamp(cursor: int, slot_count: int) -> int:
    return min(cursor, max(slot_count - 1, 0))


def next_slot(cursor: int, match_index: int, slot_count: int) -> Tuple[int, int]:
    """(cursor, index) -> (слот для этого матча, новый cursor)."""
    slot_index = _clamp(cursor, slot_count)
    if advances_after(match_index):
        cursor += 1
    return slot_index, cursor


def slot_index_for(match_index: int, slot_count: int) -> int:
    """То же, что свёртка next_slot от 0 до match_index, но сразу."""
    if match_index < SINGLE_SLOT_MATCHES:
        cursor = match_index
    elif match_index < SHARED_SLOT_END:
        cursor = SINGLE_SLOT_MATCHES + (match_index - SINGLE_SLOT_MATCHES) // 2
    else:
        shared_slots = (SHARED_SLOT_END - SINGLE_SLOT_MATCHES) // 2
        cursor = SINGLE_SLOT_MATCHES + shared_slots + (match_index - SHARED_SLOT_END)
    return _clamp(cursor, slot_count)


def assign(match_index: int, slots: Sequence[ScheduleSlot] = AFCON_2025_SLOTS) -> ScheduleSlot:
    if not slots:
        return EMPTY_SLOT
    return slots[slot_index_for(match_index, len(slots))]


def iter_slots(slots: Sequence[ScheduleSlot] = AFCON_2025_SLOTS) -> Iterator[ScheduleSlot]:
    """Бесконечная последовательность слотов для матчей 0, 1, 2, ..."""
    cursor = 0
    match_index = 0
    while True:
        if not slots:
            yield EMPTY_SLOT
        else:
            slot_index, cursor = next_slot(cursor, match_index, len(slots))
            yield slots[slot_index]
        match_index += 1
