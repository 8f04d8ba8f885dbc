# board.py
# Board geometry, label layout and initial grids per date

from __future__ import annotations

import calendar
from typing import Iterator

BOARD_ROWS = 7
BOARD_COLS = 7

# Grid cell values
FREE = 0
RESERVED = -1

# Static label layout. Empty labels are permanently unusable cells.
BOARD_LAYOUT: tuple[tuple[str, ...], ...] = (
    ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", ""),
    ("JUL", "AUG", "SEP", "OCT", "NOV", "DEC", ""),
    ("1", "2", "3", "4", "5", "6", "7"),
    ("8", "9", "10", "11", "12", "13", "14"),
    ("15", "16", "17", "18", "19", "20", "21"),
    ("22", "23", "24", "25", "26", "27", "28"),
    ("29", "30", "31", "", "", "", ""),
)

MONTH_LABELS: tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

# Illegal fixed cells (pink corners etc.)
BLOCKED_CELLS: frozenset[tuple[int, int]] = frozenset(
    (r, c)
    for r in range(BOARD_ROWS)
    for c in range(BOARD_COLS)
    if BOARD_LAYOUT[r][c] == ""
)

Grid = list[list[int]]


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < BOARD_ROWS and 0 <= c < BOARD_COLS


def is_blocked(r: int, c: int) -> bool:
    return (r, c) in BLOCKED_CELLS


def label_position(label: str) -> tuple[int, int] | None:
    """Board cell carrying ``label``, or None if no cell does."""
    if not label:
        return None
    for r, row in enumerate(BOARD_LAYOUT):
        for c, cell in enumerate(row):
            if cell == label:
                return (r, c)
    return None


def month_label(month: int) -> str:
    """1..12 -> "JAN".."DEC"."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return MONTH_LABELS[month - 1]


def init_grid(month: str, day: str | int) -> Grid:
    """
    Initial placement grid for a date.

    Cells labelled ``month`` or ``day`` and permanently unusable cells are
    reserved (-1), everything else is free (0). Labels that match no cell
    are not an error here; they simply reserve fewer cells.
    """
    day_label = str(day)
    grid: Grid = []
    for r, row in enumerate(BOARD_LAYOUT):
        grid_row = []
        for c, cell in enumerate(row):
            if is_blocked(r, c) or cell == month or cell == day_label:
                grid_row.append(RESERVED)
            else:
                grid_row.append(FREE)
        grid.append(grid_row)
    return grid


def free_cell_count(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value == FREE)


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_month(month: str, year: int | None = None) -> int:
    """Days in a month label. Without a year February counts 29 days."""
    index = MONTH_LABELS.index(month) + 1
    if year is None:
        return 29 if index == 2 else calendar.monthrange(2001, index)[1]
    return calendar.monthrange(year, index)[1]


def is_valid_date(month: str, day: str | int) -> bool:
    """Both labels name a board cell and the day exists in that month."""
    if month not in MONTH_LABELS:
        return False
    try:
        day_num = int(day)
    except (TypeError, ValueError):
        return False
    return 1 <= day_num <= days_in_month(month)


def calendar_dates(year: int | None = None) -> Iterator[tuple[str, int]]:
    """All (month label, day) pairs of a year; 366 dates when no year is given."""
    for month in MONTH_LABELS:
        for day in range(1, days_in_month(month, year) + 1):
            yield month, day
