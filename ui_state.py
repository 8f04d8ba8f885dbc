from __future__ import annotations

from datetime import date
from enum import Enum, auto

from board import MONTH_LABELS, days_in_month, month_label


class UIState(Enum):
    MENU = auto()
    SOLVE_TODAY = auto()
    PICK_DATE = auto()


class AppState:
    def __init__(self, today: date | None = None):
        today = today or date.today()
        self.current_state = UIState.MENU
        self.selected_date: tuple[str, int] = (month_label(today.month), today.day)

    def step_day(self, delta: int) -> None:
        """Move the selected day, wrapping within the month."""
        month, day = self.selected_date
        n = days_in_month(month)
        self.selected_date = (month, (day - 1 + delta) % n + 1)

    def step_month(self, delta: int) -> None:
        """Move the selected month, clamping the day to the new month."""
        month, day = self.selected_date
        idx = (MONTH_LABELS.index(month) + delta) % len(MONTH_LABELS)
        new_month = MONTH_LABELS[idx]
        self.selected_date = (new_month, min(day, days_in_month(new_month)))
