"""Application state and the navigation surface the window talks to."""

from __future__ import annotations

from datetime import date
from typing import Callable

from calendar_logic import VIEWS, shift_date
from event_store import DateKey, EventRecord, EventStore
from german_holidays import holiday_map
from view_composer import ViewModel, compose_view

SWIPE_THRESHOLD = 40
MOUSE_SWIPE_THRESHOLD = 60


def swipe_direction(dx: float, dy: float,
                    threshold: float = SWIPE_THRESHOLD) -> int:
    """Map a drag to -1 (previous), 1 (next) or 0 (ignored).

    Dragging right goes back, dragging left goes forward. Short or
    mostly vertical drags are ignored.
    """
    if abs(dx) < threshold or abs(dx) < abs(dy):
        return 0
    return -1 if dx > 0 else 1


class CalendarSession:
    """Current view and reference date of one running calendar."""

    def __init__(self, store: EventStore,
                 today: Callable[[], date] = date.today,
                 view: str = "month") -> None:
        if view not in VIEWS:
            raise ValueError(f"unknown view: {view!r}")
        self.store = store
        self._today = today
        self.view = view
        self.current_date = today()
        self._rendered_today = self.current_date
        self._rollover_hooks: list[Callable[[date], None]] = []

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def set_view(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"unknown view: {view!r}")
        self.view = view

    def go_previous(self) -> None:
        self.current_date = shift_date(self.current_date, self.view, -1)

    def go_next(self) -> None:
        self.current_date = shift_date(self.current_date, self.view, 1)

    def go_today(self) -> None:
        self.current_date = self._today()
        self.view = "month"

    def swipe(self, dx: float, dy: float,
              threshold: float = SWIPE_THRESHOLD) -> bool:
        """Navigate for a drag gesture; return True if it moved."""
        direction = swipe_direction(dx, dy, threshold)
        if direction < 0:
            self.go_previous()
        elif direction > 0:
            self.go_next()
        return direction != 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> ViewModel:
        today = self._today()
        self._rendered_today = today
        return compose_view(self.view, self.current_date, today, self.store)

    def check_rollover(self) -> bool:
        """Return True if the date changed since the last render.

        When the old today was on display the reference date moves along.
        Hooks registered with ``on_rollover`` get the new date.
        """
        today = self._today()
        if today == self._rendered_today:
            return False
        if self.current_date == self._rendered_today:
            self.current_date = today
        self._rendered_today = today
        for hook in self._rollover_hooks:
            hook(today)
        return True

    def on_rollover(self, hook: Callable[[date], None]) -> None:
        self._rollover_hooks.append(hook)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def add_event(self, key: DateKey, text: str, hour: int | None = None,
                  yearly: bool = False) -> EventRecord:
        text = text.strip()
        if yearly:
            record = EventRecord.yearly(text)
        elif hour is not None:
            record = EventRecord.timed(text, hour)
        else:
            record = EventRecord.all_day(text)
        self.store.add(key, record)
        return record

    def delete_event(self, key: DateKey, index: int) -> bool:
        return self.store.delete(key, index)

    def day_details(self, key: DateKey) -> tuple[str | None, list[EventRecord]]:
        """Return the holiday label (if any) and stored records for a day."""
        try:
            holiday = holiday_map(key.year).get(key.to_date())
        except ValueError:
            holiday = None
        return holiday, self.store.get(key)
