"""Turn dates, holidays and events into display descriptors for each view.

Nothing here touches tkinter; the window only draws what it gets.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from calendar_logic import (
    VIEWS,
    iso_week_numbers,
    month_grid,
    week_dates,
    year_grids,
)
from event_store import TIMED, EventRecord, EventStore
from german_holidays import holiday_map
from recurrence import events_on


@dataclass(frozen=True)
class CellDescriptor:
    date: date | None
    day_number: int | None = None
    is_today: bool = False
    is_weekend: bool = False
    holiday: str | None = None
    normal_events: tuple[EventRecord, ...] = ()
    recurring_events: tuple[EventRecord, ...] = ()
    dots: tuple[str, ...] = ()
    number_style: str = "blank"

    @classmethod
    def blank(cls) -> "CellDescriptor":
        return cls(None)

    @property
    def all_day_events(self) -> list[EventRecord]:
        """Untimed own records followed by the yearly entries."""
        own = [r for r in self.normal_events if r.kind != TIMED]
        return own + list(self.recurring_events)

    def timed_events(self, hour: int) -> list[EventRecord]:
        return [r for r in self.normal_events
                if r.kind == TIMED and r.hour == hour]


@dataclass(frozen=True)
class MonthBlock:
    year: int
    month: int
    title: str
    cells: tuple[CellDescriptor, ...]


@dataclass(frozen=True)
class ViewModel:
    mode: str
    title: str
    subtitle: str
    cells: tuple[CellDescriptor, ...] = ()
    months: tuple[MonthBlock, ...] = ()
    week_numbers: tuple[int, ...] = ()


class _HolidayCache:
    """Per-render lookup of holiday labels across the visible years."""

    def __init__(self) -> None:
        self._years: dict[int, dict[date, str]] = {}

    def get(self, d: date) -> str | None:
        if d.year not in self._years:
            self._years[d.year] = holiday_map(d.year)
        return self._years[d.year].get(d)


def _describe(d: date, today: date, store: EventStore,
              holidays: _HolidayCache) -> CellDescriptor:
    holiday = holidays.get(d)
    day_events = events_on(store, d)
    is_today = d == today
    is_weekend = d.weekday() >= 5

    dots: list[str] = []
    # A holiday that is not today is shown through the number colour alone
    if holiday and is_today:
        dots.append("holiday")
    if day_events.normal:
        dots.append("event")
    if day_events.recurring:
        dots.append("birthday")

    if is_today:
        style = "today"
    elif holiday:
        style = "holiday"
    elif is_weekend:
        style = "weekend"
    else:
        style = "normal"

    return CellDescriptor(
        date=d,
        day_number=d.day,
        is_today=is_today,
        is_weekend=is_weekend,
        holiday=holiday,
        normal_events=tuple(day_events.normal),
        recurring_events=tuple(day_events.recurring),
        dots=tuple(dots),
        number_style=style,
    )


def _describe_grid(cells, today: date, store: EventStore,
                   holidays: _HolidayCache) -> tuple[CellDescriptor, ...]:
    return tuple(
        CellDescriptor.blank() if d is None
        else _describe(d, today, store, holidays)
        for d in cells
    )


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def compose_day_view(ref: date, today: date, store: EventStore) -> ViewModel:
    cell = _describe(ref, today, store, _HolidayCache())
    subtitle = (f"{calendar.day_abbr[ref.weekday()]}, "
                f"{ref.day} {calendar.month_abbr[ref.month]}")
    return ViewModel("day", month_title(ref.year, ref.month), subtitle, (cell,))


def week_title(first: date, last: date) -> str:
    """Title for a week that may span two months or two years."""
    if first.month == last.month:
        return month_title(first.year, first.month)
    start = calendar.month_abbr[first.month]
    end = calendar.month_abbr[last.month]
    if first.year == last.year:
        return f"{start} – {end} {last.year}"
    return f"{start} {first.year} – {end} {last.year}"


def compose_week_view(ref: date, today: date, store: EventStore) -> ViewModel:
    days = week_dates(ref)
    cells = _describe_grid(days, today, store, _HolidayCache())
    subtitle = f"Week {ref.isocalendar()[1]}"
    return ViewModel("week", week_title(days[0], days[-1]), subtitle, cells)


def compose_month_view(ref: date, today: date, store: EventStore) -> ViewModel:
    cells = _describe_grid(month_grid(ref.year, ref.month), today, store,
                           _HolidayCache())
    return ViewModel("month", month_title(ref.year, ref.month), "", cells,
                     week_numbers=tuple(iso_week_numbers(ref.year, ref.month)))


def compose_year_view(ref: date, today: date, store: EventStore) -> ViewModel:
    holidays = _HolidayCache()
    months = tuple(
        MonthBlock(
            ref.year, m, calendar.month_name[m],
            _describe_grid(grid, today, store, holidays),
        )
        for m, grid in enumerate(year_grids(ref.year), start=1)
    )
    return ViewModel("year", str(ref.year), "", months=months)


_COMPOSERS = {
    "day": compose_day_view,
    "week": compose_week_view,
    "month": compose_month_view,
    "year": compose_year_view,
}


def compose_view(mode: str, ref: date, today: date, store: EventStore) -> ViewModel:
    if mode not in VIEWS:
        raise ValueError(f"unknown view: {mode!r}")
    return _COMPOSERS[mode](ref, today, store)
