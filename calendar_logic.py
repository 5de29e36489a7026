"""Pure calendar calculations — no UI dependencies.

Months are 1-based throughout. ``date.weekday()`` already counts from
Monday = 0, which is the Monday-first column index of every grid here.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

VIEWS = ("day", "week", "month", "year")


def is_leap(year: int) -> bool:
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_grid(year: int, month: int) -> list[date | None]:
    """Return the flat Monday-first cell list for a month.

    Leading ``None`` cells pad up to the weekday of the 1st, trailing
    ones pad the last week so the length is a multiple of 7.
    """
    lead = date(year, month, 1).weekday()
    last = days_in_month(year, month)

    cells: list[date | None] = [None] * lead
    cells.extend(date(year, month, d) for d in range(1, last + 1))
    cells.extend([None] * ((7 - len(cells) % 7) % 7))
    return cells


def month_rows(year: int, month: int) -> list[list[date | None]]:
    """Return the month grid split into weeks of 7 cells."""
    cells = month_grid(year, month)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def iso_week_numbers(year: int, month: int) -> list[int]:
    """Return the ISO week number for each row of the month grid."""
    weeks: list[int] = []
    for row in month_rows(year, month):
        # Every row holds at least one real day
        first = next(d for d in row if d is not None)
        weeks.append(first.isocalendar()[1])
    return weeks


def week_start(d: date) -> date:
    """Return the Monday of the week containing ``d``."""
    return d - timedelta(days=d.weekday())


def week_dates(d: date) -> list[date]:
    """Return the seven dates (Monday..Sunday) of the week containing ``d``."""
    start = week_start(d)
    return [start + timedelta(days=i) for i in range(7)]


def year_grids(year: int) -> list[list[date | None]]:
    """Return one month grid per month of the year."""
    return [month_grid(year, m) for m in range(1, 13)]


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def _clamped(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, days_in_month(year, month)))


def shift_date(d: date, view: str, step: int) -> date:
    """Move ``d`` by ``step`` units of the given view.

    Day and week views move by 1 and 7 days; month and year views keep
    the day of month, clamped to the length of the target month.
    """
    if view == "day":
        return d + timedelta(days=step)
    if view == "week":
        return d + timedelta(days=7 * step)
    if view == "month":
        y, m = d.year, d.month
        for _ in range(abs(step)):
            y, m = next_month(y, m) if step > 0 else prev_month(y, m)
        return _clamped(y, m, d.day)
    if view == "year":
        return _clamped(d.year + step, d.month, d.day)
    raise ValueError(f"unknown view: {view!r}")
