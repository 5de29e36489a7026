"""German public holidays, including the Easter-based movable feasts."""

from __future__ import annotations

from datetime import date, timedelta
from typing import NamedTuple

from event_store import DateKey


def easter(year: int) -> date:
    """Compute Easter Sunday (Anonymous Gregorian algorithm).

    Valid for Gregorian years from 1583 on.
    """
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    el = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * el) // 451
    month, day = divmod(h + el - 7 * m + 114, 31)
    return date(year, month, day + 1)


# --- date generators --------------------------------------------------------

def _fixed(m: int, d: int):
    return lambda year: date(year, m, d)


def _easter_rel(offset: int):
    return lambda year: easter(year) + timedelta(days=offset)


# --- Holiday registry: (key, label, date_fn) --------------------------------

HOLIDAYS: list[tuple] = [
    ("neujahr",             "Neujahr",                   _fixed(1, 1)),
    ("tag_der_arbeit",      "Tag der Arbeit",            _fixed(5, 1)),
    ("tag_dt_einheit",      "Tag der Deutschen Einheit", _fixed(10, 3)),
    ("weihnachten1",        "1. Weihnachtstag",          _fixed(12, 25)),
    ("weihnachten2",        "2. Weihnachtstag",          _fixed(12, 26)),
    ("ostermontag",         "Ostermontag",               _easter_rel(1)),
    ("christi_himmelfahrt", "Christi Himmelfahrt",       _easter_rel(39)),
    ("pfingstmontag",       "Pfingstmontag",             _easter_rel(50)),
    ("fronleichnam",        "Fronleichnam",              _easter_rel(60)),
]


class Holiday(NamedTuple):
    key: DateKey
    label: str


def holidays_for_year(year: int) -> list[Holiday]:
    """Return the nine holidays of a year, fixed ones first."""
    return [
        Holiday(DateKey.from_date(date_fn(year)), label)
        for _key, label, date_fn in HOLIDAYS
    ]


def holiday_map(year: int) -> dict[date, str]:
    """Return {date: label} for all holidays in a year."""
    return {h.key.to_date(): h.label for h in holidays_for_year(year)}
