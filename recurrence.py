"""Yearly ("birthday") entries and the combined event list of a day."""

from __future__ import annotations

from datetime import date
from typing import NamedTuple

from calendar_logic import is_leap
from event_store import DateKey, EventRecord, EventStore


def normalize_text(text: str) -> str:
    return text.strip().casefold()


def _dedupe(records, seen: set[str]) -> list[EventRecord]:
    result: list[EventRecord] = []
    for record in records:
        norm = normalize_text(record.text)
        if norm not in seen:
            seen.add(norm)
            result.append(record)
    return result


def birthdays_on(store: EventStore, year: int, month: int, day: int
                 ) -> list[EventRecord]:
    """Return the yearly entries falling on the given day.

    An entry anchored on Feb 29 shows on Feb 28 in non-leap years.
    Entries with the same trimmed, case-insensitive text are collapsed,
    first one wins.
    """
    matches: list[EventRecord] = []
    for key, records in store.items():
        origin_month, origin_day = key.month, key.day
        if origin_month == 2 and origin_day == 29 and not is_leap(year):
            origin_day = 28
        if (origin_month, origin_day) != (month, day):
            continue
        matches.extend(r for r in records if r.is_yearly)
    return _dedupe(matches, set())


class DayEvents(NamedTuple):
    normal: list[EventRecord]
    recurring: list[EventRecord]


def events_on(store: EventStore, d: date) -> DayEvents:
    """Return the day's own records plus the yearly entries landing on it.

    A yearly entry whose text repeats one of the day's own records is
    left out.
    """
    normal = [r for r in store.get(DateKey.from_date(d)) if not r.is_yearly]
    seen = {normalize_text(r.text) for r in normal}
    recurring = _dedupe(birthdays_on(store, d.year, d.month, d.day), seen)
    return DayEvents(normal, recurring)
