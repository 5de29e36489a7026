"""User events keyed by calendar day, persisted as one JSON mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import NamedTuple

logger = logging.getLogger(__name__)

TIMED = "timed"
ALL_DAY = "allday"
YEARLY = "yearly"

_KINDS = (TIMED, ALL_DAY, YEARLY)


class DateKey(NamedTuple):
    """A (year, month, day) triple; month and day are 1-based.

    Unlike ``date`` it may name an impossible day such as 1990-2-29, so
    a yearly entry stored under such a key keeps its anchor.
    """

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year}-{self.month}-{self.day}"

    @classmethod
    def parse(cls, text: str) -> "DateKey":
        """Parse the un-padded ``"2024-3-5"`` form (padding is tolerated)."""
        parts = text.strip().split("-")
        if len(parts) != 3:
            raise ValueError(f"malformed date key: {text!r}")
        year, month, day = (int(p) for p in parts)
        if not 1 <= month <= 12 or not 1 <= day <= 31:
            raise ValueError(f"date key out of range: {text!r}")
        return cls(year, month, day)

    @classmethod
    def from_date(cls, d: date) -> "DateKey":
        return cls(d.year, d.month, d.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


@dataclass(frozen=True)
class EventRecord:
    """One user entry, tagged as timed, all-day or yearly."""

    text: str
    kind: str = ALL_DAY
    hour: int | None = None

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("event text must not be empty")
        if self.kind not in _KINDS:
            raise ValueError(f"unknown event kind: {self.kind!r}")
        if self.kind == TIMED:
            if self.hour is None or not 0 <= self.hour <= 23:
                raise ValueError(f"hour must be 0-23, got {self.hour!r}")
        elif self.hour is not None:
            raise ValueError(f"{self.kind} events carry no hour")

    @classmethod
    def timed(cls, text: str, hour: int) -> "EventRecord":
        return cls(text, TIMED, hour)

    @classmethod
    def all_day(cls, text: str) -> "EventRecord":
        return cls(text, ALL_DAY)

    @classmethod
    def yearly(cls, text: str) -> "EventRecord":
        return cls(text, YEARLY)

    @property
    def is_yearly(self) -> bool:
        return self.kind == YEARLY

    def to_dict(self) -> dict:
        data: dict = {"text": self.text}
        if self.kind == TIMED:
            data["hour"] = self.hour
        elif self.kind == YEARLY:
            data["birthday"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EventRecord":
        """Build a record from its stored form.

        ``birthday``, ``isRecurringYearly`` and ``repeat: "yearly"`` all
        mark a yearly entry; a yearly entry's stored hour is dropped.
        """
        text = data.get("text")
        if not isinstance(text, str):
            raise ValueError(f"event text missing: {data!r}")
        if (data.get("birthday") is True
                or data.get("isRecurringYearly") is True
                or data.get("repeat") == "yearly"):
            return cls.yearly(text)
        hour = data.get("hour")
        if hour is None:
            return cls.all_day(text)
        if isinstance(hour, bool) or not isinstance(hour, int):
            raise ValueError(f"bad hour: {hour!r}")
        return cls.timed(text, hour)


class EventStore:
    """Mapping of DateKey to an ordered list of EventRecord.

    ``backend`` is any object with ``load() -> dict`` and
    ``save(mapping)``; the whole mapping is saved after every change.
    """

    def __init__(self, backend=None) -> None:
        self._backend = backend
        self._events: dict[DateKey, list[EventRecord]] = {}

    @classmethod
    def load(cls, backend) -> "EventStore":
        """Build a store from the backend, skipping anything malformed."""
        store = cls(backend)
        raw = backend.load()
        if not isinstance(raw, dict):
            logger.debug("Ignoring stored events of type %s", type(raw).__name__)
            return store
        for key_text, items in raw.items():
            try:
                key = DateKey.parse(key_text)
            except (AttributeError, ValueError):
                logger.debug("Skipping malformed date key %r", key_text)
                continue
            if not isinstance(items, list):
                logger.debug("Skipping non-list entry under %s", key_text)
                continue
            records: list[EventRecord] = []
            for item in items:
                try:
                    records.append(EventRecord.from_dict(item))
                except (AttributeError, ValueError):
                    logger.debug("Skipping malformed event under %s: %r",
                                 key_text, item)
            if records:
                store._events.setdefault(key, []).extend(records)
        return store

    def get(self, key: DateKey) -> list[EventRecord]:
        return list(self._events.get(key, []))

    def add(self, key: DateKey, record: EventRecord) -> None:
        self._events.setdefault(key, []).append(record)
        self._persist()

    def delete(self, key: DateKey, index: int) -> bool:
        """Remove the record at ``index``; out-of-range is a no-op."""
        records = self._events.get(key)
        if records is None or not 0 <= index < len(records):
            logger.warning("No event #%s on %s to delete", index, key)
            return False
        del records[index]
        if not records:
            del self._events[key]
        self._persist()
        return True

    def items(self):
        """Yield (DateKey, records) pairs in insertion order."""
        for key, records in self._events.items():
            yield key, list(records)

    def __contains__(self, key: object) -> bool:
        return key in self._events

    def to_mapping(self) -> dict[str, list[dict]]:
        return {
            str(key): [r.to_dict() for r in records]
            for key, records in self._events.items()
        }

    def _persist(self) -> None:
        if self._backend is not None:
            self._backend.save(self.to_mapping())
