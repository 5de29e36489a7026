from datetime import date

import pytest

from calendar_session import CalendarSession, swipe_direction
from event_store import DateKey, EventRecord, EventStore


class Clock:
    def __init__(self, today):
        self.today = today

    def __call__(self):
        return self.today


@pytest.fixture
def clock():
    return Clock(date(2024, 3, 15))


@pytest.fixture
def session(clock):
    return CalendarSession(EventStore(), today=clock)


def test_defaults(session):
    assert session.view == "month"
    assert session.current_date == date(2024, 3, 15)


@pytest.mark.parametrize("view, prev, nxt", [
    ("day", date(2024, 3, 14), date(2024, 3, 16)),
    ("week", date(2024, 3, 8), date(2024, 3, 22)),
    ("month", date(2024, 2, 15), date(2024, 4, 15)),
    ("year", date(2023, 3, 15), date(2025, 3, 15)),
])
def test_previous_next(session, view, prev, nxt):
    session.set_view(view)
    session.go_previous()
    assert session.current_date == prev
    session.go_next()
    session.go_next()
    assert session.current_date == nxt


def test_set_view_rejects_unknown(session):
    with pytest.raises(ValueError):
        session.set_view("decade")


def test_go_today_returns_to_month(session):
    session.set_view("year")
    session.go_next()
    session.go_today()
    assert session.current_date == date(2024, 3, 15)
    assert session.view == "month"


def test_render_uses_injected_today(session):
    vm = session.render()
    assert vm.mode == "month"
    today = [c for c in vm.cells if c.is_today]
    assert [c.date for c in today] == [date(2024, 3, 15)]


def test_rollover_follows_today(session, clock):
    session.render()
    assert not session.check_rollover()
    clock.today = date(2024, 3, 16)
    assert session.check_rollover()
    assert session.current_date == date(2024, 3, 16)
    assert not session.check_rollover()


def test_rollover_keeps_navigated_date(session, clock):
    session.go_next()
    session.render()
    clock.today = date(2024, 3, 16)
    assert session.check_rollover()
    assert session.current_date == date(2024, 4, 15)


def test_rollover_hooks_get_new_date(session, clock):
    seen = []
    session.on_rollover(seen.append)
    session.render()
    assert not session.check_rollover()
    assert seen == []
    clock.today = date(2024, 3, 16)
    assert session.check_rollover()
    assert seen == [date(2024, 3, 16)]
    assert not session.check_rollover()
    assert seen == [date(2024, 3, 16)]


def test_add_event_builds_tagged_records(session):
    key = DateKey(2024, 3, 15)
    assert session.add_event(key, "  Dentist ", hour=9) == EventRecord.timed("Dentist", 9)
    assert session.add_event(key, "Trip") == EventRecord.all_day("Trip")
    # a yearly entry never keeps an hour
    assert session.add_event(key, "Anna", hour=7, yearly=True) == EventRecord.yearly("Anna")
    assert len(session.store.get(key)) == 3


def test_add_event_rejects_empty_text(session):
    key = DateKey(2024, 3, 15)
    with pytest.raises(ValueError):
        session.add_event(key, "   ")
    assert key not in session.store


def test_delete_event(session):
    key = DateKey(2024, 3, 15)
    session.add_event(key, "a")
    assert not session.delete_event(key, 3)
    assert session.delete_event(key, 0)
    assert key not in session.store


def test_day_details(session):
    session.add_event(DateKey(2024, 10, 3), "Parade")
    holiday, records = session.day_details(DateKey(2024, 10, 3))
    assert holiday == "Tag der Deutschen Einheit"
    assert records == [EventRecord.all_day("Parade")]
    assert session.day_details(DateKey(1990, 2, 29)) == (None, [])


@pytest.mark.parametrize("dx, dy, expected", [
    (80, 5, -1),
    (-80, 5, 1),
    (30, 0, 0),
    (50, 90, 0),
])
def test_swipe_direction(dx, dy, expected):
    assert swipe_direction(dx, dy) == expected


def test_swipe_navigates(session):
    assert session.swipe(-70, 0, threshold=60)
    assert session.current_date == date(2024, 4, 15)
    assert not session.swipe(50, 0, threshold=60)
    assert session.current_date == date(2024, 4, 15)
