from datetime import date

import pytest

from calendar_logic import year_grids
from event_store import DateKey, EventRecord, EventStore
from view_composer import (
    CellDescriptor,
    compose_day_view,
    compose_month_view,
    compose_view,
    compose_week_view,
    compose_year_view,
    week_title,
)


@pytest.fixture
def store():
    s = EventStore()
    s.add(DateKey(2024, 3, 5), EventRecord.all_day("Trip"))
    s.add(DateKey(2024, 3, 5), EventRecord.timed("Dentist", 9))
    s.add(DateKey(2024, 3, 5), EventRecord.timed("Lunch", 12))
    s.add(DateKey(1990, 3, 7), EventRecord.yearly("Anna"))
    return s


def _cell(vm, d):
    return next(c for c in vm.cells if c.date == d)


def test_month_view_shape():
    vm = compose_month_view(date(2024, 3, 15), date(2024, 3, 15), EventStore())
    assert vm.mode == "month"
    assert vm.title == "March 2024"
    assert vm.subtitle == ""
    assert len(vm.cells) == 35
    assert vm.cells[:4] == (CellDescriptor.blank(),) * 4
    assert vm.cells[4].day_number == 1


def test_event_and_birthday_dots(store):
    vm = compose_month_view(date(2024, 3, 1), date(2024, 3, 20), store)
    busy = _cell(vm, date(2024, 3, 5))
    assert busy.dots == ("event",)
    assert len(busy.normal_events) == 3
    bday = _cell(vm, date(2024, 3, 7))
    assert bday.dots == ("birthday",)
    assert bday.recurring_events == (EventRecord.yearly("Anna"),)
    assert _cell(vm, date(2024, 3, 6)).dots == ()


def test_holiday_not_today_styles_number_only():
    # Easter Monday 2024 is April 1
    vm = compose_month_view(date(2024, 4, 1), date(2024, 4, 10), EventStore())
    cell = _cell(vm, date(2024, 4, 1))
    assert cell.holiday == "Ostermontag"
    assert cell.number_style == "holiday"
    assert "holiday" not in cell.dots


def test_holiday_today_gets_dot_and_today_style():
    vm = compose_month_view(date(2024, 4, 1), date(2024, 4, 1), EventStore())
    cell = _cell(vm, date(2024, 4, 1))
    assert cell.is_today
    assert cell.number_style == "today"
    assert cell.dots == ("holiday",)


def test_weekend_and_normal_styles():
    vm = compose_month_view(date(2024, 3, 1), date(2024, 4, 1), EventStore())
    assert _cell(vm, date(2024, 3, 2)).number_style == "weekend"
    assert _cell(vm, date(2024, 3, 4)).number_style == "normal"
    assert not any(c.is_today for c in vm.cells)


def test_week_view(store):
    vm = compose_week_view(date(2024, 3, 7), date(2024, 3, 7), store)
    assert [c.date for c in vm.cells] == [date(2024, 3, d) for d in range(4, 11)]
    assert vm.subtitle == "Week 10"
    assert vm.title == "March 2024"


def test_day_view_slots(store):
    vm = compose_day_view(date(2024, 3, 5), date(2024, 1, 1), store)
    assert vm.subtitle == "Tue, 5 Mar"
    cell = vm.cells[0]
    assert [r.text for r in cell.all_day_events] == ["Trip"]
    assert [r.text for r in cell.timed_events(9)] == ["Dentist"]
    assert cell.timed_events(10) == []


def test_birthday_is_all_day_in_day_view(store):
    vm = compose_day_view(date(2031, 3, 7), date(2031, 3, 7), store)
    assert vm.cells[0].all_day_events == [EventRecord.yearly("Anna")]
    assert all(vm.cells[0].timed_events(h) == [] for h in range(24))


def test_year_view(store):
    vm = compose_year_view(date(2024, 6, 1), date(2024, 3, 7), store)
    assert vm.title == "2024"
    assert vm.cells == ()
    assert len(vm.months) == 12
    assert [m.title for m in vm.months][:2] == ["January", "February"]
    march = vm.months[2]
    assert all(len(m.cells) % 7 == 0 for m in vm.months)
    today = next(c for c in march.cells if c.is_today)
    assert today.date == date(2024, 3, 7)
    assert today.dots == ("birthday",)


def test_compose_is_idempotent_and_pure(store):
    before = store.to_mapping()
    first = compose_view("month", date(2024, 3, 1), date(2024, 3, 5), store)
    second = compose_view("month", date(2024, 3, 1), date(2024, 3, 5), store)
    assert first == second
    assert store.to_mapping() == before


def test_compose_unknown_view():
    with pytest.raises(ValueError):
        compose_view("decade", date(2024, 1, 1), date(2024, 1, 1), EventStore())


def test_month_view_week_numbers():
    vm = compose_month_view(date(2024, 12, 10), date(2024, 12, 10), EventStore())
    assert vm.week_numbers == (48, 49, 50, 51, 52, 1)
    assert len(vm.week_numbers) == len(vm.cells) // 7


def test_year_view_follows_year_grids():
    vm = compose_year_view(date(2024, 1, 1), date(2024, 1, 1), EventStore())
    grids = year_grids(2024)
    assert [[c.date for c in m.cells] for m in vm.months] == grids


def test_week_across_new_year():
    store = EventStore()
    store.add(DateKey(2024, 12, 31), EventRecord.all_day("Party"))
    vm = compose_week_view(date(2025, 1, 1), date(2025, 1, 2), store)
    assert vm.cells[0].date == date(2024, 12, 30)
    assert vm.cells[-1].date == date(2025, 1, 5)
    assert vm.title == "Dec 2024 – Jan 2025"
    assert vm.subtitle == "Week 1"
    holidays = {c.date: c.holiday for c in vm.cells if c.holiday}
    assert holidays == {date(2025, 1, 1): "Neujahr"}
    assert vm.cells[1].dots == ("event",)


def test_christmas_week_holidays():
    vm = compose_week_view(date(2024, 12, 25), date(2024, 1, 1), EventStore())
    holidays = {c.date: c.holiday for c in vm.cells if c.holiday}
    assert holidays == {
        date(2024, 12, 25): "1. Weihnachtstag",
        date(2024, 12, 26): "2. Weihnachtstag",
    }


@pytest.mark.parametrize("first, last, expected", [
    (date(2024, 3, 4), date(2024, 3, 10), "March 2024"),
    (date(2024, 2, 26), date(2024, 3, 3), "Feb – Mar 2024"),
    (date(2024, 12, 30), date(2025, 1, 5), "Dec 2024 – Jan 2025"),
])
def test_week_title(first, last, expected):
    assert week_title(first, last) == expected
