from datetime import date

import pytest

from event_store import DateKey
from german_holidays import easter, holiday_map, holidays_for_year


@pytest.mark.parametrize("year, expected", [
    (2024, date(2024, 3, 31)),
    (2025, date(2025, 4, 20)),
    (2000, date(2000, 4, 23)),
    (2023, date(2023, 4, 9)),
    (2019, date(2019, 4, 21)),
    (1818, date(1818, 3, 22)),   # earliest possible
    (1943, date(1943, 4, 25)),   # latest possible
])
def test_easter(year, expected):
    assert easter(year) == expected


def test_nine_holidays_every_year():
    for year in range(1900, 2101):
        assert len(holidays_for_year(year)) == 9


def test_order_is_stable():
    labels = [h.label for h in holidays_for_year(2024)]
    assert labels == [
        "Neujahr", "Tag der Arbeit", "Tag der Deutschen Einheit",
        "1. Weihnachtstag", "2. Weihnachtstag", "Ostermontag",
        "Christi Himmelfahrt", "Pfingstmontag", "Fronleichnam",
    ]
    assert holidays_for_year(2024) == holidays_for_year(2024)


def test_movable_holidays_2025():
    by_label = {h.label: h.key for h in holidays_for_year(2025)}
    assert by_label["Ostermontag"] == DateKey(2025, 4, 21)
    assert by_label["Christi Himmelfahrt"] == DateKey(2025, 5, 29)
    assert by_label["Pfingstmontag"] == DateKey(2025, 6, 9)
    assert by_label["Fronleichnam"] == DateKey(2025, 6, 19)


def test_easter_monday_key_text():
    keys = [str(h.key) for h in holidays_for_year(2025)]
    assert "2025-4-21" in keys


def test_holiday_map():
    hm = holiday_map(2024)
    assert hm[date(2024, 10, 3)] == "Tag der Deutschen Einheit"
    assert hm[date(2024, 4, 1)] == "Ostermontag"
    assert date(2024, 3, 31) not in hm
