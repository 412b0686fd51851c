import json
from datetime import date

import pytest

from app.services.holiday_service import HolidayCalendar, sunday_based_weekday


def write_calendar(tmp_path, data):
    path = tmp_path / "holidays.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return HolidayCalendar(str(path))


def test_missing_file_means_no_holidays(tmp_path):
    calendar = HolidayCalendar(str(tmp_path / "absent.json"))

    check = calendar.is_holiday(date(2025, 12, 25))

    assert check.is_holiday is False
    assert check.name is None


def test_explicit_date(tmp_path):
    calendar = write_calendar(tmp_path, {
        "version": 1,
        "fixed": [],
        "dates": [{"date": "2025-03-31", "name": "Idul Fitri"}],
    })

    assert calendar.is_holiday(date(2025, 3, 31)).name == "Idul Fitri"
    assert calendar.is_holiday(date(2025, 4, 1)).is_holiday is False


def test_weekday_rule_uses_sunday_as_zero(tmp_path):
    calendar = write_calendar(tmp_path, {"version": 1, "fixed": [{"date": "* * 0", "name": "Minggu"}], "dates": []})

    # 2025-06-15 is a Sunday, 2025-06-16 a Monday
    assert calendar.is_holiday(date(2025, 6, 15)).name == "Minggu"
    assert calendar.is_holiday(date(2025, 6, 16)).is_holiday is False


def test_yearly_rule(tmp_path):
    calendar = write_calendar(tmp_path, {"version": 1, "fixed": [{"date": "08-17", "name": "Kemerdekaan"}]})

    assert calendar.is_holiday(date(2025, 8, 17)).is_holiday is True
    assert calendar.is_holiday(date(2030, 8, 17)).is_holiday is True


def test_unsupported_rule_raises(tmp_path):
    calendar = write_calendar(tmp_path, {"version": 1, "fixed": [{"date": "every friday", "name": "?"}]})

    with pytest.raises(ValueError):
        calendar.is_holiday(date(2025, 6, 13))


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2025, 6, 15)) == 0
    assert sunday_based_weekday(date(2025, 6, 21)) == 6
