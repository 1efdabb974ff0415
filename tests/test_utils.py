from datetime import date, datetime
from types import SimpleNamespace

import pytest

from core.utils import (
    format_inr,
    format_time_12h,
    normalize_time,
    parse_datetime,
    parse_date,
    format_date,
    relative_time,
    remaining_days,
    days_from,
    split_full_name,
    progress_percent,
    sort_by_date_desc,
)


@pytest.mark.parametrize("amount, expected", [
    (0, "₹0"),
    (999, "₹999"),
    (5000, "₹5,000"),
    (120000, "₹1,20,000"),
    (1234567, "₹12,34,567"),
    ("5000.00", "₹5,000"),
    (None, "₹0"),
])
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_format_inr_with_decimals():
    assert format_inr(1234.5, decimals=2) == "₹1,234.50"


@pytest.mark.parametrize("value, expected", [
    ("14:30:00", "2:30 PM"),
    ("00:05", "12:05 AM"),
    ("12:00", "12:00 PM"),
    ("", "--"),
    (None, "--"),
    ("noon", "noon"),
])
def test_format_time_12h(value, expected):
    assert format_time_12h(value) == expected


def test_normalize_time():
    assert normalize_time("9") == "9:00:00"
    assert normalize_time("09:30") == "09:30:00"
    assert normalize_time("09:30:15") == "09:30:15"
    assert normalize_time("") == ""


def test_parse_datetime_handles_timezones_and_dates():
    assert parse_datetime("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0)
    assert parse_datetime("2024-03-01T15:30:00+05:30") == datetime(2024, 3, 1, 10, 0)
    assert parse_datetime(date(2024, 3, 1)) == datetime(2024, 3, 1)
    assert parse_datetime("garbage") is None
    assert parse_date("2024-03-01T23:00:00") == date(2024, 3, 1)


def test_format_date():
    assert format_date("2024-03-01") == "01/03/2024"
    assert format_date(None) == "--"


def test_relative_time():
    now = datetime(2024, 6, 10, 12, 0)
    assert relative_time("2024-06-10T11:30:00", now) == "Just now"
    assert relative_time("2024-06-10T11:00:00", now) == "1 hour ago"
    assert relative_time("2024-06-10T07:00:00", now) == "5 hours ago"
    assert relative_time("2024-06-09T06:00:00", now) == "Yesterday"
    assert relative_time("2024-06-01T06:00:00", now) == "Jun 1"
    assert relative_time("2023-12-25T06:00:00", now) == "Dec 25, 2023"


def test_remaining_days_rounds_up():
    today = datetime(2024, 6, 10, 12, 0)
    assert remaining_days("2024-06-20", today) == 10
    assert remaining_days("2024-06-11", today) == 1
    assert remaining_days("2024-06-01", today) < 0
    assert remaining_days(None, today) == 0


def test_days_from():
    assert days_from(date(2024, 1, 1), 45) == date(2024, 2, 15)


def test_split_full_name():
    assert split_full_name("Shakir Jamal Khan") == ("Shakir", "Jamal Khan")
    assert split_full_name("Asha") == ("Asha", "")


def test_progress_percent():
    assert progress_percent(2500, 5000) == 50.0
    assert progress_percent(100, 0) == 0.0


def test_sort_by_date_desc_puts_undated_last():
    items = [
        SimpleNamespace(id=1, date="2024-01-01"),
        SimpleNamespace(id=2, date=""),
        SimpleNamespace(id=3, date="2024-05-01"),
    ]
    assert [i.id for i in sort_by_date_desc(items, "date")] == [3, 1, 2]
