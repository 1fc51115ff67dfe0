"""Tests for date parsing helpers."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from costbook.utils.date_parser import month_bounds, parse_date, parse_year_month


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("15 March 2024") == date(2024, 3, 15)


def test_parse_relative_days():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date(" Yesterday ") == today - timedelta(days=1)
    assert parse_date("tomorrow") == today + timedelta(days=1)


def test_parse_months():
    today = date.today()
    assert parse_date("this month") == today.replace(day=1)
    assert parse_date("last month") == (today - relativedelta(months=1)).replace(day=1)


def test_parse_invalid():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("the day after never")


def test_parse_year_month():
    assert parse_year_month("2024-03") == (2024, 3)
    assert parse_year_month("2023-12") == (2023, 12)


def test_parse_year_month_relative():
    today = date.today()
    assert parse_year_month("this month") == (today.year, today.month)


@pytest.mark.parametrize("value", ["2024-13", "2024-00", "2024", "March", "2024-3-1"])
def test_parse_year_month_invalid(value):
    with pytest.raises(ValueError):
        parse_year_month(value)


def test_month_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 3, 1))
    assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2024, 1, 1))
