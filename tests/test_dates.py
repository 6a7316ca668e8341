"""Tests for since-date helpers."""
from datetime import date
import pytest
from happygit.domain.dates import adjusted_date, days_ago
from happygit.domain.models import DateAdjustment


def test_days_ago_zero_is_today():
    """Test that zero days ago is the reference date."""
    assert days_ago(0, today=date(2024, 5, 17)) == "2024-05-17"


def test_days_ago_crosses_year_boundary():
    """Test going back across a year boundary."""
    assert days_ago(5, today=date(2024, 1, 3)) == "2023-12-29"


def test_days_ago_crosses_leap_day():
    """Test going back across February in a leap year."""
    assert days_ago(30, today=date(2024, 3, 15)) == "2024-02-14"
    assert days_ago(365, today=date(2024, 3, 1)) == "2023-03-02"


def test_days_ago_defaults_to_system_date():
    """Test the default clock."""
    assert days_ago(0) == date.today().isoformat()


def test_days_ago_rejects_negative():
    """Test that future dates are not accepted."""
    with pytest.raises(ValueError):
        days_ago(-1, today=date(2024, 1, 1))


@pytest.mark.parametrize(
    "adjustment,expected",
    [
        ("first-day-of-year", "2024-01-01"),
        ("first-day-of-month", "2024-02-01"),
        ("last-day-of-month", "2024-02-29"),
        ("last-day-of-year", "2024-12-31"),
        ("first-day-of-next-month", "2024-03-01"),
        ("first-day-of-next-year", "2025-01-01"),
    ],
)
def test_adjusted_date(adjustment, expected):
    """Test every supported calendar boundary."""
    assert adjusted_date(adjustment, today=date(2024, 2, 17)) == expected


def test_adjusted_date_accepts_enum():
    """Test passing a DateAdjustment member."""
    assert adjusted_date(DateAdjustment.FIRST_DAY_OF_MONTH, today=date(2023, 12, 25)) == "2023-12-01"


def test_first_day_of_next_month_in_december():
    """Test rolling over into January."""
    assert adjusted_date("first-day-of-next-month", today=date(2023, 12, 25)) == "2024-01-01"


def test_first_day_of_month_uses_current_month():
    """Test that the boundary stays in today's month."""
    today = date.today()
    result = date.fromisoformat(adjusted_date("first-day-of-month"))

    assert result.day == 1
    assert (result.year, result.month) == (today.year, today.month)


def test_adjusted_date_rejects_unknown_adjustment():
    """Test that unknown adjustments fail loudly."""
    with pytest.raises(ValueError):
        adjusted_date("first-friday-of-month", today=date(2024, 2, 17))
