"""Since-date helpers.

Every function accepts an optional ``today`` so callers can pin the clock.
"""
import calendar
from datetime import date, timedelta
from typing import Optional, Union
from happygit.domain.models import DateAdjustment


def days_ago(how_long_ago: int, today: Optional[date] = None) -> str:
    """Return the ISO date ``how_long_ago`` days before today.

    Args:
        how_long_ago: Number of calendar days to go back
        today: Reference date, defaults to the system date

    Returns:
        Date string formatted as YYYY-MM-DD

    Raises:
        ValueError: If how_long_ago is negative
    """
    if how_long_ago < 0:
        raise ValueError(f"Number of days must not be negative: {how_long_ago}")
    today = today or date.today()
    return (today - timedelta(days=how_long_ago)).isoformat()


def adjusted_date(
    adjusted_to: Union[DateAdjustment, str],
    today: Optional[date] = None
) -> str:
    """Return today's date snapped to a calendar boundary.

    Args:
        adjusted_to: A DateAdjustment or its string value, e.g. "first-day-of-month"
        today: Reference date, defaults to the system date

    Returns:
        Date string formatted as YYYY-MM-DD

    Raises:
        ValueError: If the adjustment is not a known DateAdjustment
    """
    adjustment = DateAdjustment(adjusted_to)
    today = today or date.today()

    if adjustment is DateAdjustment.FIRST_DAY_OF_YEAR:
        adjusted = today.replace(month=1, day=1)
    elif adjustment is DateAdjustment.FIRST_DAY_OF_MONTH:
        adjusted = today.replace(day=1)
    elif adjustment is DateAdjustment.LAST_DAY_OF_MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        adjusted = today.replace(day=last_day)
    elif adjustment is DateAdjustment.LAST_DAY_OF_YEAR:
        adjusted = today.replace(month=12, day=31)
    elif adjustment is DateAdjustment.FIRST_DAY_OF_NEXT_MONTH:
        if today.month == 12:
            adjusted = date(today.year + 1, 1, 1)
        else:
            adjusted = date(today.year, today.month + 1, 1)
    else:
        adjusted = date(today.year + 1, 1, 1)

    return adjusted.isoformat()
