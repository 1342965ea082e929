"""Date parsing and reporting-window utilities."""

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "2024-01-15T10:00:00Z", "January 15, 2024"
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    raw = date_str.strip()
    keyword = raw.lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if keyword in relative_dates:
        return relative_dates[keyword]

    if keyword.startswith("last "):
        period = keyword[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)
        elif period == "quarter":
            return quarter_date_range(*previous_quarter(today))[0]

    elif keyword.startswith("this "):
        period = keyword[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())
        elif period == "quarter":
            return quarter_date_range(today.year, quarter_of(today))[0]

    try:
        return date_parser.parse(raw).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def coerce_date(value: Any) -> Optional[date]:
    """Normalize a stored date value to a calendar date.

    Accepts date, datetime (time of day dropped), ISO strings or None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(str(value))


def quarter_of(day: date) -> int:
    """Return the 1-based quarter containing ``day``."""
    return (day.month - 1) // 3 + 1


def previous_quarter(day: date) -> tuple[int, int]:
    """Return (year, quarter) of the quarter before the one containing ``day``."""
    quarter = quarter_of(day)
    if quarter == 1:
        return day.year - 1, 4
    return day.year, quarter - 1


def month_date_range(year: int, month: int) -> tuple[date, date]:
    """Return inclusive first and last calendar day of a month.

    Raises:
        ValueError: If month is not 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def quarter_date_range(year: int, quarter: int) -> tuple[date, date]:
    """Return inclusive first and last calendar day of a quarter.

    The window runs from the first day of month ``(quarter - 1) * 3 + 1``
    through the last day of month ``(quarter - 1) * 3 + 3``.

    Raises:
        ValueError: If quarter is not 1-4
    """
    if not 1 <= quarter <= 4:
        raise ValueError(f"Quarter must be between 1 and 4, got {quarter}")
    first_month = (quarter - 1) * 3 + 1
    start, _ = month_date_range(year, first_month)
    _, end = month_date_range(year, first_month + 2)
    return start, end
