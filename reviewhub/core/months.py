"""
Calendar month helpers.

Months travel through the API as ``YYYY-MM`` strings; review timestamps are
stored as naive UTC datetimes, so month windows are naive UTC as well.
"""
import calendar
import re
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from reviewhub.core.exceptions import InvalidInputError

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_RE = re.compile(MONTH_PATTERN)


def utcnow() -> datetime:
    """Naive UTC now, the format every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_valid_month(value: str) -> bool:
    return isinstance(value, str) and bool(_MONTH_RE.match(value))


def parse_month(value: str) -> Tuple[int, int]:
    """Split ``YYYY-MM`` into (year, month), raising InvalidInputError on bad input."""
    if not is_valid_month(value):
        raise InvalidInputError(f"Invalid month format: {value}. Use YYYY-MM")
    year, month = value.split("-")
    return int(year), int(month)


def month_bounds(value: str) -> Tuple[datetime, datetime]:
    """First and last instant of the month, both inclusive."""
    year, month = parse_month(value)
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def previous_months(count: int = 3, reference: Optional[date] = None) -> List[str]:
    """
    The ``count`` completed months before the reference date's month,
    most recent first. With reference 2024-04-15 and count 3:
    ["2024-03", "2024-02", "2024-01"].
    """
    reference = reference or utcnow().date()
    year, month = reference.year, reference.month
    months = []
    for _ in range(count):
        month -= 1
        if month == 0:
            year -= 1
            month = 12
        months.append(format_month(year, month))
    return months
