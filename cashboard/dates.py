"""Date utilities for cashboard.

Pure functions for period normalization, date range calculations and
formatting. Period inputs come straight from the command line and are
never trusted: anything malformed falls back to today's year/month.
"""

from datetime import date, datetime, timedelta

from cashboard.domain.models import Period

# How far back a requested year may reach, relative to the current year
MAX_YEARS_BACK = 100


def _coerce_int(value: str | int | None) -> int | None:
    """Convert an untrusted value to int, or None if it isn't integral."""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def year_bounds(today: date | None = None) -> tuple[int, int]:
    """Get the inclusive (min_year, max_year) a period may use.

    Args:
        today: Reference date. If None, uses the current date.

    Returns:
        Tuple of (min_year, max_year).
    """
    today = today or date.today()
    return today.year - MAX_YEARS_BACK, today.year + 1


def normalize_year(year: str | int | None, today: date | None = None) -> Period:
    """Parse a requested year, falling back to the current year.

    Args:
        year: Raw year value (e.g. "2024"), possibly malformed or missing.
        today: Reference date. If None, uses the current date.

    Returns:
        Period with month set to None. Never raises.
    """
    today = today or date.today()
    min_year, max_year = year_bounds(today)

    parsed = _coerce_int(year)
    if parsed is None or not min_year <= parsed <= max_year:
        parsed = today.year

    return Period(year=parsed)


def normalize_period(
    year: str | int | None,
    month: str | int | None,
    today: date | None = None,
) -> Period:
    """Parse a requested year/month pair into a valid Period.

    Year and month fall back independently: "year=2024&month=13" gives
    2024 with the current month.

    Args:
        year: Raw year value, possibly malformed or missing.
        month: Raw month value (1-12), possibly malformed or missing.
        today: Reference date. If None, uses the current date.

    Returns:
        Period with year in [current-100, current+1] and month in [1, 12].
    """
    today = today or date.today()
    period = normalize_year(year, today)

    parsed_month = _coerce_int(month)
    if parsed_month is None or not 1 <= parsed_month <= 12:
        parsed_month = today.month

    return Period(year=period.year, month=parsed_month)


def month_range(period: Period) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        period: Period with a month set.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Short month label (e.g., "Jan 2025")

    Raises:
        ValueError: If the period has no month.
    """
    if period.month is None:
        raise ValueError("Period has no month")

    dt = datetime(period.year, period.month, 1)
    since = dt.strftime("%Y-%m-%d")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    return since, until, format_month_label(period.year, period.month)


def year_range(year: int) -> tuple[str, str]:
    """Calculate the [since, until) date range covering a whole year."""
    return f"{year:04d}-01-01", f"{year + 1:04d}-01-01"


def format_month_label(year: int, month: int) -> str:
    """Format a short month/year header, e.g. "Jan 2025"."""
    return date(year, month, 1).strftime("%b %Y")


def ordinal_suffix(day: int) -> str:
    """Get the English ordinal suffix for a day of the month."""
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_ordinal_date(value: date) -> str:
    """Format a row-level date, e.g. "1st Jan 2025"."""
    return f"{value.day}{ordinal_suffix(value.day)} {value.strftime('%b %Y')}"
