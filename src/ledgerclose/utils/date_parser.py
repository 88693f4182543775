"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Oracle-style date used by the legacy statement detail files
LEGACY_DATE_FORMAT = "%d-%b-%y"


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports ISO dates ("2017-03-31"), legacy Oracle dates ("31-Mar-17") and
    the free-form formats dateutil understands ("March 31, 2017").

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip()
    if not date_str:
        raise ValueError("Empty date string")

    try:
        return datetime.strptime(date_str, LEGACY_DATE_FORMAT).date()
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def start_of_day(value: date) -> datetime:
    """Return the first instant of a date."""
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    """Return the last whole second of a date."""
    return datetime.combine(value, time(23, 59, 59))


def fiscal_year_bounds(year: int, start_month: int = 1) -> tuple[datetime, datetime]:
    """Get start and end timestamps of a fiscal year.

    A fiscal year starting in a month other than January is named for the
    calendar year in which it starts.

    Args:
        year: Fiscal year number
        start_month: First month of the fiscal year (1-12)

    Returns:
        Tuple of (start, end) where end is the last second of the year

    Raises:
        ValueError: If start_month is not a month number
    """
    if not 1 <= start_month <= 12:
        raise ValueError(f"Invalid fiscal year start month: {start_month}")
    start = datetime(year, start_month, 1)
    end = start + relativedelta(years=1) - timedelta(seconds=1)
    return start, end


def format_legacy_date(value: datetime) -> str:
    """Format a timestamp as a legacy Oracle date ("31-Mar-17")."""
    return value.strftime(LEGACY_DATE_FORMAT)
