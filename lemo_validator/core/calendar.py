"""
Calendar helpers.

Century disambiguation and month decoding for birth numbers, Gregorian
date checks, and the permissive date parser used by the date validators.
"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as date_parser

# Birth numbers issued before 1954 have no check digit
LEGACY_CUTOFF_YEAR = 1954

# Month offsets encoding sex and extension exhaustion
FEMALE_MONTH_OFFSET = 50
EXTENDED_MONTH_OFFSET = 20
EXTENDED_FEMALE_MONTH_OFFSET = 70
EXTENDED_OFFSETS_SINCE = 2004

_RELATIVE_DAYS = {'today': 0, 'tomorrow': 1, 'yesterday': -1}


def resolve_year(two_digit_year: int, has_check_digit: bool, reference_year: int, window: int = 101) -> int:
    """
    Resolve a two-digit birth number year to four digits.

    Nine-digit numbers and ten-digit numbers with a year of 54 or more
    start in the 1900s, the rest in the 2000s. The result is then shifted
    by a century to land within [reference_year - window, reference_year].

    Args:
        two_digit_year: Year field as parsed (0..99)
        has_check_digit: True for ten-digit numbers
        reference_year: Year of the reference instant
        window: How many years back a birth date may lie

    Returns:
        Four-digit year

    Example:
        resolve_year(71, True, 2026)  # 1971
        resolve_year(40, True, 2026)  # 1940
    """
    if not has_check_digit or two_digit_year >= 54:
        year = 1900 + two_digit_year
    else:
        year = 2000 + two_digit_year

    if year > reference_year:
        year -= 100
    if year < reference_year - window:
        year += 100

    return year


def decode_month(raw_month: int, year: int) -> int:
    """
    Strip the sex/extension offset from a birth number month.

    Offsets of 20 and 70 only exist from 2004 on; 50 marks women in any year.
    """
    if raw_month > EXTENDED_FEMALE_MONTH_OFFSET and year >= EXTENDED_OFFSETS_SINCE:
        return raw_month - EXTENDED_FEMALE_MONTH_OFFSET
    if raw_month > FEMALE_MONTH_OFFSET:
        return raw_month - FEMALE_MONTH_OFFSET
    if raw_month > EXTENDED_MONTH_OFFSET and year >= EXTENDED_OFFSETS_SINCE:
        return raw_month - EXTENDED_MONTH_OFFSET
    return raw_month


def is_valid_date(year: int, month: int, day: int) -> bool:
    """Check a (year, month, day) triple against the Gregorian calendar"""
    if not 1 <= year <= 9999 or not 1 <= month <= 12 or day < 1:
        return False
    return day <= calendar.monthrange(year, month)[1]


def _naive(value: datetime) -> datetime:
    """Aware datetimes become naive UTC so they compare with naive ones"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: str, now: Optional[datetime] = None, dayfirst: bool = True) -> Optional[datetime]:
    """
    Parse a date/time string permissively.

    Tries, in order:
    - ISO 8601 ("2024-01-05", "20240105T1030")
    - Unix timestamps prefixed with "@" ("@1700000000", UTC)
    - Keywords relative to now: "now", "today", "tomorrow", "yesterday"
    - dateutil's free-form parser ("5.1.2024", "Jan 5 2024 10:30")

    Args:
        value: String to parse
        now: Reference instant for relative keywords and missing fields
        dayfirst: Read ambiguous numeric dates as day.month.year

    Returns:
        Naive datetime, or None if the value is not a date
    """
    if now is None:
        now = datetime.now()
    now = _naive(now)
    text = value.strip()
    if not text:
        return None

    try:
        return _naive(date_parser.isoparse(text))
    except (ValueError, OverflowError):
        pass

    if text.startswith('@'):
        try:
            return _naive(datetime.fromtimestamp(float(text[1:]), tz=timezone.utc))
        except (ValueError, OverflowError, OSError):
            return None

    keyword = text.lower()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if keyword == 'now':
        return now
    if keyword in _RELATIVE_DAYS:
        return midnight + timedelta(days=_RELATIVE_DAYS[keyword])

    try:
        return _naive(date_parser.parse(text, dayfirst=dayfirst, default=midnight))
    except (ValueError, OverflowError):
        return None
