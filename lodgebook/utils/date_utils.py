# lodgebook/utils/date_utils.py
"""
Date utility functions used across the project.

Notes:
- Month keys are "YYYY-MM" strings. They sort lexicographically in the
  same order as the months they name.
- "Today" is always taken in the configured timezone, never the host's.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import date, datetime
from typing import Iterator, Optional, Union

from dateutil import parser, tz
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_KEY_RE = re.compile(MONTH_KEY_PATTERN)


class DateUtilsError(ValueError):
    """Custom exception for date utilities errors."""
    pass


def today_in(timezone_name: str = "UTC") -> date:
    """Return today's date in the named timezone."""
    zone = tz.gettz(timezone_name)
    if zone is None:
        raise DateUtilsError(f"Unknown timezone: {timezone_name}")
    return datetime.now(zone).date()


def month_key(d: date) -> str:
    """Return the "YYYY-MM" key of the month containing ``d``."""
    return f"{d.year:04d}-{d.month:02d}"


def is_month_key(value: str) -> bool:
    return isinstance(value, str) and bool(_MONTH_KEY_RE.match(value))


def parse_month_key(value: str) -> date:
    """Return the first day of the month named by a "YYYY-MM" key."""
    if not is_month_key(value):
        raise DateUtilsError(f"Invalid month key '{value}'. Expected format: YYYY-MM")
    year, month = value.split("-")
    return date(int(year), int(month), 1)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def day_in_month(key: str, day: int) -> date:
    """
    Return ``day`` of the month named by ``key``.

    Days past the end of the month are clamped to its last day, so a
    due day of 31 falls on 28/29 February.
    """
    first = parse_month_key(key)
    last = calendar.monthrange(first.year, first.month)[1]
    return first.replace(day=min(max(day, 1), last))


def subtract_months(d: date, months: int) -> date:
    return d - relativedelta(months=months)


def iter_month_keys(start: date, end: date) -> Iterator[str]:
    """Yield month keys from the month of ``start`` through the month of ``end``."""
    current = start_of_month(start)
    stop = start_of_month(end)
    while current <= stop:
        yield month_key(current)
        current = current + relativedelta(months=1)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end`` (month boundaries only)."""
    delta = relativedelta(start_of_month(end), start_of_month(start))
    return delta.years * 12 + delta.months


def coerce_date(value: Union[str, date, datetime, None]) -> Optional[Union[date, str]]:
    """
    Normalise legacy date input.

    Full ISO timestamps ("2024-05-01T10:15:00.000Z") are truncated to their
    calendar date and empty strings become ``None``. Anything else is
    returned unchanged for regular validation.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if "T" in text:
            try:
                return parser.isoparse(text).date()
            except ValueError:
                logger.debug(f"Unparseable timestamp '{text}' left for validation")
                return text
        return text
    return value
