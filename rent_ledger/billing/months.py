"""Calendar-month arithmetic and month-keys.

A month-key is ``YYYY-MM`` with a zero-padded, 1-based month, so lexical
order equals chronological order.
"""

import calendar
import re
from datetime import date, datetime

MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def month_key(moment: date) -> str:
    """Return the month-key of a date or datetime."""
    return f"{moment.year:04d}-{moment.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    """Split a month-key into ``(year, month)``.

    Raises
    ------
    ValueError
        If ``key`` is not a valid month-key.
    """
    match = MONTH_KEY_PATTERN.match(key)
    if match is None:
        raise ValueError(f"Invalid month key: {key!r}")
    return int(match.group(1)), int(match.group(2))


def add_months(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` by whole calendar months.

    The day of month is clamped to the length of the target month
    (Jan 31 + 1 month is Feb 28 or 29).
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def months_between(start: date, end: date) -> int:
    """Signed number of month boundaries from ``start`` to ``end``.

    Only year and month are considered; days are ignored.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)
