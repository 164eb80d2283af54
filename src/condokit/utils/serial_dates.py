"""Spreadsheet date serial utilities."""

import math
from datetime import date, datetime, timedelta
from typing import Any, Optional

# Serial 25569 is 1970-01-01; day 0 is 1899-12-30.
UNIX_EPOCH_SERIAL = 25569
UNIX_EPOCH = date(1970, 1, 1)
SPREADSHEET_EPOCH = datetime(1899, 12, 30)

# Smaller numbers are row counters or codes, not dates.
MIN_DATE_SERIAL = 1000

# Serial of 9999-12-31, the last day a date object can hold.
MAX_DATE_SERIAL = 2958465


def serial_to_date(serial: Any) -> Optional[date]:
    """Convert a spreadsheet date serial into a calendar date.

    Fractional serials carry a time of day and floor to their calendar day.

    Args:
        serial: Cell value to interpret

    Returns:
        Calendar date, or None if the value is not a plausible date serial
    """
    if isinstance(serial, bool) or not isinstance(serial, (int, float)):
        return None
    if not math.isfinite(serial) or serial < MIN_DATE_SERIAL or serial >= MAX_DATE_SERIAL + 1:
        return None
    return UNIX_EPOCH + timedelta(days=serial - UNIX_EPOCH_SERIAL)


def date_to_serial(value: date | datetime) -> float:
    """Convert a date or datetime into a spreadsheet date serial."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.replace(tzinfo=None)
    delta = value - SPREADSHEET_EPOCH
    return delta.days + delta.seconds / 86400


def _segment(value: date | str, index: int) -> int:
    if isinstance(value, date):
        return (value.year, value.month, value.day)[index]
    return int(value.split("-")[index])


def get_quarter(value: date | str) -> str:
    """Return the fiscal quarter ("Q1".."Q4") of a date or ISO date string."""
    month = _segment(value, 1)
    if month <= 3:
        return "Q1"
    if month <= 6:
        return "Q2"
    if month <= 9:
        return "Q3"
    return "Q4"


def get_year(value: date | str) -> int:
    """Return the fiscal year of a date or ISO date string."""
    return _segment(value, 0)
