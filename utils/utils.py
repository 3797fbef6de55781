"""Unified utility module for the asset dashboard"""

import datetime as dt
import math
from numbers import Real


def parse_date_str(value) -> dt.date | None:
    """Parse a YYYY-MM-DD, YYYYMMDD or YYYY-MM string into a date."""
    if not value:
        return None
    if isinstance(value, dt.date):
        return value
    for fmt in ("%Y-%m-%d", "%Y%m%d", "%Y-%m"):
        try:
            return dt.datetime.strptime(str(value).strip(), fmt).date()
        except ValueError:
            continue
    return None


def as_number(value) -> float | None:
    """Return value as float if it is a finite real number, else None.

    Booleans and numeric strings are not numbers here.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_int(value, default: int | None = None) -> int | None:
    try:
        return int(value) if str(value).strip() != '' else default
    except (ValueError, TypeError):
        return default
