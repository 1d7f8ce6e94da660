"""
String coercion helpers for raw XER field values.

Every XER value arrives as a string. These helpers turn a raw value into a
typed value with "parse, else None" semantics: blank, missing and unparseable
input all become None and nothing here raises.
"""
import math
from datetime import datetime
from typing import Optional

import pandas as pd


def parse_optional_str(value: Optional[str]) -> Optional[str]:
    """Return the value, or None when it is missing or empty."""
    if value is None or value == '':
        return None
    return value


def parse_optional_float(value: Optional[str]) -> Optional[float]:
    """Parse a float, returning None for blank or unparseable values."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        result = float(value)
    except ValueError:
        return None
    # float() accepts 'nan' and 'inf'; neither is a usable quantity
    if not math.isfinite(result):
        return None
    return result


def parse_optional_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer, returning None for blank or unparseable values."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    # P6 occasionally writes integral numbers as "10.0"
    number = parse_optional_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_optional_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an XER date ("2024-01-15 08:00") into a naive datetime.

    Returns None for blank or unparseable values.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        parsed = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    # Float arithmetic compares dates across tasks, so everything is kept naive (UTC)
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed.to_pydatetime()
