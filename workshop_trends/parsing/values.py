"""
Coercion of spreadsheet cell text into dates and numbers.

Neither function raises: an unusable date comes back as an empty string and
an unusable number as 0.
"""

import re
from datetime import date
import pandas as pd

_PLAIN_NUMBER = re.compile(r'^\d{1,4}(\.\d+)?$')
_MONTH_DAY_YEAR = re.compile(r'^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})$')
_YEAR_MONTH_DAY = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})')
_NON_NUMERIC = re.compile(r'[^0-9.\-]')

MIN_YEAR = 2000


def _iso(year: str, month: str, day: str) -> str:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return ''


def parse_date(value) -> str:
    """
    Parse a date cell into an ISO ``YYYY-MM-DD`` string.

    Count and percentage columns sit in the same row as workshop dates, so
    bare numbers and anything containing ``%`` are rejected outright.

    Args:
        value: Raw cell value

    Returns:
        ISO date string, or '' when the cell is not a date
    """
    if value is None:
        return ''
    text = str(value).strip()
    if not text:
        return ''
    if _PLAIN_NUMBER.match(text) or '%' in text:
        return ''

    m = _MONTH_DAY_YEAR.match(text)
    if m:
        return _iso(m.group(3), m.group(1), m.group(2))

    m = _YEAR_MONTH_DAY.match(text)
    if m:
        return _iso(m.group(1), m.group(2), m.group(3))

    # Free-form dates such as "Mar 5, 2024"; a digit is required so words
    # like "today" or "Total" never resolve to a date.
    if re.search(r'[/\-]|[a-zA-Z]', text) and re.search(r'\d', text):
        try:
            parsed = pd.to_datetime(text, errors='coerce')
        except (ValueError, OverflowError):
            return ''
        if not pd.isna(parsed) and parsed.year >= MIN_YEAR:
            return parsed.date().isoformat()
    return ''


def parse_num(value):
    """
    Parse a numeric cell, ignoring ``%`` signs and any stray characters.

    Args:
        value: Raw cell value

    Returns:
        int when the value is whole, float otherwise; 0 for blank or garbage
    """
    if value is None:
        return 0
    text = _NON_NUMERIC.sub('', str(value).replace('%', ''))
    if not text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    return int(number) if number.is_integer() else number
