from __future__ import annotations

import datetime as dt
import re
from typing import Optional

import pandas as pd

_RELATIVE_RE = re.compile(r"(\d+)\s*(day|week|month|year)s?\s*ago")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

MIN_YEAR = 1900


def _parse_iso(text: str) -> Optional[dt.date]:
    text = text.strip()
    if not _ISO_DATE_RE.match(text):
        return None
    try:
        ts = pd.to_datetime(text, format="ISO8601", errors="coerce")
    except (OverflowError, TypeError, ValueError):
        return None
    if ts is None or pd.isna(ts) or ts.year < MIN_YEAR:
        return None
    return ts.date()


def as_date(value: object) -> Optional[dt.date]:
    """Reduce a date, datetime, Timestamp or ISO date string to a date."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        return _parse_iso(value)
    return None


def resolve_date_expression(expression: object, anchor: object = None) -> Optional[dt.date]:
    """Resolve a relative phrase ("today", "3 weeks ago", "1 month ago") to a date.

    Months and years roll back on the calendar; a day that does not exist in the
    target month clamps to its last day. Returns None for anything it cannot read.
    """
    if not isinstance(expression, str):
        return None
    base = as_date(anchor) or dt.date.today()
    expr = expression.strip().lower()
    if expr == "today":
        return base

    match = _RELATIVE_RE.search(expr)
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2)
    try:
        if unit == "day":
            return base - dt.timedelta(days=amount)
        if unit == "week":
            return base - dt.timedelta(days=amount * 7)
        offset = pd.DateOffset(months=amount) if unit == "month" else pd.DateOffset(years=amount)
        return (pd.Timestamp(base) - offset).date()
    except (OverflowError, ValueError):
        return None


def parse_cell_date(value: object) -> Optional[dt.date]:
    """Read a table cell as a calendar date.

    Only date-likes and ISO 8601 strings ("2024-01-15", "2024-01-15T08:00:00")
    count; month names, free text and pre-1900 years do not.
    """
    return as_date(value)
