from __future__ import annotations

import re
from datetime import date, datetime
from typing import List, Optional, Tuple

import pandas as pd

# (pattern, strict format). A format of None defers to pandas' free-form parser.
DATE_PATTERNS: List[Tuple["re.Pattern[str]", Optional[str]]] = [
    (re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%m/%d/%Y"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%m-%d-%Y"),
    (re.compile(r"^\d{4}/\d{2}/\d{2}$"), "%Y/%m/%d"),
    (re.compile(r"^[A-Za-z]+ \d{1,2}, \d{4}$"), None),
    (re.compile(r"^\d{1,2} [A-Za-z]+ \d{4}$"), None),
]

MONTH_YEAR_PATTERN = re.compile(
    r"^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*[\s-]?(\d{2,4})$",
    re.IGNORECASE,
)
MONTHS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]

# Only used when ordering chart labels; stringified datetime cells look like this.
ISO_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?$")
# Bare four-digit year labels, such as grouping by a year column.
YEAR_PATTERN = re.compile(r"^\d{4}$")


def _to_timestamp(text: str, fmt: Optional[str]) -> Optional[pd.Timestamp]:
    try:
        if fmt is None:
            parsed = pd.to_datetime(text, errors="coerce")
        else:
            parsed = pd.to_datetime(text, format=fmt, errors="coerce")
    except (ValueError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed


def _parse_pattern_date(text: str) -> Optional[pd.Timestamp]:
    for pattern, fmt in DATE_PATTERNS:
        if pattern.match(text):
            return _to_timestamp(text, fmt)
    return None


def _parse_month_year(text: str) -> Optional[pd.Timestamp]:
    match = MONTH_YEAR_PATTERN.match(text)
    if not match:
        return None
    month = MONTHS.index(match.group(1).lower()) + 1
    year = int(match.group(2))
    if len(match.group(2)) == 2:
        year += 2000
    try:
        return pd.Timestamp(year=year, month=month, day=1)
    except (ValueError, OverflowError):
        return None


def _parse_year(text: str) -> Optional[pd.Timestamp]:
    if not YEAR_PATTERN.match(text):
        return None
    try:
        return pd.Timestamp(year=int(text), month=1, day=1)
    except (ValueError, OverflowError):
        return None


def is_date_like(value: object) -> bool:
    """Whether a raw cell counts as a date when classifying a column."""
    if isinstance(value, (datetime, date)):
        return not pd.isna(value)
    if not isinstance(value, str) or not value:
        return False
    if any(pattern.match(value) for pattern, _ in DATE_PATTERNS):
        return _parse_pattern_date(value) is not None
    # Month-year labels such as "Jan 2023" or "Sept-23" count without parsing.
    return MONTH_YEAR_PATTERN.match(value) is not None


def parse_date(text: str) -> Optional[pd.Timestamp]:
    """Parse a stringified label for chronological ordering, or return None."""
    if not text:
        return None
    parsed = _parse_pattern_date(text)
    if parsed is not None:
        return parsed
    if ISO_DATETIME_PATTERN.match(text):
        return _to_timestamp(text, None)
    year = _parse_year(text)
    if year is not None:
        return year
    return _parse_month_year(text)
