from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime
from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd

STRIPPED_NUMBER_CHARS = re.compile(r"[,$]")
# Leading number only: "45%" reads as 45 and "12 kg" as 12.
LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class CellKind(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    MISSING = "missing"


def is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, (float, np.floating)) and math.isnan(value):
        return True
    return False


def _is_native_number(value: object) -> bool:
    # bool is an int subclass but is not a numeric cell.
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Real)


def cell_kind(value: object) -> CellKind:
    if is_missing(value):
        return CellKind.MISSING
    if isinstance(value, (datetime, date)):
        return CellKind.DATE
    if _is_native_number(value):
        return CellKind.NUMBER
    return CellKind.TEXT


def parse_number(value: object) -> Optional[float]:
    """Return the cell as a finite float, or None when it is not numeric.

    Strings are accepted after removing thousands separators and dollar signs,
    so "1,200" and "$45" both parse. Trailing text after the number is ignored.
    """
    kind = cell_kind(value)
    if kind is CellKind.NUMBER:
        number = float(value)  # type: ignore[arg-type]
        return number if math.isfinite(number) else None
    if kind is not CellKind.TEXT or not isinstance(value, str):
        return None

    match = LEADING_NUMBER.match(STRIPPED_NUMBER_CHARS.sub("", value))
    if match is None:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def coerce_number(value: object) -> float:
    number = parse_number(value)
    return 0.0 if number is None else number


def stringify(value: object, missing: str = "") -> str:
    kind = cell_kind(value)
    if kind is CellKind.MISSING:
        return missing
    if kind is CellKind.DATE:
        if isinstance(value, datetime):
            if (value.hour, value.minute, value.second, value.microsecond) == (0, 0, 0, 0):
                return value.date().isoformat()
            return value.isoformat(sep=" ")
        return value.isoformat()  # type: ignore[union-attr]
    if kind is CellKind.NUMBER:
        if isinstance(value, numbers.Integral):
            return str(int(value))
        number = float(value)  # type: ignore[arg-type]
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return str(number)
    return str(value)
