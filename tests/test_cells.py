from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from dashgen.services.cells import CellKind, cell_kind, coerce_number, is_missing, parse_number, stringify


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1,200", 1200.0),
        ("$45", 45.0),
        ("$1,234.50", 1234.5),
        (" 7.5 ", 7.5),
        ("-3", -3.0),
        ("1e3", 1000.0),
        ("45%", 45.0),
        ("12 kg", 12.0),
        ("12abc", 12.0),
        ("$1,500 USD", 1500.0),
        (42, 42.0),
        (np.int64(7), 7.0),
        (2.5, 2.5),
    ],
)
def test_parse_number_accepts_numeric_cells(value, expected):
    assert parse_number(value) == expected


@pytest.mark.parametrize(
    "value",
    ["no data", "", "kg 12", "inf", "nan", "$", "-", "%", None, True, float("nan"), date(2023, 1, 1)],
)
def test_parse_number_rejects_non_numeric_cells(value):
    assert parse_number(value) is None


def test_coerce_number_defaults_to_zero():
    assert coerce_number("n/a") == 0.0
    assert coerce_number(None) == 0.0
    assert coerce_number("$5") == 5.0
    assert coerce_number("15%") == 15.0


def test_cell_kind():
    assert cell_kind(None) is CellKind.MISSING
    assert cell_kind("") is CellKind.MISSING
    assert cell_kind(pd.NaT) is CellKind.MISSING
    assert cell_kind(float("nan")) is CellKind.MISSING
    assert cell_kind(3) is CellKind.NUMBER
    assert cell_kind(np.float64(3.5)) is CellKind.NUMBER
    assert cell_kind(False) is CellKind.TEXT
    assert cell_kind("East") is CellKind.TEXT
    assert cell_kind(datetime(2023, 1, 1)) is CellKind.DATE
    assert cell_kind(pd.Timestamp("2023-01-01")) is CellKind.DATE


def test_is_missing_keeps_whitespace_and_zero():
    assert not is_missing(" ")
    assert not is_missing(0)


def test_stringify():
    assert stringify(100.0) == "100"
    assert stringify(100) == "100"
    assert stringify(2.5) == "2.5"
    assert stringify("East") == "East"
    assert stringify(None) == ""
    assert stringify(None, missing="Unknown") == "Unknown"
    assert stringify(date(2023, 1, 5)) == "2023-01-05"
    assert stringify(datetime(2023, 1, 5)) == "2023-01-05"
    assert stringify(pd.Timestamp("2023-01-05")) == "2023-01-05"
    assert stringify(datetime(2023, 1, 5, 10, 30)) == "2023-01-05 10:30:00"
