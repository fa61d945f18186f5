from __future__ import annotations

from datetime import date, datetime

import pandas as pd
import pytest

from dashgen.services.dates import is_date_like, parse_date


@pytest.mark.parametrize(
    "value",
    [
        "2023-01-01",
        "01/31/2023",
        "01-31-2023",
        "2023/01/31",
        "January 5, 2023",
        "5 January 2023",
        "Jan 2023",
        "Sept-23",
        "dec2024",
        date(2023, 1, 1),
        datetime(2023, 1, 1, 12, 0),
    ],
)
def test_date_like_values(value):
    assert is_date_like(value)


@pytest.mark.parametrize(
    "value",
    ["2023-13-45", "31/01/2023", "hello", "East", "", None, 20230101, "2023"],
)
def test_not_date_like_values(value):
    assert not is_date_like(value)


def test_parse_date_for_labels():
    assert parse_date("2023-02-01") == pd.Timestamp(2023, 2, 1)
    assert parse_date("02/01/2023") == pd.Timestamp(2023, 2, 1)
    assert parse_date("Jan 2023") == pd.Timestamp(2023, 1, 1)
    assert parse_date("Mar-23") == pd.Timestamp(2023, 3, 1)
    assert parse_date("2023-01-05 10:30:00") == pd.Timestamp(2023, 1, 5, 10, 30)


def test_parse_date_reads_year_labels():
    assert parse_date("2021") == pd.Timestamp(2021, 1, 1)
    assert parse_date("0000") is None
    # Still not date-like for classification: a column of years stays numerical.
    assert not is_date_like("2021")


@pytest.mark.parametrize("label", ["East", "100", "20230", "Unknown", ""])
def test_parse_date_rejects_plain_labels(label):
    assert parse_date(label) is None
