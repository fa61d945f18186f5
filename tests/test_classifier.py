from __future__ import annotations

from datetime import date

from dashgen.services.classifier import CLASSIFY_SAMPLE_SIZE, classify


def test_iso_dates_are_temporal():
    assert classify(["2023-01-01", "2023-02-01", "2023-03-01"]) == "temporal"


def test_native_dates_are_temporal():
    assert classify([date(2023, 1, d) for d in range(1, 6)]) == "temporal"


def test_formatted_numbers_are_numerical():
    # 3 of 4 parse after stripping separators: 75% clears the threshold.
    assert classify(["1,200", "$45", "no data", "300"]) == "numerical"


def test_native_numbers_are_numerical():
    assert classify([1, 2, 3.5, 4]) == "numerical"


def test_free_text_is_categorical():
    assert classify(["apple", "banana", "cherry", "42"]) == "categorical"


def test_blank_column_is_unknown():
    assert classify([None, "", None]) == "unknown"
    assert classify([]) == "unknown"


def test_date_threshold_is_inclusive():
    values = ["2023-01-0%d" % d for d in range(1, 8)] + ["a", "b", "c"]
    assert classify(values) == "temporal"


def test_below_date_threshold_falls_through():
    values = ["2023-01-0%d" % d for d in range(1, 7)] + ["a", "b", "c", "d"]
    assert classify(values) == "categorical"


def test_number_threshold_is_inclusive():
    assert classify(["1", "2", "3", "4", "5", "6", "7", "x", "y", "z"]) == "numerical"
    assert classify([str(n) for n in range(69)] + ["text"] * 31) == "categorical"


def test_dates_and_numbers_split_evenly_are_categorical():
    assert classify(["2023-01-01"] * 5 + ["10"] * 5) == "categorical"


def test_only_the_sample_is_inspected():
    values = ["label"] * CLASSIFY_SAMPLE_SIZE + ["1"] * 1000
    assert classify(values) == "categorical"


def test_blanks_are_dropped_before_sampling():
    assert classify([None] * 500 + [""] * 10 + ["1", "2", "3"]) == "numerical"


def test_numbers_with_trailing_units_are_numerical():
    assert classify(["10%", "20%", "35%", "45%"]) == "numerical"
    assert classify(["12 kg", "3.5 kg", "40 kg"]) == "numerical"


def test_units_before_the_number_are_categorical():
    assert classify(["kg 12", "kg 3", "kg 40"]) == "categorical"
