from __future__ import annotations

from typing import Sequence

from dashgen.schemas import ColumnType
from dashgen.services.cells import is_missing, parse_number
from dashgen.services.dates import is_date_like

TYPE_THRESHOLD = 0.7
CLASSIFY_SAMPLE_SIZE = 100


def classify(values: Sequence[object]) -> ColumnType:
    """Infer a column's semantic type from its raw values.

    Only the first ``CLASSIFY_SAMPLE_SIZE`` non-empty values are inspected.
    Dates are checked before numbers, and a column falls back to
    ``categorical`` when neither reaches ``TYPE_THRESHOLD`` (inclusive).
    """
    present = [value for value in values if not is_missing(value)]
    if not present:
        return "unknown"

    sample = present[:CLASSIFY_SAMPLE_SIZE]
    date_count = 0
    number_count = 0
    for value in sample:
        if is_date_like(value):
            date_count += 1
        elif parse_number(value) is not None:
            number_count += 1

    if date_count / len(sample) >= TYPE_THRESHOLD:
        return "temporal"
    if number_count / len(sample) >= TYPE_THRESHOLD:
        return "numerical"
    return "categorical"
