from __future__ import annotations

import re
from pathlib import PurePath
from typing import List, Mapping, Sequence

import pandas as pd

from dashgen.schemas import ChartDataPoint
from dashgen.services.cells import stringify

Row = Mapping[str, object]

WHITESPACE = re.compile(r"\s+")


def _to_csv(frame: pd.DataFrame) -> str:
    text = frame.to_csv(index=False, lineterminator="\n")
    return text[:-1] if text.endswith("\n") else text


def rows_to_csv(rows: Sequence[Row], column_names: Sequence[str]) -> str:
    """Render rows as CSV text with a header of column names."""
    records: List[List[str]] = [[stringify(row.get(name)) for name in column_names] for row in rows]
    return _to_csv(pd.DataFrame(records, columns=list(column_names), dtype=object))


def chart_to_csv(points: Sequence[ChartDataPoint]) -> str:
    records = [[point.label, stringify(point.value)] for point in points]
    return _to_csv(pd.DataFrame(records, columns=["Label", "Value"], dtype=object))


def filtered_export_name(file_name: str) -> str:
    return f"{PurePath(file_name).stem}_filtered.csv"


def chart_export_name(title: str) -> str:
    return WHITESPACE.sub("_", title) + ".csv"
