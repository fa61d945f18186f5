from __future__ import annotations

from typing import Mapping, Optional, Sequence

from dashgen.schemas import ColumnSchema, DashboardSummary, FilterSet
from dashgen.services.cells import coerce_number, stringify
from dashgen.services.filters import has_active_filters

Row = Mapping[str, object]


def compute_summary(
    columns: Sequence[ColumnSchema],
    rows: Sequence[Row],
    filtered_rows: Sequence[Row],
    filters: Optional[FilterSet] = None,
) -> DashboardSummary:
    numerical = [column for column in columns if column.type == "numerical"]
    categorical = [column for column in columns if column.type == "categorical"]

    summary = DashboardSummary(
        total_rows=len(rows),
        filtered_rows=len(filtered_rows),
        column_count=len(columns),
        numerical_count=len(numerical),
        is_filtered=has_active_filters(filters),
    )

    if numerical:
        value_column = numerical[0].name
        total = sum(coerce_number(row.get(value_column)) for row in filtered_rows)
        summary.value_column = value_column
        summary.value_total = total
        summary.value_average = total / len(filtered_rows) if filtered_rows else 0.0

    if categorical:
        category_column = categorical[0].name
        summary.category_column = category_column
        summary.unique_categories = len({stringify(row.get(category_column)) for row in filtered_rows})

    return summary
