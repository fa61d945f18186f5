from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from dashgen.schemas import (
    ChartDataPoint,
    ChartPayload,
    ChartSpec,
    ColumnSchema,
    DashboardResponse,
    FilterSet,
)
from dashgen.services.aggregator import aggregate
from dashgen.services.filters import apply_filters
from dashgen.services.parsing import ParsedTable
from dashgen.services.planner import plan_charts
from dashgen.services.schema_builder import build_schema
from dashgen.services.summary import compute_summary

logger = logging.getLogger(__name__)

EMPTY_DASHBOARD_REASON = (
    "No suitable columns found for visualization. "
    "Please ensure your data has at least one categorical and one numerical column."
)

Row = Mapping[str, object]


def analyze_table(table: ParsedTable) -> Tuple[List[ColumnSchema], List[ChartSpec]]:
    columns = build_schema(table.rows, table.column_names)
    charts = plan_charts(columns)
    return columns, charts


def chart_color(index: int, palette: Sequence[str]) -> str:
    return palette[index % len(palette)]


def chart_series(rows: Sequence[Row], spec: ChartSpec) -> List[ChartDataPoint]:
    return aggregate(rows, spec.label_column, spec.value_column, spec.aggregation)


def build_dashboard(
    file_name: str,
    rows: Sequence[Row],
    columns: Sequence[ColumnSchema],
    charts: Sequence[ChartSpec],
    palette: Sequence[str],
    filters: Optional[FilterSet] = None,
) -> DashboardResponse:
    """Filter the rows once and compute every chart's series from the result."""
    filtered = apply_filters(rows, filters)
    payloads = [
        ChartPayload(spec=spec, color=chart_color(index, palette), data=chart_series(filtered, spec))
        for index, spec in enumerate(charts)
    ]
    logger.debug("Dashboard for %s: %d/%d rows, %d chart(s)", file_name, len(filtered), len(rows), len(payloads))

    return DashboardResponse(
        file_name=file_name,
        summary=compute_summary(columns, rows, filtered, filters),
        charts=payloads,
        empty_reason=None if payloads else EMPTY_DASHBOARD_REASON,
    )
