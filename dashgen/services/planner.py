from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Sequence

from dashgen.schemas import ChartSpec, ColumnSchema

logger = logging.getLogger(__name__)

MAX_CHARTS = 6
MAX_PAIRED_COLUMNS = 2

ChartCollection = Dict[str, ChartSpec]


def _columns_of(columns: Sequence[ColumnSchema], column_type: str) -> List[ColumnSchema]:
    return [column for column in columns if column.type == column_type]


def plan_charts(columns: Sequence[ColumnSchema]) -> List[ChartSpec]:
    """Pick up to ``MAX_CHARTS`` charts for a schema.

    Categorical comparisons come first, then time series, then the
    distribution pie, then a trend view. Datasets without a temporal column
    get an averaged category line in place of the time-based charts.
    """
    categorical = _columns_of(columns, "categorical")
    numerical = _columns_of(columns, "numerical")
    temporal = _columns_of(columns, "temporal")
    specs: List[ChartSpec] = []

    for cat_idx, cat_col in enumerate(categorical[:MAX_PAIRED_COLUMNS]):
        for num_idx, num_col in enumerate(numerical[:MAX_PAIRED_COLUMNS]):
            specs.append(
                ChartSpec(
                    id=f"bar-{cat_idx}-{num_idx}",
                    type="bar",
                    title=f"{num_col.name} by {cat_col.name}",
                    label_column=cat_col.name,
                    value_column=num_col.name,
                    aggregation="sum",
                )
            )

    if temporal:
        time_col = temporal[0]
        for num_idx, num_col in enumerate(numerical[:MAX_PAIRED_COLUMNS]):
            specs.append(
                ChartSpec(
                    id=f"line-{num_idx}",
                    type="line",
                    title=f"{num_col.name} over Time",
                    label_column=time_col.name,
                    value_column=num_col.name,
                    aggregation="sum",
                )
            )

    if categorical and numerical:
        specs.append(
            ChartSpec(
                id="pie-0",
                type="pie",
                title=f"{numerical[0].name} Distribution",
                label_column=categorical[0].name,
                value_column=numerical[0].name,
                aggregation="sum",
            )
        )

    if temporal and len(numerical) > 1:
        specs.append(
            ChartSpec(
                id="area-0",
                type="area",
                title=f"{numerical[1].name} Trend",
                label_column=temporal[0].name,
                value_column=numerical[1].name,
                aggregation="sum",
            )
        )
    elif not temporal and categorical and numerical:
        specs.append(
            ChartSpec(
                id="line-cat-0",
                type="line",
                title=f"{numerical[0].name} Comparison",
                label_column=categorical[0].name,
                value_column=numerical[0].name,
                aggregation="average",
            )
        )

    planned = specs[:MAX_CHARTS]
    logger.info("Planned %d chart(s): %s", len(planned), [spec.id for spec in planned])
    return planned


def charts_by_id(specs: Sequence[ChartSpec]) -> ChartCollection:
    return OrderedDict((spec.id, spec) for spec in specs)


def replace_chart(charts: ChartCollection, chart_id: str, **changes: Any) -> ChartCollection:
    """Return a new collection where ``chart_id`` is swapped for an edited copy.

    The id and position are kept. Raises ``KeyError`` for an unknown id.
    """
    if chart_id not in charts:
        raise KeyError(f"Chart not found: {chart_id}")
    changes.pop("id", None)
    updated = charts[chart_id].model_copy(update=changes)
    return OrderedDict(
        (spec_id, updated if spec_id == chart_id else spec) for spec_id, spec in charts.items()
    )
