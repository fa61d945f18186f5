from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence

import pandas as pd

from dashgen.schemas import AggregationType, ChartDataPoint
from dashgen.services.cells import coerce_number, stringify
from dashgen.services.dates import parse_date

logger = logging.getLogger(__name__)

MAX_CHART_POINTS = 20
MISSING_LABEL = "Unknown"

Row = Mapping[str, object]

_REDUCERS: Dict[str, str] = {"sum": "sum", "average": "mean", "count": "count"}


def aggregate(
    rows: Sequence[Row],
    label_column: str,
    value_column: str,
    aggregation: AggregationType,
    limit: int = MAX_CHART_POINTS,
) -> List[ChartDataPoint]:
    """Group rows by label and reduce the value column into chart points.

    Labels that all read as dates are ordered chronologically; anything else
    is ranked by value, largest first. At most ``limit`` points are returned.
    """
    if aggregation not in _REDUCERS:
        raise ValueError(f"Unsupported aggregation: {aggregation}")
    if not rows:
        return []

    frame = pd.DataFrame(
        {
            "label": [stringify(row.get(label_column), missing=MISSING_LABEL) for row in rows],
            "value": [coerce_number(row.get(value_column)) for row in rows],
        }
    )
    by_label = frame.groupby("label", sort=False)["value"]
    grouped = getattr(by_label, _REDUCERS[aggregation])().rename("value").reset_index()

    dates = [parse_date(label) for label in grouped["label"]]
    if all(parsed is not None for parsed in dates):
        grouped["date"] = dates
        grouped = grouped.sort_values("date", kind="stable")
    else:
        grouped = grouped.sort_values("value", ascending=False, kind="stable")

    points = [
        ChartDataPoint(label=str(label), value=float(value))
        for label, value in zip(grouped["label"], grouped["value"])
    ]
    logger.debug(
        "Aggregated %d rows of %r by %r (%s) into %d group(s)",
        len(rows),
        value_column,
        label_column,
        aggregation,
        len(points),
    )
    return points[:limit]
