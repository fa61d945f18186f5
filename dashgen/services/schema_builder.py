from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Tuple

from dashgen.schemas import ColumnSchema, ColumnType
from dashgen.services.cells import is_missing, parse_number, stringify
from dashgen.services.classifier import classify

logger = logging.getLogger(__name__)

MAX_UNIQUE_VALUES = 50
SAMPLE_VALUE_COUNT = 5

Row = Mapping[str, object]


def column_values(rows: Sequence[Row], column: str) -> List[object]:
    return [row.get(column) for row in rows]


def unique_values(values: Sequence[object], limit: int = MAX_UNIQUE_VALUES) -> List[str]:
    seen: Dict[str, None] = {}
    for value in values:
        if is_missing(value):
            continue
        seen.setdefault(stringify(value), None)
        if len(seen) >= limit:
            break
    return list(seen)


def min_max(values: Sequence[object]) -> Tuple[float, float]:
    numbers = [number for number in map(parse_number, values) if number is not None]
    if not numbers:
        return 0.0, 0.0
    return min(numbers), max(numbers)


def describe_column(name: str, values: Sequence[object], column_type: ColumnType) -> ColumnSchema:
    schema = ColumnSchema(
        name=name,
        type=column_type,
        sample_values=list(values[:SAMPLE_VALUE_COUNT]),
    )
    if column_type == "categorical":
        schema.unique_values = unique_values(values)
    elif column_type == "numerical":
        schema.min, schema.max = min_max(values)
    return schema


def build_schema(rows: Sequence[Row], column_names: Sequence[str]) -> List[ColumnSchema]:
    """Classify every column and attach its filter values or numeric bounds."""
    columns: List[ColumnSchema] = []
    for name in column_names:
        values = column_values(rows, name)
        columns.append(describe_column(name, values, classify(values)))

    logger.info(
        "Built schema for %d columns over %d rows: %s",
        len(columns),
        len(rows),
        ", ".join(f"{column.name}={column.type}" for column in columns),
    )
    return columns


def apply_type_overrides(
    rows: Sequence[Row],
    columns: Sequence[ColumnSchema],
    overrides: Mapping[str, ColumnType],
) -> List[ColumnSchema]:
    """Return a schema with user-chosen types, recomputing the changed columns.

    Raises ``KeyError`` when an override names a column that is not in the schema.
    """
    known = {column.name for column in columns}
    missing = [name for name in overrides if name not in known]
    if missing:
        raise KeyError(f"Unknown column(s): {', '.join(missing)}")

    updated: List[ColumnSchema] = []
    for column in columns:
        new_type = overrides.get(column.name, column.type)
        if new_type == column.type:
            updated.append(column)
            continue
        logger.info("Overriding type of %r: %s -> %s", column.name, column.type, new_type)
        updated.append(describe_column(column.name, column_values(rows, column.name), new_type))
    return updated
