from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Set

from dashgen.schemas import FilterSet
from dashgen.services.cells import stringify

Row = Mapping[str, object]


def normalize_filters(raw: Optional[Mapping[str, Sequence[object]]]) -> Dict[str, Set[str]]:
    """Stringify allow-lists and drop the columns that impose no constraint."""
    if not raw:
        return {}
    normalized: Dict[str, Set[str]] = {}
    for column, values in raw.items():
        allowed = {stringify(value) for value in values or []}
        if allowed:
            normalized[column] = allowed
    return normalized


def has_active_filters(filters: Optional[FilterSet]) -> bool:
    return bool(normalize_filters(filters))


def apply_filters(rows: Sequence[Row], filters: Optional[FilterSet]) -> Sequence[Row]:
    """Keep rows whose value is allowed in every filtered column.

    Columns combine with AND, values within a column with OR. With no
    filters the input sequence itself is returned.
    """
    if not filters:
        return rows

    active = normalize_filters(filters)
    if not active:
        return rows

    kept: List[Row] = []
    for row in rows:
        if all(stringify(row.get(column)) in allowed for column, allowed in active.items()):
            kept.append(row)
    return kept
