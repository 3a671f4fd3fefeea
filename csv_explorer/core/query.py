from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from csv_explorer.core.dataset_loader import Row

FilterSet = Dict[str, str]


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class SortSpec:
    """
    Active sort column and direction. column=None keeps dataset order.
    """
    column: Optional[str] = None
    direction: SortDirection = SortDirection.ASCENDING

    def toggle(self, column: str) -> SortSpec:
        """
        Header-click policy:
        - a new column starts ascending
        - the active column flips direction
        """
        if column != self.column:
            return SortSpec(column=column, direction=SortDirection.ASCENDING)

        flipped = (
            SortDirection.DESCENDING
            if self.direction == SortDirection.ASCENDING
            else SortDirection.ASCENDING
        )
        return replace(self, direction=flipped)

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "direction": self.direction.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SortSpec:
        column = data.get("column")
        return cls(
            column=str(column) if column else None,
            direction=SortDirection(data.get("direction", SortDirection.ASCENDING.value)),
        )


def _cell(row: Row, column: str) -> str:
    value = row.get(column)
    return "" if value is None else str(value)


# -----------------------------------------------------------------------------
# Stages
# -----------------------------------------------------------------------------
def matches_filters(row: Row, filter_set: Mapping[str, str]) -> bool:
    for column, pattern in filter_set.items():
        if not pattern:
            continue
        if pattern.lower() not in _cell(row, column).lower():
            return False
    return True


def matches_search(row: Row, search_query: str) -> bool:
    if not search_query:
        return True
    needle = search_query.lower()
    return any(needle in ("" if v is None else str(v)).lower() for v in row.values())


def _numeric(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return number


def sort_key(value: str) -> Tuple[int, Any]:
    """
    Comparator key: numbers compare numerically and order before text,
    text compares as plain strings.
    """
    number = _numeric(value.strip()) if value else None
    if number is not None:
        return (0, number)
    return (1, value)


# -----------------------------------------------------------------------------
# Pipeline
# -----------------------------------------------------------------------------
def filtered_indices(
        rows: Sequence[Row],
        filter_set: Mapping[str, str],
        search_query: str,
) -> List[int]:
    """
    Filter stage (AND across columns) then search stage (OR across cells).
    Returns dataset positions in dataset order.
    """
    active_filters = {c: p for c, p in (filter_set or {}).items() if p}
    return [
        i for i, row in enumerate(rows)
        if matches_filters(row, active_filters) and matches_search(row, search_query or "")
    ]


def evaluate_indices(
        rows: Sequence[Row],
        filter_set: Mapping[str, str],
        search_query: str,
        sort_spec: SortSpec,
) -> List[int]:
    """
    Dataset positions of the rows in the final filtered, searched and sorted view.
    """
    return sort_indices(rows, filtered_indices(rows, filter_set, search_query), sort_spec)


def sort_indices(rows: Sequence[Row], indices: Sequence[int], sort_spec: SortSpec) -> List[int]:
    column = sort_spec.column
    if column is None:
        return list(indices)

    # sorted() is stable in both directions, equal keys keep pre-sort order
    return sorted(
        indices,
        key=lambda i: sort_key(_cell(rows[i], column)),
        reverse=sort_spec.direction == SortDirection.DESCENDING,
    )


def evaluate(
        rows: Sequence[Row],
        filter_set: Mapping[str, str],
        search_query: str,
        sort_spec: SortSpec,
) -> List[Row]:
    return [rows[i] for i in evaluate_indices(rows, filter_set, search_query, sort_spec)]
