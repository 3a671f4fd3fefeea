from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from csv_explorer.core.aggregator import GroupCount, aggregate
from csv_explorer.core.dataset_loader import Row
from csv_explorer.core.paginator import PageState, clamp_page_index, paginate, total_pages
from csv_explorer.core.query import SortSpec, filtered_indices, sort_indices
from csv_explorer.core.view_state import ColumnLayout


@dataclass(frozen=True)
class ExplorerState:
    """
    Represents the current session-only user selection.

    Fields:

    - filters: column -> substring pattern (empty or missing = no constraint)
    - search: free-text query matched against every cell
    - sort: active sort column/direction
    - page: page index and page size
    - group_column: column feeding the group-by chart, None = no chart

    """
    filters: Dict[str, str] = field(default_factory=dict)
    search: str = ""
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageState = field(default_factory=PageState)
    group_column: Optional[str] = None

    def with_filter(self, column: str, pattern: str) -> ExplorerState:
        filters = dict(self.filters)
        if pattern:
            filters[column] = pattern
        else:
            filters.pop(column, None)
        return replace(self, filters=filters)

    def query_dict(self) -> Dict[str, Any]:
        """The persistable part of the state: filters, search and sort."""
        return {
            "filters": dict(self.filters),
            "search": self.search,
            "sort": self.sort.to_dict(),
        }

    @classmethod
    def from_query_dict(cls, data: Dict[str, Any], page_size: int) -> ExplorerState:
        raw_filters = data.get("filters") or {}
        if not isinstance(raw_filters, dict):
            raise TypeError("filters must be an object")
        return cls(
            filters={str(k): str(v) for k, v in raw_filters.items() if v},
            search=str(data.get("search") or ""),
            sort=SortSpec.from_dict(data.get("sort") or {}),
            page=PageState(page_index=0, page_size=page_size),
        )


@dataclass(frozen=True)
class DerivedView:
    """
    Everything the UI renders, recomputed after each action.
    """
    columns: List[str]
    page_rows: List[Row]
    page_row_indices: List[int]
    page: PageState
    total_pages: int
    filtered_count: int
    total_count: int
    chart: Optional[List[GroupCount]] = None


def recompute(
        rows: List[Row],
        columns: List[str],
        state: ExplorerState,
        layout: Optional[ColumnLayout] = None,
) -> DerivedView:
    """
    filter -> search -> sort -> paginate, plus aggregate over the filtered
    (unsorted, unpaginated) rows.

    The returned view carries the page state clamped to the new page count;
    callers store it back as the session's page state.
    """
    matched = filtered_indices(rows, state.filters, state.search)
    ordered = sort_indices(rows, matched, state.sort)

    n_pages = total_pages(len(ordered), state.page.page_size)
    page_state = clamp_page_index(state.page, n_pages)
    page = paginate(ordered, page_state)

    chart: Optional[List[GroupCount]] = None
    if state.group_column is not None:
        chart = aggregate([rows[i] for i in matched], state.group_column)

    display_columns = layout.ordered_columns(columns) if layout is not None else list(columns)

    return DerivedView(
        columns=display_columns,
        page_rows=[rows[i] for i in page.rows],
        page_row_indices=list(page.rows),
        page=page_state,
        total_pages=page.total_pages,
        filtered_count=len(ordered),
        total_count=len(rows),
        chart=chart,
    )
