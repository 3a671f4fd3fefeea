from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from csv_explorer.core.query import SortSpec
from csv_explorer.core.state import DerivedView

FONT_FAMILY = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'

STYLE_TABLE = {"overflowX": "auto"}

STYLE_CELL = {
    "fontFamily": FONT_FAMILY,
    "fontSize": "12px",
    "padding": "6px 8px",
    "border": "none",
    "textAlign": "left",
    "whiteSpace": "nowrap",
    "overflow": "hidden",
    "textOverflow": "ellipsis",
}

STYLE_HEADER = {
    "fontFamily": FONT_FAMILY,
    "fontSize": "12px",
    "fontWeight": "600",
    "backgroundColor": "#f3f4f6",
    "borderBottom": "1px solid #e5e7eb",
}

STYLE_DATA = {
    "borderBottom": "1px solid #e5e7eb",
}


def table_columns(columns: Sequence[str], editable: bool = False) -> List[Dict[str, Any]]:
    return [{"name": c, "id": c, "editable": editable} for c in columns]


def column_width_styles(columns: Sequence[str], widths: Sequence[float]) -> List[Dict[str, Any]]:
    """
    style_cell_conditional entries pinning each displayed column to its width.
    Widths are positional: widths[i] applies to whatever column is shown at i.
    """
    styles: List[Dict[str, Any]] = []
    for column, width in zip(columns, widths):
        px = f"{width:g}px"
        styles.append({"if": {"column_id": column}, "width": px, "minWidth": px, "maxWidth": px})
    return styles


def sort_by_prop(sort: SortSpec) -> List[Dict[str, str]]:
    """SortSpec -> DataTable sort_by."""
    if sort.column is None:
        return []
    return [{"column_id": sort.column, "direction": sort.direction.value}]


def sort_column_from_prop(sort_by: Optional[List[Dict[str, str]]], current: SortSpec) -> Optional[str]:
    """
    The column the user clicked.

    DataTable cycles asc -> desc -> none on its own; an empty sort_by means the
    active column was clicked again, so it maps back to that column and the
    session's toggle policy decides the direction.
    """
    if sort_by:
        return sort_by[0].get("column_id")
    return current.column


def page_label(view: DerivedView) -> str:
    return f"Page {view.page.page_index + 1} of {view.total_pages}"


def nav_disabled(view: DerivedView) -> Tuple[bool, bool]:
    """(previous disabled, next disabled)"""
    return view.page.page_index == 0, view.page.page_index >= view.total_pages - 1


def row_count_text(view: DerivedView) -> str:
    if view.filtered_count == view.total_count:
        return f"{view.total_count} rows"
    return f"{view.filtered_count} of {view.total_count} rows"


def find_edited_cell(
        data: Optional[List[Dict[str, Any]]],
        data_previous: Optional[List[Dict[str, Any]]],
) -> Optional[Tuple[int, str, str]]:
    """
    Diff the DataTable's data against data_previous and return the single
    (page_row, column, new_value) that changed, or None.
    """
    if not data or not data_previous or len(data) != len(data_previous):
        return None

    for page_row, (new, old) in enumerate(zip(data, data_previous)):
        for column, value in new.items():
            if old.get(column) != value:
                return page_row, column, "" if value is None else str(value)
    return None
