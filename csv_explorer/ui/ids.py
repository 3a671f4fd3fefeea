from __future__ import annotations

__all__ = ["IDs", "Routes", "column_filter_id"]


class Routes:
    TABLE = "/"
    PIVOT = "/pivot_table"


class IDs:
    class Control:
        # Shell
        URL = "url"
        PAGE_CONTENT = "page-content"
        PAGE_LOADING = "page-loading"

        # Table view
        TABLE = "table-grid"
        SEARCH_INPUT = "search-input"
        CLEAR_FILTERS_BTN = "clear-filters-btn"
        PREV_BTN = "prev-page-btn"
        NEXT_BTN = "next-page-btn"
        PAGE_LABEL = "page-label"
        ROW_COUNT = "row-count"
        GROUP_SELECT = "group-select"
        CHART = "group-chart"

        # Pivot view
        PIVOT_TABLE = "pivot-grid"
        PIVOT_PREV_BTN = "pivot-prev-page-btn"
        PIVOT_NEXT_BTN = "pivot-next-page-btn"
        PIVOT_PAGE_LABEL = "pivot-page-label"
        COLUMN_ORDER_SELECT = "column-order-select"
        WIDTH_COLUMN_SELECT = "width-column-select"
        WIDTH_SLIDER = "width-slider"

    class Pattern:
        # pattern-matching "type" strings
        COLUMN_FILTER = "column-filter"


def column_filter_id(column: str) -> dict:
    return {"type": IDs.Pattern.COLUMN_FILTER, "column": column}
