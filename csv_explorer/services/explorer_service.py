from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from csv_explorer.core.dataset_loader import DEFAULT_FETCH_TIMEOUT, fetch_text
from csv_explorer.core.exceptions import FetchError, ParseError
from csv_explorer.core.gesture import MIN_COLUMN_WIDTH, Pointer, PointerCapture, ResizeGesture
from csv_explorer.core.paginator import TABLE_PAGE_SIZE, PageState, next_page, previous_page
from csv_explorer.core.row_store import RowStore
from csv_explorer.core.state import DerivedView, ExplorerState, recompute
from csv_explorer.core.view_state import DEFAULT_COLUMN_WIDTH, ColumnLayout, ViewStateStore

logger = logging.getLogger(__name__)


class ExplorerSession:
    """
    One view's explicit state plus the actions that mutate it.

    Every action updates the state and then calls ``refresh``, which runs
    the pure recompute() and stores the clamped page state back. The derived
    view of the last refresh is kept on `.view`.
    """

    def __init__(
            self,
            view_state: ViewStateStore,
            page_size: int = TABLE_PAGE_SIZE,
            persist_query_state: bool = False,
            min_column_width: float = MIN_COLUMN_WIDTH,
            max_column_width: Optional[float] = None,
            default_column_width: float = DEFAULT_COLUMN_WIDTH,
    ) -> None:
        self.store = RowStore()
        self.view_state = view_state
        self.page_size = page_size
        self.persist_query_state = persist_query_state
        self.min_column_width = min_column_width
        self.max_column_width = max_column_width
        self.default_column_width = default_column_width

        self.state = ExplorerState(page=PageState(page_size=page_size))
        self.layout = ColumnLayout()
        self.capture = PointerCapture()
        self.loading = False
        self.error: Optional[str] = None
        self.view: Optional[DerivedView] = None

    # -------------------------------------------------------------------------
    # Mount / load
    # -------------------------------------------------------------------------
    def mount(self) -> None:
        """Reset session state to defaults and read the persisted layout."""
        self.layout = self.view_state.load()
        self.state = self._initial_state()

    def _initial_state(self) -> ExplorerState:
        default = ExplorerState(page=PageState(page_size=self.page_size))
        if not self.persist_query_state:
            return default

        data = self.view_state.load_query_state()
        if data is None:
            return default
        try:
            return ExplorerState.from_query_dict(data, page_size=self.page_size)
        except (TypeError, ValueError, AttributeError):
            logger.warning("Discarding unreadable query state", extra={"query_state": data})
            return default

    def load(self, source: str | Path, timeout: float = DEFAULT_FETCH_TIMEOUT) -> Optional[DerivedView]:
        """
        Mount, then one fetch-and-parse cycle.

        FetchError / ParseError are terminal for this attempt: the message is
        kept on `.error`, the dataset is left empty and None is returned.
        """
        self.mount()
        self.loading = True
        self.error = None
        self.view = None
        try:
            raw_text = fetch_text(source, timeout=timeout)
            self.store.load(raw_text)
        except (FetchError, ParseError) as e:
            self.store.clear()
            self.error = str(e)
            logger.error(
                "Dataset load failed",
                extra={"source": str(source), "error_kind": type(e).__name__, "error": str(e)},
            )
            return None
        finally:
            self.loading = False

        logger.info(
            "Dataset mounted",
            extra={"source": str(source), "n_rows": len(self.store), "n_columns": len(self.store.columns)},
        )
        return self.refresh()

    def load_text(self, raw_text: str) -> Optional[DerivedView]:
        """Same as ``load`` but for CSV text that is already in memory."""
        self.mount()
        self.error = None
        try:
            self.store.load(raw_text)
        except ParseError as e:
            self.error = str(e)
            logger.error("Dataset parse failed", extra={"error": str(e)})
            self.view = None
            return None
        return self.refresh()

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None and self.view is not None

    # -------------------------------------------------------------------------
    # Recompute
    # -------------------------------------------------------------------------
    def refresh(self) -> DerivedView:
        view = recompute(self.store.rows, self.store.columns, self.state, self.layout)
        if view.page != self.state.page:
            self.state = replace(self.state, page=view.page)
        self.view = view
        return view

    def _query_changed(self) -> DerivedView:
        if self.persist_query_state:
            self.view_state.save_query_state(self.state.query_dict())
        return self.refresh()

    # -------------------------------------------------------------------------
    # Query actions
    # -------------------------------------------------------------------------
    def set_filter(self, column: str, pattern: str) -> DerivedView:
        self.state = self.state.with_filter(column, pattern or "")
        return self._query_changed()

    def clear_filters(self) -> DerivedView:
        self.state = replace(self.state, filters={})
        return self._query_changed()

    def set_search(self, query: str) -> DerivedView:
        self.state = replace(self.state, search=query or "")
        return self._query_changed()

    def toggle_sort(self, column: str) -> DerivedView:
        self.state = replace(self.state, sort=self.state.sort.toggle(column))
        return self._query_changed()

    def set_group_column(self, column: Optional[str]) -> DerivedView:
        self.state = replace(self.state, group_column=column or None)
        return self.refresh()

    # -------------------------------------------------------------------------
    # Pagination
    # -------------------------------------------------------------------------
    def next_page(self) -> DerivedView:
        n_pages = self.view.total_pages if self.view is not None else 1
        self.state = replace(self.state, page=next_page(self.state.page, n_pages))
        return self.refresh()

    def previous_page(self) -> DerivedView:
        self.state = replace(self.state, page=previous_page(self.state.page))
        return self.refresh()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------
    def set_cell(self, row_index: int, column: str, value: str) -> DerivedView:
        """Edit by dataset position. Edits stay in memory, never written back to the source."""
        self.store.set_cell(row_index, column, value)
        return self.refresh()

    def set_page_cell(self, page_row: int, column: str, value: str) -> DerivedView:
        """Edit by position within the currently rendered page."""
        if self.view is None:
            raise RuntimeError("No page rendered yet")
        return self.set_cell(self.view.page_row_indices[page_row], column, value)

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------
    def reorder_columns(self, order: Sequence[str]) -> DerivedView:
        self.layout = self.layout.with_order(order)
        self.view_state.save(self.layout)
        return self.refresh()

    def resize_gesture(self) -> ResizeGesture:
        return ResizeGesture(
            self.view_state,
            self.layout,
            capture=self.capture,
            min_width=self.min_column_width,
            max_width=self.max_column_width,
            default_width=self.default_column_width,
        )

    def resize_column(self, column_index: int, start_x: float, end_x: float) -> DerivedView:
        """One complete drag from start_x to end_x on the given column position."""
        gesture = self.resize_gesture()
        try:
            with gesture.drag(column_index, Pointer(start_x)) as handle:
                gesture.update(handle, Pointer(end_x))
        finally:
            self.layout = gesture.layout
        return self.refresh()

    def set_column_width(self, column_index: int, width: float) -> DerivedView:
        current = self.layout.width_for(column_index, self.default_column_width)
        return self.resize_column(column_index, 0, width - current)

    def column_widths(self, columns: Optional[List[str]] = None) -> List[float]:
        """Width per display position, defaulting where nothing is stored."""
        cols = columns if columns is not None else self.store.columns
        return [self.layout.width_for(i, self.default_column_width) for i in range(len(cols))]
