from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import Input, Output
from dash.exceptions import PreventUpdate

from csv_explorer.ui.helpers import (
    column_width_styles,
    nav_disabled,
    page_label,
    sort_by_prop,
    sort_column_from_prop,
    table_columns,
)
from csv_explorer.ui.ids import IDs

if TYPE_CHECKING:
    from csv_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_pivot_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Pivot grid: sort, paging, column order and column width
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.PIVOT_TABLE, "data"),
        Output(IDs.Control.PIVOT_TABLE, "columns"),
        Output(IDs.Control.PIVOT_TABLE, "sort_by"),
        Output(IDs.Control.PIVOT_TABLE, "style_cell_conditional"),
        Output(IDs.Control.PIVOT_PAGE_LABEL, "children"),
        Output(IDs.Control.PIVOT_PREV_BTN, "disabled"),
        Output(IDs.Control.PIVOT_NEXT_BTN, "disabled"),
        Output(IDs.Control.COLUMN_ORDER_SELECT, "value"),
        Output(IDs.Control.WIDTH_SLIDER, "value"),
        Input(IDs.Control.PIVOT_TABLE, "sort_by"),
        Input(IDs.Control.PIVOT_PREV_BTN, "n_clicks"),
        Input(IDs.Control.PIVOT_NEXT_BTN, "n_clicks"),
        Input(IDs.Control.COLUMN_ORDER_SELECT, "value"),
        Input(IDs.Control.WIDTH_COLUMN_SELECT, "value"),
        Input(IDs.Control.WIDTH_SLIDER, "value"),
        prevent_initial_call=True,
    )
    def on_pivot_event(
            sort_by: Optional[list[dict]],
            _prev_clicks: Any,
            _next_clicks: Any,
            column_order: Optional[list[str]],
            width_column: Optional[str],
            width: Optional[float],
    ):
        session = ctx.pivot_session
        if session is None or session.view is None:
            raise PreventUpdate

        triggered_id = dash.ctx.triggered_id

        try:
            if triggered_id == IDs.Control.PIVOT_TABLE:
                column = sort_column_from_prop(sort_by, session.state.sort)
                if column is None:
                    raise PreventUpdate
                session.toggle_sort(column)

            elif triggered_id == IDs.Control.PIVOT_PREV_BTN:
                session.previous_page()

            elif triggered_id == IDs.Control.PIVOT_NEXT_BTN:
                session.next_page()

            elif triggered_id == IDs.Control.COLUMN_ORDER_SELECT:
                # Columns dropped from the dropdown go to the end, nothing is hidden
                chosen = [c for c in (column_order or []) if c in session.store.columns]
                rest = [c for c in session.view.columns if c not in chosen]
                session.reorder_columns(chosen + rest)

            elif triggered_id == IDs.Control.WIDTH_SLIDER:
                if width_column is None or width is None or width_column not in session.view.columns:
                    raise PreventUpdate
                position = session.view.columns.index(width_column)
                session.set_column_width(position, float(width))

            elif triggered_id != IDs.Control.WIDTH_COLUMN_SELECT:
                raise PreventUpdate

        except PreventUpdate:
            raise
        except Exception:
            # Grid keeps showing its last good state
            logger.exception("Error in pivot view callback", extra={"triggered": str(triggered_id)})
            raise PreventUpdate

        view = session.view
        widths = session.column_widths(view.columns)
        prev_disabled, next_disabled = nav_disabled(view)

        slider_value: Any = dash.no_update
        if width_column in view.columns:
            slider_value = widths[view.columns.index(width_column)]

        return (
            view.page_rows,
            table_columns(view.columns),
            sort_by_prop(session.state.sort),
            column_width_styles(view.columns, widths),
            page_label(view),
            prev_disabled,
            next_disabled,
            list(view.columns),
            slider_value,
        )
