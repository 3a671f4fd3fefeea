from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
import plotly.graph_objs as go
from dash import ALL, Input, Output, State
from dash.exceptions import PreventUpdate

from csv_explorer.services.explorer_service import ExplorerSession
from csv_explorer.ui.helpers import (
    find_edited_cell,
    nav_disabled,
    page_label,
    row_count_text,
    sort_by_prop,
    sort_column_from_prop,
)
from csv_explorer.ui.ids import IDs
from csv_explorer.views.group_count_view import GroupCountView

if TYPE_CHECKING:
    from csv_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)

FILTER_PATTERN = {"type": IDs.Pattern.COLUMN_FILTER, "column": ALL}


def build_chart_figure(session: ExplorerSession) -> go.Figure:
    """Chart for the session's last derived view (group counts over the filtered rows)."""
    if session.view is None:
        return GroupCountView.empty_figure("No dataset loaded")
    return GroupCountView(session.view).figure(session.state)


def _error_figure(details: str) -> go.Figure:
    return GroupCountView.empty_figure(f"Something went wrong while rendering this view. {details}")


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Every table-view interaction: action -> recompute -> render
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TABLE, "data"),
        Output(IDs.Control.TABLE, "sort_by"),
        Output(IDs.Control.PAGE_LABEL, "children"),
        Output(IDs.Control.PREV_BTN, "disabled"),
        Output(IDs.Control.NEXT_BTN, "disabled"),
        Output(IDs.Control.ROW_COUNT, "children"),
        Output(IDs.Control.CHART, "figure"),
        Output(FILTER_PATTERN, "value"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(FILTER_PATTERN, "value"),
        Input(IDs.Control.CLEAR_FILTERS_BTN, "n_clicks"),
        Input(IDs.Control.TABLE, "sort_by"),
        Input(IDs.Control.PREV_BTN, "n_clicks"),
        Input(IDs.Control.NEXT_BTN, "n_clicks"),
        Input(IDs.Control.GROUP_SELECT, "value"),
        Input(IDs.Control.TABLE, "data_timestamp"),
        State(FILTER_PATTERN, "id"),
        State(IDs.Control.TABLE, "data"),
        State(IDs.Control.TABLE, "data_previous"),
        prevent_initial_call=True,
    )
    def on_table_event(
            search: Optional[str],
            filter_values: list[Optional[str]],
            _clear_clicks: Any,
            sort_by: Optional[list[dict]],
            _prev_clicks: Any,
            _next_clicks: Any,
            group_column: Optional[str],
            _data_timestamp: Any,
            filter_ids: list[dict],
            data: Optional[list[dict]],
            data_previous: Optional[list[dict]],
    ):
        session = ctx.table_session
        if session is None or session.view is None:
            raise PreventUpdate

        triggered_id = dash.ctx.triggered_id
        prop_id = dash.ctx.triggered[0]["prop_id"] if dash.ctx.triggered else ""

        try:
            if triggered_id == IDs.Control.SEARCH_INPUT:
                session.set_search(search or "")

            elif isinstance(triggered_id, dict) and triggered_id.get("type") == IDs.Pattern.COLUMN_FILTER:
                column = triggered_id["column"]
                values = {fid["column"]: value for fid, value in zip(filter_ids, filter_values)}
                session.set_filter(column, values.get(column) or "")

            elif triggered_id == IDs.Control.CLEAR_FILTERS_BTN:
                session.clear_filters()

            elif triggered_id == IDs.Control.TABLE and prop_id.endswith(".sort_by"):
                column = sort_column_from_prop(sort_by, session.state.sort)
                if column is None:
                    raise PreventUpdate
                session.toggle_sort(column)

            elif triggered_id == IDs.Control.TABLE and prop_id.endswith(".data_timestamp"):
                edit = find_edited_cell(data, data_previous)
                if edit is None:
                    raise PreventUpdate
                page_row, column, value = edit
                session.set_page_cell(page_row, column, value)

            elif triggered_id == IDs.Control.PREV_BTN:
                session.previous_page()

            elif triggered_id == IDs.Control.NEXT_BTN:
                session.next_page()

            elif triggered_id == IDs.Control.GROUP_SELECT:
                session.set_group_column(group_column)

            else:
                raise PreventUpdate

        except PreventUpdate:
            raise
        except Exception:
            logger.exception(
                "Error in table view callback",
                extra={"triggered": prop_id},
            )
            return (
                dash.no_update, dash.no_update, dash.no_update, dash.no_update,
                dash.no_update, dash.no_update,
                _error_figure("Check the logs for details."),
                [dash.no_update] * len(filter_ids),
            )

        view = session.view
        prev_disabled, next_disabled = nav_disabled(view)
        filters = session.state.filters

        logger.debug(
            "table_render",
            extra={
                "triggered": prop_id,
                "page_index": view.page.page_index,
                "total_pages": view.total_pages,
                "filtered_count": view.filtered_count,
            },
        )

        return (
            view.page_rows,
            sort_by_prop(session.state.sort),
            page_label(view),
            prev_disabled,
            next_disabled,
            row_count_text(view),
            build_chart_figure(session),
            [filters.get(fid["column"], "") for fid in filter_ids],
        )
