from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dash_table, dcc, html

from csv_explorer.core.state import DerivedView
from csv_explorer.services.explorer_service import ExplorerSession
from csv_explorer.ui.helpers import (
    STYLE_CELL,
    STYLE_DATA,
    STYLE_HEADER,
    STYLE_TABLE,
    column_width_styles,
    nav_disabled,
    page_label,
    row_count_text,
    sort_by_prop,
    table_columns,
)
from csv_explorer.ui.ids import IDs, column_filter_id


def build_filter_panel(session: ExplorerSession, view: DerivedView) -> dbc.Card:
    filters = session.state.filters

    column_inputs = [
        html.Div(
            [
                html.Label(column, className="form-label mb-0 small"),
                dbc.Input(
                    id=column_filter_id(column),
                    type="text",
                    value=filters.get(column, ""),
                    placeholder="contains…",
                    debounce=True,
                    size="sm",
                    className="mb-2",
                ),
            ]
        )
        for column in view.columns
    ]

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("Search all columns", className="form-label"),
                    dbc.Input(
                        id=IDs.Control.SEARCH_INPUT,
                        type="search",
                        value=session.state.search,
                        placeholder="Search…",
                        debounce=True,
                        className="mb-3",
                    ),
                    html.Hr(),
                    *column_inputs,
                    dbc.Button(
                        "Clear filters",
                        id=IDs.Control.CLEAR_FILTERS_BTN,
                        color="secondary",
                        size="sm",
                        outline=True,
                        className="mt-2",
                    ),
                ]
            ),
        ],
    )


def build_chart_panel(session: ExplorerSession, view: DerivedView, figure: go.Figure) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Group by", className="me-2"),
                        dcc.Dropdown(
                            id=IDs.Control.GROUP_SELECT,
                            options=[{"label": c, "value": c} for c in view.columns],
                            value=session.state.group_column,
                            placeholder="No chart",
                            style={"minWidth": "220px"},
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                dcc.Graph(
                    id=IDs.Control.CHART,
                    figure=figure,
                    config={"responsive": True},
                ),
            ),
        ],
        className="mt-3",
    )


def build_table_page(session: ExplorerSession, view: DerivedView, figure: go.Figure) -> dbc.Row:
    prev_disabled, next_disabled = nav_disabled(view)

    table_card = dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Rows"),
                        html.Small(row_count_text(view), id=IDs.Control.ROW_COUNT, className="text-muted ms-auto"),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dash_table.DataTable(
                        id=IDs.Control.TABLE,
                        data=view.page_rows,
                        columns=table_columns(view.columns, editable=True),
                        editable=True,
                        sort_action="custom",
                        sort_mode="single",
                        sort_by=sort_by_prop(session.state.sort),
                        page_action="none",
                        style_table=STYLE_TABLE,
                        style_as_list_view=True,
                        style_cell=STYLE_CELL,
                        style_cell_conditional=column_width_styles(view.columns, session.column_widths(view.columns)),
                        style_header=STYLE_HEADER,
                        style_data=STYLE_DATA,
                    ),
                    html.Div(
                        [
                            dbc.Button(
                                "Previous",
                                id=IDs.Control.PREV_BTN,
                                color="secondary",
                                size="sm",
                                disabled=prev_disabled,
                            ),
                            html.Span(page_label(view), id=IDs.Control.PAGE_LABEL, className="mx-3"),
                            dbc.Button(
                                "Next",
                                id=IDs.Control.NEXT_BTN,
                                color="secondary",
                                size="sm",
                                disabled=next_disabled,
                            ),
                        ],
                        className="d-flex align-items-center mt-3",
                    ),
                ]
            ),
        ],
    )

    return dbc.Row(
        [
            dbc.Col(build_filter_panel(session, view), md=3),
            dbc.Col([table_card, build_chart_panel(session, view, figure)], md=9),
        ],
        className="gx-3",
    )
