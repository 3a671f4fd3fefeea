from __future__ import annotations

import dash_bootstrap_components as dbc
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
    sort_by_prop,
    table_columns,
)
from csv_explorer.ui.ids import IDs


def build_layout_panel(session: ExplorerSession, view: DerivedView) -> dbc.Card:
    """
    Column order + width controls. Both write the persisted column layout.
    """
    column_options = [{"label": c, "value": c} for c in view.columns]
    first = view.columns[0] if view.columns else None

    return dbc.Card(
        [
            dbc.CardHeader("Columns", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("Column order", className="form-label"),
                    dcc.Dropdown(
                        id=IDs.Control.COLUMN_ORDER_SELECT,
                        options=column_options,
                        value=list(view.columns),
                        multi=True,
                        clearable=False,
                        className="mb-1",
                    ),
                    html.Small(
                        "Remove and re-add a column to move it to the end.",
                        className="text-muted d-block mb-3",
                    ),
                    html.Label("Column width", className="form-label"),
                    dbc.Select(
                        id=IDs.Control.WIDTH_COLUMN_SELECT,
                        options=column_options,
                        value=first,
                        className="mb-2",
                    ),
                    dcc.Slider(
                        id=IDs.Control.WIDTH_SLIDER,
                        min=session.min_column_width,
                        max=session.max_column_width or 600,
                        step=5,
                        value=session.column_widths(view.columns)[0] if first else session.default_column_width,
                        updatemode="mouseup",
                        marks=None,
                        tooltip={"placement": "bottom", "always_visible": True},
                    ),
                ]
            ),
        ],
    )


def build_pivot_page(session: ExplorerSession, view: DerivedView) -> dbc.Row:
    prev_disabled, next_disabled = nav_disabled(view)

    grid_card = dbc.Card(
        [
            dbc.CardHeader(html.Strong("Grid"), className="p-2"),
            dbc.CardBody(
                [
                    dash_table.DataTable(
                        id=IDs.Control.PIVOT_TABLE,
                        data=view.page_rows,
                        columns=table_columns(view.columns),
                        sort_action="custom",
                        sort_mode="single",
                        sort_by=sort_by_prop(session.state.sort),
                        page_action="none",
                        style_table=STYLE_TABLE,
                        style_cell=STYLE_CELL,
                        style_cell_conditional=column_width_styles(view.columns, session.column_widths(view.columns)),
                        style_header=STYLE_HEADER,
                        style_data=STYLE_DATA,
                    ),
                    html.Div(
                        [
                            dbc.Button(
                                "Previous",
                                id=IDs.Control.PIVOT_PREV_BTN,
                                color="secondary",
                                size="sm",
                                disabled=prev_disabled,
                            ),
                            html.Span(page_label(view), id=IDs.Control.PIVOT_PAGE_LABEL, className="mx-3"),
                            dbc.Button(
                                "Next",
                                id=IDs.Control.PIVOT_NEXT_BTN,
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
            dbc.Col(build_layout_panel(session, view), md=3),
            dbc.Col(grid_card, md=9),
        ],
        className="gx-3",
    )
