from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from csv_explorer.ui.ids import IDs
from csv_explorer.ui.layout.build_navbar import build_navbar

if TYPE_CHECKING:
    from csv_explorer.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    """
    App shell: navbar, the router location and the page slot. Page content is
    rendered by the routing callback once the dataset for that route has loaded.
    """
    return dbc.Container(
        fluid=True,
        className="csv-explorer-root",
        children=[
            dcc.Location(id=IDs.Control.URL, refresh=False),
            build_navbar(ctx.global_config),
            dcc.Loading(
                id=IDs.Control.PAGE_LOADING,
                type="default",
                children=html.Div(id=IDs.Control.PAGE_CONTENT),
            ),
        ],
    )


def build_error_page(message: str) -> dbc.Alert:
    return dbc.Alert(
        [
            html.H5("Could not load the dataset", className="alert-heading"),
            html.P(f"Error: {message}", className="mb-0"),
        ],
        color="danger",
        className="mt-3",
    )


def build_not_found_page(pathname: str) -> dbc.Alert:
    return dbc.Alert(f"No page at {pathname}", color="warning", className="mt-3")
