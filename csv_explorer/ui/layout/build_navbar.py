from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from csv_explorer.config.model import GlobalConfig
from csv_explorer.ui.ids import Routes


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(
                            global_config.data_source,
                            className="text-muted",
                            id="navbar-subtitle",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                dbc.Nav(
                    [
                        dbc.NavItem(dbc.NavLink("Table", href=Routes.TABLE, active="exact")),
                        dbc.NavItem(dbc.NavLink("Pivot", href=Routes.PIVOT, active="exact")),
                    ],
                    pills=True,
                    className="ms-auto",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm mb-3",
    )
