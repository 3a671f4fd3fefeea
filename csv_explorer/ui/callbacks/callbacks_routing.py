from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import dash
from dash import Input, Output

from csv_explorer.ui.callbacks.callbacks_table import build_chart_figure
from csv_explorer.ui.ids import IDs, Routes
from csv_explorer.ui.layout.build_layout import build_error_page, build_not_found_page
from csv_explorer.ui.layout.build_pivot_page import build_pivot_page
from csv_explorer.ui.layout.build_table_page import build_table_page

if TYPE_CHECKING:
    from csv_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_routing_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Route -> (re)load the dataset for that view -> page
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.PAGE_CONTENT, "children"),
        Input(IDs.Control.URL, "pathname"),
    )
    def render_page(pathname: Optional[str]):
        cfg = ctx.global_config
        path = (pathname or Routes.TABLE).rstrip("/") or Routes.TABLE

        if path == Routes.TABLE:
            session = ctx.table_session
        elif path == Routes.PIVOT:
            session = ctx.pivot_session
        else:
            return build_not_found_page(path)

        logger.info("route_mount", extra={"route": path, "source": cfg.data_source})

        # Each view reloads the source; nothing carries over between routes
        view = session.load(cfg.data_source, timeout=cfg.fetch_timeout)
        if view is None:
            return build_error_page(session.error or "unknown error")

        try:
            if path == Routes.PIVOT:
                return build_pivot_page(session, view)
            return build_table_page(session, view, build_chart_figure(session))
        except Exception as e:
            logger.exception("Error building page", extra={"route": path})
            return build_error_page(f"{type(e).__name__}: {e}")
