from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from csv_explorer.config.loader import load_global_config
from csv_explorer.config.model import GlobalConfig
from csv_explorer.core.view_state import ViewStateStore
from csv_explorer.services.explorer_service import ExplorerSession
from csv_explorer.services.storage import InMemoryStorage, LocalFileSystemStorage, StorageBackend
from csv_explorer.ui.callbacks.callbacks_pivot import register_pivot_callbacks
from csv_explorer.ui.callbacks.callbacks_routing import register_routing_callbacks
from csv_explorer.ui.callbacks.callbacks_table import register_table_callbacks
from csv_explorer.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def _build_storage(global_config: GlobalConfig) -> StorageBackend:
    if global_config.state_dir is None:
        logger.warning("No state_dir configured; column layout will not survive restarts")
        return InMemoryStorage()
    # LocalFileSystemStorage creates the directory if needed
    return LocalFileSystemStorage(global_config.state_dir)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Persisted view state, shared by both views
    view_state = ViewStateStore(_build_storage(global_config))

    # 3) One session per route
    table_session = ExplorerSession(
        view_state,
        page_size=global_config.table_page_size,
        persist_query_state=global_config.persist_query_state,
        default_column_width=global_config.default_column_width,
    )
    pivot_session = ExplorerSession(
        view_state,
        page_size=global_config.pivot_page_size,
        persist_query_state=global_config.persist_query_state,
        min_column_width=global_config.pivot_min_column_width,
        max_column_width=global_config.pivot_max_column_width,
        default_column_width=global_config.default_column_width,
    )

    # 4) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        table_session=table_session,
        pivot_session=pivot_session,
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        # page components are created by the routing callback
        suppress_callback_exceptions=True,
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_routing_callbacks(app, ctx)
    register_table_callbacks(app, ctx)
    register_pivot_callbacks(app, ctx)

    logger.info(
        "App created",
        extra={"config_root": str(config_root), "data_source": global_config.data_source},
    )
    return app
