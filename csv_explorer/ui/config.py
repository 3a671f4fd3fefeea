from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from csv_explorer.config.model import GlobalConfig
from csv_explorer.services.explorer_service import ExplorerSession


@dataclass
class AppConfig:
    """
    Shared state for the Dash app, passed into layout + callback registration
    functions instead of using module-level globals.

    Each route owns its own session: the views never share dataset state.
    """
    config_root: Path
    global_config: GlobalConfig
    table_session: Optional[ExplorerSession] = None
    pivot_session: Optional[ExplorerSession] = None

    def validate(self) -> None:
        """Ensure both view sessions are attached before the app starts."""
        if self.table_session is None:
            raise RuntimeError("AppConfig.table_session must be initialized.")
        if self.pivot_session is None:
            raise RuntimeError("AppConfig.pivot_session must be initialized.")
