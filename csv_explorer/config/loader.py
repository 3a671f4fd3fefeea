from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from csv_explorer.config.model import GlobalConfig
from csv_explorer.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_DATA_SOURCE = "CSV_EXPLORER_DATA_SOURCE"
ENV_STATE_DIR = "CSV_EXPLORER_STATE_DIR"


def _resolve_path(root: Path, raw: str) -> Path:
    # Absolute paths are used as-is, relative ones hang off the config root
    path = Path(raw)
    if path.is_absolute():
        return path
    return (root / path).resolve()


def _resolve_source(root: Path, raw: str) -> str:
    if raw.startswith(("http://", "https://")):
        return raw
    return str(_resolve_path(root, raw))


def _positive_int(raw: Dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"'{key}' must be a positive integer, got {value!r}")
    return value


def _positive_number(raw: Dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"'{key}' must be a positive number, got {value!r}")
    return float(value)


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    global.json keys (all optional):

    - ui_title: browser title, defaults to 'CSV Explorer'
    - data_source: CSV path or URL, defaults to 'data/data.csv'
    - state_dir: directory for persisted column layout; omitted = in-memory only
    - table_page_size / pivot_page_size: rows per page (10 / 15)
    - default_column_width: width for columns without a stored width (100)
    - pivot_min_column_width / pivot_max_column_width: resize bounds in the pivot view
    - persist_query_state: also persist filters/search/sort (false)
    - fetch_timeout: seconds for http(s) sources (10)

    Env overrides: CSV_EXPLORER_DATA_SOURCE, CSV_EXPLORER_STATE_DIR.

    :param root: Directory containing 'global.json'. A missing file means all defaults.
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json is not valid JSON or has invalid values.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    raw: Dict[str, Any] = {}
    if global_path.is_file():
        try:
            with global_path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"{global_path} must contain a JSON object")
    else:
        logger.warning("No global.json found, using defaults", extra={"config_root": str(root)})

    defaults = GlobalConfig()

    data_source_raw = os.environ.get(ENV_DATA_SOURCE) or raw.get("data_source", defaults.data_source)
    if not isinstance(data_source_raw, str) or not data_source_raw.strip():
        raise ConfigError("'data_source' must be a non-empty string")

    state_dir_raw: Optional[str] = os.environ.get(ENV_STATE_DIR) or raw.get("state_dir")
    state_dir = _resolve_path(root, state_dir_raw) if state_dir_raw else None

    min_width = _positive_number(raw, "pivot_min_column_width", defaults.pivot_min_column_width)
    max_width = _positive_number(raw, "pivot_max_column_width", defaults.pivot_max_column_width)
    if min_width > max_width:
        raise ConfigError("'pivot_min_column_width' must not exceed 'pivot_max_column_width'")

    return GlobalConfig(
        ui_title=str(raw.get("ui_title", defaults.ui_title)),
        data_source=_resolve_source(root, data_source_raw.strip()),
        state_dir=state_dir,
        table_page_size=_positive_int(raw, "table_page_size", defaults.table_page_size),
        pivot_page_size=_positive_int(raw, "pivot_page_size", defaults.pivot_page_size),
        default_column_width=_positive_number(raw, "default_column_width", defaults.default_column_width),
        pivot_min_column_width=min_width,
        pivot_max_column_width=max_width,
        persist_query_state=bool(raw.get("persist_query_state", defaults.persist_query_state)),
        fetch_timeout=_positive_number(raw, "fetch_timeout", defaults.fetch_timeout),
    )
