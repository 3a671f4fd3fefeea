from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from csv_explorer.core.dataset_loader import DEFAULT_FETCH_TIMEOUT
from csv_explorer.core.paginator import PIVOT_PAGE_SIZE, TABLE_PAGE_SIZE
from csv_explorer.core.view_state import DEFAULT_COLUMN_WIDTH


@dataclass
class GlobalConfig:
    """
    Parsed global.json.

    - data_source: local path (resolved against the config root) or http(s) URL
    - state_dir: where view state is persisted; None keeps it in memory only
    """
    ui_title: str = "CSV Explorer"
    data_source: str = "data/data.csv"
    state_dir: Optional[Path] = None
    table_page_size: int = TABLE_PAGE_SIZE
    pivot_page_size: int = PIVOT_PAGE_SIZE
    default_column_width: float = DEFAULT_COLUMN_WIDTH
    pivot_min_column_width: float = 200
    pivot_max_column_width: float = 300
    persist_query_state: bool = False
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
