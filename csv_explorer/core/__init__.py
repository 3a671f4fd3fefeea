"""
Core domain layer: row store, query pipeline, paginator, aggregator,
persisted view state and the resize gesture
"""

from .aggregator import GroupCount, aggregate
from .paginator import Page, PageState, paginate
from .query import SortDirection, SortSpec, evaluate
from .row_store import RowStore
from .state import DerivedView, ExplorerState, recompute
from .view_state import ColumnLayout, ViewStateStore

__all__ = [
    "ColumnLayout",
    "DerivedView",
    "ExplorerState",
    "GroupCount",
    "Page",
    "PageState",
    "RowStore",
    "SortDirection",
    "SortSpec",
    "ViewStateStore",
    "aggregate",
    "evaluate",
    "paginate",
    "recompute",
]
