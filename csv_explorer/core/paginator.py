from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

TABLE_PAGE_SIZE = 10
PIVOT_PAGE_SIZE = 15


@dataclass(frozen=True)
class PageState:
    page_index: int = 0
    page_size: int = TABLE_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {self.page_index}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")


@dataclass(frozen=True)
class Page(Generic[T]):
    rows: List[T] = field(default_factory=list)
    total_pages: int = 1


def total_pages(n_rows: int, page_size: int) -> int:
    """max(1, ceil(n_rows / page_size)); an empty view still has one (empty) page."""
    if n_rows <= 0:
        return 1
    return (n_rows - 1) // page_size + 1


def paginate(rows: Sequence[T], page_state: PageState) -> Page[T]:
    """
    Slice one page out of an ordered sequence.

    Does not clamp page_index: if a filter shrank the view, the caller clamps
    with ``clamp_page_index`` before the next call.
    """
    start = page_state.page_index * page_state.page_size
    end = start + page_state.page_size
    return Page(rows=list(rows[start:end]), total_pages=total_pages(len(rows), page_state.page_size))


def clamp_page_index(page_state: PageState, n_pages: int) -> PageState:
    max_index = max(0, n_pages - 1)
    if page_state.page_index <= max_index:
        return page_state
    return replace(page_state, page_index=max_index)


def previous_page(page_state: PageState) -> PageState:
    return replace(page_state, page_index=max(page_state.page_index - 1, 0))


def next_page(page_state: PageState, n_pages: int) -> PageState:
    return replace(page_state, page_index=max(0, min(page_state.page_index + 1, n_pages - 1)))
