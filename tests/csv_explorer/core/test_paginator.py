from __future__ import annotations

import math

import pytest

from csv_explorer.core.paginator import (
    PageState,
    clamp_page_index,
    next_page,
    paginate,
    previous_page,
    total_pages,
)


@pytest.mark.parametrize("n_rows", [0, 1, 9, 10, 11, 25, 100])
@pytest.mark.parametrize("page_size", [1, 10, 15])
def test_total_pages_formula(n_rows, page_size):
    assert total_pages(n_rows, page_size) == max(1, math.ceil(n_rows / page_size))


def test_paginate_slices_pages():
    rows = list(range(25))

    first = paginate(rows, PageState(page_index=0, page_size=10))
    assert first.rows == list(range(10))
    assert first.total_pages == 3

    last = paginate(rows, PageState(page_index=2, page_size=10))
    assert last.rows == [20, 21, 22, 23, 24]


def test_paginate_empty_has_one_empty_page():
    page = paginate([], PageState(page_index=0, page_size=10))
    assert page.rows == []
    assert page.total_pages == 1


def test_paginate_does_not_clamp():
    page = paginate(list(range(5)), PageState(page_index=3, page_size=10))
    assert page.rows == []
    assert page.total_pages == 1


def test_clamp_page_index():
    state = PageState(page_index=4, page_size=10)
    assert clamp_page_index(state, 2).page_index == 1
    assert clamp_page_index(state, 0).page_index == 0
    assert clamp_page_index(state, 10) is state


def test_previous_saturates_at_zero():
    state = PageState(page_index=0, page_size=10)
    assert previous_page(state) == state
    assert previous_page(PageState(page_index=2, page_size=10)).page_index == 1


def test_next_saturates_at_last_page():
    state = PageState(page_index=2, page_size=10)
    assert next_page(state, 3) == state
    assert next_page(PageState(page_index=0, page_size=10), 3).page_index == 1
    assert next_page(PageState(page_index=0, page_size=10), 1).page_index == 0


def test_page_state_rejects_invalid_values():
    with pytest.raises(ValueError):
        PageState(page_index=-1)
    with pytest.raises(ValueError):
        PageState(page_size=0)
