from __future__ import annotations

import json
import logging

import pytest

from csv_explorer.core.view_state import (
    COLUMN_STATE_KEY,
    COLUMN_WIDTHS_KEY,
    DEFAULT_COLUMN_WIDTH,
    ColumnLayout,
    ViewStateStore,
)
from csv_explorer.services.storage import InMemoryStorage, LocalFileSystemStorage


def _make_store(initial=None) -> ViewStateStore:
    return ViewStateStore(InMemoryStorage(initial))


def test_load_without_stored_state_is_default_layout():
    layout = _make_store().load()
    assert layout == ColumnLayout()
    assert layout.width_for(0) == DEFAULT_COLUMN_WIDTH
    assert layout.width_for(7) == 100


@pytest.mark.parametrize(
    "layout",
    [
        ColumnLayout(),
        ColumnLayout(widths={0: 150, 3: 220.5}, order=["b", "a", "c"]),
        ColumnLayout(widths={1: 80}, order=[]),
    ],
)
def test_save_then_load_roundtrips(layout):
    store = _make_store()
    store.save(layout)
    assert store.load() == layout


def test_persisted_format_uses_string_index_keys():
    storage = InMemoryStorage()
    ViewStateStore(storage).save(ColumnLayout(widths={2: 140}, order=["x", "y"]))

    assert json.loads(storage.get(COLUMN_WIDTHS_KEY)) == {"2": 140}
    assert json.loads(storage.get(COLUMN_STATE_KEY)) == [{"colId": "x"}, {"colId": "y"}]


@pytest.mark.parametrize(
    "widths_raw",
    [
        "{not json",
        "[1, 2]",
        '{"abc": 100}',
        '{"0": "wide"}',
        '{"0": true}',
        "null",
        '{"0": NaN}',
        '{"0": Infinity}',
        '{"0": -40}',
        '{"0": 0}',
    ],
)
def test_corrupt_widths_fall_back_to_default(widths_raw, caplog):
    store = _make_store({COLUMN_WIDTHS_KEY: widths_raw})

    with caplog.at_level(logging.WARNING):
        layout = store.load()

    assert layout.widths == {}
    assert layout.width_for(0) == DEFAULT_COLUMN_WIDTH


@pytest.mark.parametrize("order_raw", ["", "{}", '[{"width": 3}]', "[1]"])
def test_corrupt_order_falls_back_to_default(order_raw):
    layout = _make_store({COLUMN_STATE_KEY: order_raw}).load()
    assert layout.order == []


def test_undecodable_file_on_disk_falls_back_to_default(tmp_path, caplog):
    (tmp_path / f"{COLUMN_WIDTHS_KEY}.json").write_bytes(b'{"0": \xff\xfe}')
    (tmp_path / f"{COLUMN_STATE_KEY}.json").write_text('["b", "a"]', encoding="utf-8")
    store = ViewStateStore(LocalFileSystemStorage(tmp_path))

    with caplog.at_level(logging.WARNING):
        layout = store.load()

    assert layout == ColumnLayout(widths={}, order=["b", "a"])
    assert "Discarding unreadable view state" in caplog.text


def test_one_corrupt_key_does_not_discard_the_other():
    store = _make_store({COLUMN_STATE_KEY: "garbage", COLUMN_WIDTHS_KEY: '{"1": 90}'})
    assert store.load() == ColumnLayout(widths={1: 90}, order=[])


def test_order_accepts_bare_strings():
    layout = _make_store({COLUMN_STATE_KEY: '["b", "a"]'}).load()
    assert layout.order == ["b", "a"]


def test_ordered_columns_ignores_stale_keys_and_appends_new_ones():
    layout = ColumnLayout(order=["gone", "c", "a"])
    assert layout.ordered_columns(["a", "b", "c"]) == ["c", "a", "b"]
    # stale entries stay in the layout
    assert layout.order == ["gone", "c", "a"]


def test_widths_are_positional_not_by_name():
    layout = ColumnLayout(widths={0: 250})
    # whatever column is first gets the stored width
    assert layout.width_for(0) == 250
    assert layout.ordered_columns(["z", "y"])[0] == "z"


def test_query_state_roundtrip_and_corruption():
    store = _make_store()
    assert store.load_query_state() is None

    store.save_query_state({"filters": {"a": "x"}, "search": "q"})
    assert store.load_query_state() == {"filters": {"a": "x"}, "search": "q"}

    store.storage.set("queryState", "[")
    assert store.load_query_state() is None
