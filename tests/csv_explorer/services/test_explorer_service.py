from __future__ import annotations

import pytest

from csv_explorer.core.query import SortDirection
from csv_explorer.core.view_state import COLUMN_WIDTHS_KEY, ColumnLayout, ViewStateStore
from csv_explorer.services.explorer_service import ExplorerSession
from csv_explorer.services.storage import InMemoryStorage, LocalFileSystemStorage


def _csv_text() -> str:
    lines = ["id,entity_type"]
    for i in range(1, 26):
        lines.append(f"{i},{'alpha' if i % 2 == 1 and i <= 23 else 'beta'}")
    return "\n".join(lines) + "\n"


def _make_session(storage=None, **kwargs) -> ExplorerSession:
    return ExplorerSession(ViewStateStore(storage or InMemoryStorage()), page_size=10, **kwargs)


def _ids(view):
    return [r["id"] for r in view.page_rows]


def test_load_from_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(_csv_text(), encoding="utf-8")
    session = _make_session()

    view = session.load(path)

    assert session.ready
    assert session.error is None
    assert view.total_count == 25
    assert view.total_pages == 3
    assert _ids(view) == [str(i) for i in range(1, 11)]


def test_fetch_error_leaves_dataset_empty(tmp_path):
    session = _make_session()
    session.load_text(_csv_text())

    view = session.load(tmp_path / "missing.csv")

    assert view is None
    assert not session.ready
    assert session.error
    assert len(session.store) == 0


def test_parse_error_leaves_dataset_empty(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("a,b\n1,2\n3,4,5,6\n", encoding="utf-8")
    session = _make_session()

    assert session.load(path) is None
    assert "Malformed CSV" in session.error
    assert len(session.store) == 0


def test_navigation_saturates():
    session = _make_session()
    session.load_text(_csv_text())

    assert session.previous_page().page.page_index == 0
    session.next_page()
    session.next_page()
    view = session.next_page()
    assert view.page.page_index == 2
    assert _ids(view) == [str(i) for i in range(21, 26)]


def test_filter_shrink_clamps_session_page():
    session = _make_session()
    session.load_text(_csv_text())
    session.next_page()
    session.next_page()

    view = session.set_filter("entity_type", "ALPHA")

    assert view.total_pages == 2
    assert session.state.page.page_index == 1
    assert _ids(view) == ["21", "23"]


def test_toggle_sort_policy():
    session = _make_session()
    session.load_text(_csv_text())

    session.toggle_sort("id")
    assert session.state.sort.direction == SortDirection.ASCENDING
    view = session.toggle_sort("id")
    assert session.state.sort.direction == SortDirection.DESCENDING
    assert _ids(view)[0] == "25"

    session.toggle_sort("entity_type")
    assert session.state.sort.column == "entity_type"
    assert session.state.sort.direction == SortDirection.ASCENDING


def test_edit_via_page_position_hits_the_right_row():
    session = _make_session()
    session.load_text(_csv_text())
    session.toggle_sort("id")
    session.toggle_sort("id")  # 25, 24, ...

    session.set_page_cell(0, "entity_type", "gamma")

    assert session.store.row(24)["entity_type"] == "gamma"
    view = session.set_filter("entity_type", "gamma")
    assert _ids(view) == ["25"]


def test_edit_out_of_range_raises():
    session = _make_session()
    session.load_text(_csv_text())
    with pytest.raises(IndexError):
        session.set_cell(25, "id", "x")


def test_group_column_drives_chart():
    session = _make_session()
    session.load_text(_csv_text())

    view = session.set_group_column("entity_type")
    assert [(g.key, g.count) for g in view.chart] == [("alpha", 12), ("beta", 13)]

    view = session.set_group_column(None)
    assert view.chart is None


def test_layout_persists_across_sessions(tmp_path):
    storage = LocalFileSystemStorage(tmp_path)
    session = _make_session(storage)
    session.load_text(_csv_text())

    session.resize_column(1, start_x=100, end_x=150)
    session.reorder_columns(["entity_type", "id"])

    assert not session.capture.active

    fresh = _make_session(LocalFileSystemStorage(tmp_path))
    view = fresh.load_text(_csv_text())
    assert fresh.layout == ColumnLayout(widths={1: 150}, order=["entity_type", "id"])
    assert view.columns == ["entity_type", "id"]
    assert fresh.column_widths() == [100, 150]


def test_corrupt_layout_is_ignored_at_mount():
    storage = InMemoryStorage({COLUMN_WIDTHS_KEY: "{broken"})
    session = _make_session(storage)

    view = session.load_text(_csv_text())

    assert view is not None
    assert session.layout == ColumnLayout()


def test_set_column_width_respects_bounds():
    session = _make_session(min_column_width=200, max_column_width=300)
    session.load_text(_csv_text())

    session.set_column_width(0, 1000)
    assert session.layout.width_for(0) == 300

    session.set_column_width(0, 250)
    assert session.layout.width_for(0) == 250


def test_query_state_persisted_only_when_enabled():
    storage = InMemoryStorage()
    session = _make_session(storage, persist_query_state=True)
    session.load_text(_csv_text())
    session.set_filter("entity_type", "alpha")
    session.set_search("1")
    session.toggle_sort("id")

    restored = _make_session(storage, persist_query_state=True)
    view = restored.load_text(_csv_text())
    assert restored.state.filters == {"entity_type": "alpha"}
    assert restored.state.search == "1"
    assert restored.state.sort.column == "id"
    assert view.filtered_count == 7

    plain = _make_session(storage)
    plain.load_text(_csv_text())
    assert plain.state.filters == {}


def test_reload_resets_session_state():
    session = _make_session()
    session.load_text(_csv_text())
    session.set_search("alpha")
    session.next_page()

    session.load_text(_csv_text())

    assert session.state.search == ""
    assert session.state.page.page_index == 0
