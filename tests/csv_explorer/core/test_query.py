from __future__ import annotations

from csv_explorer.core.query import (
    SortDirection,
    SortSpec,
    evaluate,
    evaluate_indices,
    filtered_indices,
    sort_key,
)


def _make_rows():
    return [
        {"id": "1", "name": "Alice", "city": "Lisbon", "team": "red"},
        {"id": "2", "name": "bob", "city": "Porto", "team": "blue"},
        {"id": "10", "name": "Carol", "city": "lisbon", "team": "blue"},
        {"id": "3", "name": "dave", "city": "Madrid", "team": "red"},
        {"id": "4", "name": "Eve", "city": "Porto", "team": "red"},
    ]


def _ids(rows):
    return [r["id"] for r in rows]


# -----------------------------------------------------------------------------
# Filter stage
# -----------------------------------------------------------------------------
def test_filter_is_case_insensitive_substring():
    rows = _make_rows()
    out = evaluate(rows, {"city": "LISB"}, "", SortSpec())
    assert _ids(out) == ["1", "10"]


def test_filters_are_anded_across_columns():
    rows = _make_rows()
    out = evaluate(rows, {"city": "porto", "team": "red"}, "", SortSpec())
    assert _ids(out) == ["4"]


def test_empty_pattern_and_absent_column_impose_nothing():
    rows = _make_rows()
    assert _ids(evaluate(rows, {"city": ""}, "", SortSpec())) == _ids(rows)
    assert _ids(evaluate(rows, {}, "", SortSpec())) == _ids(rows)


def test_filter_on_missing_column_treats_cell_as_empty():
    rows = _make_rows()
    # no row has "nope"; "" does not contain "x"
    assert evaluate(rows, {"nope": "x"}, "", SortSpec()) == []


def test_filter_survival_matches_definition_for_every_row():
    rows = _make_rows()
    filters = {"name": "e", "team": "RE"}
    kept = set(filtered_indices(rows, filters, ""))
    for i, row in enumerate(rows):
        expected = all(p.lower() in row[c].lower() for c, p in filters.items())
        assert (i in kept) == expected


# -----------------------------------------------------------------------------
# Search stage
# -----------------------------------------------------------------------------
def test_empty_search_is_noop():
    rows = _make_rows()
    assert evaluate(rows, {}, "", SortSpec()) == rows


def test_search_is_or_across_cells():
    rows = _make_rows()
    # "bo" hits name "bob" and the two "Lisbon" cities
    out = evaluate(rows, {}, "BO", SortSpec())
    assert _ids(out) == ["1", "2", "10"]


def test_search_applies_on_top_of_filters():
    rows = _make_rows()
    out = evaluate(rows, {"team": "red"}, "porto", SortSpec())
    assert _ids(out) == ["4"]


# -----------------------------------------------------------------------------
# Sort stage
# -----------------------------------------------------------------------------
def test_no_sort_column_preserves_dataset_order():
    rows = _make_rows()
    assert evaluate_indices(rows, {}, "", SortSpec()) == [0, 1, 2, 3, 4]


def test_numeric_values_sort_numerically():
    rows = _make_rows()
    out = evaluate(rows, {}, "", SortSpec(column="id"))
    assert _ids(out) == ["1", "2", "3", "4", "10"]

    out = evaluate(rows, {}, "", SortSpec(column="id", direction=SortDirection.DESCENDING))
    assert _ids(out) == ["10", "4", "3", "2", "1"]


def test_sort_is_stable_in_both_directions():
    rows = _make_rows()
    asc = evaluate(rows, {}, "", SortSpec(column="team"))
    assert _ids(asc) == ["2", "10", "1", "3", "4"]

    desc = evaluate(rows, {}, "", SortSpec(column="team", direction=SortDirection.DESCENDING))
    # equal keys keep their pre-sort order, descending too
    assert _ids(desc) == ["1", "3", "4", "2", "10"]


def test_sort_does_not_mutate_input():
    rows = _make_rows()
    before = list(rows)
    evaluate(rows, {}, "", SortSpec(column="name"))
    assert rows == before


def test_sort_key_orders_numbers_before_text():
    values = ["b", "10", "", "2", "a", "-1.5"]
    assert sorted(values, key=sort_key) == ["-1.5", "2", "10", "", "a", "b"]


def test_sort_on_missing_column_never_raises():
    rows = _make_rows()
    out = evaluate(rows, {}, "", SortSpec(column="nope"))
    assert _ids(out) == _ids(rows)


# -----------------------------------------------------------------------------
# Toggle policy
# -----------------------------------------------------------------------------
def test_toggle_new_column_starts_ascending():
    spec = SortSpec(column="id", direction=SortDirection.DESCENDING).toggle("name")
    assert spec == SortSpec(column="name", direction=SortDirection.ASCENDING)


def test_toggle_same_column_flips_direction():
    spec = SortSpec().toggle("id")
    assert spec.direction == SortDirection.ASCENDING

    spec = spec.toggle("id")
    assert spec.direction == SortDirection.DESCENDING

    spec = spec.toggle("id")
    assert spec.direction == SortDirection.ASCENDING


def test_sort_spec_dict_roundtrip():
    spec = SortSpec(column="city", direction=SortDirection.DESCENDING)
    assert SortSpec.from_dict(spec.to_dict()) == spec
    assert SortSpec.from_dict({}) == SortSpec()
