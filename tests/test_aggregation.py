import pytest

from tabular_engine.aggregation import group_and_aggregate, top_n
from tabular_engine.errors import InvalidArgument
from tabular_engine.models import Dataset


def _as_pairs(groups):
    return [(g.group, g.value) for g in groups]


def test_example_scenario_sum():
    ds = Dataset.create(
        "people",
        ["name", "age"],
        [{"name": "Bob", "age": "30"}, {"name": "Amy", "age": ""}],
    )
    assert _as_pairs(group_and_aggregate(ds, "name", "age", "sum")) == [
        ("Bob", 30),
        ("Amy", 0),
    ]


def test_count_totals_row_count(people_dataset):
    groups = group_and_aggregate(people_dataset, "department", "salary", "count")
    assert sum(g.value for g in groups) == people_dataset.row_count
    assert _as_pairs(groups) == [
        ("Engineering", 2),
        ("Marketing", 1),
        ("Sales", 1),
        ("Unknown", 1),
    ]


def test_avg_min_max(people_dataset):
    avg = dict(_as_pairs(group_and_aggregate(people_dataset, "department", "salary", "avg")))
    assert avg["Engineering"] == pytest.approx(80000)
    assert avg["Unknown"] == 0

    mins = dict(_as_pairs(group_and_aggregate(people_dataset, "department", "salary", "min")))
    maxs = dict(_as_pairs(group_and_aggregate(people_dataset, "department", "salary", "max")))
    assert mins["Engineering"] == 75000
    assert maxs["Engineering"] == 85000


def test_non_numeric_values_only_count():
    ds = Dataset.create(
        "d",
        ["g", "v"],
        [{"g": "a", "v": "10"}, {"g": "a", "v": "n/a"}, {"g": "a", "v": 20}, {"g": "b", "v": "x"}],
    )
    assert _as_pairs(group_and_aggregate(ds, "g", "v", "avg")) == [("a", 15), ("b", 0)]
    assert _as_pairs(group_and_aggregate(ds, "g", "v", "count")) == [("a", 3), ("b", 1)]


def test_ties_keep_first_seen_order():
    ds = Dataset.create(
        "d",
        ["g"],
        [{"g": "z"}, {"g": "y"}, {"g": "x"}, {"g": "y"}, {"g": "w"}],
    )
    assert [g.group for g in group_and_aggregate(ds, "g", "g", "count")] == ["y", "z", "x", "w"]


def test_null_and_missing_keys_group_as_unknown():
    ds = Dataset.create(
        "d",
        ["g", "v"],
        [{"g": None, "v": 1}, {"v": 2}, {"g": "", "v": 3}, {"g": 0, "v": 4}, {"g": 2.0, "v": 5}],
    )
    assert _as_pairs(group_and_aggregate(ds, "g", "v", "sum")) == [
        ("Unknown", 6),
        ("2", 5),
        ("0", 4),
    ]


def test_invalid_arguments(people_dataset):
    with pytest.raises(InvalidArgument):
        group_and_aggregate(people_dataset, "department", "salary", "median")
    with pytest.raises(InvalidArgument):
        group_and_aggregate(people_dataset, "nope", "salary", "sum")
    with pytest.raises(InvalidArgument):
        group_and_aggregate(people_dataset, "department", "nope", "sum")


def test_empty_dataset_has_no_groups():
    assert group_and_aggregate(Dataset.create("d", ["g"], []), "g", "g") == []


def test_top_n(people_dataset):
    groups = group_and_aggregate(people_dataset, "department", "salary", "count")
    assert [g.group for g in top_n(groups, 2)] == ["Engineering", "Marketing"]
    with pytest.raises(InvalidArgument):
        top_n(groups, 0)
