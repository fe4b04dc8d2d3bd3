import pytest

from tabular_engine.errors import InvalidArgument
from tabular_engine.models import Dataset
from tabular_engine.transforms import remove_null_rows, split_column


@pytest.fixture
def tags():
    return Dataset.create("tags", ["tag"], [{"tag": "a;b"}, {"tag": "c"}])


def test_remove_null_rows():
    ds = Dataset.create(
        "d",
        ["a", "b"],
        [
            {"a": "", "b": None},
            {"a": "x", "b": ""},
            {},
            {"a": 0},
            {"a": float("nan"), "b": ""},
        ],
    )
    cleaned, report = remove_null_rows(ds)

    assert cleaned.rows == [{"a": "x", "b": ""}, {"a": 0}]
    assert cleaned.row_count == len(cleaned.rows)
    assert cleaned.cleaned is True
    assert cleaned.columns == ds.columns
    assert report["rows_removed"] == 3
    assert report["rows_before"] == 5 and report["rows_after"] == 2
    # input snapshot untouched
    assert ds.row_count == 5 and ds.cleaned is False


def test_remove_null_rows_is_monotonic(people_dataset):
    cleaned, report = remove_null_rows(people_dataset)
    assert len(cleaned.rows) <= len(people_dataset.rows)
    assert report["rows_removed"] == 0
    assert cleaned.cleaned is True


def test_split_example(tags):
    split, report = split_column(tags, "tag", ";")

    assert split.columns == ["tag", "tag_1", "tag_2"]
    assert split.rows[0] == {"tag": "a;b", "tag_1": "a", "tag_2": "b"}
    assert split.rows[1] == {"tag": "c"}
    assert split.cleaned is True
    assert report["parts"] == 2
    assert report["rows_split"] == 1
    assert report["new_columns"] == ["tag_1", "tag_2"]
    # input snapshot untouched
    assert tags.columns == ["tag"]
    assert tags.rows[0] == {"tag": "a;b"}


def test_split_twice_is_stable(tags):
    once, _ = split_column(tags, "tag", ";")
    twice, report = split_column(once, "tag", ";")

    assert twice.columns == once.columns
    assert twice.rows == once.rows
    assert twice.row_count == once.row_count
    assert report["new_columns"] == []


def test_split_trims_parts_and_uses_max_part_count():
    ds = Dataset.create(
        "d",
        ["addr", "n"],
        [{"addr": "1 Main St, Springfield", "n": 1}, {"addr": "a, b , c", "n": 2}, {"addr": 42, "n": 3}],
    )
    split, report = split_column(ds, "addr", ",")

    assert split.columns == ["addr", "n", "addr_1", "addr_2", "addr_3"]
    assert split.rows[0]["addr_2"] == "Springfield"
    assert "addr_3" not in split.rows[0]
    assert split.rows[1]["addr_2"] == "b"
    assert split.rows[2] == {"addr": 42, "n": 3}
    assert report["parts"] == 3


def test_split_without_matches_adds_no_columns(tags):
    split, report = split_column(tags, "tag", "|")
    assert split.columns == ["tag"]
    assert report["parts"] == 0
    assert split.cleaned is True


def test_split_rejects_bad_arguments(tags):
    with pytest.raises(InvalidArgument):
        split_column(tags, "missing", ";")
    with pytest.raises(InvalidArgument):
        split_column(tags, "tag", "")
    assert tags.cleaned is False


def test_row_count_invariant_after_chained_transforms(people_dataset):
    ds, _ = split_column(people_dataset, "join_date", "-")
    ds, _ = remove_null_rows(ds)
    assert ds.row_count == len(ds.rows)
    assert ds.columns[-3:] == ["join_date_1", "join_date_2", "join_date_3"]
