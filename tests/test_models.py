import pytest

from tabular_engine.errors import InvalidArgument, NotFound
from tabular_engine.models import Dataset, create_dataset


def test_create_assigns_identity():
    a = create_dataset("a", {"columns": ["x"], "rows": [{"x": 1}]})
    b = create_dataset("a", {"columns": ["x"], "rows": [{"x": 1}]})
    assert a.id != b.id
    assert a.row_count == 1
    assert a.cleaned is False
    assert a.created_at


def test_create_validates():
    with pytest.raises(InvalidArgument):
        Dataset.create("d", ["x", "x"], [])
    with pytest.raises(InvalidArgument):
        Dataset.create("  ", ["x"], [])


def test_with_rows_recomputes_count_and_keeps_identity():
    ds = Dataset.create("d", ["x"], [{"x": 1}, {"x": 2}])
    smaller = ds.with_rows(ds.rows[:1], cleaned=True)
    assert smaller.row_count == 1
    assert (smaller.id, smaller.name, smaller.created_at) == (ds.id, ds.name, ds.created_at)
    assert smaller.cleaned is True
    # cleaned is never reset
    assert smaller.with_rows([], cleaned=False).cleaned is True


def test_dict_round_trip_recomputes_row_count():
    ds = Dataset.create("d", ["x"], [{"x": 1}])
    data = ds.to_dict()
    data["row_count"] = 99
    restored = Dataset.from_dict(data)
    assert restored.row_count == 1
    assert restored == ds


def test_not_found_message():
    assert str(NotFound("Dataset 'x' not found")) == "Dataset 'x' not found"
