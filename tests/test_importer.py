from pathlib import Path

import pandas as pd
import pytest

from tabular_engine.errors import ParseError
from tabular_engine.importer import import_file, load_file


def test_load_csv_sanitizes_headers_and_keeps_text(people_csv: Path):
    parsed = load_file(str(people_csv))

    assert parsed["columns"] == ["name", "department", "salary_usd", "tags"]
    assert len(parsed["rows"]) == 5
    assert parsed["rows"][0] == {
        "name": "John",
        "department": "Engineering",
        "salary_usd": "75000",
        "tags": "a;b",
    }
    # blank cells stay empty strings
    assert parsed["rows"][4] == {"name": "", "department": "", "salary_usd": "", "tags": ""}


def test_import_file_builds_uncleaned_dataset(people_csv: Path):
    ds = import_file(str(people_csv))
    assert ds.name == "people"
    assert ds.cleaned is False
    assert ds.row_count == len(ds.rows) == 5
    assert import_file(str(people_csv), name="Staff").name == "Staff"


def test_duplicate_headers_are_made_unique(tmp_path: Path):
    path = tmp_path / "dupes.csv"
    path.write_text("A,a,\n1,2,3\n", encoding="utf-8")
    assert load_file(str(path))["columns"] == ["a", "a_1", "column_3"]


def test_dedupe_suffix_skips_existing_header(tmp_path: Path):
    path = tmp_path / "clash.csv"
    path.write_text("a,a,a_1\n1,2,3\n", encoding="utf-8")
    parsed = load_file(str(path))
    assert parsed["columns"] == ["a", "a_2", "a_1"]
    assert parsed["rows"] == [{"a": "1", "a_2": "2", "a_1": "3"}]

    dataset = import_file(str(path))
    assert len(set(dataset.columns)) == 3


def test_load_excel_first_sheet(tmp_path: Path):
    df = pd.DataFrame(
        {
            "First Name": ["Ann", "Ben"],
            "Score": [1.5, None],
            "Joined": pd.to_datetime(["2024-01-01", "2024-02-01"]),
        }
    )
    path = tmp_path / "people.xlsx"
    df.to_excel(path, index=False)

    parsed = load_file(str(path))
    assert parsed["columns"] == ["first_name", "score", "joined"]
    assert parsed["rows"][0] == {"first_name": "Ann", "score": 1.5, "joined": "2024-01-01"}
    assert parsed["rows"][1]["score"] is None


def test_unsupported_extension(tmp_path: Path):
    path = tmp_path / "data.txt"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    with pytest.raises(ParseError, match="Unsupported file format"):
        load_file(str(path))


@pytest.mark.parametrize("content", ["", "only,a,header\n"])
def test_empty_csv(tmp_path: Path, content: str):
    path = tmp_path / "empty.csv"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ParseError, match="No data"):
        load_file(str(path))


def test_malformed_csv(tmp_path: Path):
    path = tmp_path / "ragged.csv"
    path.write_text("a,b\n1,2\n1,2,3\n", encoding="utf-8")
    with pytest.raises(ParseError):
        load_file(str(path))


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_file(str(tmp_path / "nope.csv"))
