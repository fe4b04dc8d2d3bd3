import sys
from pathlib import Path

import pandas as pd
import pytest

# Ensure project root (containing the 'tabular_engine' package directory) is on sys.path
_project_root = Path(__file__).resolve().parents[1]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from tabular_engine.models import Dataset  # noqa: E402


@pytest.fixture
def people_dataset():
    """Small employee table; every cell is text, as a CSV import yields."""
    return Dataset.create(
        "people",
        ["name", "department", "salary", "join_date"],
        [
            {"name": "John", "department": "Engineering", "salary": "75000", "join_date": "2022-01-15"},
            {"name": "Jane", "department": "Marketing", "salary": "65000", "join_date": "2022-03-10"},
            {"name": "Bob", "department": "Engineering", "salary": "85000", "join_date": "2021-11-20"},
            {"name": "Alice", "department": "Sales", "salary": "70000", "join_date": "2022-02-28"},
            {"name": "Diana", "department": "", "salary": "", "join_date": ""},
        ],
    )


@pytest.fixture
def people_csv(tmp_path: Path) -> Path:
    df = pd.DataFrame(
        {
            "Name": ["John", "Jane", "Bob", "Alice", ""],
            "Department": ["Engineering", "Marketing", "Engineering", "Sales", ""],
            "Salary USD": ["75000", "65000", "85000", "70000", ""],
            "Tags": ["a;b", "c", "a;b;c", "", ""],
        }
    )
    csv_path = tmp_path / "people.csv"
    df.to_csv(csv_path, index=False)
    return csv_path
