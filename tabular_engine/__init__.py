"""In-memory tabular dataset engine: type inference, summary statistics, grouping,
filter/sort/paginate views and cleaning transforms over imported CSV/Excel data.

Public entry points:
    import_file(path)                        -> Dataset
    summarize(dataset)                       -> DataSummary
    group_and_aggregate(dataset, g, v, fn)   -> [GroupedValue]
    build_view(dataset, search=..., ...)     -> DataView
    remove_null_rows(dataset) / split_column(dataset, column, delimiter)
    run_processing_pipeline(file_path, *, mode="full", config=None)
"""

from .aggregation import group_and_aggregate
from .data_profiler import DataProfiler, summarize
from .errors import InvalidArgument, NotFound, ParseError, TabularEngineError
from .importer import import_file, load_file
from .manager import DatasetManager
from .models import ColumnSummary, DataSummary, Dataset, GroupedValue, create_dataset
from .pipeline import run_processing_pipeline
from .transforms import remove_null_rows, split_column
from .type_inference import TypeInferencer, infer_type
from .view import build_view, filter_data, paginate, search_rows, sort_rows

__all__ = [
    "Dataset",
    "ColumnSummary",
    "DataSummary",
    "GroupedValue",
    "create_dataset",
    "infer_type",
    "TypeInferencer",
    "DataProfiler",
    "summarize",
    "group_and_aggregate",
    "search_rows",
    "filter_data",
    "sort_rows",
    "paginate",
    "build_view",
    "remove_null_rows",
    "split_column",
    "load_file",
    "import_file",
    "DatasetManager",
    "run_processing_pipeline",
    "TabularEngineError",
    "ParseError",
    "InvalidArgument",
    "NotFound",
]
