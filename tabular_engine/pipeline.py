from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

from .aggregation import group_and_aggregate, top_n
from .config import load_config
from .data_profiler import DataProfiler
from .errors import InvalidArgument
from .importer import import_file
from .models import DataSummary, Dataset
from .transforms import remove_null_rows, split_column
from .type_inference import TypeInferencer

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _apply_cleaning(
    dataset: Dataset, steps: List[Any], config: Dict[str, Any]
) -> Tuple[Dataset, List[Dict[str, Any]]]:
    """Run the configured cleaning transforms in order, collecting their reports.

    A step is either ``"remove_null_rows"`` or ``{"split": column,
    "delimiter": d}`` (delimiter defaults to ``split_delimiter``).
    """
    reports: List[Dict[str, Any]] = []
    for step in steps:
        if step == "remove_null_rows":
            dataset, report = remove_null_rows(dataset)
        elif isinstance(step, dict) and "split" in step:
            delimiter = step.get("delimiter", config.get("split_delimiter", ","))
            dataset, report = split_column(dataset, step["split"], delimiter)
        else:
            raise InvalidArgument(f"Unknown cleaning step: {step!r}")
        reports.append(report)
    return dataset, reports


def _build_payload(
    dataset: Dataset,
    summary: DataSummary,
    type_info: Dict[str, str],
    cleaning_report: List[Dict[str, Any]],
    mode: str,
    config: Dict[str, Any],
) -> Dict[str, Any]:
    dataset_block = {
        "id": dataset.id,
        "name": dataset.name,
        "rows": summary.total_rows,
        "columns": summary.total_columns,
        "column_names": list(dataset.columns),
        "cleaned": dataset.cleaned,
    }

    if mode == "schema_only":
        return {
            "dataset": dataset_block,
            "columns": {c: {"type": type_info.get(c, "string")} for c in dataset.columns},
            "mode": mode,
            "version": "v1",
        }

    # Full mode
    sample_size = int(config.get("sample_size", 10))
    payload: Dict[str, Any] = {
        "dataset": dataset_block,
        "columns": {c.column: c.to_dict() for c in summary.column_summaries},
        "sample_rows": [dict(r) for r in dataset.rows[:sample_size]],
        "cleaning_report": cleaning_report,
        "mode": mode,
        "version": "v1",
    }

    group_by = config.get("group_by")
    if group_by:
        value_column = config.get("value_column") or group_by
        fn = config.get("aggregate", "count")
        groups = group_and_aggregate(dataset, group_by, value_column, fn)
        payload["groups"] = {
            "group_by": group_by,
            "value_column": value_column,
            "aggregate": fn,
            "total_groups": len(groups),
            "data": [g.to_dict() for g in top_n(groups, int(config.get("top_n", 10)))],
        }
    return payload


def run_processing_pipeline(
    file_path: str, *, mode: str = "full", config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Primary orchestrator: import -> clean -> infer types -> summarize -> build payload.

    Parameters
    ----------
    file_path : str
        Path to CSV or Excel file (first sheet only for Excel).
    mode : str
        'full' or 'schema_only'.
    config : dict, optional
        Overrides for ``DEFAULT_CONFIG`` (sample_size, clean, group_by, ...).

    Returns
    -------
    dict with keys: dataset, summary, type_info, cleaning_report, payload
    """
    if mode not in ("full", "schema_only"):
        raise InvalidArgument("mode must be 'full' or 'schema_only'")
    cfg = load_config(overrides=config)

    dataset = import_file(file_path, name=cfg.get("name") or Path(file_path).stem)
    dataset, cleaning_report = _apply_cleaning(dataset, cfg.get("clean") or [], cfg)

    type_info = TypeInferencer().infer_types(dataset)
    summary = DataProfiler().summarize(dataset)

    payload = _build_payload(dataset, summary, type_info, cleaning_report, mode, cfg)

    return {
        "dataset": dataset,
        "summary": summary,
        "type_info": type_info,
        "cleaning_report": cleaning_report,
        "payload": payload,
    }
