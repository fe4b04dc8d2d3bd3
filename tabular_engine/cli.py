"""Command-line interface for the import / clean / summarize pipeline.

Usage (examples):
    python -m tabular_engine.cli path/to/file.csv
    python -m tabular_engine.cli path/to/file.xlsx --mode schema_only
    python -m tabular_engine.cli people.csv --group-by department --value salary --agg avg
    python -m tabular_engine.cli people.csv --remove-null-rows --split tags --delimiter ";"
    python -m tabular_engine.cli path/to/file.csv --json --output result.json

The CLI prints a concise human-readable summary by default; use --json for full payload.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import warnings

from .aggregation import AGGREGATE_FUNCTIONS
from .config import load_config
from .errors import InvalidArgument, ParseError
from .export import write_csv
from .pipeline import run_processing_pipeline

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s: %(message)s"


def _fmt(value: Any) -> str:
    return f"{value:.2f}" if isinstance(value, float) else str(value)


def _summarize(payload: Dict[str, Any]) -> str:
    dataset = payload.get("dataset", {})
    cols = dataset.get("column_names", [])
    preview_cols = cols[:8]
    more = "" if len(cols) <= 8 else f" (+{len(cols)-8} more)"
    lines = [
        f"Dataset: {dataset.get('name')}  Cleaned: {dataset.get('cleaned')}",
        f"Rows: {dataset.get('rows')}  Columns: {dataset.get('columns')}",
        f"Columns: {', '.join(preview_cols)}{more}",
        f"Mode: {payload.get('mode')}  Version: {payload.get('version')}",
    ]
    for report in payload.get("cleaning_report", []):
        if report["transform"] == "remove_null_rows":
            lines.append(f"Removed {report['rows_removed']} rows with null values")
        else:
            lines.append(f"Split column \"{report['column']}\" into {report['parts']} parts")
    if payload.get("mode") == "full":
        for name, c in payload.get("columns", {}).items():
            line = f"  - {name}: type={c.get('type')} count={c.get('count')} nulls={c.get('nullCount')} unique={c.get('uniqueCount')}"
            if "mean" in c:
                line += f" mean={_fmt(c['mean'])} median={_fmt(c['median'])} std={_fmt(c['std'])}"
            if "min" in c:
                line += f" min={_fmt(c['min'])} max={_fmt(c['max'])}"
            lines.append(line)
    groups = payload.get("groups")
    if groups:
        lines.append(
            f"{groups['aggregate']} of {groups['value_column']} by {groups['group_by']} "
            f"(top {len(groups['data'])} of {groups['total_groups']}):"
        )
        for g in groups["data"]:
            lines.append(f"  {g['group']}: {_fmt(g['value'])}")
    return "\n".join(lines)


def _clean_steps(args: argparse.Namespace) -> Optional[List[Any]]:
    steps: List[Any] = []
    if args.remove_null_rows:
        steps.append("remove_null_rows")
    if args.split:
        step: Dict[str, Any] = {"split": args.split}
        if args.delimiter is not None:
            step["delimiter"] = args.delimiter
        steps.append(step)
    return steps or None


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Import a CSV or Excel file, optionally clean it, and summarize it."
    )
    parser.add_argument("file", help="Path to input CSV or Excel file")
    parser.add_argument(
        "--mode",
        choices=["full", "schema_only"],
        default="full",
        help="Payload detail level (default: full)",
    )
    parser.add_argument("--config", help="Optional YAML config file")
    parser.add_argument(
        "--sample-size",
        type=int,
        help="Sample rows count for full mode (default: 10)",
    )
    parser.add_argument("--group-by", help="Column to group rows by")
    parser.add_argument("--value", help="Column to aggregate (default: the group column)")
    parser.add_argument(
        "--agg",
        choices=list(AGGREGATE_FUNCTIONS),
        help="Aggregate function (default: count)",
    )
    parser.add_argument(
        "--remove-null-rows",
        action="store_true",
        help="Drop rows in which every value is empty.",
    )
    parser.add_argument("--split", help="Column to split into <column>_1..N")
    parser.add_argument("--delimiter", help="Delimiter for --split (default: ',')")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print full JSON payload to stdout (in addition to summary)",
    )
    parser.add_argument(
        "--output",
        help="Optional path to write full JSON payload (pretty-printed)",
    )
    parser.add_argument("--export-csv", help="Write the (cleaned) dataset as CSV")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")

    # Target common noisy warnings we expect
    warnings.filterwarnings("ignore", message="Could not infer format", category=UserWarning)

    try:
        config = load_config(
            args.config,
            overrides={
                "sample_size": args.sample_size,
                "group_by": args.group_by,
                "value_column": args.value,
                "aggregate": args.agg,
                "clean": _clean_steps(args),
            },
        )
        result = run_processing_pipeline(str(path), mode=args.mode, config=config)
    except (ParseError, InvalidArgument) as exc:
        raise SystemExit(f"error: {exc}")
    payload = result["payload"]

    print(_summarize(payload))

    if args.json:
        print("\n=== JSON Payload ===")
        print(json.dumps(payload, indent=2, default=str))

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(
            json.dumps(payload, indent=2, default=str), encoding="utf-8"
        )
        print(f"\nSaved JSON payload to {out_path}")

    if args.export_csv:
        out_path = write_csv(result["dataset"], args.export_csv)
        print(f"\nExported dataset to {out_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
