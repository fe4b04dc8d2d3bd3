"""Engine configuration: defaults plus an optional YAML file."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidArgument

DEFAULT_CONFIG: Dict[str, Any] = {
    # data table
    "page_size": 50,
    # cleaning
    "split_delimiter": ",",
    "clean": [],
    # pipeline payload
    "sample_size": 10,
    # charts
    "group_by": None,
    "value_column": None,
    "aggregate": "count",
    "top_n": 10,
}


def _merge(base: Dict[str, Any], extra: Dict[str, Any]) -> None:
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key].update(value)
        else:
            base[key] = value


def load_config(
    path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Load and merge a user config with the engine defaults.

    Keys omitted by the user keep their default. ``overrides`` (typically CLI
    flags) are applied last; ``None`` values in it are ignored.
    """
    user_config: Dict[str, Any] = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        if not isinstance(user_config, dict):
            raise InvalidArgument("Config file must contain a YAML mapping")

    config = copy.deepcopy(DEFAULT_CONFIG)
    _merge(config, user_config)
    if overrides:
        _merge(config, {k: v for k, v in overrides.items() if v is not None})

    page_size = config.get("page_size")
    if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size <= 0:
        raise InvalidArgument(f"page_size must be a positive integer, got {page_size!r}")

    return config


__all__ = ["DEFAULT_CONFIG", "load_config"]
