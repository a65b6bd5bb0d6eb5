"""Solver configuration: YAML file + keyword overrides, resolved into a DotDict."""

# config.py
# Keys:
#   techniques: ordered technique keys (subset of the catalog), default all
#   max_hints:  stop after this many applied hints, default unlimited (null)
#   log_level:  logging level name for the CLI, default INFO

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hint_engine.catalog import SolvingTechnique, default_techniques, techniques_by_key

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "solver.yaml"


class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return DotDict(data)


def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg


def default_config() -> DotDict:
    return DotDict(
        techniques=[t.key for t in default_techniques()],
        max_hints=None,
        log_level="INFO",
    )


def load_solver_config(path: Optional[str | Path] = None, **overrides) -> DotDict:
    """Defaults, then the YAML file (if any), then non-None overrides. Raises ValueError on bad values."""
    cfg = default_config()
    if path is not None:
        merge_overrides(cfg, **load_yaml(path))
    merge_overrides(cfg, **overrides)
    validate_config(cfg)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> None:
    unknown = set(cfg) - set(default_config())
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    techniques = cfg.get("techniques")
    if not isinstance(techniques, list) or not techniques:
        raise ValueError("techniques must be a non-empty list of technique keys")
    techniques_by_key(techniques)
    max_hints = cfg.get("max_hints")
    if max_hints is not None and (isinstance(max_hints, bool) or not isinstance(max_hints, int) or max_hints < 0):
        raise ValueError(f"max_hints must be a non-negative integer or null, got {max_hints!r}")
    level = cfg.get("log_level")
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ValueError(f"Invalid log_level: {level!r}")


def configured_techniques(cfg: Dict[str, Any]) -> tuple[SolvingTechnique, ...]:
    return techniques_by_key(cfg["techniques"])
