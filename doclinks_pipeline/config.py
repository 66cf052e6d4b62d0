# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Run configuration for doclinks.

A run is described by RewriteConfig. Values come from an optional YAML file
(mapping at top level) and are overridden by explicit command-line flags:

    krate: mycrate          # library owning the scanned files (required)
    apply: false            # write changes back in place
    extensions: [".rs"]     # suffixes picked up when walking directories
    extra_roots: []         # root crate names recognised besides std/core/alloc
    report: null            # optional .jsonl/.csv change report
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml  # pyyaml (runtime dep)


@dataclass(frozen=True)
class RewriteConfig:
    krate: str = ""
    apply: bool = False
    extensions: Tuple[str, ...] = (".rs",)
    extra_roots: Tuple[str, ...] = ()
    report: Optional[str] = None

    def __post_init__(self) -> None:
        if any(not e.startswith(".") for e in self.extensions):
            raise ValueError(f"extensions must start with '.': {self.extensions!r}")

    def validate(self) -> "RewriteConfig":
        if not self.krate:
            raise ValueError("a library name is required (--krate or 'krate' in the config file)")
        return self

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "krate": self.krate,
            "apply": self.apply,
            "extensions": list(self.extensions),
            "extra_roots": list(self.extra_roots),
            "report": self.report,
        }


_KNOWN_KEYS = {f.name for f in fields(RewriteConfig)}


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML at {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {p} must be a mapping at top-level.")
    return data


def _as_tuple(key: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    raise ValueError(f"'{key}' must be a string or a list of strings, got {type(value).__name__}")


def config_from_mapping(data: Mapping[str, Any], base: Optional[RewriteConfig] = None) -> RewriteConfig:
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    changes: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key in ("extensions", "extra_roots"):
            changes[key] = _as_tuple(key, value)
        elif key == "apply":
            if not isinstance(value, bool):
                raise ValueError("'apply' must be a boolean")
            changes[key] = value
        else:
            changes[key] = str(value)
    return replace(base or RewriteConfig(), **changes)


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> RewriteConfig:
    """
    Build a RewriteConfig from an optional YAML file, then apply overrides.

    Overrides whose value is None are ignored so that unset CLI flags never
    mask values from the file.
    """
    cfg = RewriteConfig()
    if path is not None:
        cfg = config_from_mapping(load_yaml(path), cfg)
    if overrides:
        cfg = config_from_mapping({k: v for k, v in overrides.items() if v is not None}, cfg)
    return cfg


__all__ = ["RewriteConfig", "load_yaml", "config_from_mapping", "load_config"]
