# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Change report writers for doclinks runs.

Filesystem-only, stdlib-only.

Exports:
- CSVLogger: append-safe CSV writer with header-once semantics.
- JSONLLogger: newline-delimited JSON writer.
- ChangeReport: facade picking CSV or JSONL from the report path suffix and
  turning scan actions / file errors into flat records.
- ensure_dir: mkdir -p helper.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from doclinks_core.interfaces import Action


def ensure_dir(path: Path) -> None:
    """Create the directory if it does not already exist (parents included)."""
    Path(path).mkdir(parents=True, exist_ok=True)


# -------------------------
# CSV logger
# -------------------------


class CSVLogger:
    """
    Append-safe CSV writer that writes the header only once.

    Parameters
    ----------
    path : str | Path
        Target CSV file path.
    fieldnames : list[str]
        Column order. Keys missing from a row are written as empty cells;
        keys outside fieldnames raise ValueError.
    """

    def __init__(self, path: Union[str, Path], fieldnames: Sequence[str]) -> None:
        if not fieldnames:
            raise ValueError("CSVLogger needs at least one field name.")
        self.path = Path(path)
        self._fieldnames = list(fieldnames)

        ensure_dir(self.path.parent)

        # An existing non-empty file is assumed to carry the header already.
        self._header_written = self.path.exists() and self.path.stat().st_size > 0

        self._f = None
        self._writer: Optional[csv.DictWriter] = None

    def _ensure_writer(self) -> csv.DictWriter:
        if self._writer is None:
            self._f = self.path.open("a", newline="", encoding="utf-8")
            self._writer = csv.DictWriter(
                self._f,
                fieldnames=self._fieldnames,
                extrasaction="raise",
                restval="",
            )
            if not self._header_written:
                self._writer.writeheader()
                self._header_written = True
        return self._writer

    def write_row(self, row: Mapping[str, Any]) -> None:
        self._ensure_writer().writerow(row)

    def close(self) -> None:
        try:
            if self._f is not None:
                self._f.flush()
                self._f.close()
        finally:
            self._f = None
            self._writer = None

    def __enter__(self) -> "CSVLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# -------------------------
# JSONL logger
# -------------------------


class JSONLLogger:
    """
    Newline-delimited JSON writer with append semantics.

    Parameters
    ----------
    path : str | Path
        Target .jsonl file path.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        ensure_dir(self.path.parent)
        self._f = self.path.open("a", encoding="utf-8")

    def log(self, record: Mapping[str, Any]) -> None:
        self._f.write(json.dumps(dict(record), ensure_ascii=False, sort_keys=True) + "\n")

    def close(self) -> None:
        try:
            if self._f is not None:
                self._f.flush()
                self._f.close()
        finally:
            self._f = None

    def __enter__(self) -> "JSONLLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# -------------------------
# Change report facade
# -------------------------

REPORT_FIELDS = ["path", "kind", "position", "reason", "text", "new_text"]


class ChangeReport:
    """
    One record per changed line (and per failed file) of a run.

    The format follows the path suffix: '.csv' writes CSV with REPORT_FIELDS
    as header, anything else writes JSONL.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.csv: Optional[CSVLogger] = None
        self.jsonl: Optional[JSONLLogger] = None
        if self.path.suffix.lower() == ".csv":
            self.csv = CSVLogger(self.path, fieldnames=REPORT_FIELDS)
        else:
            self.jsonl = JSONLLogger(self.path)

    def _write(self, record: Mapping[str, Any]) -> None:
        if self.csv is not None:
            self.csv.write_row(record)
        if self.jsonl is not None:
            self.jsonl.log(record)

    def log_actions(self, source: Union[str, Path], actions: Iterable[Action]) -> int:
        """Record every non-unchanged action; returns the number of records written."""
        n = 0
        for a in actions:
            if a.is_unchanged:
                continue
            self._write({"path": str(source), **a.to_jsonable()})
            n += 1
        return n

    def log_error(self, source: Union[str, Path], kind: str, message: str) -> None:
        self._write({"path": str(source), "kind": f"error:{kind}", "reason": message})

    def close(self) -> None:
        if self.csv is not None:
            self.csv.close()
        if self.jsonl is not None:
            self.jsonl.close()

    def __enter__(self) -> "ChangeReport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "CSVLogger",
    "JSONLLogger",
    "ChangeReport",
    "REPORT_FIELDS",
    "ensure_dir",
]
