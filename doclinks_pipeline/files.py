# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
File-level driver around the core scanner.

- gather_source_files: expand files/directories into the list of sources to scan
- read_lines / write_text: UTF-8 I/O raising RewriteIOError with a failure kind
- handle_path: heading, scan, print changes, optionally write back, report

Failures never escape handle_path: they are printed to stderr, recorded in
the returned FileOutcome and the caller moves on to the next file.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, TextIO, Union

from doclinks_core.classifier import LinkScanner
from doclinks_core.interfaces import Action
from doclinks_core.patterns import PatternRegistry
from doclinks_pipeline.logging_utils import ChangeReport
from doclinks_pipeline.render import format_action, heading, iter_changes, render_text, summarize

SKIP_DIRS = {".git", ".github", "target", "node_modules", ".venv", "venv", "__pycache__"}

# Failure kinds
OPEN_FOR_READ = "open_for_read"
READ = "read"
OPEN_FOR_WRITE = "open_for_write"
WRITE = "write"

_MESSAGES = {
    OPEN_FOR_READ: "Failed to open file '{path}' for read: {cause}",
    READ: "Failed to handle file '{path}': {cause}",
    OPEN_FOR_WRITE: "Failed to open file '{path}' for write: {cause}",
    WRITE: "Failed to write to '{path}': {cause}",
}


class RewriteIOError(Exception):
    """A file could not be read or written; `kind` is one of the failure kinds above."""

    def __init__(self, kind: str, path: Union[str, Path], cause: BaseException) -> None:
        if kind not in _MESSAGES:
            raise ValueError(f"unknown failure kind: {kind!r}")
        self.kind = kind
        self.path = Path(path)
        self.cause = cause
        super().__init__(_MESSAGES[kind].format(path=self.path, cause=cause))


def gather_source_files(
    paths: Iterable[Union[str, Path]],
    extensions: Sequence[str] = (".rs",),
) -> List[Path]:
    """
    Files are kept as given (whatever their suffix); directories are walked
    recursively for files ending in one of `extensions`, skipping SKIP_DIRS.
    Paths that do not exist are kept so that reading them reports the failure.
    """
    out: Dict[Path, None] = {}
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            found = []
            for f in p.rglob("*"):
                if any(part in SKIP_DIRS for part in f.relative_to(p).parts):
                    continue
                if f.is_file() and f.suffix in extensions:
                    found.append(f)
            for f in sorted(found):
                out.setdefault(f, None)
        else:
            out.setdefault(p, None)
    return list(out)


def read_lines(path: Union[str, Path]) -> List[str]:
    """
    Read a UTF-8 file as lines with trailing whitespace removed.

    Only "\\n" ends a line; a "\\r" inside a line is kept as content.
    """
    try:
        f = Path(path).open("r", encoding="utf-8", newline="")
    except OSError as e:
        raise RewriteIOError(OPEN_FOR_READ, path, e) from e
    with f:
        try:
            text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise RewriteIOError(READ, path, e) from e
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.rstrip() for line in lines]


def write_text(path: Union[str, Path], text: str) -> None:
    """Replace the whole content of `path` with `text` in a single write."""
    try:
        f = Path(path).open("w", encoding="utf-8", newline="\n")
    except OSError as e:
        raise RewriteIOError(OPEN_FOR_WRITE, path, e) from e
    with f:
        try:
            f.write(text)
        except OSError as e:
            raise RewriteIOError(WRITE, path, e) from e


@dataclass
class FileOutcome:
    path: Path
    actions: List[Action] = field(default_factory=list)
    written: bool = False
    error: Optional[RewriteIOError] = None

    @property
    def changed(self) -> bool:
        return any(not a.is_unchanged for a in self.actions)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "path": str(self.path),
            "changed": self.changed,
            "written": self.written,
            "error": None if self.error is None else str(self.error),
            "counts": summarize(self.actions),
        }


def handle_path(
    path: Union[str, Path],
    krate: str,
    apply: bool,
    registry: PatternRegistry,
    *,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    report: Optional[ChangeReport] = None,
) -> FileOutcome:
    """
    Scan one file owned by library `krate`, print its changes and, when
    `apply` is set and something changed, rewrite it in place.
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    outcome = FileOutcome(path=Path(path))

    print(heading(str(outcome.path)), file=out)

    try:
        lines = read_lines(outcome.path)
        outcome.actions = LinkScanner(registry, krate).scan(lines)

        for a in iter_changes(outcome.actions):
            print(format_action(a) + "\n", file=out)
        if report is not None:
            report.log_actions(outcome.path, outcome.actions)

        if apply and outcome.changed:
            write_text(outcome.path, render_text(outcome.actions))
            outcome.written = True
    except RewriteIOError as e:
        outcome.error = e
        print(f"[doclinks] {e}", file=err)
        if report is not None:
            report.log_error(outcome.path, e.kind, str(e))

    return outcome


__all__ = [
    "SKIP_DIRS",
    "OPEN_FOR_READ",
    "READ",
    "OPEN_FOR_WRITE",
    "WRITE",
    "RewriteIOError",
    "FileOutcome",
    "gather_source_files",
    "read_lines",
    "write_text",
    "handle_path",
]
