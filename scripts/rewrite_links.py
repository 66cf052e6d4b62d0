#!/usr/bin/env python3
# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Rewrite rustdoc HTML links in doc comments into intra-doc paths.

For every source file given (directories are walked for *.rs files), the
changes are printed as a diff-like listing. With --apply the files are
rewritten in place.

- Config:
  An optional YAML file (--config) provides defaults for krate, apply,
  extensions, extra_roots and report; explicit flags win.

- Artifacts:
  --report out.jsonl (or out.csv) records one entry per changed line and per
  failed file.

- Exit code:
  0 when every file was processed, 1 when at least one file failed, 2 on
  usage/configuration errors.

Usage:
  python -m scripts.rewrite_links --krate mycrate src/
  python -m scripts.rewrite_links --krate core --apply library/core/src/fmt/mod.rs
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional, Sequence, TextIO

from doclinks_core.patterns import PatternRegistry
from doclinks_pipeline.config import load_config
from doclinks_pipeline.files import gather_source_files, handle_path
from doclinks_pipeline.logging_utils import ChangeReport


def run_main(
    paths: Sequence[str],
    krate: Optional[str] = None,
    apply: Optional[bool] = None,
    config: Optional[str] = None,
    report: Optional[str] = None,
    extra_roots: Optional[Sequence[str]] = None,
    extensions: Optional[Sequence[str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> Dict[str, Any]:
    """
    Process every file under `paths` and return a run summary.

    Args:
        paths: Files and/or directories to scan.
        krate: Name of the library owning the files (links rooted at it become "crate::").
        apply: Rewrite files in place when True.
        config: Optional YAML config path; explicit arguments override its values.
        report: Optional .jsonl/.csv path receiving one record per change.
        extra_roots: Root crate names recognised in links besides std/core/alloc.
        extensions: File suffixes collected when walking directories.
        out / err: Streams for the change listing and for failures.

    Returns:
        dict with {"config","files","changed","written","errors","counts","outcomes"}.

    Raises:
        ValueError: on invalid configuration (missing krate, unknown config keys).
    """
    cfg = load_config(
        config,
        overrides={
            "krate": krate,
            "apply": apply,
            "report": report,
            "extra_roots": list(extra_roots) if extra_roots else None,
            "extensions": list(extensions) if extensions else None,
        },
    ).validate()

    # Compiled once for the whole run
    registry = PatternRegistry.build(extra_roots=cfg.extra_roots)
    files = gather_source_files(paths, extensions=cfg.extensions)

    change_report = ChangeReport(cfg.report) if cfg.report else None
    outcomes = []
    try:
        for path in files:
            outcomes.append(
                handle_path(path, cfg.krate, cfg.apply, registry, out=out, err=err, report=change_report)
            )
    finally:
        if change_report is not None:
            change_report.close()

    totals = {"lines": 0, "unchanged": 0, "deleted": 0, "replaced": 0}
    records = []
    for o in outcomes:
        rec = o.to_jsonable()
        for k in totals:
            totals[k] += rec["counts"][k]
        records.append(rec)

    return {
        "config": cfg.to_jsonable(),
        "files": len(outcomes),
        "changed": sum(1 for o in outcomes if o.changed),
        "written": sum(1 for o in outcomes if o.written),
        "errors": sum(1 for o in outcomes if not o.ok),
        "counts": totals,
        "outcomes": records,
    }


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="rewrite_links",
        description="Turn rustdoc HTML links in doc comments into intra-doc paths.",
    )
    p.add_argument("paths", nargs="+", help="Source files or directories to process.")
    p.add_argument("--krate", type=str, default=None, help="Name of the library owning the files.")
    p.add_argument(
        "--apply",
        action="store_true",
        default=None,
        help="Rewrite the files in place instead of only listing the changes.",
    )
    p.add_argument("--config", type=str, default=None, help="Optional YAML config file.")
    p.add_argument("--report", type=str, default=None, help="Write a .jsonl or .csv change report.")
    p.add_argument(
        "--extra-root",
        dest="extra_roots",
        action="append",
        default=None,
        help="Additional root crate name recognised in links (repeatable).",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        default=None,
        help="File suffix collected when walking directories (repeatable, default: .rs).",
    )
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        summary = run_main(
            paths=args.paths,
            krate=args.krate,
            apply=args.apply,
            config=args.config,
            report=args.report,
            extra_roots=args.extra_roots,
            extensions=args.extensions,
        )
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    brief = {k: summary[k] for k in ("files", "changed", "written", "errors", "counts")}
    print(json.dumps(brief, sort_keys=True))
    return 1 if summary["errors"] else 0


if __name__ == "__main__":
    raise SystemExit(main())


__all__ = ["run_main", "main"]
