# Doclinks: Pipeline package
# License: MIT

"""
Pipeline package wrapping the core scanner with file I/O, rendering,
configuration and change reports.

Primary exports
- RewriteConfig, load_config: run configuration (optional YAML file + CLI overrides)
- handle_path, gather_source_files, FileOutcome, RewriteIOError: per-file driver
- ChangeReport: JSONL/CSV record of every changed line

See:
- doclinks_pipeline/files.py
- scripts/rewrite_links.py
"""

from __future__ import annotations

from .config import RewriteConfig, load_config
from .files import FileOutcome, RewriteIOError, gather_source_files, handle_path
from .logging_utils import ChangeReport

__all__ = [
    "RewriteConfig",
    "load_config",
    "FileOutcome",
    "RewriteIOError",
    "gather_source_files",
    "handle_path",
    "ChangeReport",
]
