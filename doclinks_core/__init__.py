# Doclinks: Core package
# License: MIT

"""
Core package for rewriting rustdoc HTML links into intra-doc paths.

Primary modules
- interfaces: Action data models (Unchanged, Deleted, Replaced) and impl context states
- patterns: PatternRegistry, every regex compiled once and shared between scans
- context: ImplContextTracker, two-state impl/trait block tracker
- rules: doc-link, module-link and method-anchor rewrites plus the local-path check
- classifier: LinkScanner / scan_lines, the single-pass line classifier

This __init__ consolidates common exports for convenience:
    from doclinks_core import PatternRegistry, scan_lines, Replaced
"""

from __future__ import annotations

__all__ = [
    # Actions
    "Action",
    "Unchanged",
    "Deleted",
    "Replaced",
    "REASON_CONSECUTIVE_EMPTY",
    "REASON_EMPTY_AT_END",
    "REASON_LOCAL_PATH",
    # Context
    "NoImpl",
    "InImpl",
    "ImplContextTracker",
    # Engine
    "PatternRegistry",
    "LinkScanner",
    "scan_lines",
    # Version
    "__version__",
]

__version__ = "0.1.0"

from .interfaces import (
    Action,
    Unchanged,
    Deleted,
    Replaced,
    REASON_CONSECUTIVE_EMPTY,
    REASON_EMPTY_AT_END,
    REASON_LOCAL_PATH,
    NoImpl,
    InImpl,
)

from .patterns import PatternRegistry
from .context import ImplContextTracker
from .classifier import LinkScanner, scan_lines
