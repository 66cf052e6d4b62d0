# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Line classifier: single-pass scan producing one Action per input line.

Per line, in priority order:
1) Empty doc-comment collapsing (one-slot lookback on the last retained action):
   - previous retained line is an unchanged empty doc comment and the current
     line is one too -> current line Deleted (consecutive empty lines)
   - previous retained line is an unchanged empty doc comment and the current
     line is not a doc comment -> previous action amended in place to Deleted
     (empty line at the end of a comment); the current line keeps going
2) HTML item link -> rewrite_doc_link
3) HTML module index link -> rewrite_module_link
4) Implementation context update (every line)
5) Bare anchor link, only inside a tracked impl/trait block -> rewrite_method_anchor
6) Unchanged

References:
- doclinks_core/rules.py (rewrite rules)
- doclinks_core/context.py (impl/trait tracking)
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from doclinks_core.context import ImplContextTracker
from doclinks_core.interfaces import (
    REASON_CONSECUTIVE_EMPTY,
    REASON_EMPTY_AT_END,
    Action,
    Deleted,
    LinePosition,
    Unchanged,
)
from doclinks_core.patterns import PatternRegistry
from doclinks_core.rules import (
    rewrite_doc_link,
    rewrite_method_anchor,
    rewrite_module_link,
)


class LinkScanner:
    """
    Scans the lines of one file owned by library `krate`.

    The registry is only read; one registry can serve any number of scanners.
    Each call to scan() starts from a fresh implementation context.
    """

    def __init__(self, registry: PatternRegistry, krate: str) -> None:
        if not krate:
            raise ValueError("krate must be a non-empty library name")
        self.registry = registry
        self.krate = krate

    def scan(self, lines: Iterable[str]) -> List[Action]:
        reg = self.registry
        actions: List[Action] = []
        # Indices of actions that survive into the output, most recent last
        retained: List[int] = []
        tracker = ImplContextTracker(reg)

        for position, raw in enumerate(lines, start=1):
            line = raw.rstrip()

            if retained:
                prev_idx = retained[-1]
                prev = actions[prev_idx]
                if isinstance(prev, Unchanged) and reg.is_empty_doc_comment(prev.text):
                    if reg.is_empty_doc_comment(line):
                        actions.append(
                            Deleted(text=line, reason=REASON_CONSECUTIVE_EMPTY, position=position)
                        )
                        continue
                    if not reg.is_doc_comment_line(line):
                        actions[prev_idx] = Deleted(
                            text=prev.text,
                            reason=REASON_EMPTY_AT_END,
                            position=prev_idx + 1,
                        )
                        retained.pop()

            action = self._classify(line, position, tracker)
            if not isinstance(action, Deleted):
                retained.append(len(actions))
            actions.append(action)

        return actions

    def _classify(
        self,
        line: str,
        position: LinePosition,
        tracker: ImplContextTracker,
    ) -> Action:
        reg = self.registry
        action: Optional[Action] = None

        m = reg.html_doc_link.match(line)
        if m is not None:
            action = rewrite_doc_link(m, line, position, self.krate, reg)
        else:
            m = reg.html_module_link.match(line)
            if m is not None:
                action = rewrite_module_link(m, line, position, self.krate, reg)

        tracker.observe(line)
        if action is not None:
            return action

        type_name = tracker.current_type
        if type_name is not None:
            m = reg.method_anchor_only.match(line)
            if m is not None:
                return rewrite_method_anchor(m, line, position, type_name)

        return Unchanged(text=line)


def scan_lines(
    lines: Iterable[str],
    krate: str,
    registry: Optional[PatternRegistry] = None,
) -> List[Action]:
    """
    Classify every line of a file owned by library `krate`.

    Returns one Action per input line, in order. When no registry is given a
    fresh one with the default root crates is compiled for this call; callers
    scanning many files should build one registry and pass it in.
    """
    if registry is None:
        registry = PatternRegistry.build()
    return LinkScanner(registry, krate).scan(lines)


__all__ = ["LinkScanner", "scan_lines"]
