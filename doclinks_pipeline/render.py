# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Rendering of scan results.

- format_action: human-readable, diff-like block for one changed line
- iter_changes: the actions that are not Unchanged, in order
- render_text: rewritten file body (deleted lines dropped, replacements applied)
- summarize: per-kind line counts
- heading: file path underlined with '='
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Sequence

from doclinks_core.interfaces import Action, Deleted, Replaced, Unchanged


def heading(title: str) -> str:
    return f"{title}\n{'=' * len(title)}\n"


def format_action(action: Action) -> str:
    if isinstance(action, Deleted):
        return f"line {action.position}: {action.reason}\n- {action.text}"
    if isinstance(action, Replaced):
        return f"line {action.position}: Replaced\n- {action.text}\n+ {action.new_text}"
    return action.text


def iter_changes(actions: Iterable[Action]) -> Iterator[Action]:
    for a in actions:
        if not a.is_unchanged:
            yield a


def render_text(actions: Iterable[Action]) -> str:
    """Rebuild the file body; every retained line is terminated by a newline."""
    out = []
    for a in actions:
        line = a.new_line()
        if line is not None:
            out.append(line + "\n")
    return "".join(out)


def summarize(actions: Sequence[Action]) -> Dict[str, int]:
    counts = {"lines": len(actions), "unchanged": 0, "deleted": 0, "replaced": 0}
    for a in actions:
        if isinstance(a, Unchanged):
            counts["unchanged"] += 1
        elif isinstance(a, Deleted):
            counts["deleted"] += 1
        elif isinstance(a, Replaced):
            counts["replaced"] += 1
    return counts


__all__ = ["heading", "format_action", "iter_changes", "render_text", "summarize"]
