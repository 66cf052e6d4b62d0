# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Doclinks: core data models.

This module defines:
- Deletion reasons (fixed, human-readable labels)
- Action data models: Unchanged, Deleted, Replaced (one per input line)
- Implementation context states: NoImpl, InImpl

References:
- doclinks_core/classifier.py (producer of actions)
- doclinks_pipeline/render.py (consumer of actions)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# ---------- Type aliases ----------

LinePosition = int  # 1-based index into the original file

# ---------- Deletion reasons ----------

REASON_CONSECUTIVE_EMPTY = "Consecutive empty comment lines"
REASON_EMPTY_AT_END = "Empty comment line at the end of a comment"
REASON_LOCAL_PATH = "Local path"


# ---------- Actions ----------


@dataclass(frozen=True)
class Unchanged:
    text: str

    @property
    def is_unchanged(self) -> bool:
        return True

    def new_line(self) -> Optional[str]:
        return self.text

    def to_jsonable(self) -> Dict[str, Any]:
        return {"kind": "unchanged", "text": self.text}


@dataclass(frozen=True)
class Deleted:
    text: str
    reason: str
    position: LinePosition

    def __post_init__(self) -> None:
        if self.position < 1:
            raise ValueError("Deleted.position must be >= 1")

    @property
    def is_unchanged(self) -> bool:
        return False

    def new_line(self) -> Optional[str]:
        """Deleted lines do not survive into the rewritten file."""
        return None

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "kind": "deleted",
            "position": self.position,
            "reason": self.reason,
            "text": self.text,
        }


@dataclass(frozen=True)
class Replaced:
    text: str
    new_text: str
    position: LinePosition

    def __post_init__(self) -> None:
        if self.position < 1:
            raise ValueError("Replaced.position must be >= 1")

    @property
    def is_unchanged(self) -> bool:
        return False

    def new_line(self) -> Optional[str]:
        return self.new_text

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "kind": "replaced",
            "position": self.position,
            "text": self.text,
            "new_text": self.new_text,
        }


Action = Union[Unchanged, Deleted, Replaced]


# ---------- Implementation context ----------


@dataclass(frozen=True)
class NoImpl:
    """No implementation or trait block is being tracked."""


@dataclass(frozen=True)
class InImpl:
    """
    Inside an `impl` / `trait` block.

    closing_marker is the exact line that ends the block: the opening line's
    indentation followed by a single closing brace.
    """
    type_name: str
    closing_marker: str


ImplContext = Union[NoImpl, InImpl]

NO_IMPL = NoImpl()


__all__ = [
    "LinePosition",
    "REASON_CONSECUTIVE_EMPTY",
    "REASON_EMPTY_AT_END",
    "REASON_LOCAL_PATH",
    "Unchanged",
    "Deleted",
    "Replaced",
    "Action",
    "NoImpl",
    "InImpl",
    "ImplContext",
    "NO_IMPL",
]
