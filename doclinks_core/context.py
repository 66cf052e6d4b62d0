# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Implementation-context tracker.

Bare anchor links ("#method.foo") only make sense relative to the type whose
impl (or trait) block encloses them. ImplContextTracker is a two-state
machine over the scanned lines:

    NoImpl --(impl/trait opening line)--> InImpl(type_name, closing_marker)
    InImpl --(line == closing_marker)-->  NoImpl

Only one block is tracked at a time. A nested opening line replaces the
current context and the outer block is not restored afterwards.
"""

from __future__ import annotations

from typing import Optional

from doclinks_core.interfaces import NO_IMPL, ImplContext, InImpl
from doclinks_core.patterns import PatternRegistry


class ImplContextTracker:
    def __init__(self, registry: PatternRegistry) -> None:
        self._registry = registry
        self.state: ImplContext = NO_IMPL

    @property
    def current_type(self) -> Optional[str]:
        """Type name of the tracked block, None outside any block."""
        if isinstance(self.state, InImpl):
            return self.state.type_name
        return None

    def observe(self, line: str) -> ImplContext:
        """Advance the state machine with one (right-trimmed) line."""
        m = self._registry.impl_or_trait_start.match(line)
        if m is not None:
            self.state = InImpl(
                type_name=m.group("type_name"),
                closing_marker=m.group("indent") + "}",
            )
        elif isinstance(self.state, InImpl) and line == self.state.closing_marker:
            self.state = NO_IMPL
        return self.state


__all__ = ["ImplContextTracker"]
