# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Rewrite rules turning rustdoc HTML links into intra-doc paths.

Implements:
- rewrite_doc_link: "[x]: ../std/fmt/struct.Foo.html#method.bar" -> "[x]: std::fmt::Foo::bar"
- rewrite_module_link: "[x]: ../fmt/index.html" -> "[x]: super::fmt"
- rewrite_method_anchor: "[x]: #method.bar" -> "[x]: Type::bar" (inside an impl block)
- local_path_or_replaced: shared check deleting links whose label equals their target

Links whose path starts with "http" are external and left untouched.

Each rule receives the regex match produced by the PatternRegistry and returns
exactly one Action for the line.
"""

from __future__ import annotations

from re import Match

from doclinks_core.interfaces import (
    REASON_LOCAL_PATH,
    Action,
    Deleted,
    LinePosition,
    Replaced,
    Unchanged,
)
from doclinks_core.patterns import PatternRegistry

SCOPE_SEP = "::"
PARENT_SCOPE = "super::"
CRATE_ROOT = "crate"
CURRENT_DIR = "./"
EXTERNAL_SCHEME = "http"


def root_segment(m: Match[str], krate: str) -> str:
    """
    Leading path segment: "crate::" / "<root>::" when a root crate was
    captured, otherwise one "super::" per "../" in the link.
    """
    root = m.group("root_crate")
    if root is not None:
        return (CRATE_ROOT if root == krate else root) + SCOPE_SEP
    return PARENT_SCOPE * m.group("parent_refs").count("/")


def local_path_or_replaced(
    new_text: str,
    line: str,
    position: LinePosition,
    registry: PatternRegistry,
) -> Action:
    # A link whose label is its own target is noise: drop the whole line.
    local = registry.local_path.match(new_text)
    if local is not None and local.group("elem") == local.group("target"):
        return Deleted(text=line, reason=REASON_LOCAL_PATH, position=position)
    return Replaced(text=line, new_text=new_text, position=position)


def rewrite_doc_link(
    m: Match[str],
    line: str,
    position: LinePosition,
    krate: str,
    registry: PatternRegistry,
) -> Action:
    parts = [m.group("link_prefix"), root_segment(m, krate)]

    intermediates = m.group("intermediate_path")
    if intermediates is not None:
        if intermediates.startswith(EXTERNAL_SCHEME):
            return Unchanged(text=line)
        if intermediates != CURRENT_DIR:
            parts.append(intermediates.replace("/", SCOPE_SEP))

    parts.append(m.group("item_name"))

    anchor = m.group("anchor_suffix")
    if anchor is not None:
        parts.append(SCOPE_SEP + anchor)

    return local_path_or_replaced("".join(parts), line, position, registry)


def rewrite_module_link(
    m: Match[str],
    line: str,
    position: LinePosition,
    krate: str,
    registry: PatternRegistry,
) -> Action:
    if m.group("module_path").startswith(EXTERNAL_SCHEME):
        return Unchanged(text=line)
    modules = m.group("module_path").replace("/", SCOPE_SEP)
    while modules.endswith(SCOPE_SEP):
        modules = modules[: -len(SCOPE_SEP)]
    new_text = m.group("link_prefix") + root_segment(m, krate) + modules
    return local_path_or_replaced(new_text, line, position, registry)


def rewrite_method_anchor(
    m: Match[str],
    line: str,
    position: LinePosition,
    type_name: str,
) -> Action:
    new_text = f"{m.group('link_prefix')}{type_name}{SCOPE_SEP}{m.group('anchor_suffix')}"
    return Replaced(text=line, new_text=new_text, position=position)


__all__ = [
    "SCOPE_SEP",
    "root_segment",
    "local_path_or_replaced",
    "rewrite_doc_link",
    "rewrite_module_link",
    "rewrite_method_anchor",
]
