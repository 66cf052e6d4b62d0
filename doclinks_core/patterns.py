# Copyright (c) 2025 Doclinks Maintainers
# License: MIT
"""
Pattern registry for doc-comment link rewriting.

All patterns are compiled once by PatternRegistry.build() and the resulting
registry is passed to every scan. The registry is immutable and safe to share
between scans of different files.

Patterns
- empty_doc_comment: a doc comment line holding only the marker ("//!" or "///")
- doc_comment_line: any doc comment line, empty or not
- local_path: a reference-style link, used to compare label and target
- impl_or_trait_start: opening line of an impl block or trait declaration
- html_doc_link: link to a generated item page (struct.Foo.html, ...), optional anchor
- html_module_link: link to a generated module index page (index.html)
- method_anchor_only: link made only of a #method./#variant./#tymethod. anchor
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern
from typing import Iterable, Tuple

DEFAULT_ROOTS: Tuple[str, ...] = ("std", "core", "alloc")

# Item kinds that rustdoc renders as "<kind>.<name>.html" pages
ITEM_KINDS: Tuple[str, ...] = (
    "enum",
    "struct",
    "primitive",
    "trait",
    "constant",
    "type",
    "fn",
    "macro",
)

ANCHOR_KINDS: Tuple[str, ...] = ("method", "variant", "tymethod")

EMPTY_DOC_COMMENT = r"^\s*//[!/]$"
DOC_COMMENT_LINE = r"^\s*//[!/]"

LOCAL_PATH = (
    r"^\s*//[!/] "
    r"\[`?(?P<elem>.*?)`?\]: "
    r"(?P<target>.*)$"
)

IMPL_OR_TRAIT_START = (
    r"^(?P<indent>\s*)"
    r"(?:impl|(?:pub(?:\(.+\))? )?trait)"
    r"(?:<.*?>)? "
    r"(?:.* for )?"
    # Path segments allowed ("io::Cursor"), generics and bounds excluded
    r"(?P<type_name>(?:[^\s<{:]|::)+)"
    r"(?:<.*>)?"
)

LINK_PREFIX = r"^(?P<link_prefix>\s*//[!/] \[.*?\]: )"
PARENT_REFS = r"(?P<parent_refs>(?:\.\./)*)"


def _alternation(names: Iterable[str]) -> str:
    return "|".join(re.escape(n) for n in names)


def _root_crate(roots: Iterable[str]) -> str:
    return rf"(?:(?P<root_crate>{_alternation(roots)})/)?"


def html_doc_link_source(roots: Iterable[str]) -> str:
    anchors = _alternation(ANCHOR_KINDS)
    return (
        LINK_PREFIX
        + PARENT_REFS
        + _root_crate(roots)
        + r"(?P<intermediate_path>(?:.*/))?"
        + rf"(?:{_alternation(ITEM_KINDS)})\."
        + r"(?P<item_name>.*)\.html"
        + rf"(?:#(?:{anchors})\.(?P<anchor_suffix>\S*))?$"
    )


def html_module_link_source(roots: Iterable[str]) -> str:
    return (
        LINK_PREFIX
        + PARENT_REFS
        + _root_crate(roots)
        + r"(?P<module_path>(?:.*/)?)"
        + r"index\.html$"
    )


def method_anchor_only_source() -> str:
    return (
        LINK_PREFIX
        + rf"#(?:{_alternation(ANCHOR_KINDS)})\.(?P<anchor_suffix>\S*)$"
    )


@dataclass(frozen=True)
class PatternRegistry:
    roots: Tuple[str, ...]
    empty_doc_comment: Pattern[str]
    doc_comment_line: Pattern[str]
    local_path: Pattern[str]
    impl_or_trait_start: Pattern[str]
    html_doc_link: Pattern[str]
    html_module_link: Pattern[str]
    method_anchor_only: Pattern[str]

    @classmethod
    def build(
        cls,
        roots: Iterable[str] = DEFAULT_ROOTS,
        extra_roots: Iterable[str] = (),
    ) -> "PatternRegistry":
        """
        Compile every pattern once.

        roots are the well-known root crate names recognised as the first
        path segment of a link ("std/struct.Foo.html"); extra_roots are
        appended after them, duplicates dropped in order.
        """
        merged = tuple(dict.fromkeys([*roots, *extra_roots]))
        if not merged:
            raise ValueError("PatternRegistry needs at least one root crate name")
        if any(not r or "/" in r for r in merged):
            raise ValueError(f"invalid root crate names: {merged!r}")
        return cls(
            roots=merged,
            empty_doc_comment=re.compile(EMPTY_DOC_COMMENT),
            doc_comment_line=re.compile(DOC_COMMENT_LINE),
            local_path=re.compile(LOCAL_PATH),
            impl_or_trait_start=re.compile(IMPL_OR_TRAIT_START),
            html_doc_link=re.compile(html_doc_link_source(merged)),
            html_module_link=re.compile(html_module_link_source(merged)),
            method_anchor_only=re.compile(method_anchor_only_source()),
        )

    # Convenience predicates used by the classifier

    def is_empty_doc_comment(self, line: str) -> bool:
        return self.empty_doc_comment.match(line) is not None

    def is_doc_comment_line(self, line: str) -> bool:
        return self.doc_comment_line.match(line) is not None


__all__ = [
    "DEFAULT_ROOTS",
    "ITEM_KINDS",
    "ANCHOR_KINDS",
    "PatternRegistry",
    "html_doc_link_source",
    "html_module_link_source",
    "method_anchor_only_source",
]
