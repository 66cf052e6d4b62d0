from __future__ import annotations

import pytest

from doclinks_core.patterns import DEFAULT_ROOTS, PatternRegistry


@pytest.fixture(scope="module")
def reg() -> PatternRegistry:
    return PatternRegistry.build()


def test_default_and_extra_roots():
    assert PatternRegistry.build().roots == DEFAULT_ROOTS
    reg = PatternRegistry.build(extra_roots=("core", "mycrate"))
    assert reg.roots == ("std", "core", "alloc", "mycrate")
    m = reg.html_doc_link.match("//! [Foo]: mycrate/struct.Foo.html")
    assert m is not None and m.group("root_crate") == "mycrate"


def test_invalid_roots_rejected():
    with pytest.raises(ValueError):
        PatternRegistry.build(roots=())
    with pytest.raises(ValueError):
        PatternRegistry.build(extra_roots=("a/b",))


def test_doc_comment_predicates(reg):
    assert reg.is_empty_doc_comment("///")
    assert reg.is_empty_doc_comment("    //!")
    assert not reg.is_empty_doc_comment("/// text")
    assert not reg.is_empty_doc_comment("//")
    assert reg.is_doc_comment_line("/// text")
    assert reg.is_doc_comment_line("  //!")
    assert not reg.is_doc_comment_line("// plain comment")
    assert not reg.is_doc_comment_line("fn main() {}")


def test_html_doc_link_parent_refs(reg):
    m = reg.html_doc_link.match("//! [Foo]: ../../struct.Foo.html")
    assert m is not None
    assert m.group("link_prefix") == "//! [Foo]: "
    assert m.group("parent_refs") == "../../"
    assert m.group("root_crate") is None
    assert m.group("intermediate_path") is None
    assert m.group("item_name") == "Foo"
    assert m.group("anchor_suffix") is None


def test_html_doc_link_root_path_and_anchor(reg):
    m = reg.html_doc_link.match("    /// [`Vec::push`]: alloc/vec/struct.Vec.html#method.push")
    assert m is not None
    assert m.group("link_prefix") == "    /// [`Vec::push`]: "
    assert m.group("root_crate") == "alloc"
    assert m.group("intermediate_path") == "vec/"
    assert m.group("item_name") == "Vec"
    assert m.group("anchor_suffix") == "push"


@pytest.mark.parametrize("kind", ["enum", "struct", "primitive", "trait", "constant", "type", "fn", "macro"])
def test_html_doc_link_item_kinds(reg, kind):
    m = reg.html_doc_link.match(f"/// [x]: {kind}.Item.html")
    assert m is not None and m.group("item_name") == "Item"


def test_html_doc_link_ignores_index_and_unknown_anchor(reg):
    assert reg.html_doc_link.match("//! [fmt]: std/fmt/index.html") is None
    assert reg.html_doc_link.match("/// [x]: struct.Foo.html#structfield.bar") is None
    assert reg.html_doc_link.match("// [Foo]: struct.Foo.html") is None


def test_html_module_link(reg):
    m = reg.html_module_link.match("//! [fmt]: std/fmt/index.html")
    assert m is not None
    assert m.group("root_crate") == "std"
    assert m.group("module_path") == "fmt/"

    m = reg.html_module_link.match("//! [io]: ../../io/index.html")
    assert m is not None
    assert m.group("parent_refs") == "../../"
    assert m.group("module_path") == "io/"


def test_method_anchor_only(reg):
    m = reg.method_anchor_only.match("    /// [go]: #tymethod.go")
    assert m is not None
    assert m.group("link_prefix") == "    /// [go]: "
    assert m.group("anchor_suffix") == "go"
    assert reg.method_anchor_only.match("/// [go]: struct.Foo.html#method.go") is None


def test_local_path_strips_backticks(reg):
    m = reg.local_path.match("/// [`Foo`]: Foo")
    assert m is not None
    assert m.group("elem") == "Foo"
    assert m.group("target") == "Foo"


@pytest.mark.parametrize(
    "line,indent,type_name",
    [
        ("impl Bar {", "", "Bar"),
        ("    impl Bar {", "    ", "Bar"),
        ("impl fmt::Display for Wrapper {", "", "Wrapper"),
        ("impl<T> Foo<T> {", "", "Foo"),
        ("impl<T: Into<u8>> From<T> for io::Cursor<T> {", "", "io::Cursor"),
        ("pub trait Iterator {", "", "Iterator"),
        ("pub(crate) trait Sealed: Sized {", "", "Sealed"),
        ("trait Private {", "", "Private"),
    ],
)
def test_impl_or_trait_start(reg, line, indent, type_name):
    m = reg.impl_or_trait_start.match(line)
    assert m is not None
    assert m.group("indent") == indent
    assert m.group("type_name") == type_name


def test_impl_or_trait_start_rejects_other_lines(reg):
    for line in ("fn implement() {}", "/// impl Foo {", "let traits = 1;", "unsafe impl Send for X {}"):
        assert reg.impl_or_trait_start.match(line) is None
