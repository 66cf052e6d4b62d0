from __future__ import annotations

from doclinks_core.interfaces import Deleted, Replaced, Unchanged
from doclinks_pipeline.render import format_action, heading, iter_changes, render_text, summarize

ACTIONS = [
    Unchanged("fn a() {}"),
    Deleted("///", "Consecutive empty comment lines", 2),
    Replaced("/// [Foo]: std/struct.Foo.html", "/// [Foo]: std::Foo", 3),
    Unchanged(""),
]


def test_render_text_drops_deleted_and_applies_replacements():
    assert render_text(ACTIONS) == "fn a() {}\n/// [Foo]: std::Foo\n\n"
    assert render_text([]) == ""


def test_format_action():
    assert format_action(ACTIONS[1]) == "line 2: Consecutive empty comment lines\n- ///"
    assert format_action(ACTIONS[2]) == (
        "line 3: Replaced\n- /// [Foo]: std/struct.Foo.html\n+ /// [Foo]: std::Foo"
    )
    assert format_action(ACTIONS[0]) == "fn a() {}"


def test_iter_changes_and_summary():
    assert list(iter_changes(ACTIONS)) == [ACTIONS[1], ACTIONS[2]]
    assert summarize(ACTIONS) == {"lines": 4, "unchanged": 2, "deleted": 1, "replaced": 1}


def test_heading_underlines_title():
    assert heading("src/lib.rs") == "src/lib.rs\n==========\n"


def test_actions_are_jsonable():
    assert ACTIONS[1].to_jsonable() == {
        "kind": "deleted",
        "position": 2,
        "reason": "Consecutive empty comment lines",
        "text": "///",
    }
    assert ACTIONS[2].to_jsonable()["new_text"] == "/// [Foo]: std::Foo"
    assert ACTIONS[0].new_line() == "fn a() {}"
    assert ACTIONS[1].new_line() is None
