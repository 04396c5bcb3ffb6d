"""Tests for core/commands.py - key name to outline operation dispatch."""

from __future__ import annotations

import pytest

from core.commands import CURSOR_END, CURSOR_START, KEY_BINDINGS, FocusDirective, dispatch
from outline_helpers import ids, indents


class TestBindings:
    """The dispatch table itself."""

    def test_all_outline_keys_bound(self) -> None:
        assert set(KEY_BINDINGS) == {"Tab", "Shift-Tab", "Enter", "Backspace", "ArrowUp", "ArrowDown"}

    @pytest.mark.parametrize("key", ["a", "Delete", "Escape", "", "tab"])
    def test_unbound_keys_pass_through(self, make_outline, key: str) -> None:
        outline = make_outline([("A", "x", 0), ("B", "y", 0)])
        before = outline.records()

        result = dispatch(outline, key, "B", cursor_at_start=True)

        assert result.handled is False
        assert result.focus is None
        assert outline.records() == before


class TestTab:
    def test_tab_indents(self, make_outline) -> None:
        outline = make_outline([("A", "", 0), ("B", "", 0)])

        result = dispatch(outline, "Tab", "B")

        assert result.handled is True
        assert indents(outline) == [0, 1]

    def test_refused_tab_still_consumed(self, make_outline) -> None:
        outline = make_outline([("A", "", 0)])

        result = dispatch(outline, "Tab", "A")

        assert result.handled is True
        assert indents(outline) == [0]

    def test_shift_tab_unindents(self, make_outline) -> None:
        outline = make_outline([("A", "", 0), ("B", "", 1)])

        result = dispatch(outline, "Shift-Tab", "B")

        assert result.handled is True
        assert indents(outline) == [0, 0]


class TestEnter:
    def test_enter_focuses_new_block_at_start(self, make_outline) -> None:
        outline = make_outline([("A", "hello", 0)])

        result = dispatch(outline, "Enter", "A")

        assert result.handled is True
        new_id = ids(outline)[1]
        assert result.focus == FocusDirective(new_id, CURSOR_START)
        assert outline.get("A").content == "hello"

    def test_enter_on_unknown_block(self, make_outline) -> None:
        outline = make_outline([("A", "", 0)])

        assert dispatch(outline, "Enter", "Z").handled is False


class TestBackspace:
    def test_mid_text_left_to_editor(self, make_outline) -> None:
        outline = make_outline([("A", "foo", 0), ("B", "bar", 0)])

        result = dispatch(outline, "Backspace", "B", cursor_at_start=False)

        assert result.handled is False
        assert len(outline) == 2

    def test_empty_block_removed_focus_end_of_previous(self, make_outline) -> None:
        outline = make_outline([("A", "foo", 0), ("B", "", 0)])

        result = dispatch(outline, "Backspace", "B", cursor_at_start=True, content_empty=True)

        assert result.handled is True
        assert result.focus == FocusDirective("A", CURSOR_END)
        assert ids(outline) == ["A"]

    def test_merge_focuses_join_point(self, make_outline) -> None:
        outline = make_outline([("A", "foo", 0), ("B", "bar", 0)])

        result = dispatch(outline, "Backspace", "B", cursor_at_start=True, content_empty=False)

        assert result.handled is True
        assert result.focus == FocusDirective("A", 3)
        assert outline.records() == [("A", "foobar", 0)]

    def test_lone_empty_block_swallows_key(self, make_outline) -> None:
        outline = make_outline([("A", "", 0)])

        result = dispatch(outline, "Backspace", "A", cursor_at_start=True, content_empty=True)

        assert result.handled is True
        assert result.focus is None
        assert ids(outline) == ["A"]

    def test_first_non_empty_block_left_to_editor(self, make_outline) -> None:
        outline = make_outline([("A", "foo", 0), ("B", "", 0)])

        result = dispatch(outline, "Backspace", "A", cursor_at_start=True, content_empty=False)

        assert result.handled is False

    def test_empty_first_block_removed_without_focus(self, make_outline) -> None:
        outline = make_outline([("A", "", 0), ("B", "b", 0)])

        result = dispatch(outline, "Backspace", "A", cursor_at_start=True, content_empty=True)

        assert result.handled is True
        assert result.focus is None
        assert ids(outline) == ["B"]


class TestArrows:
    def test_arrow_up_and_down(self, make_outline) -> None:
        outline = make_outline([("A", "", 0), ("B", "", 1), ("C", "", 0)])

        assert dispatch(outline, "ArrowUp", "B").focus == FocusDirective("A", CURSOR_START)
        assert dispatch(outline, "ArrowDown", "B").focus == FocusDirective("C", CURSOR_START)

    def test_arrows_at_edges_not_handled(self, make_outline) -> None:
        outline = make_outline([("A", "", 0), ("B", "", 0)])

        assert dispatch(outline, "ArrowUp", "A").handled is False
        assert dispatch(outline, "ArrowDown", "B").handled is False
