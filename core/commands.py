'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from core.log import Log
from core.outline import DeleteAction, Outline

__all__ = [
    "CURSOR_START",
    "CURSOR_END",
    "FocusDirective",
    "KeyResult",
    "KEY_BINDINGS",
    "dispatch",
]

CURSOR_START = "start"
CURSOR_END = "end"

Cursor = Union[str, int]


@dataclass(frozen=True)
class FocusDirective:
    """Tell the host which block takes input focus and where the caret goes."""
    block_id: str
    cursor: Cursor = CURSOR_START


@dataclass(frozen=True)
class KeyResult:
    handled: bool
    focus: Optional[FocusDirective] = None


NOT_HANDLED = KeyResult(False)


def _on_tab(outline: Outline, block_id: str, **_) -> KeyResult:
    outline.indent(block_id)
    # Consumed even when refused so the editor never inserts a literal tab.
    return KeyResult(True)


def _on_shift_tab(outline: Outline, block_id: str, **_) -> KeyResult:
    outline.unindent(block_id)
    return KeyResult(True)


def _on_enter(outline: Outline, block_id: str, **_) -> KeyResult:
    new_block = outline.split_after(block_id)
    if new_block is None:
        return NOT_HANDLED
    return KeyResult(True, FocusDirective(new_block.id, CURSOR_START))


def _on_backspace(outline: Outline, block_id: str, *, cursor_at_start: bool = False,
                  content_empty: bool = False) -> KeyResult:
    if not cursor_at_start:
        return NOT_HANDLED

    result = outline.handle_boundary_delete(block_id, cursor_at_start, content_empty)
    if result.action is DeleteAction.NONE:
        # An empty lone block has nothing left to delete; swallow the key.
        return KeyResult(content_empty)
    if result.focus_target is None:
        return KeyResult(True)
    if result.action is DeleteAction.REMOVED:
        return KeyResult(True, FocusDirective(result.focus_target, CURSOR_END))
    return KeyResult(True, FocusDirective(result.focus_target, result.cursor))


def _focus_step(delta: int) -> Callable[..., KeyResult]:
    def handler(outline: Outline, block_id: str, **_) -> KeyResult:
        target = outline.focus_relative(block_id, delta)
        if target is None:
            return NOT_HANDLED
        return KeyResult(True, FocusDirective(target, CURSOR_START))
    return handler


KEY_BINDINGS: Dict[str, Callable[..., KeyResult]] = {
    "Tab": _on_tab,
    "Shift-Tab": _on_shift_tab,
    "Enter": _on_enter,
    "Backspace": _on_backspace,
    "ArrowUp": _focus_step(-1),
    "ArrowDown": _focus_step(1),
}


def dispatch(outline: Outline, key: str, block_id: str, *,
             cursor_at_start: bool = False, content_empty: bool = False) -> KeyResult:
    """
    Route a key name to its outline operation. Keys without a binding are
    reported unhandled so the editor widget can process them itself.
    """
    handler = KEY_BINDINGS.get(key)
    if handler is None:
        return NOT_HANDLED
    result = handler(outline, block_id, cursor_at_start=cursor_at_start,
                     content_empty=content_empty)
    Log.debug(f"{key} on {block_id}: handled={result.handled} focus={result.focus}", 3)
    return result
