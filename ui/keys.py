# ui/keys.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Optional

import wx

from core.commands import KeyResult, dispatch
from core.log import Log

__all__ = ["key_name", "handle_row_key"]


def key_name(evt: wx.KeyEvent) -> Optional[str]:
    """Translate a wx key event into a dispatch-table key name."""
    if evt.ControlDown() or evt.AltDown():
        return None

    code = evt.GetKeyCode()

    if code == wx.WXK_TAB:
        return "Shift-Tab" if evt.ShiftDown() else "Tab"

    if code in (wx.WXK_RETURN, wx.WXK_NUMPAD_ENTER):
        # Shift+Enter stays a soft line break inside the block.
        return None if evt.ShiftDown() else "Enter"

    if code == wx.WXK_BACK:
        return "Backspace"

    if evt.ShiftDown():
        return None

    if code in (wx.WXK_UP, wx.WXK_NUMPAD_UP):
        return "ArrowUp"

    if code in (wx.WXK_DOWN, wx.WXK_NUMPAD_DOWN):
        return "ArrowDown"

    return None


def handle_row_key(outline, row, evt: wx.KeyEvent) -> KeyResult:
    """Route a key press in a block editor through the outline dispatch table."""
    name = key_name(evt)
    if name is None:
        return KeyResult(False)

    # Multi-line blocks keep normal caret movement until the edge line.
    if name == "ArrowUp" and not row.caret_on_first_line():
        return KeyResult(False)
    if name == "ArrowDown" and not row.caret_on_last_line():
        return KeyResult(False)

    result = dispatch(
        outline,
        name,
        row.block_id,
        cursor_at_start=row.caret_at_start(),
        content_empty=row.editor.IsEmpty(),
    )
    Log.debug(f"key {name} -> handled={result.handled}", 3)
    return result
