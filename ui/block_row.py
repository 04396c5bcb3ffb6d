# ui/block_row.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import wx
import wx.html

from core.commands import CURSOR_END, CURSOR_START
from core.preview import page_link_title, render_markdown
from ui.constants import (
    BULLET,
    BULLET_W,
    INDENT_W,
    MIN_EDITOR_H,
    PADDING,
    PREVIEW_BG_COLOR,
)

__all__ = ["BlockRow"]


class BlockRow(wx.Panel):
    """
    Render surface for one block: indent spacer, bullet, and either a text
    editor (edit mode) or its markdown preview (display mode).
    """

    def __init__(self, parent: wx.Window, owner, block_id: str, content: str, indent: int):
        super().__init__(parent)
        self.owner = owner  # OutlinePanel
        self.block_id = block_id
        self.indent = indent

        self.editor = wx.TextCtrl(
            self,
            value=content,
            style=wx.TE_MULTILINE | wx.TE_PROCESS_TAB | wx.TE_PROCESS_ENTER
                  | wx.TE_NO_VSCROLL | wx.BORDER_NONE,
        )
        self.preview = wx.html.HtmlWindow(self, style=wx.html.HW_SCROLLBAR_NEVER | wx.BORDER_NONE)
        self.preview.SetBackgroundColour(PREVIEW_BG_COLOR)
        self.preview.Hide()

        bullet = wx.StaticText(self, label=BULLET, size=(BULLET_W, -1))

        self._row = wx.BoxSizer(wx.HORIZONTAL)
        self._spacer = self._row.Add(indent * INDENT_W, 1)
        self._row.Add(bullet, 0, wx.TOP | wx.RIGHT, PADDING)
        self._row.Add(self.editor, 1, wx.EXPAND)
        self._row.Add(self.preview, 1, wx.EXPAND)
        self.SetSizer(self._row)

        self.editor.Bind(wx.EVT_KEY_DOWN, self._on_key_down)
        self.editor.Bind(wx.EVT_TEXT, self._on_text)
        self.editor.Bind(wx.EVT_KILL_FOCUS, self._on_blur)
        self.preview.Bind(wx.EVT_LEFT_UP, self._on_preview_click)
        self.preview.Bind(wx.html.EVT_HTML_LINK_CLICKED, self._on_link)

        self._fit_editor()

    # ---------- state ----------

    @property
    def editing(self) -> bool:
        return self.editor.IsShown()

    def text(self) -> str:
        return self.editor.GetValue()

    def set_text(self, content: str):
        if self.editor.GetValue() != content:
            # ChangeValue does not raise EVT_TEXT.
            self.editor.ChangeValue(content)
            self._fit_editor()
        if not self.editing:
            self.show_preview()

    def set_indent(self, indent: int):
        self.indent = indent
        self._spacer.AssignSpacer(indent * INDENT_W, 1)
        self.Layout()

    def caret_at_start(self) -> bool:
        start, end = self.editor.GetSelection()
        return start == 0 and end == 0

    def caret_on_first_line(self) -> bool:
        _, _, line = self.editor.PositionToXY(self.editor.GetInsertionPoint())
        return line <= 0

    def caret_on_last_line(self) -> bool:
        _, _, line = self.editor.PositionToXY(self.editor.GetInsertionPoint())
        return line >= self.editor.GetNumberOfLines() - 1

    # ---------- mode switches ----------

    def begin_edit(self, cursor=CURSOR_START):
        if not self.editing:
            self.preview.Hide()
            self.editor.Show()
            self.Layout()
            self.owner.relayout()
        self.editor.SetFocus()
        if cursor == CURSOR_END:
            self.editor.SetInsertionPointEnd()
        elif cursor == CURSOR_START:
            self.editor.SetInsertionPoint(0)
        else:
            self.editor.SetInsertionPoint(min(int(cursor), self.editor.GetLastPosition()))

    def show_preview(self):
        html = render_markdown(self.text())
        self.preview.SetPage(html)
        height = self.preview.GetInternalRepresentation().GetHeight() if html else 0
        self.preview.SetMinSize((-1, max(MIN_EDITOR_H, height + PADDING)))
        self.editor.Hide()
        self.preview.Show()
        self.Layout()

    def _fit_editor(self):
        lines = max(1, self.editor.GetNumberOfLines())
        line_h = self.editor.GetCharHeight()
        self.editor.SetMinSize((-1, max(MIN_EDITOR_H, lines * line_h + PADDING)))

    # ---------- events ----------

    def _on_key_down(self, evt: wx.KeyEvent):
        if not self.owner.on_row_key(self, evt):
            evt.Skip()

    def _on_text(self, evt):
        self._fit_editor()
        self.owner.on_row_text(self)
        evt.Skip()

    def _on_blur(self, evt):
        # Defer: the row may be torn down by the key press that moved focus.
        wx.CallAfter(self.owner.on_row_blur, self.block_id)
        evt.Skip()

    def _on_preview_click(self, evt):
        self.begin_edit(CURSOR_END)
        evt.Skip()

    def _on_link(self, evt):
        href = evt.GetLinkInfo().GetHref()
        title = page_link_title(href)
        if title is not None:
            self.owner.on_page_link(title)
        else:
            wx.LaunchDefaultBrowser(href)
