# ui/outline_panel.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Callable, Dict, Optional

import wx

from core.commands import CURSOR_END, FocusDirective
from core.document import Document
from core.log import Log
from core.outline import Block, OutlineEvent
from ui.block_row import BlockRow
from ui.constants import PREVIEW_BG_COLOR, ROW_GAP
from ui.keys import handle_row_key

__all__ = ["OutlinePanel"]


class OutlinePanel(wx.ScrolledWindow):
    """
    Host for one document's outline. Owns one BlockRow per block and keeps
    them in step with the outline through its change notifications.
    """

    def __init__(
        self,
        parent: wx.Window,
        on_dirty: Optional[Callable[[], None]] = None,
        on_open_page: Optional[Callable[[str], None]] = None,
    ):
        super().__init__(parent, style=wx.VSCROLL)
        self.SetScrollRate(0, 12)
        self.SetBackgroundColour(PREVIEW_BG_COLOR)

        self.document: Optional[Document] = None
        self._rows: Dict[str, BlockRow] = {}
        self._on_dirty = on_dirty
        self._on_open_page = on_open_page
        self.dirty = False

        self._sizer = wx.BoxSizer(wx.VERTICAL)
        self.SetSizer(self._sizer)

    @property
    def outline(self):
        return self.document.outline if self.document else None

    # ---------- document lifecycle ----------

    def load(self, document: Document):
        """Tear down the current rows and mount one row per block of document."""
        if self.document is not None:
            self.document.outline.set_listener(None)

        self.Freeze()
        try:
            self._sizer.Clear(delete_windows=True)
            self._rows = {}
            self.document = document
            for block in document.outline:
                row = self._mount(block)
                self._sizer.Add(row, 0, wx.EXPAND | wx.BOTTOM, ROW_GAP)
                row.show_preview()
            document.outline.set_listener(self._on_outline_event)
        finally:
            self.Thaw()

        self.dirty = False
        self.relayout()
        Log.debug(f"Loaded '{document.title}' with {len(document.outline)} blocks", 1)

        first = document.outline[0]
        self.focus_block(FocusDirective(first.id, CURSOR_END))

    def relayout(self):
        self._sizer.Layout()
        self.FitInside()

    def _mount(self, block: Block) -> BlockRow:
        row = BlockRow(self, self, block.id, block.content, block.indent)
        self._rows[block.id] = row
        return row

    def _unmount(self, block_id: str):
        row = self._rows.pop(block_id, None)
        if row is None:
            return
        self._sizer.Detach(row)
        row.Hide()
        # The row's own key handler may still be on the stack.
        wx.CallAfter(row.Destroy)

    def _mark_dirty(self):
        self.dirty = True
        if self._on_dirty:
            self._on_dirty()

    # ---------- outline notifications ----------

    def _on_outline_event(self, event: OutlineEvent):
        if event.kind == "created":
            block = event.blocks[0]
            row = self._mount(block)
            self._sizer.Insert(event.index, row, 0, wx.EXPAND | wx.BOTTOM, ROW_GAP)
        elif event.kind == "removed":
            self._unmount(event.blocks[0].id)
        elif event.kind == "content":
            block = event.blocks[0]
            row = self._rows.get(block.id)
            if row is not None:
                row.set_text(block.content)
        elif event.kind == "indent":
            for block in event.blocks:
                row = self._rows.get(block.id)
                if row is not None:
                    row.set_indent(block.indent)
        self._mark_dirty()
        self.relayout()

    # ---------- row callbacks ----------

    def on_row_key(self, row: BlockRow, evt: wx.KeyEvent) -> bool:
        if self.outline is None:
            return False
        result = handle_row_key(self.outline, row, evt)
        if result.focus is not None:
            self.focus_block(result.focus)
        return result.handled

    def on_row_text(self, row: BlockRow):
        if self.outline is not None:
            self.outline.set_content(row.block_id, row.text())

    def on_row_blur(self, block_id: str):
        row = self._rows.get(block_id)
        if row is None or wx.Window.FindFocus() is row.editor:
            return
        row.show_preview()
        self.relayout()

    def on_page_link(self, title: str):
        if self._on_open_page is not None:
            # Leave the clicked row's event handler before the panel is reloaded.
            wx.CallAfter(self._on_open_page, title)

    def focus_block(self, directive: FocusDirective) -> bool:
        row = self._rows.get(directive.block_id)
        if row is None:
            return False
        row.begin_edit(directive.cursor)
        self.ScrollChildIntoView(row)
        return True

    def current_block_id(self) -> Optional[str]:
        focused = wx.Window.FindFocus()
        for block_id, row in self._rows.items():
            if focused is row.editor:
                return block_id
        return None

    def add_block(self) -> Optional[str]:
        """Menu 'Add Block': append a top-level block after the focused one."""
        if self.outline is None:
            return None
        block = self.outline.create(self.current_block_id(), 0)
        self.focus_block(FocusDirective(block.id))
        return block.id
