'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import wx

from core.document import Document
from core.io_worker import IOWorker
from core.log import Log
from core.logseq import import_graph
from core.storage import (
    ensure_notebook,
    list_documents,
    load_document,
    load_or_create_by_title,
    load_or_create_journal,
    save_record,
)
from ui.constants import AUTOSAVE_MS, DEFAULT_BG_COLOR, LIST_W
from ui.outline_panel import OutlinePanel
from ui.statusbar import StatusBar

DEFAULT_NOTEBOOK = "~/.outlinepad/notebook"


class MainFrame(wx.Frame):
    """Main application frame: document list on the left, outline on the right."""
    def __init__(self, verbosity: int = 0, notebook_dir: Optional[str] = None):
        super().__init__(None, title="OutlinePad", size=(900, 700))
        self.SetMinSize((600, 400))
        Log.set_verbosity(verbosity)

        self.io = IOWorker()
        self.notebook_dir: Optional[str] = None
        self._summaries: List[Dict[str, Any]] = []

        self._build_menu()
        self.SetStatusBar(StatusBar(self))
        self._build_body()

        self._autosave_timer = wx.Timer(self)
        self.Bind(wx.EVT_TIMER, self._on_autosave_timer, self._autosave_timer)
        self._autosave_timer.Start(AUTOSAVE_MS)
        self.Bind(wx.EVT_CLOSE, self.on_close)

        self.open_notebook(notebook_dir or DEFAULT_NOTEBOOK)

    # ---------------- Layout ----------------

    def _build_menu(self):
        menubar = wx.MenuBar()
        file_menu = wx.Menu()
        actions = [
            (wx.ID_NEW, "&New Document\tCtrl+N", self.on_action_new_document),
            (wx.ID_ANY, "Today's &Journal\tCtrl+J", self.on_action_journal_today),
            (wx.ID_OPEN, "&Open Notebook...\tCtrl+O", self.on_action_open_notebook),
            (wx.ID_SAVE, "&Save\tCtrl+S", self.on_action_save),
            None,
            (wx.ID_ANY, "&Add Block\tCtrl+B", self.on_action_add_block),
            (wx.ID_ANY, "&Import Logseq Graph...", self.on_action_import_logseq),
            None,
            (wx.ID_EXIT, "&Quit\tCtrl+Q", lambda evt: self.Close()),
        ]
        for action in actions:
            if action is None:
                file_menu.AppendSeparator()
                continue
            item_id, label, handler = action
            item = file_menu.Append(item_id, label)
            self.Bind(wx.EVT_MENU, handler, item)
        menubar.Append(file_menu, "&File")
        self.SetMenuBar(menubar)

    def _build_body(self):
        splitter = wx.SplitterWindow(self, style=wx.SP_LIVE_UPDATE)
        self.doc_list = wx.ListBox(splitter, style=wx.LB_SINGLE)
        self.doc_list.SetBackgroundColour(DEFAULT_BG_COLOR)
        self.doc_list.Bind(wx.EVT_LISTBOX, self._on_doc_selected)
        self.outline_panel = OutlinePanel(
            splitter, on_dirty=self._on_dirty, on_open_page=self.open_page_by_title
        )
        splitter.SplitVertically(self.doc_list, self.outline_panel, LIST_W)
        splitter.SetMinimumPaneSize(120)

    # ---------------- Notebook / documents ----------------

    def open_notebook(self, notebook_dir: str):
        self.save_current(wait=True)
        try:
            info = ensure_notebook(str(Path(notebook_dir).expanduser()))
        except ValueError as e:
            wx.MessageBox(str(e), "Open Notebook", wx.OK | wx.ICON_ERROR)
            return
        self.notebook_dir = info["path"]
        self.SetTitle(f"OutlinePad - {info['name']}")
        Log.add(f"Opened notebook {info['path']}")
        self.refresh_document_list()
        self.show_document(load_or_create_journal(self.notebook_dir, date.today()))

    def refresh_document_list(self, select_id: Optional[str] = None):
        self._summaries = list_documents(self.notebook_dir)
        self.doc_list.Set([s["title"] or "(untitled)" for s in self._summaries])
        for i, summary in enumerate(self._summaries):
            if summary["id"] == select_id:
                self.doc_list.SetSelection(i)

    def show_document(self, doc: Document):
        self.save_current()
        self.outline_panel.load(doc)
        self.SetStatusText(doc.title)

    def save_current(self, wait: bool = False):
        """Snapshot the open document on this thread, write it on the IO worker."""
        panel = self.outline_panel
        if self.notebook_dir is None or panel.document is None or not panel.dirty:
            return
        record = panel.document.to_dict()
        panel.dirty = False
        self.io.submit(save_record, self.notebook_dir, record, callback=self._on_saved)
        if wait:
            self.io.flush()

    def _on_saved(self, result, err):
        if not self:
            return  # frame already destroyed (save on close)
        if err is not None:
            exc, tb = err
            Log.add(f"Save failed: {exc}\n{tb}")
            self.SetStatusText(f"Save failed: {exc}")
            self.outline_panel.dirty = True
            return
        current = self.outline_panel.document
        self.refresh_document_list(current.id if current else None)
        self.SetStatusText("Saved.")

    def open_page_by_title(self, title: str):
        """Follow a [[page link]]: open the document with that title, creating it if needed."""
        if self.notebook_dir is None:
            return
        self.save_current(wait=True)
        try:
            doc = load_or_create_by_title(self.notebook_dir, title)
        except (OSError, ValueError) as e:
            Log.add(f"Cannot open page '{title}': {e}")
            self.SetStatusText(str(e))
            return
        self.show_document(doc)
        self.refresh_document_list(doc.id)

    def _on_dirty(self):
        self.SetStatusText("Modified")

    # ---------------- Actions ----------------

    def on_action_new_document(self, evt=None):
        with wx.TextEntryDialog(self, "Title:", "New Document") as dialog:
            if dialog.ShowModal() != wx.ID_OK:
                return
            title = dialog.GetValue().strip() or "Untitled"
        doc = Document.new(title)
        self.show_document(doc)
        self.outline_panel.dirty = True
        self.save_current()

    def on_action_journal_today(self, evt=None):
        self.show_document(load_or_create_journal(self.notebook_dir, date.today()))

    def on_action_open_notebook(self, evt=None):
        with wx.DirDialog(self, "Open or create a notebook directory") as dialog:
            if dialog.ShowModal() != wx.ID_OK:
                return
            path = dialog.GetPath()
        self.open_notebook(path)

    def on_action_save(self, evt=None):
        self.outline_panel.dirty = True
        self.save_current()

    def on_action_add_block(self, evt=None):
        self.outline_panel.add_block()

    def on_action_import_logseq(self, evt=None):
        with wx.DirDialog(self, "Choose a Logseq graph directory") as dialog:
            if dialog.ShowModal() != wx.ID_OK:
                return
            graph_dir = dialog.GetPath()
        self.save_current(wait=True)
        self.SetStatusText(f"Importing {graph_dir}...")
        self.io.submit(import_graph, graph_dir, self.notebook_dir, callback=self._on_imported)

    def _on_imported(self, counts, err):
        if err is not None:
            Log.add(f"Import failed: {err[0]}\n{err[1]}")
            self.SetStatusText(f"Import failed: {err[0]}")
            return
        self.refresh_document_list()
        self.SetStatusText(
            f"Imported {counts['journals']} journals and {counts['pages']} pages "
            f"({counts['failed']} failed, {len(counts['renamed'])} renamed)"
        )

    # ---------------- Events ----------------

    def _on_doc_selected(self, evt):
        idx = evt.GetSelection()
        if not (0 <= idx < len(self._summaries)):
            return
        doc_id = self._summaries[idx]["id"]
        current = self.outline_panel.document
        if current is not None and current.id == doc_id:
            return
        try:
            doc = load_document(self.notebook_dir, doc_id)
        except ValueError as e:
            Log.add(f"Cannot open document {doc_id}: {e}")
            self.SetStatusText(str(e))
            return
        self.show_document(doc)

    def _on_autosave_timer(self, evt):
        self.save_current()

    def on_close(self, evt):
        self._autosave_timer.Stop()
        self.save_current(wait=True)
        evt.Skip()
