################################################################################################
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the main window's status bar and its log viewer.
'''
################################################################################################

import wx

from core.log import Log

################################################################################################
class LogPopup(wx.PopupTransientWindow):
    WIN_HEIGHT = 300

    def __init__(self, parent):
        super().__init__(parent, wx.SIMPLE_BORDER)
        text = wx.TextCtrl(
            self,
            value=Log.format(),
            style=wx.TE_MULTILINE | wx.TE_READONLY | wx.TE_DONTWRAP,
            size=(parent.Size[0], self.WIN_HEIGHT),
        )
        text.SetFont(wx.Font(wx.FontInfo(9).Family(wx.FONTFAMILY_TELETYPE)))
        text.SetBackgroundColour((0, 0, 0))
        text.SetForegroundColour((128, 192, 128))
        text.ShowPosition(text.GetLastPosition())

        box = wx.BoxSizer(wx.VERTICAL)
        box.Add(text, 1, wx.EXPAND)
        self.SetSizerAndFit(box)

    def OnDismiss(self):
        self.Parent.popup = None

################################################################################################
class StatusBar(wx.StatusBar):
    def __init__(self, parent):
        super().__init__(parent)
        self.Bind(wx.EVT_RIGHT_DOWN, self.OnRightDown)
        Log.add("Create StatusBar")
        self.popup = None

    def OnRightDown(self, event):
        """Context menu with log options."""
        menu = wx.Menu()

        item_show_log = menu.Append(wx.ID_ANY, "Show Log")
        menu.AppendSeparator()
        item_save = menu.Append(wx.ID_SAVE, "Save Log to File...")
        item_copy = menu.Append(wx.ID_COPY, "Copy Log to Clipboard")
        menu.AppendSeparator()
        item_clear = menu.Append(wx.ID_CLEAR, "Clear Log")

        self.Bind(wx.EVT_MENU, self.OnShowLog, item_show_log)
        self.Bind(wx.EVT_MENU, self.OnSaveLogToFile, item_save)
        self.Bind(wx.EVT_MENU, self.OnCopyLogToClipboard, item_copy)
        self.Bind(wx.EVT_MENU, self.OnClearLog, item_clear)

        self.PopupMenu(menu)
        menu.Destroy()

    def OnShowLog(self, event):
        if self.popup is not None:
            self.popup.Dismiss()
            self.popup = None

        self.popup = LogPopup(self)
        pos = self.ClientToScreen((0, 0))
        self.popup.Position((pos[0], pos[1] - LogPopup.WIN_HEIGHT), (0, 0))
        self.popup.Popup()

    def OnSaveLogToFile(self, event):
        with wx.FileDialog(
            self,
            "Save Log to file",
            wildcard="Text files (*.txt)|*.txt|Log files (*.log)|*.log|All files (*.*)|*.*",
            style=wx.FD_SAVE | wx.FD_OVERWRITE_PROMPT
        ) as dialog:
            if dialog.ShowModal() == wx.ID_CANCEL:
                return
            path = dialog.GetPath()

        if Log.write_to_file(path):
            self.SetStatusText(f"Log saved to: {path}")
        else:
            self.SetStatusText(f"Could not write log to: {path}")

    def OnCopyLogToClipboard(self, event):
        if not wx.TheClipboard.Open():
            self.SetStatusText("Error: Could not access clipboard")
            return
        try:
            wx.TheClipboard.SetData(wx.TextDataObject(Log.format()))
        finally:
            wx.TheClipboard.Close()
        self.SetStatusText(f"Copied {Log.count()} log entries to clipboard")

    def OnClearLog(self, event):
        result = wx.MessageBox(
            "Are you sure you want to clear the entire log?",
            "Clear Log",
            wx.YES_NO | wx.ICON_QUESTION
        )
        if result == wx.YES:
            Log.clear()
            self.SetStatusText("Log cleared")

################################################################################################
