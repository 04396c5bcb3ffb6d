'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import wx

# Shared UI constants
INDENT_W = 20
BULLET = "•"
BULLET_W = 14
PADDING = 4
ROW_GAP = 2
MIN_EDITOR_H = 24
LIST_W = 220
AUTOSAVE_MS = 30000
DEFAULT_BG_COLOR = wx.Colour(240, 240, 255)
PREVIEW_BG_COLOR = wx.Colour(255, 255, 255)
