# app.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import sys
import traceback
import wx

from core.log import Log

def on_exception(exc_type, exc_value, exc_traceback):
    """Send unhandled exceptions to the log and status bar instead of failing silently."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    error_message = f"!ERROR! Unhandled Exception:\n{tb_text}"
    Log.add(error_message)

    app = wx.GetApp()
    main_frame = app.GetTopWindow() if app else None
    if main_frame and hasattr(main_frame, 'SetStatusText'):
        main_frame.SetStatusText(error_message.splitlines()[-1])
    else:
        sys.stderr.write(error_message)

if tuple(getattr(wx, 'VERSION', (0,0,0))[:3]) < (4, 2, 0):
    raise RuntimeError(f"OutlinePad requires wxPython >= 4.2.0; found {wx.__version__}")

from ui.main_frame import MainFrame

def main(verbosity: int = 0, stdexp: bool = False, notebook: str = None):
    if not stdexp:
        sys.excepthook = on_exception

    app = wx.App(False)

    frame = MainFrame(verbosity=verbosity, notebook_dir=notebook)
    frame.Show()

    return app.MainLoop()
