# core/io_worker.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import threading
import queue
import traceback

import wx

from core.log import Log

class IOWorker:
    """
    Single background thread for notebook writes. Only serialized records
    cross into it; the outline itself stays on the wx main thread.
    """

    def __init__(self):
        self._q = queue.Queue()
        self._t = threading.Thread(target=self._run, name="IOWorker", daemon=True)
        self._t.start()

    def submit(self, fn, *args, callback=None, **kwargs):
        """Queue a task; callback(result, error) runs on the GUI thread via wx.CallAfter."""
        self._q.put((fn, args, kwargs, callback))

    def flush(self):
        """Block until every queued task has run (used on shutdown)."""
        self._q.join()

    def _run(self):
        while True:
            fn, args, kwargs, cb = self._q.get()
            result = None
            err = None

            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                err = (e, traceback.format_exc())

            if cb:
                wx.CallAfter(cb, result, err)
            elif err is not None:
                Log.add(f"IO task {getattr(fn, '__name__', fn)} failed:\n{err[1]}")

            self._q.task_done()
