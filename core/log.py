################################################################################################

'''

Copyright 2025 Aaron Vose (avose@aaronvose.net)

Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the in-memory info / debug log shared by the engine, the
notebook store and the desktop host.

'''

################################################################################################

import inspect
from datetime import datetime
from pathlib import Path

################################################################################################

TIME_FMT = "%m/%d/%Y %H:%M:%S"

def _now() -> str:
    return datetime.now().strftime(TIME_FMT)

################################################################################################

class LogManager():
    __log = None

    def __init__(self, verbosity: int = 0):
        if LogManager.__log is None:
            LogManager.__log = [(_now(), "Begin OutlinePad Log")]
        self.verbosity = verbosity

    def add(self, text: str):
        LogManager.__log.append((_now(), text))

    def debug(self, text: str, level: int = 0):
        """Record text only when the current verbosity reaches level."""
        if self.verbosity < level:
            return
        # Prefix with the caller's file name (no directories).
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        filename = Path(caller.f_code.co_filename).name if caller is not None else "unknown"
        self.add(f"[{filename}] {text}")

    def get(self, index: int = None):
        if index is not None:
            return LogManager.__log[index]
        return LogManager.__log.copy()

    def tail(self, count: int):
        return LogManager.__log[-count:] if count > 0 else []

    def count(self):
        return len(LogManager.__log)

    def set_verbosity(self, verbosity: int = 0):
        self.verbosity = verbosity

    def clear(self):
        """Drop every entry, leaving a single marker line."""
        LogManager.__log.clear()
        LogManager.__log.append((_now(), "Log cleared"))

    def format(self) -> str:
        return "\n".join(f"[{timestamp}] {message}" for timestamp, message in LogManager.__log)

    def write_to_file(self, filepath: str):
        """Write all log entries to a text file."""
        try:
            Path(filepath).write_text(self.format() + "\n", encoding="utf-8")
        except OSError as e:
            self.add(f"Failed to write log to file '{filepath}': {e}")
            return False
        self.add(f"Log written to file: {filepath}")
        return True

################################################################################################

Log = LogManager()

################################################################################################
