"""Tests for core/log.py - the shared in-memory log."""

from __future__ import annotations

from pathlib import Path


class TestLog:
    def test_add_and_tail(self, quiet_log) -> None:
        quiet_log.add("hello log")

        timestamp, message = quiet_log.tail(1)[0]
        assert message == "hello log"
        assert timestamp
        assert quiet_log.tail(0) == []

    def test_debug_respects_verbosity(self, quiet_log) -> None:
        quiet_log.set_verbosity(1)
        before = quiet_log.count()

        quiet_log.debug("too chatty", 2)
        assert quiet_log.count() == before

        quiet_log.debug("wanted", 1)
        assert quiet_log.get(-1)[1] == "[test_log.py] wanted"

    def test_format(self, quiet_log) -> None:
        quiet_log.add("formatted")

        assert quiet_log.format().splitlines()[-1].endswith("] formatted")

    def test_clear(self, quiet_log) -> None:
        quiet_log.add("soon gone")

        quiet_log.clear()

        assert quiet_log.count() == 1
        assert quiet_log.get(0)[1] == "Log cleared"

    def test_write_to_file(self, quiet_log, tmp_path: Path) -> None:
        quiet_log.add("persist me")
        target = tmp_path / "log.txt"

        assert quiet_log.write_to_file(str(target)) is True
        assert "persist me" in target.read_text(encoding="utf-8")

    def test_write_failure_reported(self, quiet_log, tmp_path: Path) -> None:
        assert quiet_log.write_to_file(str(tmp_path / "missing" / "log.txt")) is False
        assert "Failed to write log" in quiet_log.get(-1)[1]
