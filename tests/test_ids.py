"""Tests for core/ids.py - block and document identifiers."""

from __future__ import annotations

import re

import pytest

from core.ids import new_block_id, new_document_id, to_base36


def _no_entropy(*args, **kwargs):
    raise NotImplementedError("no entropy source")


class TestBase36:
    @pytest.mark.parametrize("value,expected", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz")])
    def test_encoding(self, value: int, expected: str) -> None:
        assert to_base36(value) == expected

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_base36(-1)


class TestBlockIds:
    def test_uuid_preferred(self) -> None:
        block_id = new_block_id()

        assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}", block_id)

    def test_ids_are_distinct(self) -> None:
        assert len({new_block_id() for _ in range(500)}) == 500

    def test_random_tier_when_uuid_unavailable(self, monkeypatch) -> None:
        monkeypatch.setattr("core.ids.uuid.uuid4", _no_entropy)

        block_id = new_block_id()

        assert re.fullmatch(r"[0-9a-z]{1,7}", block_id)

    def test_clock_tier_when_no_entropy(self, monkeypatch) -> None:
        monkeypatch.setattr("core.ids.uuid.uuid4", _no_entropy)
        monkeypatch.setattr("core.ids.secrets.randbits", _no_entropy)

        first, second = new_block_id(), new_block_id()

        assert re.fullmatch(r"[0-9a-z]+-[0-9a-z]+", first)
        assert first != second

    def test_document_ids(self) -> None:
        assert len(new_document_id()) == 36
        assert new_document_id() != new_document_id()
