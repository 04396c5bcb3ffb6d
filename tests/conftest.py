"""Shared fixtures for the outline engine and notebook tests."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Callable, Sequence, Tuple

import pytest

from core.log import Log
from core.outline import Outline


Spec = Sequence[Tuple[str, str, int]]


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic block ids: n1, n2, ..."""
    counter = itertools.count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def make_outline(id_factory):
    """Build an outline from (id, content, indent) records."""

    def _make(records: Spec = (), **kwargs) -> Outline:
        kwargs.setdefault("id_factory", id_factory)
        return Outline(list(records), **kwargs)

    return _make


@pytest.fixture
def notebook(tmp_path: Path) -> str:
    """An initialized, empty notebook directory."""
    from core.storage import ensure_notebook

    nb_dir = tmp_path / "notebook"
    ensure_notebook(str(nb_dir), name="Test Notebook")
    return str(nb_dir)


@pytest.fixture
def quiet_log():
    """Reset log verbosity after a test changes it."""
    previous = Log.verbosity
    yield Log
    Log.set_verbosity(previous)
