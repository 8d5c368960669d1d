"""Shared fixtures for keyedlist tests."""

from __future__ import annotations

import os
import sys

import pytest

from keyedlist import _contracts, _term


@pytest.fixture(autouse=True)
def _reset_switches():
    """Contracts on and color off for every test; restore afterwards."""
    saved = (_contracts._ENABLED, _term._COLOR)
    _contracts.enable_contracts(True)
    _term.force_color(False)
    yield
    _contracts._ENABLED, _term._COLOR = saved


@pytest.fixture
def write_lines(tmp_path):
    """Write lines to a file under tmp_path and return its path."""
    def _write(name: str, lines: list[str]) -> str:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def _add_examples_to_path():
    """Ensure examples/ is importable."""
    examples_dir = os.path.join(os.path.dirname(__file__), "..", "examples")
    examples_dir = os.path.abspath(examples_dir)
    if examples_dir not in sys.path:
        sys.path.insert(0, examples_dir)
    yield
    if examples_dir in sys.path:
        sys.path.remove(examples_dir)
