"""Tests for opt-in postcondition checking."""

from __future__ import annotations

import pytest

from keyedlist import _contracts, count_duplicates, deduplicate, diff
from keyedlist._contracts import contracts_enabled, enable_contracts, ensures, postconditions


# ---------------------------------------------------------------------------
# switch
# ---------------------------------------------------------------------------

class TestSwitch:
    def test_enable_disable(self):
        enable_contracts(False)
        assert contracts_enabled() is False
        enable_contracts(True)
        assert contracts_enabled() is True

    @pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("0", False), ("", False)])
    def test_reads_environment(self, monkeypatch, value, expected):
        monkeypatch.setenv("KEYEDLIST_CONTRACTS", value)
        _contracts._ENABLED = None
        assert contracts_enabled() is expected

    def test_unset_environment_disables(self, monkeypatch):
        monkeypatch.delenv("KEYEDLIST_CONTRACTS", raising=False)
        _contracts._ENABLED = None
        assert contracts_enabled() is False


# ---------------------------------------------------------------------------
# @ensures
# ---------------------------------------------------------------------------

class TestEnsures:
    def test_passes_when_satisfied(self):
        @ensures(lambda x, result: result > x)
        def f(x: int) -> int:
            return x + 1
        assert f(5) == 6

    def test_raises_when_violated(self):
        @ensures(lambda x, result: result > x)
        def f(x: int) -> int:
            return x - 1
        with pytest.raises(AssertionError, match="Postcondition failed"):
            f(5)

    def test_skipped_when_disabled(self):
        @ensures(lambda x, result: False)
        def f(x: int) -> int:
            return x
        enable_contracts(False)
        assert f(1) == 1

    def test_defaults_are_bound(self):
        seen = {}

        def pred(x, scale, result):
            seen["scale"] = scale
            return True

        @ensures(pred)
        def f(x: int, scale: int = 3) -> int:
            return x * scale
        f(2)
        assert seen == {"scale": 3}

    def test_stacking_shares_list(self):
        def a(x, result):
            return True

        def b(x, result):
            return True

        @ensures(a)
        @ensures(b)
        def f(x: int) -> int:
            return x
        assert postconditions(f) == [a, b]

    def test_predicate_exception_reported(self):
        def boom(x, result):
            raise ValueError("bad")

        @ensures(boom)
        def f(x: int) -> int:
            return x
        with pytest.raises(AssertionError, match="ValueError: bad"):
            f(1)


# ---------------------------------------------------------------------------
# library operations carry postconditions
# ---------------------------------------------------------------------------

class TestOperationContracts:
    @pytest.mark.parametrize("fn, count", [(count_duplicates, 2), (deduplicate, 2), (diff, 3)])
    def test_registered(self, fn, count):
        assert len(postconditions(fn)) == count

    def test_inconsistent_key_caught(self):
        # A key function that changes between calls breaks ordering of the output.
        calls = iter(range(1000, 0, -1))

        def unstable(x):
            return next(calls)

        with pytest.raises(AssertionError, match="Postcondition failed"):
            deduplicate([1, 2, 3], key=unstable)
