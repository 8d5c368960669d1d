"""Tests for key extraction: defaults, @keyed_by, WithKey and with_key."""

from __future__ import annotations

import dataclasses

import pytest

from keyedlist._key import HasItemKey, KeyExtractionError, WithKey, get_item_key, keyed_by, with_key


# ---------------------------------------------------------------------------
# get_item_key
# ---------------------------------------------------------------------------

class TestGetItemKey:
    def test_int_is_own_key(self):
        assert get_item_key(7) == 7

    def test_float_is_own_key(self):
        assert get_item_key(1.5) == 1.5

    def test_str_is_own_key(self):
        assert get_item_key("abc") == "abc"

    def test_bytes_is_own_key(self):
        assert get_item_key(b"ab") == b"ab"

    def test_enumerate_pair_uses_element_key(self):
        assert get_item_key((3, "x")) == "x"

    def test_nested_enumerate_pair(self):
        assert get_item_key((0, (1, 42))) == 42

    def test_bool_index_is_not_a_pair(self):
        with pytest.raises(KeyExtractionError):
            get_item_key((True, "x"))

    def test_object_with_item_key(self):
        class Box:
            def item_key(self):
                return "k"
        assert get_item_key(Box()) == "k"
        assert isinstance(Box(), HasItemKey)

    def test_unsupported_type_raises(self):
        with pytest.raises(KeyExtractionError, match="'dict'"):
            get_item_key({"a": 1})

    def test_error_is_type_error(self):
        with pytest.raises(TypeError):
            get_item_key(object())


# ---------------------------------------------------------------------------
# @keyed_by
# ---------------------------------------------------------------------------

class TestKeyedBy:
    def test_installs_item_key(self):
        @keyed_by(lambda p: p.name)
        @dataclasses.dataclass
        class Package:
            name: str
            version: str

        pkg = Package("hypothesis", "6.0")
        assert pkg.item_key() == "hypothesis"
        assert get_item_key(pkg) == "hypothesis"

    def test_returns_same_class(self):
        class C:
            pass
        assert keyed_by(lambda c: 1)(C) is C

    def test_qualname(self):
        @keyed_by(lambda c: 1)
        class C:
            pass
        assert C.item_key.__qualname__.endswith("C.item_key")


# ---------------------------------------------------------------------------
# WithKey / with_key
# ---------------------------------------------------------------------------

class TestWithKey:
    def test_item_key_is_stored_key(self):
        w = WithKey("k", {"a": 1})
        assert w.item_key() == "k"
        assert get_item_key(w) == "k"

    def test_delegates_attributes(self):
        @dataclasses.dataclass
        class Point:
            x: int
            y: int

        w = WithKey(1, Point(2, 3))
        assert w.x == 2
        assert w.y == 3

    def test_missing_attribute_raises(self):
        w = WithKey(1, object())
        with pytest.raises(AttributeError):
            w.nope

    def test_delegates_indexing_len_iter(self):
        w = WithKey("k", [10, 20, 30])
        assert w[1] == 20
        assert len(w) == 3
        assert list(w) == [10, 20, 30]

    def test_key_is_immutable(self):
        w = WithKey(1, "x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            w.key = 2  # type: ignore[misc]

    def test_key_not_recomputed(self):
        item = {"id": 1}
        w = WithKey(item["id"], item)
        item["id"] = 99
        assert w.item_key() == 1

    def test_with_key_wraps_in_order(self):
        ws = with_key(["bb", "a", "ccc"], len)
        assert [w.key for w in ws] == [2, 1, 3]
        assert [w.item for w in ws] == ["bb", "a", "ccc"]

    def test_with_key_empty(self):
        assert with_key([], len) == []
