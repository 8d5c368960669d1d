from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from keyedlist._key import WithKey


def _tagged(keys: list[Any]) -> list[WithKey]:
    # Payload records the input position so equal keys stay distinguishable.
    return [WithKey(k, (k, i)) for i, k in enumerate(keys)]


def keyed_lists(
    keys: st.SearchStrategy[Any] | None = None,
    *,
    min_size: int = 0,
    max_size: int = 20,
    tagged: bool = False,
) -> st.SearchStrategy[list[Any]]:
    """Lists whose elements collide on key often.

    By default elements are small integers, which are their own key. With
    ``tagged=True`` every element is a ``WithKey`` whose item is
    ``(key, position)``, so tests can tell which of several equal-keyed
    elements ended up where.
    """
    if keys is None:
        keys = st.integers(min_value=0, max_value=max(1, max_size // 3))
    lists = st.lists(keys, min_size=min_size, max_size=max_size)
    if tagged:
        return lists.map(_tagged)
    return lists
