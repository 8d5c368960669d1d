"""Ordered grouping of elements by key.

All three list operations group their input with a stable sort followed by
``itertools.groupby`` and then walk the runs in ascending key order. Only
``<`` and ``==`` are used on keys, so keys need not be hashable, but they
must form a consistent total order; keys that cannot be compared with each
other make ``sorted`` raise ``TypeError``.
"""

from __future__ import annotations

import bisect
import dataclasses
import itertools
from collections.abc import Callable, Iterable, Iterator, Mapping
from operator import itemgetter
from typing import Any, Union

from keyedlist._key import KeyFn

Run = tuple[Any, list[tuple[int, Any]]]


@dataclasses.dataclass(frozen=True)
class One:
    item: Any


@dataclasses.dataclass(frozen=True)
class Many:
    items: tuple[Any, ...]


Slot = Union[One, Many]


class KeyedMap(Mapping):
    """Read-only mapping ordered by key, looked up by bisection.

    Iteration yields keys ascending. Equality against any mapping compares
    the key-ordered items, so a ``KeyedMap`` equals the ``dict`` with the
    same contents.
    """

    def __init__(self, pairs: Iterable[tuple[Any, Any]] = ()) -> None:
        ordered = sorted(pairs, key=itemgetter(0))
        self._keys = [k for k, _ in ordered]
        self._values = [v for _, v in ordered]

    def __getitem__(self, key: Any) -> Any:
        try:
            i = bisect.bisect_left(self._keys, key)
        except TypeError:
            raise KeyError(key) from None
        if i < len(self._keys) and self._keys[i] == key:
            return self._values[i]
        raise KeyError(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        try:
            theirs = sorted(other.items(), key=itemgetter(0))
        except TypeError:
            return False
        return list(zip(self._keys, self._values)) == theirs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in zip(self._keys, self._values))
        return f"{type(self).__name__}({{{body}}})"


def key_runs(sequence: Iterable[Any], key: KeyFn) -> list[Run]:
    """Runs of equal-keyed elements, ascending by key.

    Each element is paired with its input position; the sort is stable, so
    every run keeps input order.
    """
    keyed = sorted(((key(item), i, item) for i, item in enumerate(sequence)), key=itemgetter(0))
    return [
        (k, [(i, item) for _, i, item in run])
        for k, run in itertools.groupby(keyed, key=itemgetter(0))
    ]


def count_keys(sequence: Iterable[Any], key: KeyFn) -> list[tuple[Any, int]]:
    return [(k, len(run)) for k, run in key_runs(sequence, key)]


def group_all(sequence: Iterable[Any], key: KeyFn) -> list[tuple[Any, Slot]]:
    groups: list[tuple[Any, Slot]] = []
    for k, run in key_runs(sequence, key):
        items = tuple(item for _, item in run)
        groups.append((k, One(items[0]) if len(items) == 1 else Many(items)))
    return groups


def group_last(
    sequence: Iterable[Any],
    key: KeyFn,
    on_evict: Callable[[Any], None],
) -> list[tuple[Any, Any]]:
    """Keep the last element per key, reporting each evicted one.

    An element is evicted by the next element with the same key, so
    evictions are reported in order of the evicting element's position,
    as a left-to-right scan would see them.
    """
    kept: list[tuple[Any, Any]] = []
    evicted: list[tuple[int, Any]] = []
    for k, run in key_runs(sequence, key):
        kept.append((k, run[-1][1]))
        evicted.extend((nxt, item) for (_, item), (nxt, _) in zip(run, run[1:]))
    for _, item in sorted(evicted, key=itemgetter(0)):
        on_evict(item)
    return kept
