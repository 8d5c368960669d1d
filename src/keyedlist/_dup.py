from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Any

from keyedlist._contracts import ensures
from keyedlist._group import KeyedMap, One, count_keys, group_all
from keyedlist._key import KeyFn, _resolve_key
from keyedlist._util import _strictly_ascending


@dataclasses.dataclass
class DedupResult:
    """One retained element per key plus everything dropped for that key.

    ``retained`` is ordered by key. ``removed`` only holds keys that occurred
    more than once; each list keeps input order.
    """

    retained: list[Any]
    removed: KeyedMap

    @property
    def removed_count(self) -> int:
        return sum(len(items) for items in self.removed.values())


# ---------------------------------------------------------------------------
# postconditions
# ---------------------------------------------------------------------------

def _counts_above_one(sequence: Any, key: Any, result: KeyedMap) -> bool:
    return all(n > 1 for n in result.values())


def _report_ascending(sequence: Any, key: Any, result: KeyedMap) -> bool:
    return _strictly_ascending(list(result))


def _retained_unique_and_ascending(sequence: Any, key: Any, result: DedupResult) -> bool:
    k = _resolve_key(key)
    return _strictly_ascending([k(item) for item in result.retained])


def _removed_keys_retained(sequence: Any, key: Any, result: DedupResult) -> bool:
    k = _resolve_key(key)
    kept = KeyedMap((k(item), item) for item in result.retained)
    return all(rk in kept and items for rk, items in result.removed.items())


# ---------------------------------------------------------------------------
# operations
# ---------------------------------------------------------------------------

@ensures(_counts_above_one)
@ensures(_report_ascending)
def count_duplicates(sequence: Iterable[Any], key: KeyFn | None = None) -> KeyedMap:
    """Count elements per key, keeping only keys seen more than once.

    The report is a read-only mapping ordered by key; it compares equal to
    the matching ``dict``.

    >>> count_duplicates([1, 1, 2, 3, 3, 3]) == {1: 2, 3: 3}
    True
    """
    return KeyedMap((k, n) for k, n in count_keys(sequence, _resolve_key(key)) if n > 1)


@ensures(_retained_unique_and_ascending)
@ensures(_removed_keys_retained)
def deduplicate(sequence: Iterable[Any], key: KeyFn | None = None) -> DedupResult:
    """Keep the last element for every key and record the others.

    The input is consumed in one pass. For each key holding several
    elements, the last one in input order is retained and the earlier ones
    are listed under ``removed[key]``.

    >>> r = deduplicate([1, 1, 2])
    >>> r.retained, dict(r.removed)
    ([1, 2], {1: [1]})
    """
    retained: list[Any] = []
    removed: list[tuple[Any, list[Any]]] = []
    for k, slot in group_all(sequence, _resolve_key(key)):
        if isinstance(slot, One):
            retained.append(slot.item)
        else:
            *rest, last = slot.items
            retained.append(last)
            removed.append((k, rest))
    return DedupResult(retained=retained, removed=KeyedMap(removed))
