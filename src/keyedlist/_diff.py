from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Any, Literal

from keyedlist._contracts import ensures
from keyedlist._group import KeyedMap, group_last
from keyedlist._key import KeyFn, _resolve_key
from keyedlist._util import _strictly_ascending

Side = Literal["left", "right"]


@dataclasses.dataclass(frozen=True)
class Ignored:
    """An element dropped because a later element on its side had the same key."""

    side: Side
    item: Any


@dataclasses.dataclass
class DiffResult:
    left: list[Any] = dataclasses.field(default_factory=list)
    both: list[tuple[Any, Any]] = dataclasses.field(default_factory=list)
    right: list[Any] = dataclasses.field(default_factory=list)
    ignored: list[Ignored] = dataclasses.field(default_factory=list)

    def is_empty(self) -> bool:
        """True when both sides hold the same keys and neither had collisions."""
        return not (self.left or self.right or self.ignored)

    def ignored_on(self, side: Side) -> list[Any]:
        return [entry.item for entry in self.ignored if entry.side == side]


def _side_keys(key: KeyFn | None, left_key: KeyFn | None, right_key: KeyFn | None) -> tuple[KeyFn, KeyFn]:
    return _resolve_key(left_key or key), _resolve_key(right_key or key)


# ---------------------------------------------------------------------------
# postconditions
# ---------------------------------------------------------------------------

def _outputs_ascending(left: Any, right: Any, key: Any, left_key: Any, right_key: Any, result: DiffResult) -> bool:
    lk, rk = _side_keys(key, left_key, right_key)
    return (
        _strictly_ascending([lk(item) for item in result.left])
        and _strictly_ascending([rk(item) for item in result.right])
        and _strictly_ascending([lk(pair[0]) for pair in result.both])
    )


def _pairs_share_key(left: Any, right: Any, key: Any, left_key: Any, right_key: Any, result: DiffResult) -> bool:
    lk, rk = _side_keys(key, left_key, right_key)
    return all(lk(a) == rk(b) for a, b in result.both)


def _sides_disjoint(left: Any, right: Any, key: Any, left_key: Any, right_key: Any, result: DiffResult) -> bool:
    lk, rk = _side_keys(key, left_key, right_key)
    only_left = KeyedMap((lk(item), item) for item in result.left)
    return not any(rk(item) in only_left for item in result.right)


# ---------------------------------------------------------------------------
# diff
# ---------------------------------------------------------------------------

@ensures(_outputs_ascending)
@ensures(_pairs_share_key)
@ensures(_sides_disjoint)
def diff(
    left: Iterable[Any],
    right: Iterable[Any],
    key: KeyFn | None = None,
    *,
    left_key: KeyFn | None = None,
    right_key: KeyFn | None = None,
) -> DiffResult:
    """Split two sequences into left-only, right-only and paired elements.

    Each side keeps only its last element per key; earlier ones are logged
    in ``ignored``, all left entries before all right entries. ``key``
    applies to both sides unless ``left_key`` / ``right_key`` is given, so
    the sides may hold different element types as long as their keys
    compare.

    >>> d = diff(["a", "b"], ["b", "c"])
    >>> d.left, d.both, d.right
    (['a'], [('b', 'b')], ['c'])
    """
    lk, rk = _side_keys(key, left_key, right_key)
    result = DiffResult()

    left_runs = group_last(left, lk, lambda item: result.ignored.append(Ignored("left", item)))
    right_runs = group_last(right, rk, lambda item: result.ignored.append(Ignored("right", item)))

    # Both lists are ascending by key: merge them.
    i = j = 0
    while i < len(left_runs) and j < len(right_runs):
        lkey, litem = left_runs[i]
        rkey, ritem = right_runs[j]
        if lkey < rkey:
            result.left.append(litem)
            i += 1
        elif rkey < lkey:
            result.right.append(ritem)
            j += 1
        else:
            result.both.append((litem, ritem))
            i += 1
            j += 1

    result.left.extend(item for _, item in left_runs[i:])
    result.right.extend(item for _, item in right_runs[j:])
    return result
