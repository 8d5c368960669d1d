from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

KeyFn = Callable[[Any], Any]

_SCALAR_KEYS = (bool, int, float, str, bytes)


class KeyExtractionError(TypeError):
    """Raised when no key can be derived for an element."""


@runtime_checkable
class HasItemKey(Protocol):
    def item_key(self) -> Any: ...


def get_item_key(item: Any) -> Any:
    """Default key for ``item``.

    Objects with an ``item_key()`` method supply their own key. Scalars and
    strings are their own key. ``(index, element)`` pairs, as produced by
    ``enumerate``, are keyed by ``element``.
    """
    if isinstance(item, HasItemKey):
        return item.item_key()
    if isinstance(item, _SCALAR_KEYS):
        return item
    if isinstance(item, tuple) and len(item) == 2 and type(item[0]) is int:
        return get_item_key(item[1])
    raise KeyExtractionError(
        f"cannot derive a key for {type(item).__name__!r}; "
        "pass key=..., decorate the class with @keyed_by, or wrap it with with_key()"
    )


def _resolve_key(key: KeyFn | None) -> KeyFn:
    return get_item_key if key is None else key


def keyed_by(fn: KeyFn) -> Callable[[type], type]:
    """Class decorator installing ``item_key()`` as ``fn(self)``.

    Example::

        @keyed_by(lambda pkg: pkg.name)
        @dataclass
        class Package:
            name: str
            version: str
    """
    def deco(cls: type) -> type:
        def item_key(self: Any) -> Any:
            return fn(self)

        item_key.__qualname__ = f"{cls.__qualname__}.item_key"
        cls.item_key = item_key  # type: ignore[attr-defined]
        return cls

    return deco


@dataclasses.dataclass(frozen=True)
class WithKey:
    """An element paired with a precomputed key.

    For element types that cannot carry ``item_key()`` themselves. Attribute
    access, indexing, ``len`` and iteration go to the wrapped item. The key
    is never recomputed.
    """

    key: Any
    item: Any

    def item_key(self) -> Any:
        return self.key

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the wrapper itself lacks.
        if name.startswith("__") or name in ("key", "item"):
            raise AttributeError(name)
        return getattr(self.item, name)

    def __getitem__(self, index: Any) -> Any:
        return self.item[index]

    def __len__(self) -> int:
        return len(self.item)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.item)


def with_key(sequence: Iterable[Any], fn: KeyFn) -> list[WithKey]:
    return [WithKey(fn(item), item) for item in sequence]
