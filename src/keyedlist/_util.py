from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any

from keyedlist._key import WithKey

Predicate = Callable[..., bool]


def _qualified_name(fn: Callable[..., Any]) -> str:
    return f"{fn.__module__}.{getattr(fn, '__qualname__', getattr(fn, '__name__', str(fn)))}"


def _jsonable(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")
    if isinstance(obj, WithKey):
        return {"key": _jsonable(obj.key), "item": _jsonable(obj.item)}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(x) for x in obj]
    if isinstance(obj, Mapping):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    return repr(obj)


def _safe_call(pred: Predicate, *args: Any, **kwargs: Any) -> tuple[bool, str | None]:
    try:
        return bool(pred(*args, **kwargs)), None
    except Exception as e:
        return False, f"{type(e).__name__}: {e}"


def _strictly_ascending(keys: list[Any]) -> bool:
    return all(a < b for a, b in zip(keys, keys[1:]))
