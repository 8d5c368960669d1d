from __future__ import annotations

import functools
import inspect
import os
from collections.abc import Callable
from typing import Any

from keyedlist._util import Predicate, _qualified_name, _safe_call

_ENSURES_ATTR = "__keyedlist_ensures__"
_ENV_VAR = "KEYEDLIST_CONTRACTS"

_ENABLED: bool | None = None


def contracts_enabled() -> bool:
    global _ENABLED
    if _ENABLED is not None:
        return _ENABLED
    _ENABLED = os.environ.get(_ENV_VAR, "") not in ("", "0")
    return _ENABLED


def enable_contracts(enabled: bool) -> None:
    global _ENABLED
    _ENABLED = enabled


def postconditions(fn: Callable[..., Any]) -> list[Predicate]:
    return list(getattr(fn, _ENSURES_ATTR, []))


def _check_ensures(fn: Callable[..., Any], arguments: dict[str, Any], result: Any) -> tuple[bool, str]:
    for pred in postconditions(fn):
        ok, err = _safe_call(pred, **arguments, result=result)
        if not ok:
            return False, err or f"{pred.__name__} returned False"
    return True, ""


def ensures(pred: Predicate) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach a postcondition, checked only while contracts are enabled.

    ``pred`` is called with the bound arguments of the call (defaults
    applied) plus ``result=``. Stacked decorators share one list.
    """
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        if hasattr(fn, _ENSURES_ATTR):
            getattr(fn, _ENSURES_ATTR).insert(0, pred)
            return fn

        sig = inspect.signature(fn)

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = fn(*args, **kwargs)
            if contracts_enabled():
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                ok, err = _check_ensures(wrapper, bound.arguments, result)
                if not ok:
                    raise AssertionError(f"Postcondition failed for {_qualified_name(fn)}: {err}")
            return result

        setattr(wrapper, _ENSURES_ATTR, [pred])
        return wrapper

    return deco
