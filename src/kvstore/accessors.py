"""Typed convenience accessors generated on top of ``set``/``get``.

Each scalar type gets a setter and a getter built by the two factories
below. They carry no logic of their own beyond projecting one field into or
out of a :class:`~kvstore.key_value.KeyValue`:

* setters are best effort: a store failure or a value of the wrong type
  is logged and swallowed;
* getters return ``None`` for every failure, for a missing key and for a
  value stored under a different type.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Type, TypeVar

from .errors import KVStoreError
from .key_value import KeyValue

if TYPE_CHECKING:
    from .store import KVStore

__all__ = ["typed_setter", "typed_getter"]

logger = logging.getLogger(__name__)

T = TypeVar("T", str, int, float, bool)


def _check_value(value_type: Type[T], value: Any) -> T:
    if value_type is float and isinstance(value, int) and not isinstance(value, bool):
        # the only widening accepted
        return float(value)  # type: ignore[return-value]
    if isinstance(value, bool) and value_type is not bool:
        raise TypeError(f"{value_type.__name__} value required, got bool")
    if not isinstance(value, value_type):
        raise TypeError(f"{value_type.__name__} value required, got {type(value).__name__}")
    return value


def typed_setter(value_type: Type[T]) -> Callable[["KVStore", str, T], None]:
    name = f"set_{value_type.__name__}"

    def setter(store: "KVStore", key: str, value: T) -> None:
        try:
            store.set(KeyValue(key, _check_value(value_type, value)))
        except (KVStoreError, TypeError, ValueError, OverflowError) as exc:
            logger.error("%s(%r) failed: %s", name, key, exc)

    setter.__name__ = setter.__qualname__ = name
    setter.__doc__ = f"Store ``value`` as {value_type.__name__} under ``key``; errors are logged, not raised."
    return setter


def typed_getter(value_type: Type[T]) -> Callable[["KVStore", str], Optional[T]]:
    name = f"get_{value_type.__name__}"
    field = f"{value_type.__name__}_value"

    def getter(store: "KVStore", key: str) -> Optional[T]:
        try:
            item = store.get(key)
        except KVStoreError as exc:
            logger.debug("%s(%r) returned no value: %s", name, key, exc)
            return None
        return getattr(item, field)

    getter.__name__ = getter.__qualname__ = name
    getter.__doc__ = f"Return the {value_type.__name__} stored under ``key`` or ``None``."
    return getter
