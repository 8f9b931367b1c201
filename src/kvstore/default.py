"""Process-wide store shared by the whole application.

The store object is created on first use without touching the disk; the
application must call :func:`init` once before reading or writing::

    import kvstore

    kvstore.init("/var/lib/myapp")
    kvstore.set_bool("onboarding_done", True)
    kvstore.get_bool("onboarding_done")  # True
"""

from __future__ import annotations

import threading
from typing import Optional

from .database import PathLike
from .key_value import KeyValue
from .store import KVStore

__all__ = [
    "get_default_store",
    "init",
    "set",
    "get",
    "remove",
    "set_str",
    "set_int",
    "set_float",
    "set_bool",
    "get_str",
    "get_int",
    "get_float",
    "get_bool",
]

_default_store: Optional[KVStore] = None
_default_lock = threading.Lock()


def get_default_store() -> KVStore:
    global _default_store
    if _default_store is None:
        with _default_lock:
            if _default_store is None:
                _default_store = KVStore()
    return _default_store


def init(root_path: PathLike) -> None:
    get_default_store().init(root_path)


def set(item: KeyValue) -> None:
    get_default_store().set(item)


def get(key: str) -> KeyValue:
    return get_default_store().get(key)


def remove(key: str) -> None:
    get_default_store().remove(key)


def set_str(key: str, value: str) -> None:
    get_default_store().set_str(key, value)


def set_int(key: str, value: int) -> None:
    get_default_store().set_int(key, value)


def set_float(key: str, value: float) -> None:
    get_default_store().set_float(key, value)


def set_bool(key: str, value: bool) -> None:
    get_default_store().set_bool(key, value)


def get_str(key: str) -> Optional[str]:
    return get_default_store().get_str(key)


def get_int(key: str) -> Optional[int]:
    return get_default_store().get_int(key)


def get_float(key: str) -> Optional[float]:
    return get_default_store().get_float(key)


def get_bool(key: str) -> Optional[bool]:
    return get_default_store().get_bool(key)
