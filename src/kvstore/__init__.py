"""
kvstore: a process-wide typed key-value store on top of SQLite.

Small scalar settings (str, int, float, bool) are persisted under string
keys in a single database file inside an application-chosen directory.
"""

__version__ = "0.1.0"

from .database import Database, PoolConfig
from .default import (
    get,
    get_bool,
    get_default_store,
    get_float,
    get_int,
    get_str,
    init,
    remove,
    set,
    set_bool,
    set_float,
    set_int,
    set_str,
)
from .errors import (
    EngineError,
    KVStoreError,
    LockPoisonedError,
    NotFoundError,
    UninitializedError,
)
from .key_value import KeyValue
from .store import DB_NAME, KVStore

__all__ = [
    "DB_NAME",
    "Database",
    "EngineError",
    "KVStore",
    "KVStoreError",
    "KeyValue",
    "LockPoisonedError",
    "NotFoundError",
    "PoolConfig",
    "UninitializedError",
    "get",
    "get_bool",
    "get_default_store",
    "get_float",
    "get_int",
    "get_str",
    "init",
    "remove",
    "set",
    "set_bool",
    "set_float",
    "set_int",
    "set_str",
]
