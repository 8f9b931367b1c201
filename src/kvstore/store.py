from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from .accessors import typed_getter, typed_setter
from .database import Database, PathLike, PoolConfig
from .errors import EngineError, LockPoisonedError, NotFoundError, UninitializedError
from .key_value import KV_SQL, TABLE_NAME, KeyValue
from .rwlock import RWLock

__all__ = ["DB_NAME", "KVStore"]

logger = logging.getLogger(__name__)

DB_NAME = "kv.db"

_UPSERT_SQL = f"""
INSERT INTO {TABLE_NAME} (key, str_value, int_value, float_value, bool_value)
VALUES (:key, :str_value, :int_value, :float_value, :bool_value)
ON CONFLICT(key) DO UPDATE SET
    str_value = excluded.str_value,
    int_value = excluded.int_value,
    float_value = excluded.float_value,
    bool_value = excluded.bool_value;
"""

_SELECT_SQL = f"""
SELECT key, str_value, int_value, float_value, bool_value
FROM {TABLE_NAME}
WHERE key = :key
LIMIT 1;
"""

_DELETE_SQL = f"DELETE FROM {TABLE_NAME} WHERE key = :key;"


class KVStore:
    """Typed key-value store persisted in ``<root>/kv.db``.

    A store is created empty and does no I/O until :meth:`init` installs a
    database. ``init`` swaps the handle under the write lock; ``set``,
    ``get`` and ``remove`` only take the read lock long enough to check out
    a connection, leaving row-level concurrency to SQLite.
    """

    def __init__(self, pool_config: Optional[PoolConfig] = None) -> None:
        self.pool_config = pool_config or PoolConfig()
        self._database: Optional[Database] = None
        self._lock = RWLock()

    # Lifecycle
    def init(self, root_path: PathLike) -> None:
        root = Path(root_path)
        if not root.is_dir():
            raise NotFoundError(f"Init KVStore failed. {root} does not exist")

        database = Database(root, DB_NAME, self.pool_config)
        try:
            database.execute(KV_SQL)
        except EngineError:
            database.dispose()
            raise

        try:
            with self._lock.write():
                previous, self._database = self._database, database
        except LockPoisonedError:
            database.dispose()
            raise

        if previous is not None:
            logger.warning("KVStore re-initialized; replacing %s with %s", previous.path, database.path)
            previous.dispose()
        logger.info("KVStore initialized at %s", database.path)

    @property
    def is_initialized(self) -> bool:
        return self.database is not None

    @property
    def database(self) -> Optional[Database]:
        with self._lock.read():
            return self._database

    # Internal helpers
    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        try:
            with self._lock.read():
                if self._database is None:
                    raise UninitializedError("KVStore is not initialized; call init() first")
                conn = self._database.get_connection()
        except LockPoisonedError as exc:
            logger.error("KVStore get connection failed: %s", exc)
            raise
        with conn:
            yield conn

    def _with_retry(self, operation: Callable[[Connection], Any], retries: int = 3, delay: float = 0.1) -> Any:
        for attempt in range(retries):
            try:
                with self._connection() as conn:
                    return operation(conn)
            except OperationalError as exc:
                message = str(exc).lower()
                if ("locked" in message or "busy" in message) and attempt < retries - 1:
                    logger.debug("Database busy, retrying (%d/%d)", attempt + 1, retries)
                    time.sleep(delay)
                    continue
                raise EngineError(str(exc)) from exc
            except SQLAlchemyError as exc:
                raise EngineError(str(exc)) from exc

    # Basic CRUD
    def set(self, item: KeyValue) -> None:
        params = item.to_params()

        def op(conn: Connection) -> None:
            with conn.begin():
                conn.execute(text(_UPSERT_SQL), params)

        self._with_retry(op)

    def get(self, key: str) -> KeyValue:
        row = self._with_retry(
            lambda conn: conn.execute(text(_SELECT_SQL), {"key": key}).mappings().first()
        )
        if row is None:
            raise NotFoundError(f"Key {key!r} not found")
        return KeyValue.from_row(row)

    def remove(self, key: str) -> None:
        def op(conn: Connection) -> None:
            with conn.begin():
                conn.execute(text(_DELETE_SQL), {"key": key})

        self._with_retry(op)

    # Typed accessors
    set_str = typed_setter(str)
    set_int = typed_setter(int)
    set_float = typed_setter(float)
    set_bool = typed_setter(bool)

    get_str = typed_getter(str)
    get_int = typed_getter(int)
    get_float = typed_getter(float)
    get_bool = typed_getter(bool)
