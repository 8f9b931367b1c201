from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from .errors import EngineError

__all__ = ["Database", "PoolConfig"]

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class PoolConfig:
    """Connection pool settings for a :class:`Database`.

    Attributes:
        max_size: Number of pooled SQLite connections.
        connection_timeout: Seconds to wait for a free connection before failing.
        busy_timeout: Seconds SQLite waits on a locked database before raising.
    """

    max_size: int = 8
    connection_timeout: float = 10.0
    busy_timeout: float = 3.0

    def __post_init__(self) -> None:
        if self.max_size < 1:
            raise ValueError("max_size must be at least 1")
        if self.connection_timeout <= 0:
            raise ValueError("connection_timeout must be positive")
        if self.busy_timeout < 0:
            raise ValueError("busy_timeout cannot be negative")


def _set_sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
    finally:
        cursor.close()


class Database:
    """A pooled SQLite database file living inside a root directory."""

    def __init__(self, root: PathLike, name: str, pool_config: PoolConfig | None = None) -> None:
        self.root = Path(root)
        self.path = self.root / name
        self.pool_config = pool_config or PoolConfig()
        try:
            self._engine: Engine = create_engine(
                f"sqlite:///{self.path}",
                poolclass=QueuePool,
                pool_size=self.pool_config.max_size,
                max_overflow=0,
                pool_timeout=self.pool_config.connection_timeout,
                connect_args={
                    "check_same_thread": False,
                    "timeout": self.pool_config.busy_timeout,
                },
            )
        except SQLAlchemyError as exc:
            raise EngineError(f"Cannot open database {self.path}: {exc}") from exc
        event.listen(self._engine, "connect", _set_sqlite_pragmas)

    def __repr__(self) -> str:
        return f"Database(path={str(self.path)!r})"

    def get_connection(self) -> Connection:
        """Check out a connection; the caller closes it to return it to the pool."""
        try:
            return self._engine.connect()
        except SQLAlchemyError as exc:
            raise EngineError(f"Cannot get connection to {self.path}: {exc}") from exc

    def execute(self, sql: str) -> None:
        """Run a single statement in its own transaction."""
        try:
            with self._engine.begin() as conn:
                conn.execute(text(sql))
        except SQLAlchemyError as exc:
            raise EngineError(f"Failed to execute statement on {self.path}: {exc}") from exc

    def dispose(self) -> None:
        """Close pooled connections; checked-out ones are discarded on return."""
        self._engine.dispose()
        logger.debug("Disposed connection pool for %s", self.path)
