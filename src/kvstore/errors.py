"""Exceptions raised by the key-value store."""

from __future__ import annotations

__all__ = [
    "KVStoreError",
    "UninitializedError",
    "NotFoundError",
    "EngineError",
    "LockPoisonedError",
]


class KVStoreError(RuntimeError):
    """Base class for every error raised by the store."""


class UninitializedError(KVStoreError):
    """Raised when the store is used before ``init`` succeeded."""


class NotFoundError(KVStoreError):
    """Raised when the root directory or a requested key does not exist."""


class EngineError(KVStoreError):
    """Raised when the underlying SQLite/SQLAlchemy layer fails."""


class LockPoisonedError(KVStoreError):
    """Raised when the store lock was left poisoned by a failed writer."""
