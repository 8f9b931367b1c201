from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from .errors import LockPoisonedError

__all__ = ["RWLock"]


class RWLock:
    """Multi-reader / single-writer lock with poisoning.

    Readers share the lock; a writer holds it exclusively. Waiting writers
    block new readers so a steady stream of readers cannot starve ``init``.

    If an exception escapes a ``write()`` block the lock becomes poisoned:
    the protected state may be half-updated, so every later acquisition
    raises :class:`LockPoisonedError`. Failures inside ``read()`` blocks
    leave the lock intact.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        with self._cond:
            return self._poisoned

    def _check_poison(self) -> None:
        if self._poisoned:
            raise LockPoisonedError("lock poisoned by a failure while held for writing")

    def acquire_read(self) -> None:
        with self._cond:
            self._check_poison()
            while self._writer or self._waiting_writers:
                self._cond.wait()
                self._check_poison()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called without a matching acquire_read")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._check_poison()
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                    self._check_poison()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self, poison: bool = False) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called without a matching acquire_write")
            self._writer = False
            if poison:
                self._poisoned = True
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        except BaseException:
            self.release_write(poison=True)
            raise
        self.release_write()
