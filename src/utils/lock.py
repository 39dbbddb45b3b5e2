"""Reader/writer lock built on threading primitives."""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """读写锁：允许多个读者并发，或者一个独占的写者

    Writers are preferred: once a writer is waiting, new readers block until it
    has finished, so a steady stream of readers cannot starve registration.
    """
    _cond: threading.Condition
    _readers: int
    _writer: bool
    _waiting_writers: int

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers > 0:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers > 0:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        """Hold a shared read section for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        """Hold the exclusive write section for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
