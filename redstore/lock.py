"""Reader-writer locks and a striped lock table addressed by string keys."""

from __future__ import annotations

import threading
from collections.abc import Iterable

_OFFSET_BASIS = 2166136261
_PRIME32 = 16777619
_MASK32 = 0xFFFFFFFF


def fnv32(key: str | bytes) -> int:
    """Return the 32-bit FNV-1 hash of ``key`` (strings are hashed as UTF-8)."""
    data = key.encode("utf-8") if isinstance(key, str) else key
    hash_code = _OFFSET_BASIS
    for byte in data:
        hash_code = (hash_code * _PRIME32) & _MASK32
        hash_code ^= byte
    return hash_code


class RWLock:
    """A non-reentrant reader-writer lock that favours waiting writers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        """Take a shared lock, waiting while a writer holds or awaits the lock."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release a shared lock."""
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release of an unlocked read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Take the exclusive lock, waiting for readers and writers to leave."""
        with self._cond:
            self._writers_waiting += 1
            acquired = False
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                self._writer = True
                acquired = True
            finally:
                self._writers_waiting -= 1
                if not acquired:
                    self._cond.notify_all()

    def release_write(self) -> None:
        """Release the exclusive lock."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release of an unlocked write lock")
            self._writer = False
            self._cond.notify_all()


class Locks:
    """A fixed table of reader-writer locks chosen by the hash of a key."""

    def __init__(self, table_size: int) -> None:
        if table_size < 1:
            raise ValueError("table size must be positive")
        self._table = [RWLock() for _ in range(table_size)]

    def _spread(self, hash_code: int) -> int:
        return (len(self._table) - 1) & hash_code

    def _lock_for(self, key: str) -> RWLock:
        return self._table[self._spread(fnv32(key))]

    def _indices(self, keys: Iterable[str], reverse: bool) -> list[int]:
        return sorted({self._spread(fnv32(key)) for key in keys}, reverse=reverse)

    def lock(self, key: str) -> None:
        """Take the exclusive lock for ``key``."""
        self._lock_for(key).acquire_write()

    def rlock(self, key: str) -> None:
        """Take the shared lock for ``key``."""
        self._lock_for(key).acquire_read()

    def unlock(self, key: str) -> None:
        """Release the exclusive lock for ``key``."""
        self._lock_for(key).release_write()

    def runlock(self, key: str) -> None:
        """Release the shared lock for ``key``."""
        self._lock_for(key).release_read()

    def locks(self, *keys: str) -> None:
        """Take exclusive locks for several keys in a deadlock-free order."""
        for index in self._indices(keys, reverse=False):
            self._table[index].acquire_write()

    def rlocks(self, *keys: str) -> None:
        """Take shared locks for several keys in a deadlock-free order."""
        for index in self._indices(keys, reverse=False):
            self._table[index].acquire_read()

    def unlocks(self, *keys: str) -> None:
        """Release exclusive locks taken by :meth:`locks`."""
        for index in self._indices(keys, reverse=True):
            self._table[index].release_write()

    def runlocks(self, *keys: str) -> None:
        """Release shared locks taken by :meth:`rlocks`."""
        for index in self._indices(keys, reverse=True):
            self._table[index].release_read()

    def rw_locks(self, write_keys: Iterable[str] | None, read_keys: Iterable[str] | None) -> None:
        """Lock write keys exclusively and read keys shared; duplicates are allowed."""
        writes = list(write_keys or ())
        reads = list(read_keys or ())
        write_indices = {self._spread(fnv32(key)) for key in writes}
        for index in self._indices(writes + reads, reverse=False):
            if index in write_indices:
                self._table[index].acquire_write()
            else:
                self._table[index].acquire_read()

    def rw_unlocks(self, write_keys: Iterable[str] | None, read_keys: Iterable[str] | None) -> None:
        """Release locks taken by :meth:`rw_locks` with the same keys."""
        writes = list(write_keys or ())
        reads = list(read_keys or ())
        write_indices = {self._spread(fnv32(key)) for key in writes}
        for index in self._indices(writes + reads, reverse=True):
            if index in write_indices:
                self._table[index].release_write()
            else:
                self._table[index].release_read()