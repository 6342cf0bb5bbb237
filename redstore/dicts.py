"""Key-value dictionaries: a plain one and a sharded thread-safe one."""

from __future__ import annotations

import random
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from redstore.lock import RWLock, fnv32

_MAX_INT32 = 2**31 - 1


class Dict(ABC):
    """Interface of a string-keyed dictionary.

    The ``put`` family and ``remove`` return the number of entries
    inserted, updated or deleted (0 or 1).
    """

    @abstractmethod
    def get(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, exists)`` for ``key``."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def put(self, key: str, val: Any) -> int:
        """Store ``val``; return 1 if the key is new, else 0."""

    @abstractmethod
    def put_if_absent(self, key: str, val: Any) -> int:
        """Store ``val`` only if the key is missing; return 1 if stored."""

    @abstractmethod
    def put_if_exists(self, key: str, val: Any) -> int:
        """Store ``val`` only if the key exists; return 1 if stored."""

    @abstractmethod
    def remove(self, key: str) -> int:
        """Delete ``key``; return 1 if it existed."""

    @abstractmethod
    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(key, value)`` pairs."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all keys."""

    @abstractmethod
    def random_keys(self, limit: int) -> list[str]:
        """Return ``limit`` random keys, possibly with repeats."""

    @abstractmethod
    def random_distinct_keys(self, limit: int) -> list[str]:
        """Return up to ``limit`` random keys without repeats."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key)[1]


class _Policy(Enum):
    UPSERT = auto()
    INSERT = auto()
    UPDATE = auto()


def _lookup(data: dict[str, Any], key: str) -> tuple[Any, bool]:
    if key in data:
        return data[key], True
    return None, False


def _store(data: dict[str, Any], key: str, val: Any, policy: _Policy) -> tuple[int, bool]:
    """Store by ``policy``; return the reported result and whether a key was added."""
    existed = key in data
    if (policy is _Policy.INSERT and existed) or (policy is _Policy.UPDATE and not existed):
        return 0, False
    data[key] = val
    result = 1 if policy is _Policy.UPDATE or not existed else 0
    return result, not existed


def _discard(data: dict[str, Any], key: str) -> int:
    if key in data:
        del data[key]
        return 1
    return 0


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError("limit must not be negative")


class SimpleDict(Dict):
    """A dictionary wrapper without any locking."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> tuple[Any, bool]:
        return _lookup(self._data, key)

    def __len__(self) -> int:
        return len(self._data)

    def put(self, key: str, val: Any) -> int:
        return _store(self._data, key, val, _Policy.UPSERT)[0]

    def put_if_absent(self, key: str, val: Any) -> int:
        return _store(self._data, key, val, _Policy.INSERT)[0]

    def put_if_exists(self, key: str, val: Any) -> int:
        return _store(self._data, key, val, _Policy.UPDATE)[0]

    def remove(self, key: str) -> int:
        return _discard(self._data, key)

    def items(self) -> Iterator[tuple[str, Any]]:
        yield from list(self._data.items())

    def keys(self) -> list[str]:
        return list(self._data)

    def random_keys(self, limit: int) -> list[str]:
        _check_limit(limit)
        if not self._data:
            return []
        return random.choices(list(self._data), k=limit)

    def random_distinct_keys(self, limit: int) -> list[str]:
        _check_limit(limit)
        return random.sample(list(self._data), min(limit, len(self._data)))

    def clear(self) -> None:
        self._data = {}


def compute_capacity(param: int) -> int:
    """Round a requested shard count up to a power of two, at least 16."""
    if param <= 16:
        return 16
    n = param - 1
    for shift in (1, 2, 4, 8, 16):
        n |= n >> shift
    if n < 0:
        return _MAX_INT32
    return n + 1


@dataclass
class _Shard:
    data: dict[str, Any] = field(default_factory=dict)
    lock: RWLock = field(default_factory=RWLock)


@contextmanager
def _holding(lock: RWLock, exclusive: bool) -> Iterator[None]:
    if exclusive:
        lock.acquire_write()
    else:
        lock.acquire_read()
    try:
        yield
    finally:
        if exclusive:
            lock.release_write()
        else:
            lock.release_read()


class ConcurrentDict(Dict):
    """A thread-safe dictionary split into independently locked shards.

    The ``*_with_lock`` methods skip locking; callers hold the shard locks
    through :meth:`rw_locks` instead.
    """

    def __init__(self, shard_count: int) -> None:
        self._shard_count = compute_capacity(shard_count)
        self._count_lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        self._table = [_Shard() for _ in range(self._shard_count)]
        self._count = 0

    def _index(self, key: str) -> int:
        return (len(self._table) - 1) & fnv32(key)

    def _shard(self, key: str) -> _Shard:
        return self._table[self._index(key)]

    def _add_count(self, delta: int) -> None:
        with self._count_lock:
            self._count += delta

    def _locked(self, op: Callable[..., Any], key: str, *args: Any) -> Any:
        shard = self._shard(key)
        with _holding(shard.lock, exclusive=True):
            return op(shard, key, *args)

    def _unlocked(self, op: Callable[..., Any], key: str, *args: Any) -> Any:
        return op(self._shard(key), key, *args)

    @staticmethod
    def _get_in(shard: _Shard, key: str) -> tuple[Any, bool]:
        return _lookup(shard.data, key)

    def _store_in(self, shard: _Shard, key: str, val: Any, policy: _Policy) -> int:
        result, inserted = _store(shard.data, key, val, policy)
        if inserted:
            self._add_count(1)
        return result

    def _remove_in(self, shard: _Shard, key: str) -> int:
        removed = _discard(shard.data, key)
        if removed:
            self._add_count(-removed)
        return removed

    def get(self, key: str) -> tuple[Any, bool]:
        return self._locked(self._get_in, key)

    def get_with_lock(self, key: str) -> tuple[Any, bool]:
        return self._unlocked(self._get_in, key)

    def __len__(self) -> int:
        with self._count_lock:
            return self._count

    def put(self, key: str, val: Any) -> int:
        return self._locked(self._store_in, key, val, _Policy.UPSERT)

    def put_with_lock(self, key: str, val: Any) -> int:
        return self._unlocked(self._store_in, key, val, _Policy.UPSERT)

    def put_if_absent(self, key: str, val: Any) -> int:
        return self._locked(self._store_in, key, val, _Policy.INSERT)

    def put_if_absent_with_lock(self, key: str, val: Any) -> int:
        return self._unlocked(self._store_in, key, val, _Policy.INSERT)

    def put_if_exists(self, key: str, val: Any) -> int:
        return self._locked(self._store_in, key, val, _Policy.UPDATE)

    def put_if_exists_with_lock(self, key: str, val: Any) -> int:
        return self._unlocked(self._store_in, key, val, _Policy.UPDATE)

    def remove(self, key: str) -> int:
        return self._locked(self._remove_in, key)

    def remove_with_lock(self, key: str) -> int:
        return self._unlocked(self._remove_in, key)

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield entries shard by shard; entries added meanwhile may be missed."""
        for shard in self._table:
            with _holding(shard.lock, exclusive=False):
                snapshot = list(shard.data.items())
            yield from snapshot

    def keys(self) -> list[str]:
        return [key for key, _ in self.items()]

    def _random_key_stream(self) -> Iterator[str]:
        """Yield keys picked from random shards, forever."""
        while True:
            shard = random.choice(self._table)
            with _holding(shard.lock, exclusive=False):
                key = random.choice(tuple(shard.data)) if shard.data else None
            if key is not None:
                yield key

    def random_keys(self, limit: int) -> list[str]:
        _check_limit(limit)
        if limit >= len(self):
            return self.keys()
        stream = self._random_key_stream()
        return [next(stream) for _ in range(limit)]

    def random_distinct_keys(self, limit: int) -> list[str]:
        _check_limit(limit)
        if limit >= len(self):
            return self.keys()
        result: dict[str, None] = {}
        stream = self._random_key_stream()
        while len(result) < limit:
            result[next(stream)] = None
        return list(result)

    def clear(self) -> None:
        self._reset()

    def _lock_plan(self, write_keys, read_keys, reverse: bool) -> Iterator[tuple[RWLock, bool]]:
        """Yield each involved shard lock once, in index order, with its mode."""
        writes = {self._index(key) for key in write_keys or ()}
        reads = {self._index(key) for key in read_keys or ()}
        for index in sorted(writes | reads, reverse=reverse):
            yield self._table[index].lock, index in writes

    def rw_locks(self, write_keys, read_keys) -> None:
        """Lock shards of write keys exclusively and of read keys shared."""
        for lock, exclusive in self._lock_plan(write_keys, read_keys, reverse=False):
            if exclusive:
                lock.acquire_write()
            else:
                lock.acquire_read()

    def rw_unlocks(self, write_keys, read_keys) -> None:
        """Release shard locks taken by :meth:`rw_locks` with the same keys."""
        for lock, exclusive in self._lock_plan(write_keys, read_keys, reverse=True):
            if exclusive:
                lock.release_write()
            else:
                lock.release_read()