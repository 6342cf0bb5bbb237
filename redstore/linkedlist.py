"""A doubly linked list with index access and predicate-based removal."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

Expected = Callable[[Any], bool]


class _Node:
    __slots__ = ("val", "prev", "next")

    def __init__(self, val: Any) -> None:
        self.val = val
        self.prev: _Node | None = None
        self.next: _Node | None = None


class LinkedList:
    """A doubly linked list of arbitrary values."""

    def __init__(self, *values: Any) -> None:
        self._first: _Node | None = None
        self._last: _Node | None = None
        self._size = 0
        for value in values:
            self.add(value)

    def _check_index(self, index: int, upper: int) -> None:
        if not 0 <= index < upper:
            raise IndexError("index out of bound")

    def _find(self, index: int) -> _Node:
        if index < self._size // 2:
            node = self._first
            for _ in range(index):
                node = node.next
        else:
            node = self._last
            for _ in range(self._size - 1 - index):
                node = node.prev
        return node

    def _unlink(self, node: _Node) -> None:
        if node.prev is None:
            self._first = node.next
        else:
            node.prev.next = node.next
        if node.next is None:
            self._last = node.prev
        else:
            node.next.prev = node.prev
        node.prev = None
        node.next = None
        self._size -= 1

    def _nodes(self) -> Iterator[_Node]:
        node = self._first
        while node is not None:
            following = node.next
            yield node
            node = following

    def _nodes_reversed(self) -> Iterator[_Node]:
        node = self._last
        while node is not None:
            preceding = node.prev
            yield node
            node = preceding

    def _remove_matching(self, nodes: Iterable[_Node], expected: Expected, count: int) -> int:
        removed = 0
        for node in nodes:
            if expected(node.val):
                self._unlink(node)
                removed += 1
                if removed == count:
                    break
        return removed

    def add(self, val: Any) -> None:
        """Append ``val`` at the tail."""
        node = _Node(val)
        if self._last is None:
            self._first = node
        else:
            node.prev = self._last
            self._last.next = node
        self._last = node
        self._size += 1

    def get(self, index: int) -> Any:
        """Return the value at ``index``."""
        self._check_index(index, self._size)
        return self._find(index).val

    def set(self, index: int, val: Any) -> None:
        """Replace the value at ``index``."""
        self._check_index(index, self._size)
        self._find(index).val = val

    def insert(self, index: int, val: Any) -> None:
        """Insert ``val`` before the element now at ``index``; ``index`` may equal the length."""
        self._check_index(index, self._size + 1)
        if index == self._size:
            self.add(val)
            return
        pivot = self._find(index)
        node = _Node(val)
        node.prev = pivot.prev
        node.next = pivot
        if pivot.prev is None:
            self._first = node
        else:
            pivot.prev.next = node
        pivot.prev = node
        self._size += 1

    def remove(self, index: int) -> Any:
        """Remove the element at ``index`` and return its value."""
        self._check_index(index, self._size)
        node = self._find(index)
        self._unlink(node)
        return node.val

    def remove_last(self) -> Any:
        """Remove the tail element and return its value, or ``None`` if empty."""
        node = self._last
        if node is None:
            return None
        self._unlink(node)
        return node.val

    def remove_all_by_val(self, expected: Expected) -> int:
        """Remove every element matching ``expected``; return how many were removed."""
        return self._remove_matching(self._nodes(), expected, 0)

    def remove_by_val(self, expected: Expected, count: int) -> int:
        """Remove at most ``count`` matching elements, scanning from the head."""
        return self._remove_matching(self._nodes(), expected, count)

    def reverse_remove_by_val(self, expected: Expected, count: int) -> int:
        """Remove at most ``count`` matching elements, scanning from the tail."""
        return self._remove_matching(self._nodes_reversed(), expected, count)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        for node in self._nodes():
            yield node.val

    def contains(self, expected: Expected) -> bool:
        """Return whether any element matches ``expected``."""
        return any(expected(val) for val in self)

    def range(self, start: int, stop: int) -> list[Any]:
        """Return the values whose index lies within ``[start, stop)``."""
        if not 0 <= start < self._size:
            raise IndexError("`start` out of range")
        if not start <= stop <= self._size:
            raise IndexError("`stop` out of range")
        result = []
        node = self._find(start)
        for _ in range(stop - start):
            result.append(node.val)
            node = node.next
        return result