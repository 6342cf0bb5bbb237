"""A list stored as a sequence of fixed-capacity pages."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from itertools import chain, islice
from typing import Any

Expected = Callable[[Any], bool]

# Must be even: a full page is split into two halves on insertion.
PAGE_SIZE = 1024


class QuickList:
    """A list of pages, cheaper than a linked list for appends and ranges."""

    def __init__(self) -> None:
        self._pages: list[list[Any]] = []
        self._size = 0

    def _locate(self, index: int) -> tuple[int, int]:
        """Return ``(page index, offset in page)`` of the element at ``index``."""
        if not 0 <= index < self._size:
            raise IndexError("index out of bound")
        if index < self._size // 2:
            begin = 0
            for page_index, page in enumerate(self._pages):
                if begin + len(page) > index:
                    return page_index, index - begin
                begin += len(page)
        else:
            begin = self._size
            last = len(self._pages) - 1
            for page_index, page in zip(range(last, -1, -1), reversed(self._pages)):
                begin -= len(page)
                if begin <= index:
                    return page_index, index - begin
        raise AssertionError("inconsistent page sizes")

    def add(self, val: Any) -> None:
        """Append ``val`` at the tail."""
        self._size += 1
        if not self._pages or len(self._pages[-1]) >= PAGE_SIZE:
            self._pages.append([val])
        else:
            self._pages[-1].append(val)

    def get(self, index: int) -> Any:
        """Return the value at ``index``."""
        page_index, offset = self._locate(index)
        return self._pages[page_index][offset]

    def set(self, index: int, val: Any) -> None:
        """Replace the value at ``index``."""
        page_index, offset = self._locate(index)
        self._pages[page_index][offset] = val

    def insert(self, index: int, val: Any) -> None:
        """Insert ``val`` before the element now at ``index``; ``index`` may equal the length."""
        if index == self._size:
            self.add(val)
            return
        page_index, offset = self._locate(index)
        page = self._pages[page_index]
        if len(page) < PAGE_SIZE:
            page.insert(offset, val)
        else:
            half = PAGE_SIZE // 2
            front, back = page[:half], page[half:]
            if offset < half:
                front.insert(offset, val)
            else:
                back.insert(offset - half, val)
            self._pages[page_index : page_index + 1] = [front, back]
        self._size += 1

    def remove(self, index: int) -> Any:
        """Remove the element at ``index`` and return its value."""
        page_index, offset = self._locate(index)
        page = self._pages[page_index]
        val = page.pop(offset)
        if not page:
            del self._pages[page_index]
        self._size -= 1
        return val

    def remove_last(self) -> Any:
        """Remove the tail element and return its value, or ``None`` if empty."""
        if self._size == 0:
            return None
        self._size -= 1
        last_page = self._pages[-1]
        val = last_page.pop()
        if not last_page:
            self._pages.pop()
        return val

    def _finish_removal(self, removed: int) -> int:
        self._pages = [page for page in self._pages if page]
        self._size -= removed
        return removed

    def remove_all_by_val(self, expected: Expected) -> int:
        """Remove every element matching ``expected``; return how many were removed."""
        return self.remove_by_val(expected, 0)

    def remove_by_val(self, expected: Expected, count: int) -> int:
        """Remove at most ``count`` matching elements scanning from the head; 0 means all."""
        removed = 0
        for page in self._pages:
            offset = 0
            while offset < len(page):
                if expected(page[offset]):
                    del page[offset]
                    removed += 1
                    if removed == count:
                        return self._finish_removal(removed)
                else:
                    offset += 1
        return self._finish_removal(removed)

    def reverse_remove_by_val(self, expected: Expected, count: int) -> int:
        """Remove at most ``count`` matching elements scanning from the tail; 0 means all."""
        removed = 0
        for page in reversed(self._pages):
            offset = len(page) - 1
            while offset >= 0:
                if expected(page[offset]):
                    del page[offset]
                    removed += 1
                    if removed == count:
                        return self._finish_removal(removed)
                offset -= 1
        return self._finish_removal(removed)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        for page in self._pages:
            yield from page

    def __reversed__(self) -> Iterator[Any]:
        for page in reversed(self._pages):
            yield from reversed(page)

    def contains(self, expected: Expected) -> bool:
        """Return whether any element matches ``expected``."""
        return any(expected(val) for val in self)

    def range(self, start: int, stop: int) -> list[Any]:
        """Return the values whose index lies within ``[start, stop)``."""
        if not 0 <= start < self._size:
            raise IndexError("`start` out of range")
        if not start <= stop <= self._size:
            raise IndexError("`stop` out of range")
        page_index, offset = self._locate(start)
        values = chain(
            self._pages[page_index][offset:],
            chain.from_iterable(self._pages[page_index + 1 :]),
        )
        return list(islice(values, stop - start))