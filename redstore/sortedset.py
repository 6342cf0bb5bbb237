"""A set of members ordered by a floating-point score."""

from __future__ import annotations

from collections.abc import Iterator

from redstore.border import NEGATIVE_INF_BORDER, POSITIVE_INF_BORDER, ScoreBorder
from redstore.skiplist import Element, Skiplist


class SortedSet:
    """Members with scores, ranked by score then member; ranks start at 0."""

    def __init__(self) -> None:
        self._dict: dict[str, Element] = {}
        self._skiplist = Skiplist()

    def add(self, member: str, score: float) -> bool:
        """Set the score of ``member``; return whether it was newly inserted."""
        old = self._dict.get(member)
        self._dict[member] = Element(member, score)
        if old is not None:
            if score != old.score:
                self._skiplist.remove(member, old.score)
                self._skiplist.insert(member, score)
            return False
        self._skiplist.insert(member, score)
        return True

    def __len__(self) -> int:
        return len(self._dict)

    def get(self, member: str) -> Element | None:
        """Return the element for ``member``, or ``None``."""
        return self._dict.get(member)

    def remove(self, member: str) -> bool:
        """Remove ``member``; return whether it was present."""
        element = self._dict.pop(member, None)
        if element is None:
            return False
        self._skiplist.remove(member, element.score)
        return True

    def get_rank(self, member: str, desc: bool) -> int:
        """Return the 0-based rank of ``member``, or -1 if absent."""
        element = self._dict.get(member)
        if element is None:
            return -1
        rank = self._skiplist.get_rank(member, element.score)
        if desc:
            return len(self._skiplist) - rank
        return rank - 1

    def iterate(self, start: int, stop: int, desc: bool) -> Iterator[Element]:
        """Yield the elements ranked within ``[start, stop)``."""
        size = len(self)
        if not 0 <= start < size:
            raise IndexError(f"illegal start {start}")
        if not start <= stop <= size:
            raise IndexError(f"illegal end {stop}")
        return self._walk(start, stop, desc, size)

    def _walk(self, start: int, stop: int, desc: bool, size: int) -> Iterator[Element]:
        if desc:
            node = self._skiplist.tail if start == 0 else self._skiplist.get_by_rank(size - start)
        else:
            node = self._skiplist.first if start == 0 else self._skiplist.get_by_rank(start + 1)
        for _ in range(stop - start):
            if node is None:
                return
            yield node.element
            node = node.backward if desc else node.next

    def range(self, start: int, stop: int, desc: bool) -> list[Element]:
        """Return the elements ranked within ``[start, stop)``."""
        return list(self.iterate(start, stop, desc))

    def count(self, low: ScoreBorder, high: ScoreBorder) -> int:
        """Return how many elements have a score within the borders."""
        total = 0
        for element in self._skiplist:
            if not low.less(element.score):
                continue
            if not high.greater(element.score):
                break
            total += 1
        return total

    def iterate_by_score(
        self,
        low: ScoreBorder,
        high: ScoreBorder,
        offset: int,
        limit: int,
        desc: bool,
    ) -> Iterator[Element]:
        """Yield elements within the borders, skipping ``offset``; ``limit`` < 0 means all."""
        if desc:
            node = self._skiplist.get_last_in_score_range(low, high)
        else:
            node = self._skiplist.get_first_in_score_range(low, high)

        while node is not None and offset > 0:
            node = node.backward if desc else node.next
            offset -= 1

        yielded = 0
        while node is not None and (limit < 0 or yielded < limit):
            if not (low.less(node.score) and high.greater(node.score)):
                return
            yield node.element
            yielded += 1
            node = node.backward if desc else node.next

    def range_by_score(
        self,
        low: ScoreBorder,
        high: ScoreBorder,
        offset: int,
        limit: int,
        desc: bool,
    ) -> list[Element]:
        """Return elements within the borders; ``limit`` < 0 means no limit."""
        if limit == 0 or offset < 0:
            return []
        return list(self.iterate_by_score(low, high, offset, limit, desc))

    def remove_by_score(self, low: ScoreBorder, high: ScoreBorder) -> int:
        """Remove elements within the borders; return how many were removed."""
        removed = self._skiplist.remove_range_by_score(low, high, 0)
        for element in removed:
            del self._dict[element.member]
        return len(removed)

    def pop_min(self, count: int) -> list[Element]:
        """Remove and return up to ``count`` lowest elements; ``count`` <= 0 means all."""
        first = self._skiplist.get_first_in_score_range(NEGATIVE_INF_BORDER, POSITIVE_INF_BORDER)
        if first is None:
            return []
        border = ScoreBorder(value=first.score, exclude=False)
        removed = self._skiplist.remove_range_by_score(border, POSITIVE_INF_BORDER, count)
        for element in removed:
            del self._dict[element.member]
        return removed

    def remove_by_rank(self, start: int, stop: int) -> int:
        """Remove elements ranked within ``[start, stop)``; return how many were removed."""
        removed = self._skiplist.remove_range_by_rank(start + 1, stop + 1)
        for element in removed:
            del self._dict[element.member]
        return len(removed)