"""A skip list ordering members by score, then by member name."""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass

from redstore.border import Infinity, ScoreBorder

MAX_LEVEL = 16


@dataclass(frozen=True)
class Element:
    """A member together with its score."""

    member: str
    score: float


class _Level:
    __slots__ = ("forward", "span")

    def __init__(self) -> None:
        self.forward: _Node | None = None
        self.span = 0


class _Node:
    __slots__ = ("element", "backward", "levels")

    def __init__(self, level: int, member: str, score: float) -> None:
        self.element = Element(member, score)
        self.backward: _Node | None = None
        self.levels = [_Level() for _ in range(level)]

    @property
    def member(self) -> str:
        return self.element.member

    @property
    def score(self) -> float:
        return self.element.score

    @property
    def next(self) -> _Node | None:
        """The following node on the base level."""
        return self.levels[0].forward

    def precedes(self, member: str, score: float) -> bool:
        return self.score < score or (self.score == score and self.member < member)


def random_level() -> int:
    """Return a level in ``[1, MAX_LEVEL]``; each level is half as likely as the one below."""
    total = (1 << MAX_LEVEL) - 1
    k = random.randrange(total)
    return MAX_LEVEL - (k + 1).bit_length() + 1


def _bounded(border: ScoreBorder) -> bool:
    return border.inf == Infinity.NONE


class Skiplist:
    """Nodes ordered by ascending score, ties broken by member."""

    def __init__(self) -> None:
        self._header = _Node(MAX_LEVEL, "", 0.0)
        self._tail: _Node | None = None
        self._length = 0
        self._level = 1

    def __len__(self) -> int:
        return self._length

    @property
    def first(self) -> _Node | None:
        """The node with the lowest score, or ``None`` when empty."""
        return self._header.levels[0].forward

    @property
    def tail(self) -> _Node | None:
        """The node with the highest score, or ``None`` when empty."""
        return self._tail

    def __iter__(self) -> Iterator[Element]:
        node = self.first
        while node is not None:
            yield node.element
            node = node.next

    def insert(self, member: str, score: float) -> Element:
        """Link a new node for ``member``; the caller ensures it is not present."""
        update: list[_Node] = [self._header] * MAX_LEVEL
        rank = [0] * MAX_LEVEL

        node = self._header
        for i in reversed(range(self._level)):
            rank[i] = 0 if i == self._level - 1 else rank[i + 1]
            while (fwd := node.levels[i].forward) is not None and fwd.precedes(member, score):
                rank[i] += node.levels[i].span
                node = fwd
            update[i] = node

        level = random_level()
        if level > self._level:
            for i in range(self._level, level):
                rank[i] = 0
                update[i] = self._header
                self._header.levels[i].span = self._length
            self._level = level

        new_node = _Node(level, member, score)
        for i in range(level):
            prev_level = update[i].levels[i]
            new_node.levels[i].forward = prev_level.forward
            prev_level.forward = new_node
            new_node.levels[i].span = prev_level.span - (rank[0] - rank[i])
            prev_level.span = (rank[0] - rank[i]) + 1

        for i in range(level, self._level):
            update[i].levels[i].span += 1

        new_node.backward = None if update[0] is self._header else update[0]
        following = new_node.levels[0].forward
        if following is not None:
            following.backward = new_node
        else:
            self._tail = new_node
        self._length += 1
        return new_node.element

    def _remove_node(self, node: _Node, update: list[_Node]) -> None:
        for i in range(self._level):
            prev_level = update[i].levels[i]
            if prev_level.forward is node:
                prev_level.span += node.levels[i].span - 1
                prev_level.forward = node.levels[i].forward
            else:
                prev_level.span -= 1
        following = node.levels[0].forward
        if following is not None:
            following.backward = node.backward
        else:
            self._tail = node.backward
        while self._level > 1 and self._header.levels[self._level - 1].forward is None:
            self._level -= 1
        self._length -= 1

    def remove(self, member: str, score: float) -> bool:
        """Unlink the node for ``member`` with ``score``; return whether it was found."""
        update: list[_Node] = [self._header] * MAX_LEVEL
        node = self._header
        for i in reversed(range(self._level)):
            while (fwd := node.levels[i].forward) is not None and fwd.precedes(member, score):
                node = fwd
            update[i] = node
        target = node.levels[0].forward
        if target is not None and target.score == score and target.member == member:
            self._remove_node(target, update)
            return True
        return False

    def get_rank(self, member: str, score: float) -> int:
        """Return the 1-based rank of ``member``, or 0 if it is absent."""
        rank = 0
        node = self._header
        for i in reversed(range(self._level)):
            while (fwd := node.levels[i].forward) is not None and (
                fwd.score < score or (fwd.score == score and fwd.member <= member)
            ):
                rank += node.levels[i].span
                node = fwd
            if node is not self._header and node.member == member:
                return rank
        return 0

    def get_by_rank(self, rank: int) -> _Node | None:
        """Return the node at the 1-based ``rank``, or ``None``."""
        if rank < 1:
            return None
        traversed = 0
        node = self._header
        for level in reversed(range(self._level)):
            while (fwd := node.levels[level].forward) is not None and (
                traversed + node.levels[level].span <= rank
            ):
                traversed += node.levels[level].span
                node = fwd
            if traversed == rank:
                return node
        return None

    def has_in_range(self, low: ScoreBorder, high: ScoreBorder) -> bool:
        """Return whether any node's score lies between the two borders."""
        if _bounded(low) and _bounded(high):
            if low.value > high.value or (
                low.value == high.value and (low.exclude or high.exclude)
            ):
                return False
        tail = self._tail
        if tail is None or not low.less(tail.score):
            return False
        first = self.first
        if first is None or not high.greater(first.score):
            return False
        return True

    def get_first_in_score_range(self, low: ScoreBorder, high: ScoreBorder) -> _Node | None:
        """Return the lowest node within the borders, or ``None``."""
        if not self.has_in_range(low, high):
            return None
        node = self._header
        for level in reversed(range(self._level)):
            while (fwd := node.levels[level].forward) is not None and not low.less(fwd.score):
                node = fwd
        candidate = node.levels[0].forward
        if candidate is None or not high.greater(candidate.score):
            return None
        return candidate

    def get_last_in_score_range(self, low: ScoreBorder, high: ScoreBorder) -> _Node | None:
        """Return the highest node within the borders, or ``None``."""
        if not self.has_in_range(low, high):
            return None
        node = self._header
        for level in reversed(range(self._level)):
            while (fwd := node.levels[level].forward) is not None and high.greater(fwd.score):
                node = fwd
        if node is self._header or not low.less(node.score):
            return None
        return node

    def remove_range_by_score(
        self, low: ScoreBorder, high: ScoreBorder, limit: int
    ) -> list[Element]:
        """Remove nodes within the borders in ascending order; ``limit`` <= 0 means all."""
        update: list[_Node] = [self._header] * MAX_LEVEL
        removed: list[Element] = []
        node = self._header
        for i in reversed(range(self._level)):
            while (fwd := node.levels[i].forward) is not None and not low.less(fwd.score):
                node = fwd
            update[i] = node

        current = node.levels[0].forward
        while current is not None:
            if not high.greater(current.score):
                break
            following = current.levels[0].forward
            removed.append(current.element)
            self._remove_node(current, update)
            if limit > 0 and len(removed) == limit:
                break
            current = following
        return removed

    def remove_range_by_rank(self, start: int, stop: int) -> list[Element]:
        """Remove nodes with 1-based rank in ``[start, stop)``."""
        traversed = 0
        update: list[_Node] = [self._header] * MAX_LEVEL
        removed: list[Element] = []
        node = self._header
        for level in reversed(range(self._level)):
            while (fwd := node.levels[level].forward) is not None and (
                traversed + node.levels[level].span < start
            ):
                traversed += node.levels[level].span
                node = fwd
            update[level] = node

        traversed += 1
        current = node.levels[0].forward
        while current is not None and traversed < stop:
            following = current.levels[0].forward
            removed.append(current.element)
            self._remove_node(current, update)
            current = following
            traversed += 1
        return removed