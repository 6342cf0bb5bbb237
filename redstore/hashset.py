"""A set of strings backed by a hash table."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator

from redstore.dicts import SimpleDict


class HashSet:
    """An unordered set of string members."""

    def __init__(self, *members: str) -> None:
        self._dict = SimpleDict()
        for member in members:
            self.add(member)

    def add(self, val: str) -> int:
        """Add ``val``; return 1 if it was new, else 0."""
        return self._dict.put(val, None)

    def remove(self, val: str) -> int:
        """Remove ``val``; return 1 if it was present, else 0."""
        return self._dict.remove(val)

    def __contains__(self, val: object) -> bool:
        return val in self._dict

    def __len__(self) -> int:
        return len(self._dict)

    def __iter__(self) -> Iterator[str]:
        for key, _ in self._dict.items():
            yield key

    def to_list(self) -> list[str]:
        """Return the members as a list."""
        return list(self)

    def shallow_copy(self) -> HashSet:
        """Return a new set with the same members."""
        return HashSet(*self)

    def random_members(self, limit: int) -> list[str]:
        """Return ``limit`` random members, possibly with repeats."""
        return self._dict.random_keys(limit)

    def random_distinct_members(self, limit: int) -> list[str]:
        """Return up to ``limit`` random members without repeats."""
        return self._dict.random_distinct_keys(limit)


def intersect(*sets: HashSet) -> HashSet:
    """Return the members present in every given set."""
    result = HashSet()
    if not sets:
        return result
    counts = Counter(member for s in sets for member in s)
    for member, count in counts.items():
        if count == len(sets):
            result.add(member)
    return result


def union(*sets: HashSet) -> HashSet:
    """Return the members present in any given set."""
    result = HashSet()
    for s in sets:
        for member in s:
            result.add(member)
    return result


def diff(*sets: HashSet) -> HashSet:
    """Return the members of the first set absent from all the others."""
    if not sets:
        return HashSet()
    result = sets[0].shallow_copy()
    for other in sets[1:]:
        for member in other:
            result.remove(member)
        if len(result) == 0:
            break
    return result