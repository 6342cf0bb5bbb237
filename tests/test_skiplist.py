import random
from collections import Counter

import pytest

from redstore.border import parse_score_border
from redstore.skiplist import MAX_LEVEL, Element, Skiplist, random_level


def make(pairs):
    sl = Skiplist()
    for member, score in pairs:
        sl.insert(member, score)
    return sl


SAMPLE = [("c", 3.0), ("a", 1.0), ("e", 5.0), ("b", 2.0), ("d", 4.0)]


def test_random_level_within_bounds_and_skewed():
    counts = Counter(random_level() for _ in range(10000))
    assert min(counts) >= 1
    assert max(counts) <= MAX_LEVEL
    assert counts[1] > counts[3]


def test_insert_orders_by_score():
    sl = make(SAMPLE)
    assert len(sl) == 5
    assert [e.member for e in sl] == ["a", "b", "c", "d", "e"]
    assert sl.first.member == "a"
    assert sl.tail.member == "e"


def test_insert_returns_element():
    sl = Skiplist()
    assert sl.insert("x", 1.5) == Element("x", 1.5)


def test_same_score_ordered_by_member():
    sl = make([("b", 1.0), ("a", 1.0), ("c", 0.0)])
    assert [e.member for e in sl] == ["c", "a", "b"]


def test_get_rank():
    sl = make(SAMPLE)
    assert sl.get_rank("a", 1.0) == 1
    assert sl.get_rank("d", 4.0) == 4
    assert sl.get_rank("zz", 9.0) == 0


def test_get_by_rank():
    sl = make(SAMPLE)
    assert sl.get_by_rank(1).member == "a"
    assert sl.get_by_rank(5).member == "e"
    assert sl.get_by_rank(6) is None
    assert sl.get_by_rank(0) is None


def test_remove():
    sl = make(SAMPLE)
    assert sl.remove("c", 3.0) is True
    assert sl.remove("c", 3.0) is False
    assert sl.remove("d", 1.0) is False
    assert [e.member for e in sl] == ["a", "b", "d", "e"]
    assert len(sl) == 4
    assert sl.get_rank("d", 4.0) == 3


def test_remove_tail_updates_tail():
    sl = make(SAMPLE)
    sl.remove("e", 5.0)
    assert sl.tail.member == "d"
    assert sl.tail.backward.member == "c"


def test_has_in_range():
    sl = make(SAMPLE)
    assert sl.has_in_range(parse_score_border("2"), parse_score_border("4"))
    assert not sl.has_in_range(parse_score_border("(5"), parse_score_border("+inf"))
    assert not sl.has_in_range(parse_score_border("4"), parse_score_border("2"))
    assert not sl.has_in_range(parse_score_border("(3"), parse_score_border("3"))
    assert sl.has_in_range(parse_score_border("3"), parse_score_border("+inf"))
    assert not Skiplist().has_in_range(parse_score_border("-inf"), parse_score_border("+inf"))


def test_first_and_last_in_score_range():
    sl = make(SAMPLE)
    low, high = parse_score_border("(1"), parse_score_border("(4")
    assert sl.get_first_in_score_range(low, high).member == "b"
    assert sl.get_last_in_score_range(low, high).member == "c"
    assert sl.get_first_in_score_range(parse_score_border("(2"), parse_score_border("(3")) is None
    assert sl.get_last_in_score_range(parse_score_border("(2"), parse_score_border("(3")) is None


def test_remove_range_by_score():
    sl = make(SAMPLE)
    removed = sl.remove_range_by_score(parse_score_border("2"), parse_score_border("4"), 0)
    assert [e.member for e in removed] == ["b", "c", "d"]
    assert [e.member for e in sl] == ["a", "e"]


def test_remove_range_by_score_with_limit():
    sl = make(SAMPLE)
    removed = sl.remove_range_by_score(parse_score_border("-inf"), parse_score_border("+inf"), 2)
    assert removed == [Element("a", 1.0), Element("b", 2.0)]
    assert len(sl) == 3


def test_remove_range_by_rank():
    sl = make(SAMPLE)
    removed = sl.remove_range_by_rank(2, 4)
    assert [e.member for e in removed] == ["b", "c"]
    assert [e.member for e in sl] == ["a", "d", "e"]
    assert sl.get_rank("e", 5.0) == 3


def test_random_operations_keep_invariants():
    rng = random.Random(7)
    sl = Skiplist()
    expected = {}
    for i in range(400):
        member = f"m{i}"
        score = float(rng.randint(0, 50))
        sl.insert(member, score)
        expected[member] = score
    for member in rng.sample(sorted(expected), 200):
        assert sl.remove(member, expected.pop(member))

    ordered = sorted(expected.items(), key=lambda kv: (kv[1], kv[0]))
    assert [(e.member, e.score) for e in sl] == ordered
    assert len(sl) == len(ordered)
    for rank, (member, score) in enumerate(ordered, start=1):
        assert sl.get_rank(member, score) == rank
        assert sl.get_by_rank(rank).member == member

    backwards = []
    node = sl.tail
    while node is not None:
        backwards.append(node.member)
        node = node.backward
    assert backwards == [m for m, _ in reversed(ordered)]


@pytest.mark.parametrize("count", [1, 3, 5])
def test_remove_all_by_rank_leaves_consistent_list(count):
    sl = make(SAMPLE)
    sl.remove_range_by_rank(1, count + 1)
    assert len(sl) == 5 - count
    assert [e.member for e in sl] == ["a", "b", "c", "d", "e"][count:]