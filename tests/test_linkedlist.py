from itertools import chain

import pytest

from redstore.linkedlist import LinkedList

SIZE = 10


def test_add_keeps_order():
    lst = LinkedList()
    for i in range(SIZE):
        lst.add(i)
    assert list(lst) == list(range(SIZE))
    assert len(lst) == SIZE


def test_constructor_values():
    assert list(LinkedList(1, 2, 3)) == [1, 2, 3]


@pytest.mark.parametrize("target, found", [(1, True), (-1, False)])
def test_contains(target, found):
    assert LinkedList(1, 2, 3, 4).contains(lambda a: a == target) is found


def test_get_each_index():
    lst = LinkedList(*range(SIZE))
    assert [lst.get(i) for i in range(SIZE)] == list(range(SIZE))


@pytest.mark.parametrize("index", [3, -1])
def test_get_out_of_bound(index):
    with pytest.raises(IndexError):
        LinkedList(0, 1, 2).get(index)


def test_set():
    lst = LinkedList(*range(SIZE))
    for i in range(SIZE):
        lst.set(i, i * 2)
    assert list(lst) == [i * 2 for i in range(SIZE)]


def test_remove_from_tail_shrinks():
    lst = LinkedList(*range(SIZE))
    for i in reversed(range(SIZE)):
        lst.remove(i)
        assert (len(lst), list(lst)) == (i, list(range(i)))


def test_remove_returns_value():
    lst = LinkedList("a", "b", "c")
    assert lst.remove(1) == "b"
    assert list(lst) == ["a", "c"]


def test_remove_all_by_val():
    lst = LinkedList(*chain.from_iterable((i, i) for i in range(SIZE)))
    index = 0
    while index < len(lst):
        lst.remove_all_by_val(lambda a, index=index: a == index)
        assert index not in list(lst)
        index += 1


@pytest.mark.parametrize("method", ["remove_by_val", "reverse_remove_by_val"])
def test_remove_one_by_val(method):
    lst = LinkedList(*chain.from_iterable((i, i) for i in range(SIZE)))
    remove_one = getattr(lst, method)
    assert [remove_one(lambda a, i=i: a == i, 1) for i in range(SIZE)] == [1] * SIZE
    assert list(lst) == list(range(SIZE))
    for i in range(SIZE):
        remove_one(lambda a, i=i: a == i, 1)
    assert len(lst) == 0


def test_reverse_remove_takes_from_tail():
    lst = LinkedList("x", 1, "x", 2, "x")
    assert lst.reverse_remove_by_val(lambda a: a == "x", 2) == 2
    assert list(lst) == ["x", 1, 2]


def test_insert_interleaves():
    lst = LinkedList(*range(SIZE))
    for i in range(SIZE):
        lst.insert(i * 2, i)
        expected = [j // 2 if j < (i + 1) * 2 else j - i - 1 for j in range(len(lst))]
        assert [lst.get(j) for j in range(len(lst))] == expected


def test_insert_at_end_and_out_of_bound():
    lst = LinkedList(0, 1)
    lst.insert(2, 9)
    assert list(lst) == [0, 1, 9]
    with pytest.raises(IndexError):
        lst.insert(5, 1)


def test_remove_last():
    lst = LinkedList(*range(SIZE))
    assert [lst.remove_last() for _ in range(SIZE)] == list(reversed(range(SIZE)))
    assert lst.remove_last() is None


@pytest.mark.parametrize(
    "start, stop",
    [(start, stop) for start in range(SIZE) for stop in range(start, SIZE)],
)
def test_range(start, stop):
    assert LinkedList(*range(SIZE)).range(start, stop) == list(range(start, stop))


@pytest.mark.parametrize("start, stop", [(5, 5), (2, 1), (0, 6)])
def test_range_out_of_bound(start, stop):
    with pytest.raises(IndexError):
        LinkedList(*range(5)).range(start, stop)