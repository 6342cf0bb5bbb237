from redstore.hashset import HashSet, diff, intersect, union


def test_add_has_remove():
    size = 10
    s = HashSet()
    for i in range(size):
        s.add(str(i))
    for i in range(size):
        assert str(i) in s
    for i in range(size):
        assert s.remove(str(i)) == 1
    for i in range(size):
        assert str(i) not in s
    assert len(s) == 0


def test_add_returns_new_count():
    s = HashSet()
    assert s.add("a") == 1
    assert s.add("a") == 0
    assert s.remove("b") == 0
    assert len(s) == 1


def test_constructor_and_iteration():
    s = HashSet("a", "b", "a")
    assert sorted(s) == ["a", "b"]
    assert sorted(s.to_list()) == ["a", "b"]


def test_shallow_copy_is_independent():
    s = HashSet("a", "b")
    copy = s.shallow_copy()
    copy.add("c")
    assert "c" not in s
    assert sorted(copy) == ["a", "b", "c"]


def test_intersect():
    result = intersect(HashSet("a", "b", "c"), HashSet("b", "c", "d"), HashSet("c", "b"))
    assert sorted(result) == ["b", "c"]
    assert len(intersect()) == 0


def test_union():
    result = union(HashSet("a", "b"), HashSet("b", "c"))
    assert sorted(result) == ["a", "b", "c"]
    assert len(union()) == 0


def test_diff():
    first = HashSet("a", "b", "c")
    result = diff(first, HashSet("b"), HashSet("c"))
    assert sorted(result) == ["a"]
    assert sorted(first) == ["a", "b", "c"]
    assert len(diff()) == 0


def test_random_members():
    s = HashSet(*(str(i) for i in range(20)))
    picked = s.random_members(5)
    assert len(picked) == 5
    assert all(member in s for member in picked)


def test_random_distinct_members():
    s = HashSet(*(str(i) for i in range(20)))
    picked = s.random_distinct_members(5)
    assert len(picked) == 5
    assert len(set(picked)) == 5
    assert sorted(s.random_distinct_members(100)) == sorted(s)