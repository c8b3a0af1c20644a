import pytest

from cset import CSet, SortedCSet


def assert_ascending(s):
    prev = None
    for o in s:
        if prev is not None:
            assert prev < o
        prev = o
    return prev


def test_sorted_cset():
    s = SortedCSet.of(4, 5, 3, 1, 2)
    assert s.to_list() == [1, 2, 3, 4, 5]
    assert assert_ascending(s) is not None

    s.map_in_place(lambda o: -2 * o)
    assert s.to_list() == [-10, -8, -6, -4, -2]

    visited = []
    ret = s.each(visited.append)
    assert ret is s
    assert visited == [-10, -8, -6, -4, -2]
    assert assert_ascending(s) is not None


def test_new_with_transform():
    s = SortedCSet([2, 1, 3], transform=lambda o: o * -2)
    assert s.to_list() == [-6, -4, -2]


def test_delete_if_visits_in_ascending_order():
    s = SortedCSet(["one", "two", "three", "four"])
    visited = []

    def predicate(o):
        visited.append(o)
        return o.startswith("t")

    ret = s.delete_if(predicate)
    assert ret is s
    assert s.to_list() == ["four", "one"]
    assert visited == ["four", "one", "three", "two"]


def test_try_delete_if_visits_in_ascending_order():
    s = SortedCSet(["one", "two", "three", "four"])
    visited = []

    def predicate(o):
        visited.append(o)
        return o.startswith("t")

    ret = s.try_delete_if(predicate)
    assert ret is s
    assert s.to_list() == ["four", "one"]
    assert visited == ["four", "one", "three", "two"]


def test_try_delete_if_without_matches():
    s = SortedCSet(["one", "two", "three", "four"])
    visited = []

    def predicate(o):
        visited.append(o)
        return False

    ret = s.try_delete_if(predicate)
    assert ret is None
    assert s.to_list() == ["four", "one", "three", "two"]
    assert visited == ["four", "one", "three", "two"]


def test_add_and_delete_keep_order():
    s = SortedCSet.of(5, 1)
    assert s.add(3) is s
    assert s.to_list() == [1, 3, 5]
    assert s.try_add(3) is None
    assert s.to_list() == [1, 3, 5]
    assert s.delete(1) is s
    assert s.to_list() == [3, 5]
    assert s.try_delete(1) is None
    assert list(reversed(s)) == [5, 3]


def test_elements_tied_in_order():
    s = SortedCSet.of(1, 1.0, 2)
    assert len(s) == 3
    s.delete(1.0)
    assert s.to_list() == [1, 2]
    assert type(s.to_list()[0]) is int


def test_pop_takes_the_smallest():
    s = SortedCSet.of(3, 1, 2)
    assert s.pop() == 1
    assert s.to_list() == [2, 3]


def test_incomparable_elements():
    s = SortedCSet.of(1, 2)
    with pytest.raises(TypeError):
        s.add("a")
    assert s.to_list() == [1, 2]
    assert len(s) == 2
    assert "a" not in s

    with pytest.raises(TypeError):
        SortedCSet([1, "a"])

    with pytest.raises(TypeError):
        s.map_in_place(lambda o: "a" if o == 1 else o)
    assert s.to_list() == [1, 2]

    with pytest.raises(TypeError):
        s.merge([3, None])
    assert s.to_list() == [1, 2, 3]


def test_bulk_changes_keep_order():
    s = SortedCSet.of(5, 3)
    assert s.merge([4, 1]).to_list() == [1, 3, 4, 5]
    assert s.subtract([3]).to_list() == [1, 4, 5]
    assert s.replace([9, 7]).to_list() == [7, 9]
    assert s.clear().to_list() == []


def test_operators_return_sorted_sets():
    s = SortedCSet.of(3, 1)
    for result in [s | [2], s + [2], s - [1], s & [1, 4], s ^ [1, 5]]:
        assert type(result) is SortedCSet
        assert result.to_list() == sorted(result.to_list())
    assert (s | [2]).to_list() == [1, 2, 3]
    assert (s ^ [1, 5]).to_list() == [3, 5]


def test_dup_is_independent():
    s = SortedCSet.of(2, 1)
    t = s.dup()
    t.add(9)
    t.delete(1)
    assert s.to_list() == [1, 2]
    assert t.to_list() == [2, 9]


def test_equal_to_unsorted_set():
    assert SortedCSet.of(1, 2) == CSet.of(2, 1)
    assert CSet.of(2, 1) == SortedCSet.of(1, 2)


def test_repr():
    assert repr(SortedCSet.of(3, 1, 2)) == "SortedCSet({1, 2, 3})"
    assert repr(SortedCSet()) == "SortedCSet()"


def test_divide():
    groups = SortedCSet.of(1, 2, 3, 5, 6, 9).divide(lambda a, b: abs(a - b) == 1)
    assert type(groups) is CSet
    assert all(type(group) is SortedCSet for group in groups)
    assert sorted(group.to_list() for group in groups) == [[1, 2, 3], [5, 6], [9]]


def test_classify():
    groups = SortedCSet.of(4, 3, 2, 1).classify(lambda o: o % 2)
    assert groups[0].to_list() == [2, 4]
    assert groups[1].to_list() == [1, 3]
