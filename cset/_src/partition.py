from __future__ import annotations
import inspect
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, Sequence
from typing import Any, Generic, TypeVar

from .element_key import element_key

__all__ = ["Classification", "classify_elements", "connected_components", "takes_two_arguments"]

KT = TypeVar("KT", bound=Hashable)
T = TypeVar("T")
V = TypeVar("V")

Self = TypeVar("Self", bound="Classification")


class Classification(Mapping[KT, V], Generic[KT, V]):
    """
    Maps key values to their classes, telling key values apart the way set
    elements are told apart. `0`, `False` and `0.0` are different keys.
    """
    _data: dict[Hashable, tuple[KT, V]]

    __slots__ = {
        "_data":
            "Maps the element key of each key value to the key value and its class.",
    }

    def __init__(self: Self, pairs: Iterable[tuple[KT, V]] = (), /) -> None:
        self._data = {}
        for key, value in pairs:
            self._data.setdefault(element_key(key), (key, value))

    def __getitem__(self: Classification[Any, V], key: Any, /) -> V:
        try:
            return self._data[element_key(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self: Classification[KT, Any], /) -> Iterator[KT]:
        return (key for key, _ in self._data.values())

    def __len__(self: Classification[Any, Any], /) -> int:
        return len(self._data)

    def __repr__(self: Classification[Any, Any], /) -> str:
        data = ", ".join([f"{key!r}: {value!r}" for key, value in self._data.values()])
        return f"{type(self).__name__}({{{data}}})"


def takes_two_arguments(func: Callable[..., Any], /) -> bool:
    """Check if `func` needs exactly two positional arguments, as a pairwise relation does."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(None, None)
    except TypeError:
        return False
    try:
        signature.bind(None)
    except TypeError:
        return True
    return False


def classify_elements(iterable: Iterable[T], key: Callable[[T], Any], /) -> list[tuple[Any, list[T]]]:
    """
    Group the elements by the value of `key`, comparing key values with
    `element_key`. Each group is paired with the first key value seen for it.
    """
    groups: dict[Hashable, tuple[Any, list[T]]] = {}
    for element in iterable:
        value = key(element)
        k = element_key(value)
        if k not in groups:
            groups[k] = (value, [])
        groups[k][1].append(element)
    return [*groups.values()]


def connected_components(elements: Sequence[T], related: Callable[[T, T], Any], /) -> list[list[T]]:
    """
    Split the elements into the classes of the transitive closure of
    `related`, which is treated as symmetric: two elements are linked if
    `related` holds in either order.

    Uses union-find with path compression and union by rank. The relation is
    not evaluated for pairs already known to share a class.
    """
    parent = list(range(len(elements)))
    rank = [0] * len(elements)

    def find(i: int) -> int:
        root = i
        while parent[root] != root:
            root = parent[root]
        while parent[i] != root:
            parent[i], i = root, parent[i]
        return root

    for i, x in enumerate(elements):
        for j in range(i + 1, len(elements)):
            y = elements[j]
            x_root = find(i)
            y_root = find(j)
            if x_root == y_root or not (related(x, y) or related(y, x)):
                continue
            if rank[x_root] < rank[y_root]:
                x_root, y_root = y_root, x_root
            parent[y_root] = x_root
            if rank[x_root] == rank[y_root]:
                rank[x_root] += 1

    components: dict[int, list[T]] = {}
    for i, element in enumerate(elements):
        components.setdefault(find(i), []).append(element)
    return [*components.values()]
