from __future__ import annotations
from bisect import bisect_left
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, Optional, TypeVar

from cset._src.comparable import SupportsLessThan, insort_comparable, sorted_comparable
from cset._src.cset import MISSING, CSet
from cset._src.element_key import element_key

__all__ = ["SortedCSet"]

Self = TypeVar("Self", bound="SortedCSet")
T = TypeVar("T", bound=SupportsLessThan)


class SortedCSet(CSet[T], Generic[T]):
    """
    A `CSet` which iterates over its elements in ascending order.

    The elements must be mutually comparable. Adding one that is not raises
    `TypeError` and leaves the set unchanged.
    """
    _sequence: list[T]

    __slots__ = {
        "_sequence":
            "Stores the elements in ascending order.",
    }

    def __init__(
        self: Self,
        iterable: Optional[Iterable[T]] = None,
        /,
        *,
        transform: Optional[Callable[[Any], T]] = None,
    ) -> None:
        self._sequence = []
        super().__init__(iterable, transform=transform)

    def __copy__(self: Self, /) -> Self:
        result = super().__copy__()
        result._sequence = self._sequence.copy()
        return result

    def __iter__(self: SortedCSet[T], /) -> Iterator[T]:
        return iter(self._sequence)

    def __reversed__(self: SortedCSet[T], /) -> Iterator[T]:
        return reversed(self._sequence)

    def _index(self: SortedCSet[T], stored: T, /) -> int:
        sequence = self._sequence
        i = bisect_left(sequence, stored)
        # Elements may tie in order while being distinct, e.g. 1 and 1.0.
        while sequence[i] is not stored:
            i += 1
        return i

    def _reset(self: SortedCSet[T], iterable: Iterable[T], /) -> None:
        data = {}
        for element in iterable:
            data[element_key(element)] = element
        sequence = sorted_comparable(data.values(), type(self).__name__)
        self._data = data
        self._sequence = sequence

    def _store(self: SortedCSet[T], element: T, /) -> bool:
        key = element_key(element)
        stored = self._data.get(key, MISSING)
        if stored is MISSING:
            insort_comparable(self._sequence, element, type(self).__name__)
            self._data[key] = element
            return True
        self._sequence[self._index(stored)] = element
        self._data[key] = element
        return False

    def _unstore(self: SortedCSet[Any], element: Any, /) -> bool:
        stored = self._data.pop(element_key(element), MISSING)
        if stored is MISSING:
            return False
        del self._sequence[self._index(stored)]
        return True
