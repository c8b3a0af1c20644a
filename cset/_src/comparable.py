from __future__ import annotations
from bisect import insort
from collections.abc import Iterable
from typing import Any, Protocol, TypeVar, runtime_checkable

__all__ = ["SupportsLessThan", "insort_comparable", "sorted_comparable"]

Self = TypeVar("Self", bound="SupportsLessThan")
T = TypeVar("T", bound="SupportsLessThan")


@runtime_checkable
class SupportsLessThan(Protocol):

    def __lt__(self: Self, other: Any, /) -> bool: ...


def sorted_comparable(iterable: Iterable[T], owner: str, /) -> list[T]:
    """Sort the elements, reporting incomparable elements as a `TypeError` naming the owner."""
    try:
        return sorted(iterable)
    except TypeError as exc:
        raise TypeError(f"{owner} elements must be mutually comparable: {exc}") from exc


def insort_comparable(sequence: list[T], element: T, owner: str, /) -> None:
    """Insert into an already sorted list, leaving it unchanged if the element is incomparable."""
    try:
        insort(sequence, element)
    except TypeError as exc:
        raise TypeError(f"{owner} cannot order {element!r} among its elements: {exc}") from exc
