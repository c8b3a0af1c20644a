from __future__ import annotations
import copy
from collections.abc import Callable, Hashable, Iterable, Iterator, MutableSet
from typing import Any, Generic, Optional, Type, TypeVar, Union, overload

from .element_key import element_key
from .flatten import has_nested, iter_leaves
from .partition import Classification, classify_elements, connected_components, takes_two_arguments

__all__ = ["CSet", "ElementsView", "to_cset"]

S = TypeVar("S")
T = TypeVar("T")
KT = TypeVar("KT", bound=Hashable)

Self = TypeVar("Self", bound="CSet")

MISSING = object()

reprs_seen: set[int] = {*()}
hashes_seen: set[int] = {*()}
eqs_seen: set[tuple[int, int]] = {*()}


class ElementsView(Iterable[T], Generic[T]):
    """
    A lazy, restartable sequence of a set's elements.

    Every iteration walks the elements the set holds when that iteration
    starts, so the view may be iterated any number of times and sees later
    changes to the set.
    """
    _cset: CSet[T]

    __slots__ = {
        "_cset":
            "The set whose elements are viewed.",
    }

    def __init__(self: ElementsView[T], cset: CSet[T], /) -> None:
        self._cset = cset

    def __iter__(self: ElementsView[T], /) -> Iterator[T]:
        return iter(self._cset.to_list())

    def __len__(self: ElementsView[Any], /) -> int:
        return len(self._cset)

    def __repr__(self: ElementsView[Any], /) -> str:
        return f"{type(self).__name__}({self._cset!r})"


class CSet(MutableSet[T], Generic[T]):
    """
    A mutable set of arbitrary elements.

    Elements are kept unique by `element_key`, so `None`, `False` and `0`
    are three different elements and lists or dicts may be elements. A
    `CSet` may contain other `CSet`s, which can be flattened into their
    elements. Mutators return the set itself for chaining, and the `try_*`
    variants return `None` instead when they had no effect.
    """
    _data: dict[Hashable, T]
    _frozen: bool

    __slots__ = {
        "_data":
            "Maps the key of each element to the element.",
        "_frozen":
            "Prevents any modification when set.",
    }

    def __init__(
        self: Self,
        iterable: Optional[Iterable[T]] = None,
        /,
        *,
        transform: Optional[Callable[[Any], T]] = None,
    ) -> None:
        self._data = {}
        self._frozen = False
        if transform is not None and not callable(transform):
            raise TypeError(f"{type(self).__name__} expected a callable transform, got {transform!r}")
        elif iterable is None:
            return
        elif not isinstance(iterable, Iterable):
            raise TypeError(f"{type(self).__name__} expected an iterable or None, got {iterable!r}")
        elif transform is None:
            self._reset(iterable)
        else:
            self._reset(map(transform, iterable))

    @classmethod
    def of(cls: Type[Self], /, *elements: T) -> Self:
        return cls(elements)

    @classmethod
    def _from_iterable(cls: Type[Self], iterable: Iterable[T], /) -> Self:
        return cls(iterable)

    def __and__(self: Self, other: Iterable[Any], /) -> Self:
        if isinstance(other, Iterable):
            return self._from_iterable(x for x in other if x in self)
        else:
            return NotImplemented

    __rand__ = __and__

    def __contains__(self: CSet[Any], element: Any, /) -> bool:
        return element_key(element) in self._data

    def __copy__(self: Self, /) -> Self:
        result = type(self).__new__(type(self))
        result._data = self._data.copy()
        result._frozen = False
        return result

    def __eq__(self: CSet[Any], other: Any, /) -> bool:
        if not isinstance(other, CSet):
            return NotImplemented
        elif self is other:
            return True
        elif len(self) != len(other):
            return False
        pair = (id(self), id(other))
        if pair in eqs_seen:
            return True
        eqs_seen.add(pair)
        try:
            return self._keys() == other._keys()
        finally:
            eqs_seen.remove(pair)

    def __ge__(self: CSet[Any], other: Any, /) -> bool:
        if isinstance(other, CSet):
            return len(self) >= len(other) and self._contains_all(other)
        else:
            return NotImplemented

    def __gt__(self: CSet[Any], other: Any, /) -> bool:
        if isinstance(other, CSet):
            return len(self) > len(other) and self._contains_all(other)
        else:
            return NotImplemented

    def __hash__(self: CSet[Any], /) -> int:
        if id(self) in hashes_seen:
            return 0
        hashes_seen.add(id(self))
        try:
            return hash(frozenset([hash(key) for key in self._data]))
        finally:
            hashes_seen.remove(id(self))

    def __iand__(self: Self, other: Iterable[Any], /) -> Self:
        if isinstance(other, Iterable):
            return self.replace(self & other)
        else:
            return NotImplemented

    def __ior__(self: Self, other: Iterable[T], /) -> Self:
        if isinstance(other, Iterable):
            return self.merge(other)
        else:
            return NotImplemented

    __iadd__ = __ior__

    def __isub__(self: Self, other: Iterable[Any], /) -> Self:
        if isinstance(other, Iterable):
            return self.subtract(other)
        else:
            return NotImplemented

    def __iter__(self: CSet[T], /) -> Iterator[T]:
        return iter(self._data.values())

    def __ixor__(self: Self, other: Iterable[T], /) -> Self:
        if isinstance(other, Iterable):
            return self.replace(self ^ other)
        else:
            return NotImplemented

    def __le__(self: CSet[Any], other: Any, /) -> bool:
        if isinstance(other, CSet):
            return len(self) <= len(other) and other._contains_all(self)
        else:
            return NotImplemented

    def __len__(self: CSet[Any], /) -> int:
        return len(self._data)

    def __lt__(self: CSet[Any], other: Any, /) -> bool:
        if isinstance(other, CSet):
            return len(self) < len(other) and other._contains_all(self)
        else:
            return NotImplemented

    @overload
    def __or__(self: Self, other: Iterable[T], /) -> Self: ...

    @overload
    def __or__(self: CSet[T], other: Iterable[S], /) -> CSet[Union[T, S]]: ...

    def __or__(self, other, /):
        if isinstance(other, Iterable):
            return self.dup().merge(other)
        else:
            return NotImplemented

    __add__ = __radd__ = __ror__ = __or__

    def __repr__(self: CSet[Any], /) -> str:
        if id(self) in reprs_seen:
            return f"{type(self).__name__}(...)"
        elif len(self) == 0:
            return f"{type(self).__name__}()"
        reprs_seen.add(id(self))
        try:
            data = ", ".join([repr(x) for x in self])
            return f"{type(self).__name__}({{{data}}})"
        finally:
            reprs_seen.remove(id(self))

    def __rsub__(self: Self, other: Iterable[S], /) -> Self:
        if isinstance(other, Iterable):
            return self._from_iterable(x for x in other if x not in self)
        else:
            return NotImplemented

    def __sub__(self: Self, other: Iterable[Any], /) -> Self:
        if isinstance(other, Iterable):
            return self.dup().subtract(other)
        else:
            return NotImplemented

    def __xor__(self: Self, other: Iterable[S], /) -> Self:
        if not isinstance(other, Iterable):
            return NotImplemented
        result = self._from_iterable(other)
        for x in self:
            if result.try_delete(x) is None:
                result.add(x)
        return result

    __rxor__ = __xor__

    def _check_frozen(self: CSet[Any], /) -> None:
        if self._frozen:
            raise TypeError(f"can't modify frozen {type(self).__name__}: {self!r}")

    def _contains_all(self: CSet[Any], other: CSet[Any], /) -> bool:
        return self._keys() >= other._keys()

    def _expect_cset(self: CSet[Any], other: Any, method: str, /) -> CSet[Any]:
        if isinstance(other, CSet):
            return other
        else:
            raise TypeError(f"{method} expected a CSet, got {other!r}")

    def _keys(self: CSet[Any], /) -> frozenset[Hashable]:
        # Built from a list so that every key is hashed again.
        return frozenset([*self._data])

    def _reset(self: CSet[T], iterable: Iterable[T], /) -> None:
        """Replace all elements at once. Nothing changes if `iterable` raises."""
        data = {}
        for element in iterable:
            data[element_key(element)] = element
        self._data = data

    def _store(self: CSet[T], element: T, /) -> bool:
        key = element_key(element)
        is_new = key not in self._data
        self._data[key] = element
        return is_new

    def _unstore(self: CSet[Any], element: Any, /) -> bool:
        return self._data.pop(element_key(element), MISSING) is not MISSING

    def add(self: Self, element: T, /) -> Self:
        self._check_frozen()
        self._store(element)
        return self

    def classify(self: CSet[T], key: Callable[[T], KT], /) -> Classification[KT, CSet[T]]:
        """
        Group the elements into sets by the value of `key`. Key values are
        told apart like set elements, so `0` and `False` give two groups.
        """
        if not callable(key):
            raise TypeError(f"classify expected a callable key, got {key!r}")
        return Classification([
            (value, self._from_iterable(group))
            for value, group in classify_elements(self.to_list(), key)
        ])

    def clear(self: Self, /) -> Self:
        self._check_frozen()
        self._reset(())
        return self

    def clone(self: Self, /) -> Self:
        """Copy the set, keeping its class and whether it is frozen."""
        result = copy.copy(self)
        result._frozen = self._frozen
        return result

    def copy(self: Self, /) -> Self:
        return copy.copy(self)

    def delete(self: Self, element: Any, /) -> Self:
        self.discard(element)
        return self

    def delete_if(self: Self, predicate: Callable[[T], Any], /) -> Self:
        self.try_delete_if(predicate)
        return self

    def discard(self: CSet[Any], element: Any, /) -> None:
        self._check_frozen()
        self._unstore(element)

    def divide(
        self: CSet[T],
        func: Union[Callable[[T], Any], Callable[[T, T], Any]],
        /,
        *,
        pairwise: Optional[bool] = None,
    ) -> CSet[CSet[T]]:
        """
        Partition the set into disjoint subsets.

        A `func` taking one argument is a key, grouping like `classify`.
        A `func` taking two arguments relates pairs of elements, and the
        subsets are the classes of elements linked by a chain of related
        pairs. Use `pairwise` to override the detected arity.
        """
        if not callable(func):
            raise TypeError(f"divide expected a callable, got {func!r}")
        elif pairwise is None:
            pairwise = takes_two_arguments(func)
        if pairwise:
            groups = connected_components(self.to_list(), func)
        else:
            groups = [group for _, group in classify_elements(self.to_list(), func)]
        return CSet(self._from_iterable(group) for group in groups)

    def dup(self: Self, /) -> Self:
        """Copy the set, keeping its class. The copy is never frozen."""
        return copy.copy(self)

    @overload
    def each(self: CSet[T], visitor: None = None, /) -> ElementsView[T]: ...

    @overload
    def each(self: Self, visitor: Callable[[T], Any], /) -> Self: ...

    def each(self, visitor=None, /):
        if visitor is None:
            return ElementsView(self)
        elif not callable(visitor):
            raise TypeError(f"each expected a callable or None, got {visitor!r}")
        for element in self.to_list():
            visitor(element)
        return self

    def flatten(self: Self, /) -> Self:
        """Return a new set with every nested `CSet` replaced by its elements, recursively."""
        return self._from_iterable(iter_leaves(self, CSet))

    def flatten_in_place(self: Self, /) -> Optional[Self]:
        """Flatten the set in place. Returns `None` if there was nothing to flatten."""
        self._check_frozen()
        if not has_nested(self, CSet):
            return None
        self._reset(iter_leaves(self, CSet))
        return self

    def freeze(self: Self, /) -> Self:
        self._frozen = True
        return self

    @property
    def frozen(self: CSet[Any], /) -> bool:
        return self._frozen

    def intersects(self: CSet[Any], other: CSet[Any], /) -> bool:
        other = self._expect_cset(other, "intersects")
        return not self._keys().isdisjoint(other._keys())

    def isdisjoint(self: CSet[Any], other: CSet[Any], /) -> bool:
        other = self._expect_cset(other, "isdisjoint")
        return self._keys().isdisjoint(other._keys())

    def is_empty(self: CSet[Any], /) -> bool:
        return len(self._data) == 0

    def ispropersubset(self: CSet[Any], other: CSet[Any], /) -> bool:
        return self < self._expect_cset(other, "ispropersubset")

    def ispropersuperset(self: CSet[Any], other: CSet[Any], /) -> bool:
        return self > self._expect_cset(other, "ispropersuperset")

    def issubset(self: CSet[Any], other: CSet[Any], /) -> bool:
        return self <= self._expect_cset(other, "issubset")

    def issuperset(self: CSet[Any], other: CSet[Any], /) -> bool:
        return self >= self._expect_cset(other, "issuperset")

    def map_in_place(self: Self, transform: Callable[[T], Any], /) -> Self:
        """Replace every element by `transform(element)`, committing only once every call succeeded."""
        self._check_frozen()
        if not callable(transform):
            raise TypeError(f"map_in_place expected a callable, got {transform!r}")
        self._reset([transform(x) for x in self.to_list()])
        return self

    def merge(self: Self, /, *iterables: Iterable[T]) -> Self:
        self._check_frozen()
        for iterable in iterables:
            if not isinstance(iterable, Iterable):
                raise TypeError(f"merge expected iterables, got {iterable!r}")
            elif iterable is not self:
                for element in iterable:
                    self._store(element)
        return self

    def rehash(self: Self, /) -> Self:
        """Rebuild the keys after elements were mutated in place."""
        self._check_frozen()
        self._reset(self.to_list())
        return self

    def replace(self: Self, iterable: Iterable[T], /) -> Self:
        self._check_frozen()
        if not isinstance(iterable, Iterable):
            raise TypeError(f"replace expected an iterable, got {iterable!r}")
        self._reset([*iterable])
        return self

    def subtract(self: Self, /, *iterables: Iterable[Any]) -> Self:
        self._check_frozen()
        for iterable in iterables:
            if not isinstance(iterable, Iterable):
                raise TypeError(f"subtract expected iterables, got {iterable!r}")
            elif iterable is self:
                self._reset(())
            else:
                for element in iterable:
                    self._unstore(element)
        return self

    def to_list(self: CSet[T], /) -> list[T]:
        return [*self]

    def try_add(self: Self, element: T, /) -> Optional[Self]:
        """Add the element, returning `None` if it was already present."""
        self._check_frozen()
        return self if self._store(element) else None

    def try_delete(self: Self, element: Any, /) -> Optional[Self]:
        """Delete the element, returning `None` if it was not present."""
        self._check_frozen()
        return self if self._unstore(element) else None

    def try_delete_if(self: Self, predicate: Callable[[T], Any], /) -> Optional[Self]:
        """
        Delete every element satisfying the predicate, returning `None` if
        none did. The predicate sees each element in iteration order and the
        set is only modified once it returned for all of them.
        """
        self._check_frozen()
        if not callable(predicate):
            raise TypeError(f"expected a callable predicate, got {predicate!r}")
        doomed = [x for x in self.to_list() if predicate(x)]
        for x in doomed:
            self._unstore(x)
        return self if doomed else None


def to_cset(
    iterable: Iterable[T],
    cls: Type[CSet[Any]] = CSet,
    /,
    *,
    transform: Optional[Callable[[Any], Any]] = None,
) -> CSet[Any]:
    """Build a set of class `cls` from the iterable."""
    if not (isinstance(cls, type) and issubclass(cls, CSet)):
        raise TypeError(f"to_cset expected a CSet class, got {cls!r}")
    return cls(iterable, transform=transform)
