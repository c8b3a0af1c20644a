"""
Keys deciding when two values are the same set element.

Python's own equality merges values a set should keep apart: `False == 0`,
`True == 1` and `1 == 1.0` all hold and hash alike. Numbers are therefore
keyed together with their exact type. Builtin containers are keyed
structurally so that lists and dicts, which are unhashable, can still be
elements; their structure is captured when the key is made.
"""
from __future__ import annotations
from collections.abc import Hashable
from numbers import Number
from typing import Any, TypeVar

__all__ = ["ElementKey", "element_key"]

Self = TypeVar("Self", bound="ElementKey")


class ElementKey:
    _hash: int
    kind: type
    value: Hashable

    __slots__ = {
        "_hash":
            "The cached hash of the kind and value.",
        "kind":
            "The exact type of the keyed element.",
        "value":
            "A hashable snapshot of the keyed element.",
    }

    def __init__(self: Self, kind: type, value: Hashable, /) -> None:
        self.kind = kind
        self.value = value
        self._hash = hash((kind, value))

    def __eq__(self: Self, other: Any, /) -> bool:
        if isinstance(other, ElementKey):
            return (
                self._hash == other._hash
                and self.kind is other.kind
                and (self.value is other.value or self.value == other.value)
            )
        else:
            return NotImplemented

    def __hash__(self: Self, /) -> int:
        return self._hash

    def __ne__(self: Self, other: Any, /) -> bool:
        if isinstance(other, ElementKey):
            return not self == other
        else:
            return NotImplemented

    def __repr__(self: Self, /) -> str:
        return f"{type(self).__name__}({self.kind.__name__}, {self.value!r})"


def element_key(element: Any, /) -> Hashable:
    kind = type(element)
    if isinstance(element, Number):
        return ElementKey(kind, element)
    elif isinstance(element, (tuple, list)):
        return ElementKey(kind, tuple([element_key(x) for x in element]))
    elif isinstance(element, (set, frozenset)):
        return ElementKey(kind, frozenset([element_key(x) for x in element]))
    elif isinstance(element, dict):
        return ElementKey(kind, frozenset([
            (element_key(key), element_key(value))
            for key, value in element.items()
        ]))
    elif isinstance(element, Hashable):
        return element
    else:
        raise TypeError(f"unhashable set element: {element!r}")
