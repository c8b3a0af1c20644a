from __future__ import annotations
from collections.abc import Iterable, Iterator
from typing import Any

__all__ = ["has_nested", "iter_leaves"]


def has_nested(iterable: Iterable[Any], nested: type, /) -> bool:
    return any(isinstance(element, nested) for element in iterable)


def iter_leaves(root: Iterable[Any], nested: type, /) -> Iterator[Any]:
    """
    Yield every element reachable from `root` that is not an instance of
    `nested`, descending into the `nested` elements depth first.

    A nested set reachable along several paths is walked only once. Reaching
    a set that is still open on the current path raises `ValueError`.
    """
    open_ids = {id(root)}
    walked_ids = set()
    stack = [(id(root), iter(root))]
    while stack:
        node_id, elements = stack[-1]
        for element in elements:
            if not isinstance(element, nested):
                yield element
            elif id(element) in open_ids:
                raise ValueError(f"tried to flatten recursive {type(element).__name__}")
            elif id(element) not in walked_ids:
                open_ids.add(id(element))
                stack.append((id(element), iter(element)))
                break
        else:
            stack.pop()
            open_ids.remove(node_id)
            walked_ids.add(node_id)
