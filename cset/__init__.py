"""
A mutable set container with full set algebra, recursive flattening of
nested sets, partitioning into equivalence classes, and a sorted variant.
Written in Python 3 with annotations/type-hints to make usage with an IDE
easier.
"""
from . import sorted
from ._src.cset import CSet, ElementsView, to_cset
from ._src.element_key import ElementKey, element_key
from ._src.partition import Classification
from .sorted import SortedCSet

__all__ = [
    "CSet",
    "Classification",
    "ElementKey",
    "ElementsView",
    "SortedCSet",
    "element_key",
    "sorted",
    "to_cset",
]

__version__ = "1.0.0"
