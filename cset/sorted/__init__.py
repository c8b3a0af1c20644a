from ._src.sorted_cset import SortedCSet

__all__ = ["SortedCSet"]
