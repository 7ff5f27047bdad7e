"""Utility modules for versiongnome."""

from versiongnome.utils.natural_sort import compare, natural_key, natural_sort

__all__ = [
    "compare",
    "natural_key",
    "natural_sort",
]
