"""Fuzzy search over configured tools, installed binaries and package registries."""

from tkit.core.search.engine import SearchEngine, SearchMode, SearchReport, SearchResult
from tkit.core.search.registries import PackageMatch, PackageRegistry, default_registries

__all__ = [
    "PackageMatch",
    "PackageRegistry",
    "SearchEngine",
    "SearchMode",
    "SearchReport",
    "SearchResult",
    "default_registries",
]
