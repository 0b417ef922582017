"""Directory traversal collaborator used by the ``explore`` util function.

This package contains the non-bridge side of exploring:
- node records observed from the filesystem
- the typed explorer configuration (filters, sorters, searcher)
- the directory listing itself
"""

from __future__ import annotations

from .config import (
    ExplorerConfig,
    NodeFilter,
    NodeFilterApplicable,
    NodeSearcherApplicable,
    NodeSorter,
    NodeSorterApplicable,
    SearchAlgorithm,
)
from .fs import explore, list_child_names
from .types import Node, Permissions, ResolvedNode, human_size, mime_essence

__all__ = [
    "ExplorerConfig",
    "NodeFilter",
    "NodeFilterApplicable",
    "NodeSearcherApplicable",
    "NodeSorter",
    "NodeSorterApplicable",
    "SearchAlgorithm",
    "explore",
    "list_child_names",
    "Node",
    "Permissions",
    "ResolvedNode",
    "human_size",
    "mime_essence",
]
