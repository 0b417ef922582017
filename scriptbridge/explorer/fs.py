"""Directory listing for the explorer collaborator."""

from __future__ import annotations

import logging
import os

from ..paths import absolute
from .config import ExplorerConfig
from .types import Node

LOGGER = logging.getLogger(__name__)


def list_child_names(directory: str | os.PathLike[str]) -> list[str]:
    """Return direct child names of ``directory`` in directory order.

    Raises ``OSError`` when ``directory`` is missing, not a directory, or
    unreadable.
    """
    names: list[str] = []
    with os.scandir(directory) as entries:
        for child in entries:
            names.append(child.name)
    return names


def explore(parent: str | os.PathLike[str], config: ExplorerConfig) -> list[Node]:
    """List, filter, search, and sort the direct children of ``parent``.

    ``parent`` is listed exactly as given, so ``missing/..`` or an empty path
    fail like any other unreadable directory. Node paths are built from its
    lexically absolutized form.

    With a searcher, matches come back ranked by match quality and sorters are
    skipped unless the searcher is ``unordered``.
    """
    names = list_child_names(parent)
    parent_text = absolute(os.fspath(parent))
    nodes = [Node.new(parent_text, name) for name in names]
    nodes = [node for node in nodes if config.filter(node)]

    searcher = config.searcher
    if searcher is not None:
        nodes = searcher.search(nodes)
    if searcher is None or searcher.unordered:
        config.sort(nodes)

    LOGGER.debug("explored %s: %d of %d entries", parent_text, len(nodes), len(names))
    return nodes


__all__ = ["list_child_names", "explore"]
