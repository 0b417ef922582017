"""Lexical path decomposition helpers.

None of these functions touch the filesystem or raise. ``None`` means the
requested component does not exist, which is distinct from an empty string.
"""

from __future__ import annotations

import os

SEPARATOR = "/"


def _components(path: str) -> tuple[bool, list[str]]:
    """Split ``path`` into ``(has_root, components)``.

    Empty segments and interior ``.`` segments are dropped; a leading ``.``
    is kept so ``./foo`` still has a parent.
    """
    has_root = path.startswith(SEPARATOR)
    parts: list[str] = []
    for idx, segment in enumerate(path.split(SEPARATOR)):
        if not segment:
            continue
        if segment == ".":
            if idx == 0:
                parts.append(segment)
            continue
        parts.append(segment)
    return has_root, parts


def dirname(path: str) -> str | None:
    """Return the parent of ``path``.

    Returns ``None`` for root paths, the empty path, and bare names without
    a separator (``foo``, ``foo/``, ``.``).
    """
    has_root, parts = _components(path)
    if not parts:
        return None
    if len(parts) == 1:
        return SEPARATOR if has_root else None
    parent = SEPARATOR.join(parts[:-1])
    return SEPARATOR + parent if has_root else parent


def basename(path: str) -> str | None:
    """Return the final component of ``path``, or ``None`` for roots and ``.``/``..``."""
    _has_root, parts = _components(path)
    if not parts:
        return None
    last = parts[-1]
    if last in (".", ".."):
        return None
    return last


def _current_directory() -> str:
    try:
        return os.getcwd()
    except OSError:
        pwd = os.environ.get("PWD", "")
        return pwd if pwd.startswith(SEPARATOR) else SEPARATOR


def _normalize(path: str) -> str:
    stack: list[str] = []
    for segment in path.split(SEPARATOR):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if stack:
                stack.pop()
            continue
        stack.append(segment)
    return SEPARATOR + SEPARATOR.join(stack)


def absolute(path: str) -> str:
    """Return ``path`` made absolute against the cwd and normalized lexically.

    Non-existent paths are fine; ``..`` above the root stays at the root.
    """
    if not path.startswith(SEPARATOR):
        path = _current_directory() + SEPARATOR + path
    return _normalize(path)


__all__ = ["dirname", "basename", "absolute"]
