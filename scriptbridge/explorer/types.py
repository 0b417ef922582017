"""Domain datatypes for explored directory entries."""

from __future__ import annotations

import mimetypes
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from ..paths import absolute

_SIZE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB")
DIRECTORY_MIME_ESSENCE = "inode/directory"


def human_size(size: int) -> str:
    """Format ``size`` bytes in decimal units, e.g. ``1.5 kB``."""
    value = float(size)
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS:
        if value < 1000 or unit == _SIZE_UNITS[-1]:
            break
        value /= 1000
    if unit == _SIZE_UNITS[0]:
        return f"{size} {unit}"
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"


def mime_essence(path: Path, is_dir: bool) -> str:
    if is_dir:
        return DIRECTORY_MIME_ESSENCE
    guessed, _encoding = mimetypes.guess_type(path.name, strict=False)
    return guessed or ""


def _extension(path: Path) -> str:
    suffix = path.suffix
    return suffix[1:] if suffix else ""


@dataclass(frozen=True)
class Permissions:
    """Unix permission bits of an entry."""

    user_read: bool = False
    user_write: bool = False
    user_execute: bool = False
    group_read: bool = False
    group_write: bool = False
    group_execute: bool = False
    other_read: bool = False
    other_write: bool = False
    other_execute: bool = False
    sticky: bool = False
    setgid: bool = False
    setuid: bool = False

    @classmethod
    def from_mode(cls, mode: int) -> Permissions:
        return cls(
            user_read=bool(mode & stat.S_IRUSR),
            user_write=bool(mode & stat.S_IWUSR),
            user_execute=bool(mode & stat.S_IXUSR),
            group_read=bool(mode & stat.S_IRGRP),
            group_write=bool(mode & stat.S_IWGRP),
            group_execute=bool(mode & stat.S_IXGRP),
            other_read=bool(mode & stat.S_IROTH),
            other_write=bool(mode & stat.S_IWOTH),
            other_execute=bool(mode & stat.S_IXOTH),
            sticky=bool(mode & stat.S_ISVTX),
            setgid=bool(mode & stat.S_ISGID),
            setuid=bool(mode & stat.S_ISUID),
        )


def _is_readonly(mode: int) -> bool:
    return not mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH)


@dataclass(frozen=True)
class ResolvedNode:
    """Metadata of the fully resolved target of an entry."""

    absolute_path: str
    extension: str
    is_dir: bool
    is_file: bool
    is_readonly: bool
    mime_essence: str
    size: int
    human_size: str

    @classmethod
    def from_path(cls, path: Path) -> ResolvedNode:
        """Stat ``path`` following symlinks; raises ``OSError`` on failure."""
        info = path.stat()
        is_dir = stat.S_ISDIR(info.st_mode)
        return cls(
            absolute_path=str(path),
            extension=_extension(path),
            is_dir=is_dir,
            is_file=stat.S_ISREG(info.st_mode),
            is_readonly=_is_readonly(info.st_mode),
            mime_essence=mime_essence(path, is_dir),
            size=int(info.st_size),
            human_size=human_size(int(info.st_size)),
        )


@dataclass(frozen=True)
class Node:
    """One explored directory entry as observed without following symlinks."""

    parent: str
    relative_path: str
    absolute_path: str
    extension: str
    is_dir: bool
    is_file: bool
    is_symlink: bool
    is_broken: bool
    is_readonly: bool
    mime_essence: str
    size: int
    human_size: str
    permissions: Permissions
    canonical: ResolvedNode | None = None
    symlink: ResolvedNode | None = None

    @classmethod
    def new(cls, parent: str, relative_path: str) -> Node:
        """Build a node for ``relative_path`` under ``parent``.

        Stat failures leave the type flags false and the size zero; a target
        that cannot be resolved marks the node broken.
        """
        absolute_path = absolute(os.path.join(parent, relative_path))
        path = Path(absolute_path)

        try:
            canonical: ResolvedNode | None = ResolvedNode.from_path(path.resolve(strict=True))
        except (OSError, RuntimeError):
            canonical = None

        try:
            info = path.lstat()
        except OSError:
            info = None

        if info is not None:
            is_symlink = stat.S_ISLNK(info.st_mode)
            is_dir = stat.S_ISDIR(info.st_mode)
            is_file = stat.S_ISREG(info.st_mode)
            is_readonly = _is_readonly(info.st_mode)
            size = int(info.st_size)
            permissions = Permissions.from_mode(info.st_mode)
        else:
            is_symlink = is_dir = is_file = is_readonly = False
            size = 0
            permissions = Permissions()

        return cls(
            parent=parent,
            relative_path=relative_path,
            absolute_path=absolute_path,
            extension=_extension(path),
            is_dir=is_dir,
            is_file=is_file,
            is_symlink=is_symlink,
            is_broken=canonical is None,
            is_readonly=is_readonly,
            mime_essence=mime_essence(path, is_dir),
            size=size,
            human_size=human_size(size),
            permissions=permissions,
            canonical=canonical,
            symlink=canonical if is_symlink else None,
        )


__all__ = [
    "Permissions",
    "ResolvedNode",
    "Node",
    "human_size",
    "mime_essence",
]
