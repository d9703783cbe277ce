"""Helpers for resolving DOS-style paths against the filesystem.

Resolution is query-only: nothing here changes the filesystem or the
shell's working directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .nodes import VirtualNode
    from .shell.common import ShellState
    from .vfs import FileSystem

SEP = "\\"
DRIVE_PREFIX = "C:\\"


@dataclass(frozen=True)
class ResolvedPath:
    id: str
    display_path: str


def normalize_separators(path: str) -> str:
    return path.replace("/", SEP)


def is_absolute(path: str) -> bool:
    normalized = normalize_separators(path)
    return normalized[:3].upper() == DRIVE_PREFIX or normalized.startswith(SEP)


def resolve_path(fs: "FileSystem", state: "ShellState", path: str | None) -> ResolvedPath | None:
    """Map ``path`` to a node id and its display path, or ``None``.

    Relative segments match child names case-insensitively. ``..`` at the
    top of the tree stays put. Any unmatched segment fails the whole lookup.
    """
    if not path:
        return ResolvedPath(state.current_folder_id, state.current_path)

    target = normalize_separators(path)
    if is_absolute(target):
        node = fs.find_file_by_path(target)
        if node is None:
            return None
        return ResolvedPath(node.id, fs.get_file_path(node.id))

    current_id = state.current_folder_id
    display_parts = state.current_path.split(SEP)
    for part in filter(None, target.split(SEP)):
        if part == ".":
            continue
        if part == "..":
            parent = fs.find_parent(current_id)
            if parent is not None:
                current_id = parent.id
                display_parts.pop()
            continue
        child = find_child(fs, current_id, part)
        if child is None:
            return None
        current_id = child.id
        display_parts.append(child.name)
    return ResolvedPath(current_id, SEP.join(display_parts))


def find_child(fs: "FileSystem", parent_id: str, name: str) -> "VirtualNode | None":
    lowered = name.lower()
    for entry in fs.get_folder_contents(parent_id):
        if entry.name.lower() == lowered:
            return entry
    return None


def split_parent(path: str) -> tuple[str | None, str]:
    """Split ``path`` into its directory part (``None`` when bare) and final name."""
    normalized = normalize_separators(path)
    stripped = normalized.rstrip(SEP) or normalized
    head, sep, name = stripped.rpartition(SEP)
    if not sep:
        return None, name
    if not head or head.upper() == DRIVE_PREFIX.rstrip(SEP):
        head = SEP
    return head, name


__all__ = [
    "ResolvedPath",
    "resolve_path",
    "find_child",
    "split_parent",
    "is_absolute",
    "normalize_separators",
]
