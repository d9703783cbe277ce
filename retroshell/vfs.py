"""Virtual filesystem implementation."""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Iterator, Mapping
from typing import Any

from .exceptions import InvalidOperation, NodeExists, NodeNotFound, PermissionDenied
from .nodes import NodeKind, VirtualNode

logger = logging.getLogger(__name__)

DRIVE = "C:"
ROOT_ID = "desktop"
RECYCLE_BIN_ID = "recycle-bin"

NodeRecord = Mapping[str, Any]


ABOUT_TEXT = """\
ABOUT ME
========

Hello, World!

I'm Daniel Chen, a passionate developer who loves building
creative and interactive web experiences.

WHAT I DO
- Full-Stack Web Development
- Creative UI/UX Design
- Interactive Experiences
- Problem Solving

Thanks for visiting! Feel free to explore."""

CONTACT_TEXT = """\
CONTACT INFORMATION
===================

Email: hello@danielchen.dev
GitHub: github.com/danielchen
LinkedIn: linkedin.com/in/danielchen
Twitter: @danielchen

Feel free to reach out!"""


DEFAULT_FILES: dict[str, dict[str, Any]] = {
    "desktop": {
        "name": "Desktop",
        "kind": "folder",
        "children": ["about", "projects", "contact", "skills", "recycle-bin"],
    },
    "about": {"name": "About Me.txt", "kind": "file", "content": ABOUT_TEXT, "app_type": "about"},
    "projects": {
        "name": "My Projects",
        "kind": "folder",
        "children": ["project-1", "project-2", "project-3"],
        "app_type": "explorer",
    },
    "contact": {"name": "Contact.txt", "kind": "file", "content": CONTACT_TEXT, "app_type": "contact"},
    "skills": {"name": "My Computer", "kind": "system", "app_type": "mycomputer"},
    "recycle-bin": {"name": "Recycle Bin", "kind": "system", "children": [], "app_type": "recyclebin"},
    "internet-explorer": {"name": "Internet Explorer", "kind": "system", "app_type": "browser"},
    "project-1": {
        "name": "Project Alpha",
        "kind": "file",
        "content": "A full-stack web application built with React and Node.js",
    },
    "project-2": {
        "name": "Project Beta",
        "kind": "file",
        "content": "An interactive data visualization dashboard",
    },
    "project-3": {
        "name": "Retro OS Website",
        "kind": "file",
        "content": "This website! A Windows 95 themed portfolio.",
    },
}


class FileSystem:
    """Operations the shell expects from the filesystem it runs against."""

    def get_file(self, node_id: str) -> VirtualNode | None:
        raise NotImplementedError

    def get_folder_contents(self, node_id: str) -> list[VirtualNode]:
        raise NotImplementedError

    def find_parent(self, node_id: str) -> VirtualNode | None:
        raise NotImplementedError

    def get_file_path(self, node_id: str) -> str:
        raise NotImplementedError

    def find_file_by_path(self, path: str) -> VirtualNode | None:
        raise NotImplementedError

    def add_file(self, node: NodeRecord, parent_id: str) -> str:
        raise NotImplementedError

    def update_file_content(self, node_id: str, content: str) -> None:
        raise NotImplementedError

    def rename_file(self, node_id: str, new_name: str) -> None:
        raise NotImplementedError

    def move_file_to_folder(self, node_id: str, target_folder_id: str) -> None:
        raise NotImplementedError

    def delete_file(self, node_id: str, parent_id: str) -> None:
        raise NotImplementedError

    def permanently_delete(self, node_id: str) -> None:
        raise NotImplementedError


class VirtualFileSystem(FileSystem):
    """In-memory desktop filesystem keyed by node id.

    ``files`` maps ids to records with ``name``, ``kind`` and optionally
    ``children`` (a list of ids) and ``content``. Names are unique among
    siblings, compared case-insensitively. Deleting moves a node into the
    recycle bin; only ``permanently_delete`` and ``empty_recycle_bin`` drop
    nodes from the store.
    """

    def __init__(
        self,
        files: Mapping[str, NodeRecord] | None = None,
        *,
        root_id: str = ROOT_ID,
        recycle_bin_id: str = RECYCLE_BIN_ID,
    ) -> None:
        seed = DEFAULT_FILES if files is None else files
        self._nodes: dict[str, VirtualNode] = {
            node_id: VirtualNode.from_record(node_id, record) for node_id, record in seed.items()
        }
        if root_id not in self._nodes:
            raise InvalidOperation(f"Root folder '{root_id}' missing from seed")
        self.root_id = root_id
        self.recycle_bin_id = recycle_bin_id
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_file(self, node_id: str) -> VirtualNode | None:
        return self._nodes.get(node_id)

    def get_folder_contents(self, node_id: str) -> list[VirtualNode]:
        node = self._nodes.get(node_id)
        if node is None or not node.children:
            return []
        return [self._nodes[child] for child in node.children if child in self._nodes]

    def find_parent(self, node_id: str) -> VirtualNode | None:
        for node in self._nodes.values():
            if node.children and node_id in node.children:
                return node
        return None

    def get_file_path(self, node_id: str) -> str:
        node = self._require(node_id)
        names = [node.name]
        parent = self.find_parent(node_id)
        while parent is not None:
            names.append(parent.name)
            parent = self.find_parent(parent.id)
        return "\\".join([DRIVE, *reversed(names)])

    def find_file_by_path(self, path: str) -> VirtualNode | None:
        """Look up an absolute path such as ``C:\\Desktop\\My Projects``.

        The drive prefix and the root folder name are both optional, so
        ``\\My Projects`` names the same folder.
        """
        normalized = path.replace("/", "\\")
        if normalized[:2].upper() == DRIVE:
            normalized = normalized[2:]
        parts = [part for part in normalized.split("\\") if part]
        root = self._nodes[self.root_id]
        if parts and parts[0].lower() == root.name.lower():
            parts = parts[1:]
        current = root
        for part in parts:
            if part == ".":
                continue
            if part == "..":
                current = self.find_parent(current.id) or current
                continue
            match = self._child_named(current.id, part)
            if match is None:
                return None
            current = match
        return current

    def walk(self, node_id: str) -> Iterator[VirtualNode]:
        """Yield ``node_id`` and every container descendant, depth first."""
        node = self._require(node_id)
        yield node
        if node.is_container:
            for child in self.get_folder_contents(node_id):
                yield from self.walk(child.id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_file(self, node: NodeRecord, parent_id: str) -> str:
        parent = self._require(parent_id)
        if parent.children is None:
            raise InvalidOperation(f"{parent.name} cannot hold children")
        name = node["name"]
        if self._child_named(parent_id, name) is not None:
            raise NodeExists(f"{name} already exists in {parent.name}")
        new_id = self._next_id()
        record = dict(node)
        record.pop("id", None)
        created = VirtualNode.from_record(new_id, record)
        if created.is_container:
            created.children = []
        self._nodes[new_id] = created
        parent.children.append(new_id)
        logger.debug("Added %s %r to %s", created.kind.value, name, parent_id)
        return new_id

    def update_file_content(self, node_id: str, content: str) -> None:
        node = self._require(node_id)
        if node.is_dir:
            raise InvalidOperation(f"{node.name} is not a file")
        node.content = content
        node.modified_at = time.time()
        logger.debug("Updated content of %s (%d chars)", node_id, len(content))

    def rename_file(self, node_id: str, new_name: str) -> None:
        node = self._require(node_id)
        self._guard_system(node)
        parent = self.find_parent(node_id)
        if parent is not None:
            clash = self._child_named(parent.id, new_name)
            if clash is not None and clash.id != node_id:
                raise NodeExists(f"{new_name} already exists in {parent.name}")
        logger.debug("Renamed %s from %r to %r", node_id, node.name, new_name)
        node.name = new_name

    def move_file_to_folder(self, node_id: str, target_folder_id: str) -> None:
        node = self._require(node_id)
        self._guard_system(node)
        target = self._require(target_folder_id)
        if node_id == target_folder_id:
            return
        if target.children is None:
            raise InvalidOperation(f"{target.name} is not a folder")
        if any(entry.id == target_folder_id for entry in self.walk(node_id)):
            raise InvalidOperation(f"Cannot move {node.name} inside itself")
        parent = self.find_parent(node_id)
        if parent is None or parent.children is None or parent.id == target_folder_id:
            return
        if self._child_named(target_folder_id, node.name) is not None:
            raise NodeExists(f"{node.name} already exists in {target.name}")
        parent.children.remove(node_id)
        target.children.append(node_id)
        logger.debug("Moved %s from %s to %s", node_id, parent.id, target_folder_id)

    def delete_file(self, node_id: str, parent_id: str) -> None:
        self._guard_system(self._require(node_id))
        parent = self._require(parent_id)
        if parent.children and node_id in parent.children:
            parent.children.remove(node_id)
        recycle_bin = self._nodes.get(self.recycle_bin_id)
        if recycle_bin is None or recycle_bin.children is None:
            self._drop(node_id)
            return
        recycle_bin.children.append(node_id)
        logger.debug("Recycled %s from %s", node_id, parent_id)

    def permanently_delete(self, node_id: str) -> None:
        parent = self.find_parent(node_id)
        if parent is not None and parent.children is not None:
            parent.children.remove(node_id)
        self._drop(node_id)
        logger.debug("Permanently deleted %s", node_id)

    def restore_file(self, node_id: str) -> None:
        self.move_file_to_folder(node_id, self.root_id)

    def empty_recycle_bin(self) -> None:
        recycle_bin = self._require(self.recycle_bin_id)
        for node_id in list(recycle_bin.children or []):
            self.permanently_delete(node_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require(self, node_id: str) -> VirtualNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFound(f"No node with id {node_id}")
        return node

    def _guard_system(self, node: VirtualNode) -> None:
        if node.is_system:
            raise PermissionDenied(f"{node.name} is a system item")

    def _child_named(self, parent_id: str, name: str) -> VirtualNode | None:
        lowered = name.lower()
        for child in self.get_folder_contents(parent_id):
            if child.name.lower() == lowered:
                return child
        return None

    def _next_id(self) -> str:
        while True:
            candidate = f"file-{next(self._ids)}"
            if candidate not in self._nodes:
                return candidate

    def _drop(self, node_id: str) -> None:
        node = self._nodes.pop(node_id, None)
        if node is None or not node.children:
            return
        for child_id in node.children:
            self._drop(child_id)


__all__ = ["FileSystem", "VirtualFileSystem", "DEFAULT_FILES", "ROOT_ID", "RECYCLE_BIN_ID"]
