"""Core node representations for the virtual filesystem."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Kinds of nodes the desktop filesystem stores."""

    FILE = "file"
    FOLDER = "folder"
    SYSTEM = "system"
    SYSTEM_FOLDER = "system-folder"
    DRIVE = "drive"

    @property
    def is_dir(self) -> bool:
        """Anything that is not a plain file is listed and entered like a directory."""
        return self is not NodeKind.FILE

    @property
    def is_container(self) -> bool:
        """Kinds whose children are walked by ``cp -r``, ``find`` and ``tree``."""
        return self in (NodeKind.FOLDER, NodeKind.SYSTEM_FOLDER, NodeKind.DRIVE)


@dataclass
class VirtualNode:
    """A single entry stored inside the filesystem, addressed by ``id``."""

    id: str
    name: str
    kind: NodeKind = NodeKind.FILE
    children: list[str] | None = None
    content: str | None = None
    icon: str | None = None
    app_type: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: float = field(default_factory=time.time)
    modified_at: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        self.kind = NodeKind(self.kind)
        if self.kind.is_container and self.children is None:
            self.children = []

    @property
    def is_dir(self) -> bool:
        return self.kind.is_dir

    @property
    def is_container(self) -> bool:
        return self.kind.is_container

    @property
    def is_system(self) -> bool:
        return self.kind is NodeKind.SYSTEM

    @property
    def size(self) -> int:
        return len(self.content or "")

    @classmethod
    def from_record(cls, node_id: str, record: dict[str, Any]) -> "VirtualNode":
        """Build a node from a plain mapping such as a seed tree entry."""
        known = {
            "id", "name", "kind", "type", "children", "content",
            "icon", "app_type", "created_at", "modified_at",
        }
        kind = record.get("kind", record.get("type", NodeKind.FILE))
        children = record.get("children")
        return cls(
            id=node_id,
            name=record["name"],
            kind=NodeKind(kind),
            children=list(children) if children is not None else None,
            content=record.get("content"),
            icon=record.get("icon"),
            app_type=record.get("app_type"),
            metadata={key: value for key, value in record.items() if key not in known},
        )


__all__ = ["NodeKind", "VirtualNode"]
