"""Exception hierarchy shared by the filesystem and the shell."""

from __future__ import annotations


class ShellError(Exception):
    """Base class for recoverable shell and filesystem errors."""


class NodeNotFound(ShellError):
    """Raised when an id or path does not name a node."""


class NodeExists(ShellError):
    """Raised when a sibling with the same name already exists."""


class InvalidOperation(ShellError):
    """Raised when an operation does not apply to the target node."""


class PermissionDenied(ShellError):
    """Raised when a protected (system) node would be mutated."""


__all__ = [
    "ShellError",
    "NodeNotFound",
    "NodeExists",
    "InvalidOperation",
    "PermissionDenied",
]
