"""retroshell package: a DOS/Unix hybrid command shell over a virtual desktop filesystem."""

from .exceptions import InvalidOperation, NodeExists, NodeNotFound, PermissionDenied, ShellError
from .nodes import NodeKind, VirtualNode
from .shell import CommandResult, Shell, ShellState, SideEffect
from .shell_parser import parse, tokenize
from .vfs import FileSystem, VirtualFileSystem

__all__ = [
    "Shell",
    "ShellState",
    "CommandResult",
    "SideEffect",
    "FileSystem",
    "VirtualFileSystem",
    "VirtualNode",
    "NodeKind",
    "tokenize",
    "parse",
    "ShellError",
    "NodeNotFound",
    "NodeExists",
    "InvalidOperation",
    "PermissionDenied",
]
