"""Command shell package."""

from .common import CommandResult, ShellState, SideEffect
from .core import Shell

__all__ = ["Shell", "ShellState", "CommandResult", "SideEffect"]
