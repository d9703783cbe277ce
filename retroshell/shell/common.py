"""Shared shell types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Shell


class SideEffect(str, Enum):
    """UI-level actions a command asks the host to perform."""

    NONE = "none"
    CLEAR = "clear"
    EXIT = "exit"
    BSOD = "bsod"


@dataclass(slots=True)
class CommandResult:
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    side_effect: SideEffect = SideEffect.NONE

    @classmethod
    def error(cls, message: str, exit_code: int = 1) -> "CommandResult":
        return cls(stderr=message, exit_code=exit_code)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class ShellState:
    """Per-session state; only ``cd`` moves the working folder."""

    current_folder_id: str
    current_path: str
    env: dict[str, str] = field(default_factory=dict)
    last_exit_code: int = 0


ShellCommand = Callable[["Shell", list[str], str], CommandResult | str | None]


__all__ = ["CommandResult", "SideEffect", "ShellState", "ShellCommand"]
