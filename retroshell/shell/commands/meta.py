"""Meta commands for shell introspection and terminal control."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ..common import CommandResult, SideEffect
from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell

COLOR_PALETTE = {
    "0": "#000000",
    "1": "#0000aa",
    "2": "#00aa00",
    "3": "#00aaaa",
    "4": "#aa0000",
    "5": "#aa00aa",
    "6": "#aa5500",
    "7": "#aaaaaa",
    "8": "#555555",
    "9": "#5555ff",
    "a": "#55ff55",
    "b": "#55ffff",
    "c": "#ff5555",
    "d": "#ff55ff",
    "e": "#ffff55",
    "f": "#ffffff",
}

VERSION_BANNER = """\
Microsoft(R) Windows 95
   (C)Copyright Microsoft Corp 1981-1995.

RetroOS Terminal Emulator v2.0
Now with pipes and redirections!"""

OPERATORS_HELP = """\
Operators:
  cmd1 | cmd2       - Pipe output of cmd1 to cmd2
  cmd > file        - Redirect output to file (overwrite)
  cmd >> file       - Redirect output to file (append)
  cmd1 && cmd2      - Run cmd2 only if cmd1 succeeds
  cmd1 ; cmd2       - Run cmd2 after cmd1"""


@COMMAND_REGISTRY.command("help", description="Show available commands")
def help(shell: "Shell", _: list[str], __: str) -> CommandResult:  # noqa: A001
    lines = ["Available commands:"]
    for name in shell.available_commands():
        desc = shell.command_docs.get(name, "")
        if desc:
            lines.append(f"  {name:<8} - {desc}")
        else:
            lines.append(f"  {name}")
    lines.append("")
    lines.append(OPERATORS_HELP)
    return CommandResult(stdout="\n".join(lines))


@COMMAND_REGISTRY.command("ver", description="Display version")
def ver(shell: "Shell", _: list[str], __: str) -> CommandResult:
    return CommandResult(stdout=VERSION_BANNER)


@COMMAND_REGISTRY.command("date", description="Display date and time")
def date(shell: "Shell", _: list[str], __: str) -> CommandResult:
    now = datetime.now()
    return CommandResult(
        stdout=(
            f"Current date is: {now.strftime('%m/%d/%Y')}\n"
            f"Current time is: {now.strftime('%I:%M:%S %p')}"
        )
    )


@COMMAND_REGISTRY.command("whoami", description="Display current user")
def whoami(shell: "Shell", _: list[str], __: str) -> CommandResult:
    return CommandResult(stdout=f"RETROOS\\{shell.state.env.get('USER', '')}")


@COMMAND_REGISTRY.command("env", description="Display environment variables")
def env(shell: "Shell", _: list[str], __: str) -> CommandResult:
    return CommandResult(stdout="\n".join(f"{key}={value}" for key, value in shell.state.env.items()))


@COMMAND_REGISTRY.command("echo", description="Display text")
def echo(shell: "Shell", args: list[str], _: str) -> CommandResult:
    return CommandResult(stdout=" ".join(args))


@COMMAND_REGISTRY.command("color", description="Change text color (0-9, a-f)")
def color(shell: "Shell", args: list[str], _: str) -> CommandResult:
    code = args[0].lower() if args else ""
    hex_color = COLOR_PALETTE.get(code)
    if hex_color is None:
        return CommandResult.error("Invalid color code. Use 0-9 or a-f.")
    if shell.on_color_change is not None:
        shell.on_color_change(hex_color)
    return CommandResult()


@COMMAND_REGISTRY.command("cls", aliases=("clear",), description="Clear screen")
def cls(shell: "Shell", _: list[str], __: str) -> CommandResult:
    return CommandResult(side_effect=SideEffect.CLEAR)


@COMMAND_REGISTRY.command("exit", description="Close terminal")
def exit_(shell: "Shell", _: list[str], __: str) -> CommandResult:
    return CommandResult(side_effect=SideEffect.EXIT)
