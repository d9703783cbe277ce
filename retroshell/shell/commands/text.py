"""Text processing commands.

Each command reads the file named by its first operand, or stdin when no
operand is given, so they work both standalone and as pipeline stages.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..args import parse_args
from ..common import CommandResult
from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")


def read_operand(shell: "Shell", command: str, path: str | None, stdin: str) -> str | CommandResult:
    """Return the text of ``path`` (or ``stdin``), or an error result."""
    if path is None:
        return stdin or ""
    resolved = shell.resolve_path(path)
    if resolved is None:
        return CommandResult.error(f"{command}: {path}: No such file or directory")
    node = shell.fs.get_file(resolved.id)
    if node is None or node.is_dir:
        return CommandResult.error(f"{command}: {path}: Is a directory")
    return node.content or ""


def _read_range_command(shell: "Shell", args: list[str], stdin: str, *, tail: bool) -> CommandResult:
    name = "tail" if tail else "head"
    parsed = parse_args(args)
    mode = "lines"
    count = 10
    for flag, flag_mode in (("n", "lines"), ("c", "bytes")):
        value = parsed.get(flag)
        if not isinstance(value, str):
            continue
        try:
            count = int(value)
        except ValueError:
            return CommandResult.error(f"{name}: invalid number: '{value}'")
        mode = flag_mode

    path = parsed.positional[0] if parsed.positional else None
    content = read_operand(shell, name, path, stdin)
    if isinstance(content, CommandResult):
        return content

    count = max(count, 0)
    if mode == "bytes":
        return CommandResult(stdout=content[len(content) - count :] if tail else content[:count])
    lines = content.split("\n")
    selected = lines[max(len(lines) - count, 0) :] if tail else lines[:count]
    return CommandResult(stdout="\n".join(selected))


@COMMAND_REGISTRY.command("head", description="Output the first part of files")
def head(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    return _read_range_command(shell, args, stdin, tail=False)


@COMMAND_REGISTRY.command("tail", description="Output the last part of files")
def tail(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    return _read_range_command(shell, args, stdin, tail=True)


@COMMAND_REGISTRY.command("wc", description="Count lines, words and characters")
def wc(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    parsed = parse_args(args)
    show_chars = parsed.as_switch("c") or parsed.has("m")
    show_lines = parsed.has("l")
    show_words = parsed.has("w")

    path = parsed.positional[0] if parsed.positional else None
    content = read_operand(shell, "wc", path, stdin)
    if isinstance(content, CommandResult):
        return content

    lines = len(content.split("\n")) if content else 0
    words = len(content.split())
    chars = len(content)
    if not (show_lines or show_words or show_chars):
        return CommandResult(stdout=f"  {lines}  {words}  {chars}")
    parts = []
    if show_lines:
        parts.append(lines)
    if show_words:
        parts.append(words)
    if show_chars:
        parts.append(chars)
    return CommandResult(stdout="  ".join(str(part) for part in parts))


def _numeric_key(line: str) -> float:
    match = _LEADING_NUMBER.match(line)
    return float(match.group(1)) if match else 0.0


@COMMAND_REGISTRY.command("sort", description="Sort lines of text")
def sort(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    parsed = parse_args(args)
    numeric = parsed.as_switch("n")
    reverse = parsed.has("r")

    path = parsed.positional[0] if parsed.positional else None
    content = read_operand(shell, "sort", path, stdin)
    if isinstance(content, CommandResult):
        return content

    lines = content.split("\n")
    if numeric:
        lines.sort(key=_numeric_key)
    else:
        lines.sort()
    if reverse:
        lines.reverse()
    return CommandResult(stdout="\n".join(lines))


@COMMAND_REGISTRY.command("uniq", description="Collapse adjacent duplicate lines")
def uniq(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    parsed = parse_args(args)
    show_counts = parsed.as_switch("c")

    path = parsed.positional[0] if parsed.positional else None
    content = read_operand(shell, "uniq", path, stdin)
    if isinstance(content, CommandResult):
        return content

    runs: list[tuple[str, int]] = []
    for line in content.split("\n"):
        if runs and runs[-1][0] == line:
            runs[-1] = (line, runs[-1][1] + 1)
        else:
            runs.append((line, 1))
    if show_counts:
        rendered = [f"{count:>4} {line}" for line, count in runs]
    else:
        rendered = [line for line, _ in runs]
    return CommandResult(stdout="\n".join(rendered))
