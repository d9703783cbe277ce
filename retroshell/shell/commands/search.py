"""Search-oriented commands."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ..args import parse_args
from ..common import CommandResult
from ..registry import COMMAND_REGISTRY
from ...nodes import VirtualNode
from .text import read_operand

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@COMMAND_REGISTRY.command("grep", description="Filter lines matching a regular expression")
def grep(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    parsed = parse_args(args)
    show_numbers = parsed.as_switch("n")
    ignore_case = parsed.has("i", "ignore-case")
    invert = parsed.has("v", "invert-match")
    if not parsed.positional:
        return CommandResult.error("grep: missing pattern")

    pattern, *paths = parsed.positional
    try:
        compiled = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error as exc:
        return CommandResult.error(f"grep: invalid pattern '{pattern}': {exc}")

    sources: list[tuple[str | None, str]] = []
    for path in paths or [None]:
        content = read_operand(shell, "grep", path, stdin)
        if isinstance(content, CommandResult):
            return content
        sources.append((path, content))

    matches: list[str] = []
    for path, content in sources:
        label = f"{path}:" if len(sources) > 1 else ""
        for idx, line in enumerate(content.split("\n"), start=1):
            if bool(compiled.search(line)) == invert:
                continue
            number = f"{idx}:" if show_numbers else ""
            matches.append(f"{label}{number}{line}")

    if not matches:
        return CommandResult(exit_code=1)
    return CommandResult(stdout="\n".join(matches))


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a ``*``/``?`` glob into a regex matching whole names.

    Not ``fnmatch``: brackets in desktop names such as ``Report [old].txt``
    stay literal instead of forming character classes.
    """
    translated = "".join(
        ".*" if char == "*" else "." if char == "?" else re.escape(char) for char in pattern
    )
    return re.compile(f"^{translated}$")


@COMMAND_REGISTRY.command("find", description="Search for files in a directory hierarchy")
def find(shell: "Shell", args: list[str], _: str) -> CommandResult:
    start: str | None = None
    name_pattern: str | None = None
    type_filter: str | None = None

    idx = 0
    while idx < len(args):
        arg = args[idx]
        option, sep, inline = arg.lstrip("-").partition("=")
        if arg.startswith("-") and option in ("name", "type"):
            if sep:
                value: str | None = inline
                idx += 1
            else:
                value = args[idx + 1] if idx + 1 < len(args) else None
                idx += 2
            if value is None:
                return CommandResult.error(f"find: missing argument to `-{option}'")
            if option == "name":
                name_pattern = value
            elif value not in ("f", "d"):
                return CommandResult.error(f"find: unknown argument to -type: {value}")
            else:
                type_filter = value
            continue
        if arg.startswith("-"):
            return CommandResult.error(f"find: unknown predicate `{arg}'")
        if start is None:
            start = arg
        idx += 1

    start = start or "."
    resolved = shell.resolve_path(start)
    if resolved is None:
        return CommandResult.error(f"find: '{start}': No such file or directory")
    matcher = glob_to_regex(name_pattern) if name_pattern else None

    def walk(folder_id: str, prefix: str) -> Iterator[tuple[str, VirtualNode]]:
        for entry in shell.fs.get_folder_contents(folder_id):
            entry_path = f"{prefix}/{entry.name}"
            yield entry_path, entry
            if entry.is_container:
                yield from walk(entry.id, entry_path)

    results: list[str] = []
    for path, node in walk(resolved.id, start.rstrip("/\\")):
        if type_filter == "d" and not node.is_container:
            continue
        if type_filter == "f" and node.is_container:
            continue
        if matcher and not matcher.match(node.name):
            continue
        results.append(path)
    return CommandResult(stdout="\n".join(results))
