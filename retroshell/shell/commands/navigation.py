"""Navigation-oriented commands."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ..args import parse_args
from ..common import CommandResult
from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


def _format_long(rows: list[tuple[str, bool, int, float]], user: str) -> str:
    lines = [f"total {len(rows)}"]
    for name, is_dir, size, mtime in rows:
        perms = "drwxr-xr-x" if is_dir else "-rw-r--r--"
        stamp = datetime.fromtimestamp(mtime).strftime("%b %d %H:%M")
        lines.append(f"{perms}  1 {user}  {size:>6}  {stamp}  {name}")
    return "\n".join(lines)


@COMMAND_REGISTRY.command("pwd", description="Print working directory")
def pwd(shell: "Shell", _: list[str], __: str) -> CommandResult:
    return CommandResult(stdout=shell.get_cwd())


@COMMAND_REGISTRY.command("cd", description="Change directory")
def cd(shell: "Shell", args: list[str], _: str) -> CommandResult:
    # Unquoted names with spaces still work: "cd My Projects".
    target = " ".join(args)
    if not target:
        return CommandResult(stdout=shell.get_cwd())
    if target in ("\\", "/"):
        home = shell.home_folder_id
        shell.change_folder(home, shell.fs.get_file_path(home))
        return CommandResult()
    if target == ".":
        return CommandResult()
    if target == ".." and shell.fs.find_parent(shell.state.current_folder_id) is None:
        return CommandResult(stderr="Already at root directory")

    resolved = shell.resolve_path(target)
    if resolved is None:
        return CommandResult.error(f"cd: {target}: No such file or directory")
    node = shell.fs.get_file(resolved.id)
    if node is None or not node.is_dir:
        return CommandResult.error(f"cd: {target}: Not a directory")
    shell.change_folder(resolved.id, resolved.display_path)
    return CommandResult()


@COMMAND_REGISTRY.command("ls", description="List directory contents")
def ls(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    show_all = parsed.has("a", "all")
    long_format = parsed.has("l")

    target = parsed.positional[0] if parsed.positional else None
    resolved = shell.resolve_path(target)
    if resolved is None:
        return CommandResult.error(f"ls: cannot access '{target}': No such file or directory")
    node = shell.fs.get_file(resolved.id)
    if node is not None and not node.is_dir:
        entries = [node]
    else:
        entries = shell.fs.get_folder_contents(resolved.id)

    rows = [(entry.name, entry.is_dir, entry.size, entry.modified_at) for entry in entries]
    if show_all and node is not None and node.is_dir:
        rows = [(".", True, 0, node.modified_at), ("..", True, 0, node.modified_at), *rows]
    if not rows:
        return CommandResult()
    if long_format:
        return CommandResult(stdout=_format_long(rows, shell.state.env.get("USER", "user")))
    return CommandResult(stdout="  ".join(row[0] for row in rows))


@COMMAND_REGISTRY.command("dir", description="List directory contents, DOS style")
def dir_(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    target = parsed.positional[0] if parsed.positional else None
    resolved = shell.resolve_path(target)
    if resolved is None:
        return CommandResult.error("The system cannot find the path specified.")

    entries = shell.fs.get_folder_contents(resolved.id)
    lines = ["", f" Directory of {resolved.display_path}", ""]
    if not entries:
        lines.append("File Not Found")
        return CommandResult(stdout="\n".join(lines))

    files = dirs = total = 0
    for entry in entries:
        stamp = datetime.fromtimestamp(entry.modified_at).strftime("%m/%d/%Y  %I:%M %p")
        if entry.is_dir:
            dirs += 1
            lines.append(f"{stamp}    <DIR>          {entry.name}")
        else:
            files += 1
            total += entry.size
            lines.append(f"{stamp}    {entry.size:>14} {entry.name}")
    lines.append(f"{files:>16} File(s) {total:>14} bytes")
    lines.append(f"{dirs:>16} Dir(s)")
    return CommandResult(stdout="\n".join(lines))


@COMMAND_REGISTRY.command("tree", description="Render tree view")
def tree(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    start = parsed.positional[0] if parsed.positional else "."
    resolved = shell.resolve_path(start)
    if resolved is None:
        return CommandResult.error(f"tree: '{start}': No such file or directory")

    root = shell.fs.get_file(resolved.id)
    lines = [root.name if root is not None else start]
    counts = {"dirs": 0, "files": 0}

    def render(folder_id: str, prefix: str = "") -> None:
        entries = shell.fs.get_folder_contents(folder_id)
        for idx, entry in enumerate(entries):
            last = idx == len(entries) - 1
            connector = "└── " if last else "├── "
            lines.append(f"{prefix}{connector}{entry.name}")
            if entry.is_container:
                counts["dirs"] += 1
                render(entry.id, prefix + ("    " if last else "│   "))
            else:
                counts["files"] += 1

    render(resolved.id)
    summary = f"{counts['dirs']} directories, {counts['files']} files"
    return CommandResult(stdout="\n".join(lines) + "\n\n" + summary)
