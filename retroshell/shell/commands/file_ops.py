"""File manipulation commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..args import parse_args
from ..common import CommandResult, SideEffect
from ..registry import COMMAND_REGISTRY
from ...exceptions import NodeNotFound, ShellError
from ...nodes import NodeKind
from ...path_utils import find_child

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@COMMAND_REGISTRY.command("cat", aliases=("type",), description="Print file contents")
def cat(shell: "Shell", args: list[str], stdin: str) -> CommandResult:
    parsed = parse_args(args)
    if not parsed.positional:
        return CommandResult(stdout=stdin or "")
    blobs: list[str] = []
    for path in parsed.positional:
        resolved = shell.resolve_path(path)
        if resolved is None:
            return CommandResult.error(f"cat: {path}: No such file or directory")
        node = shell.fs.get_file(resolved.id)
        if node is None or node.is_dir:
            return CommandResult.error(f"cat: {path}: Is a directory")
        blobs.append(node.content or "")
    return CommandResult(stdout="".join(blobs))


def _create(shell: "Shell", command: str, path: str, kind: NodeKind) -> CommandResult | None:
    """Create ``path`` as ``kind``; returns an error result or ``None``."""
    verb = "create directory" if kind is NodeKind.FOLDER else "touch"
    parent_id, name = shell.resolve_parent(path)
    if parent_id is None or not name:
        return CommandResult.error(f"{command}: cannot {verb} '{path}': No such file or directory")
    parent = shell.fs.get_file(parent_id)
    if parent is None or not parent.is_dir:
        return CommandResult.error(f"{command}: cannot {verb} '{path}': Not a directory")
    if find_child(shell.fs, parent_id, name) is not None:
        if kind is NodeKind.FILE:
            return None
        return CommandResult.error(f"{command}: cannot {verb} '{name}': File exists")
    if kind is NodeKind.FOLDER:
        record = {"name": name, "kind": "folder", "children": [], "app_type": "explorer"}
    else:
        record = {"name": name, "kind": "file", "content": "", "app_type": "notepad"}
    shell.fs.add_file(record, parent_id)
    return None


@COMMAND_REGISTRY.command("mkdir", aliases=("md",), description="Create directories")
def mkdir(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    if not parsed.positional:
        return CommandResult.error("mkdir: missing operand")
    for path in parsed.positional:
        failure = _create(shell, "mkdir", path, NodeKind.FOLDER)
        if failure is not None:
            return failure
    return CommandResult()


@COMMAND_REGISTRY.command("touch", description="Create empty file")
def touch(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    if not parsed.positional:
        return CommandResult.error("touch: missing file operand")
    for path in parsed.positional:
        failure = _create(shell, "touch", path, NodeKind.FILE)
        if failure is not None:
            return failure
    return CommandResult()


def _is_within(shell: "Shell", node_id: str, ancestor_id: str) -> bool:
    current: str | None = node_id
    while current is not None:
        if current == ancestor_id:
            return True
        parent = shell.fs.find_parent(current)
        current = parent.id if parent else None
    return False


def _copy_tree(shell: "Shell", node_id: str, parent_id: str, name: str | None = None) -> str:
    node = shell.fs.get_file(node_id)
    if node is None:
        raise NodeNotFound(f"No node with id {node_id}")
    kind = NodeKind.FOLDER if node.kind is NodeKind.SYSTEM_FOLDER else node.kind
    record = {
        "name": name or node.name,
        "kind": kind.value,
        "content": node.content,
        "icon": node.icon,
        "app_type": node.app_type,
        **node.metadata,
    }
    if node.is_container:
        record["children"] = []
    new_id = shell.fs.add_file(record, parent_id)
    if node.is_container:
        for child in shell.fs.get_folder_contents(node_id):
            _copy_tree(shell, child.id, new_id)
    return new_id


@COMMAND_REGISTRY.command("cp", description="Copy files and directories")
def cp(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    recursive = parsed.has("r", "R", "recursive")
    if len(parsed.positional) < 2:
        return CommandResult.error("cp: missing destination file operand")
    source, dest = parsed.positional[:2]

    src = shell.resolve_path(source)
    if src is None:
        return CommandResult.error(f"cp: cannot stat '{source}': No such file or directory")
    src_node = shell.fs.get_file(src.id)
    if src_node is None:
        return CommandResult.error(f"cp: cannot stat '{source}': No such file or directory")
    if src_node.is_system:
        return CommandResult.error(f"cp: cannot copy '{source}': Permission denied")
    if src_node.is_container and not recursive:
        return CommandResult.error(f"cp: -r not specified; omitting directory '{source}'")

    dst = shell.resolve_path(dest)
    dst_node = shell.fs.get_file(dst.id) if dst else None
    if dst_node is not None and dst_node.is_dir:
        if dst_node.is_system:
            return CommandResult.error(f"cp: cannot create '{dest}': Permission denied")
        parent_id, name = dst_node.id, src_node.name
        existing = find_child(shell.fs, parent_id, name)
    elif dst_node is not None:
        parent = shell.fs.find_parent(dst_node.id)
        parent_id = parent.id if parent else shell.state.current_folder_id
        name, existing = dst_node.name, dst_node
    else:
        resolved_parent, name = shell.resolve_parent(dest)
        if resolved_parent is None or not name:
            return CommandResult.error(f"cp: cannot create '{dest}': No such file or directory")
        parent_id, existing = resolved_parent, None

    if existing is not None and existing.id == src_node.id:
        return CommandResult.error(f"cp: '{source}' and '{dest}' are the same file")
    if src_node.is_container and _is_within(shell, parent_id, src_node.id):
        return CommandResult.error(
            f"cp: cannot copy a directory, '{source}', into itself, '{dest}'"
        )
    if existing is not None:
        if existing.is_dir:
            return CommandResult.error(f"cp: cannot overwrite directory '{dest}': File exists")
        # Overwriting replaces the destination outright; it does not go to the recycle bin.
        shell.fs.permanently_delete(existing.id)
    _copy_tree(shell, src_node.id, parent_id, name)
    return CommandResult()


@COMMAND_REGISTRY.command("mv", description="Move or rename files and directories")
def mv(shell: "Shell", args: list[str], _: str) -> CommandResult:
    parsed = parse_args(args)
    if len(parsed.positional) < 2:
        return CommandResult.error("mv: missing destination file operand")
    source, dest = parsed.positional[:2]

    src = shell.resolve_path(source)
    if src is None:
        return CommandResult.error(f"mv: cannot stat '{source}': No such file or directory")
    src_node = shell.fs.get_file(src.id)
    if src_node is None:
        return CommandResult.error(f"mv: cannot stat '{source}': No such file or directory")
    if src_node.is_system:
        return CommandResult.error(f"mv: cannot move '{source}': Permission denied")

    dst = shell.resolve_path(dest)
    dst_node = shell.fs.get_file(dst.id) if dst else None
    try:
        if dst_node is not None and dst_node.is_container:
            shell.fs.move_file_to_folder(src_node.id, dst_node.id)
            return CommandResult()
        if dst_node is not None and dst_node.id != src_node.id:
            return CommandResult.error(
                f"mv: cannot move '{source}' to '{dest}': File exists"
            )

        parent_id, new_name = shell.resolve_parent(dest)
        if parent_id is None or not new_name:
            return CommandResult.error(
                f"mv: cannot move '{source}' to '{dest}': No such file or directory"
            )
        clash = find_child(shell.fs, parent_id, new_name)
        if clash is not None and clash.id != src_node.id:
            return CommandResult.error(
                f"mv: cannot move '{source}' to '{dest}': File exists"
            )
        # rename_file checks the current folder, move_file_to_folder the target.
        blocker = find_child(shell.fs, parent_id, src_node.name)
        if blocker is None or blocker.id == src_node.id:
            shell.fs.move_file_to_folder(src_node.id, parent_id)
            shell.fs.rename_file(src_node.id, new_name)
        else:
            shell.fs.rename_file(src_node.id, new_name)
            shell.fs.move_file_to_folder(src_node.id, parent_id)
    except ShellError as exc:
        return CommandResult.error(f"mv: cannot move '{source}' to '{dest}': {exc}")
    return CommandResult()


def _looks_destructive(args: list[str]) -> bool:
    joined = " ".join(args).lower()
    if "system32" in joined:
        return True
    recursive = any(
        arg == "--recursive" or (arg.startswith("-") and not arg.startswith("--") and "r" in arg.lower())
        for arg in args
    )
    return recursive and ("/" in joined or "\\" in joined)


@COMMAND_REGISTRY.command("rm", aliases=("del",), description="Remove files or directories")
def rm(shell: "Shell", args: list[str], _: str) -> CommandResult:
    if _looks_destructive(args):
        return CommandResult(side_effect=SideEffect.BSOD)

    parsed = parse_args(args)
    force = parsed.has("f", "force")
    recursive = force or parsed.has("r", "R", "recursive")
    if not parsed.positional:
        return CommandResult.error("rm: missing operand")

    for path in parsed.positional:
        resolved = shell.resolve_path(path)
        if resolved is None:
            if force:
                continue
            return CommandResult.error(f"rm: cannot remove '{path}': No such file or directory")
        node = shell.fs.get_file(resolved.id)
        parent = shell.fs.find_parent(resolved.id)
        if node is None or node.is_system or parent is None:
            return CommandResult.error(f"rm: cannot remove '{path}': Permission denied")
        if node.is_container and not recursive:
            return CommandResult.error(f"rm: cannot remove '{path}': Is a directory")
        shell.fs.delete_file(resolved.id, parent.id)
    return CommandResult()
