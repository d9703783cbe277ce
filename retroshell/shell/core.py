"""Core Shell implementation: walks parsed command lines and dispatches built-ins."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..exceptions import ShellError
from ..path_utils import ResolvedPath, resolve_path, split_parent
from ..shell_parser import CommandList, CommandSpec, Pipeline, Redirect, RedirectMode, parse, tokenize
from ..vfs import ROOT_ID, FileSystem
from .common import CommandResult, ShellCommand, ShellState, SideEffect
from .registry import COMMAND_REGISTRY

logger = logging.getLogger(__name__)

CommandHandler = Callable[[list[str], str], CommandResult | str | None]


class Shell:
    """Executes DOS/Unix flavoured command lines against a desktop filesystem."""

    def __init__(
        self,
        fs: FileSystem,
        *,
        env: dict[str, str] | None = None,
        user: str = "Daniel",
        home_folder_id: str | None = None,
        allowed_commands: Iterable[str] | None = None,
        max_output_bytes: int | None = None,
    ) -> None:
        self.fs = fs
        self.home_folder_id = home_folder_id or getattr(fs, "root_id", ROOT_ID)
        home_path = fs.get_file_path(self.home_folder_id)
        self.state = ShellState(
            current_folder_id=self.home_folder_id,
            current_path=home_path,
            env={"USER": user, "HOME": home_path, "SHELL": "/bin/bash", **(env or {})},
        )
        self.commands: dict[str, CommandHandler] = {}
        self.command_docs: dict[str, str] = {}
        self.allowed_commands: set[str] | None = (
            {name.lower() for name in allowed_commands} if allowed_commands else None
        )
        self.max_output_bytes = max_output_bytes

        self.on_clear: Callable[[], None] | None = None
        self.on_exit: Callable[[], None] | None = None
        self.on_color_change: Callable[[str], None] | None = None
        self.on_bsod: Callable[[], None] | None = None

        self._register_builtin_commands()

    # ------------------------------------------------------------------
    # Command registration
    # ------------------------------------------------------------------
    def register_command(
        self,
        name: str,
        handler: CommandHandler,
        *,
        description: str = "",
    ) -> None:
        key = name.lower()
        self.commands[key] = handler
        if description:
            self.command_docs[key] = description

    def available_commands(self) -> list[str]:
        return sorted(self.commands)

    def _register_builtin_commands(self) -> None:
        # Import command modules for their side effects (registration)
        from . import commands  # noqa: F401

        for spec in COMMAND_REGISTRY.iter_commands():
            handler = self._bind_registered_handler(spec.handler)
            for name in spec.names:
                self.register_command(name, handler, description=spec.description)

    def _bind_registered_handler(self, func: ShellCommand) -> CommandHandler:
        def bound(args: list[str], stdin: str) -> CommandResult | str | None:
            return func(self, args, stdin)

        return bound

    # ------------------------------------------------------------------
    # Paths and state
    # ------------------------------------------------------------------
    def get_cwd(self) -> str:
        return self.state.current_path

    def resolve_path(self, path: str | None) -> ResolvedPath | None:
        return resolve_path(self.fs, self.state, path)

    def change_folder(self, folder_id: str, display_path: str) -> None:
        self.state.current_folder_id = folder_id
        self.state.current_path = display_path

    def resolve_parent(self, path: str) -> tuple[str | None, str]:
        """Return ``(parent_id, name)`` for a path that may not exist yet.

        ``parent_id`` is ``None`` when the directory part does not resolve.
        A bare name lands in the current folder.
        """
        parent_path, name = split_parent(path)
        if parent_path is None:
            return self.state.current_folder_id, name
        resolved = self.resolve_path(parent_path)
        return (resolved.id if resolved else None), name

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def execute(self, command_line: str) -> CommandResult:
        line = command_line.strip()
        if not line:
            return CommandResult()
        try:
            return self.execute_list(parse(tokenize(line)), "")
        except Exception as exc:  # last-resort guard; execute never raises
            logger.exception("Unhandled failure executing %r", line)
            return CommandResult.error(f"Error: {exc}")

    def execute_list(self, command_list: CommandList, stdin: str) -> CommandResult:
        result = CommandResult()
        stdout_parts: list[str] = []
        stderr_parts: list[str] = []
        for idx, pipeline in enumerate(command_list.pipelines):
            if idx > 0 and command_list.operators[idx - 1] == "&&" and result.exit_code != 0:
                logger.debug("Short-circuiting after exit code %d", result.exit_code)
                break
            result = self.execute_pipeline(pipeline, stdin)
            if result.stdout:
                stdout_parts.append(result.stdout)
            if result.stderr:
                stderr_parts.append(result.stderr)
        self.state.last_exit_code = result.exit_code
        return CommandResult(
            stdout="\n".join(stdout_parts),
            stderr="\n".join(stderr_parts),
            exit_code=result.exit_code,
        )

    def execute_pipeline(self, pipeline: Pipeline, stdin: str) -> CommandResult:
        result = CommandResult()
        stderr_parts: list[str] = []
        current_stdin = stdin
        for command in pipeline.commands:
            result = self.execute_command(command, current_stdin)
            if result.stderr:
                stderr_parts.append(result.stderr)
            current_stdin = result.stdout
        return CommandResult(
            stdout=result.stdout,
            stderr="\n".join(stderr_parts),
            exit_code=result.exit_code,
        )

    def execute_command(self, command: CommandSpec, stdin: str) -> CommandResult:
        name = command.name
        key = name.lower()
        handler = self.commands.get(key)
        if handler is None:
            return CommandResult.error(
                f"'{name}' is not recognized as an internal or external command,\n"
                "operable program or batch file.",
                exit_code=127,
            )
        if self.allowed_commands is not None and key not in self.allowed_commands:
            return CommandResult.error(f"Command '{name}' is disabled in this shell")
        logger.debug("Dispatching %s with %d argument(s)", key, len(command.args))
        try:
            raw = handler(command.args, stdin)
        except ShellError as exc:
            return CommandResult.error(f"{key}: {exc}")
        except Exception as exc:  # unexpected failure path
            logger.exception("Built-in %s failed", key)
            return CommandResult.error(f"Error: {exc}")

        result = self._normalize(raw)
        if result.side_effect is not SideEffect.NONE:
            self._fire_side_effect(result.side_effect)
            return CommandResult()
        result = self._enforce_output_limit(result)
        if command.redirect is not None and result.stdout:
            return self._apply_redirect(command.redirect, result.stdout)
        return result

    def _normalize(self, raw: CommandResult | str | None) -> CommandResult:
        if isinstance(raw, CommandResult):
            return raw
        if raw is None:
            return CommandResult()
        return CommandResult(stdout=str(raw))

    def _fire_side_effect(self, effect: SideEffect) -> None:
        callback = {
            SideEffect.CLEAR: self.on_clear,
            SideEffect.EXIT: self.on_exit,
            SideEffect.BSOD: self.on_bsod,
        }.get(effect)
        logger.debug("Side effect %s (callback %s)", effect.value, "set" if callback else "unset")
        if callback is not None:
            callback()

    def _enforce_output_limit(self, result: CommandResult) -> CommandResult:
        if self.max_output_bytes is None:
            return result
        total = len(result.stdout) + len(result.stderr)
        if total <= self.max_output_bytes:
            return result
        return CommandResult.error(f"Output limit ({self.max_output_bytes} bytes) exceeded")

    def _apply_redirect(self, redirect: Redirect, stdout: str) -> CommandResult:
        target = redirect.file
        resolved = self.resolve_path(target)
        if resolved is not None:
            node = self.fs.get_file(resolved.id)
            if node is not None:
                if node.is_system:
                    return CommandResult.error(f"{target}: Permission denied")
                if node.is_dir:
                    return CommandResult.error(f"{target}: Is a directory")
                if redirect.mode is RedirectMode.APPEND:
                    existing = node.content or ""
                    if existing and not existing.endswith("\n"):
                        existing += "\n"
                    content = existing + stdout
                else:
                    content = stdout
                self.fs.update_file_content(resolved.id, content)
                return CommandResult()

        parent_id, name = self.resolve_parent(target)
        if parent_id is None or not name:
            return CommandResult.error(f"{target}: No such file or directory")
        try:
            self.fs.add_file(
                {"name": name, "kind": "file", "content": stdout, "app_type": "notepad"},
                parent_id,
            )
        except ShellError as exc:
            return CommandResult.error(f"{target}: {exc}")
        return CommandResult()


__all__ = ["Shell"]
