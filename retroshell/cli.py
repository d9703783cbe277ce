"""Command-line interface for retroshell."""

from __future__ import annotations

import argparse
import logging
import sys

from .shell import CommandResult, Shell
from .vfs import VirtualFileSystem

CLEAR_SCREEN = "\033[2J\033[H"

BSOD_BANNER = """\
A fatal exception 0E has occurred at 0028:C0011E36 in VXD VMM(01) +
00010E36. The current application will be terminated.

*  Press any key to terminate the current application.
*  Press CTRL+ALT+DEL again to restart your computer. You will
   lose any unsaved information in all applications."""


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--user", default="Daniel", help="User name reported by whoami and env.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity for shell internals.",
    )


def _build_shell(args: argparse.Namespace) -> Shell:
    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr)
    return Shell(VirtualFileSystem(), user=args.user)


def _write_result(result: CommandResult) -> None:
    if result.stdout:
        sys.stdout.write(result.stdout + "\n")
    if result.stderr:
        sys.stderr.write(result.stderr + "\n")


def _ansi_color(hex_color: str) -> str:
    red, green, blue = (int(hex_color[idx : idx + 2], 16) for idx in (1, 3, 5))
    return f"\033[38;2;{red};{green};{blue}m"


def _run_exec(args: argparse.Namespace) -> int:
    shell = _build_shell(args)
    result = shell.execute(args.command)
    _write_result(result)
    return result.exit_code


def _run_shell(args: argparse.Namespace) -> int:
    shell = _build_shell(args)
    state = {"running": True, "exit_code": 0}

    def on_exit() -> None:
        state["running"] = False

    def on_bsod() -> None:
        sys.stdout.write(BSOD_BANNER + "\n")
        state["running"] = False
        state["exit_code"] = 1

    shell.on_clear = lambda: sys.stdout.write(CLEAR_SCREEN)
    shell.on_exit = on_exit
    shell.on_bsod = on_bsod
    shell.on_color_change = lambda hex_color: sys.stdout.write(_ansi_color(hex_color))

    try:
        while state["running"]:
            line = input(f"{shell.get_cwd()}>")
            if line.strip() in {":q", "quit"}:
                break
            _write_result(shell.execute(line))
    except (EOFError, KeyboardInterrupt):
        return 0
    return state["exit_code"]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="retroshell")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command line")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("command", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    exit_code = args.func(args)
    raise SystemExit(exit_code)


__all__ = ["main"]
