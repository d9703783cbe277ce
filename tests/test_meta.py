import re

from retroshell import Shell, VirtualFileSystem
from retroshell.shell.commands.meta import COLOR_PALETTE


def setup_shell() -> Shell:
    return Shell(VirtualFileSystem())


def test_help_lists_commands_and_operators():
    out = setup_shell().execute("help").stdout
    assert out.startswith("Available commands:")
    for name in ("cd", "grep", "find", "tree", "del", "type"):
        assert f"  {name}" in out
    assert "cmd1 && cmd2" in out


def test_ver_banner():
    out = setup_shell().execute("ver").stdout
    assert "Windows 95" in out
    assert "RetroOS Terminal Emulator" in out


def test_date_format():
    out = setup_shell().execute("date").stdout
    assert re.fullmatch(
        r"Current date is: \d{2}/\d{2}/\d{4}\nCurrent time is: \d{2}:\d{2}:\d{2} (AM|PM)", out
    )


def test_whoami_and_env():
    shell = setup_shell()
    assert shell.execute("whoami").stdout == "RETROOS\\Daniel"
    assert "SHELL=/bin/bash" in shell.execute("env").stdout.splitlines()


def test_echo_joins_arguments():
    shell = setup_shell()
    assert shell.execute('echo  "a  b"   c').stdout == "a  b c"
    assert shell.execute("echo").stdout == ""


def test_color_palette_and_validation():
    shell = setup_shell()
    seen: list[str] = []
    shell.on_color_change = seen.append
    assert shell.execute("color F").exit_code == 0
    assert seen == ["#ffffff"]
    result = shell.execute("color z")
    assert result.exit_code == 1
    assert result.stderr == "Invalid color code. Use 0-9 or a-f."
    assert shell.execute("color").exit_code == 1
    assert len(COLOR_PALETTE) == 16


def test_exit_fires_callback():
    shell = setup_shell()
    calls: list[str] = []
    shell.on_exit = lambda: calls.append("bye")
    result = shell.execute("exit")
    assert calls == ["bye"]
    assert result.stdout == ""
