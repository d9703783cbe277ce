import builtins

import pytest

from retroshell.cli import main


def feed(monkeypatch, lines: list[str]) -> None:
    inputs = iter(lines)

    def fake_input(_: str) -> str:
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_cli_exec_outputs(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "echo hi"])
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert "hi" in captured.out


def test_cli_exec_reports_failure_code(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "frobnicate"])
    assert exc.value.code == 127
    captured = capsys.readouterr()
    assert "is not recognized" in captured.err


def test_cli_exec_user_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "--user", "Ada", "whoami"])
    assert exc.value.code == 0
    assert "RETROOS\\Ada" in capsys.readouterr().out


def test_cli_shell_repl(monkeypatch, capsys):
    feed(monkeypatch, ["echo hello", ":q"])
    with pytest.raises(SystemExit) as exc:
        main(["shell"])
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert "hello" in captured.out


def test_cli_shell_keeps_state_between_lines(monkeypatch, capsys):
    feed(monkeypatch, ["cd My Projects", "pwd", "exit", "echo unreachable"])
    with pytest.raises(SystemExit) as exc:
        main(["shell"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "C:\\Desktop\\My Projects" in out
    assert "unreachable" not in out


def test_cli_shell_stops_on_eof(monkeypatch):
    feed(monkeypatch, [])
    with pytest.raises(SystemExit) as exc:
        main(["shell"])
    assert exc.value.code == 0


def test_cli_shell_crash_exits_nonzero(monkeypatch, capsys):
    feed(monkeypatch, ["rm -rf C:\\system32", "echo after"])
    with pytest.raises(SystemExit) as exc:
        main(["shell"])
    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert "fatal exception" in out
    assert "after" not in out
