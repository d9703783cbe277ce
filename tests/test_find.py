import pytest

from retroshell import Shell, VirtualFileSystem
from retroshell.shell.commands.search import glob_to_regex
from retroshell.vfs import ROOT_ID


@pytest.fixture
def shell() -> Shell:
    vfs = VirtualFileSystem()
    folder_a = vfs.add_file({"name": "a", "kind": "folder"}, ROOT_ID)
    folder_b = vfs.add_file({"name": "b", "kind": "folder"}, folder_a)
    vfs.add_file({"name": "file1.txt", "kind": "file", "content": "content"}, folder_a)
    vfs.add_file({"name": "file2.py", "kind": "file", "content": "print('hello')"}, folder_b)
    vfs.add_file({"name": "root_file.md", "kind": "file", "content": "# Root"}, ROOT_ID)
    return Shell(vfs)


def test_find_all(shell):
    result = shell.execute("find a")
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["a/b", "a/b/file2.py", "a/file1.txt"]


def test_find_defaults_to_current_folder(shell):
    lines = shell.execute("find").stdout.splitlines()
    assert "./a/b/file2.py" in lines
    assert "./root_file.md" in lines
    assert "./My Projects/Project Alpha" in lines


def test_find_name(shell):
    result = shell.execute("find / -name *.py")
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 1
    assert lines[0] == "/a/b/file2.py"

    result = shell.execute("find . -name file*")
    assert result.exit_code == 0
    lines = sorted(result.stdout.splitlines())
    assert lines == ["./a/b/file2.py", "./a/file1.txt"]


def test_find_name_inline_value(shell):
    result = shell.execute("find a -name=*.txt")
    assert result.stdout == "a/file1.txt"


def test_find_name_matches_whole_name(shell):
    assert shell.execute("find a -name ile").stdout == ""
    assert shell.execute("find a -name file1?txt").stdout == "a/file1.txt"
    assert shell.execute("find a -name file1.tx").stdout == ""


def test_find_type_file(shell):
    result = shell.execute("find a -type f")
    assert result.exit_code == 0
    assert sorted(result.stdout.splitlines()) == ["a/b/file2.py", "a/file1.txt"]


def test_find_type_dir(shell):
    result = shell.execute("find / -type d")
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "/a" in lines
    assert "/a/b" in lines
    assert "/My Projects" in lines
    assert "/a/file1.txt" not in lines


def test_find_subdir(shell):
    result = shell.execute("find /a/b")
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines == ["/a/b/file2.py"]


def test_find_missing_path(shell):
    result = shell.execute("find /nonexistent")
    assert result.exit_code == 1
    assert "No such file or directory" in result.stderr


def test_find_rejects_bad_predicates(shell):
    assert "unknown argument to -type" in shell.execute("find a -type x").stderr
    assert "unknown predicate" in shell.execute("find a -size 5").stderr
    assert "missing argument" in shell.execute("find a -name").stderr


def test_glob_to_regex_escapes_regex_characters():
    assert glob_to_regex("a+b(1).txt").match("a+b(1).txt")
    assert not glob_to_regex("*.txt").match("notes.txt.bak")
    assert glob_to_regex("Report [old].txt").match("Report [old].txt")
    assert not glob_to_regex("Report [old].txt").match("Report o.txt")
