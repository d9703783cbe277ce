import pytest

from retroshell import Shell, VirtualFileSystem
from retroshell.vfs import ROOT_ID


@pytest.fixture
def shell() -> Shell:
    vfs = VirtualFileSystem()
    vfs.add_file({"name": "fruit.txt", "kind": "file", "content": "pear\napple\napple\nfig\napple"}, ROOT_ID)
    vfs.add_file({"name": "nums.txt", "kind": "file", "content": "10 ten\n9 nine\n100 hundred\nx"}, ROOT_ID)
    vfs.add_file({"name": "log.txt", "kind": "file", "content": "ok start\nERROR disk\nok done\nerror net"}, ROOT_ID)
    return Shell(vfs)


def test_wc_default_counts(shell):
    assert shell.execute("wc fruit.txt").stdout == "  5  5  26"


def test_wc_selected_counts(shell):
    assert shell.execute("wc -l fruit.txt").stdout == "5"
    assert shell.execute("wc -w fruit.txt").stdout == "5"
    assert shell.execute("wc -c fruit.txt").stdout == "26"
    assert shell.execute("wc -lw fruit.txt").stdout == "5  5"


def test_wc_reads_stdin_and_handles_empty_input(shell):
    assert shell.execute("echo one two | wc -w").stdout == "2"
    shell.execute("touch empty.txt")
    assert shell.execute("wc empty.txt").stdout == "  0  0  0"


def test_sort_lexical_and_reverse(shell):
    assert shell.execute("sort fruit.txt").stdout == "apple\napple\napple\nfig\npear"
    assert shell.execute("sort -r fruit.txt").stdout == "pear\nfig\napple\napple\napple"


def test_sort_numeric(shell):
    result = shell.execute("sort -n nums.txt")
    assert result.stdout == "x\n9 nine\n10 ten\n100 hundred"
    result = shell.execute("sort -nr nums.txt")
    assert result.stdout.splitlines()[0] == "100 hundred"


def test_uniq_collapses_adjacent_duplicates_only(shell):
    assert shell.execute("uniq fruit.txt").stdout == "pear\napple\nfig\napple"
    assert shell.execute("sort fruit.txt | uniq").stdout == "apple\nfig\npear"


def test_uniq_counts(shell):
    result = shell.execute("sort fruit.txt | uniq -c")
    assert result.stdout == "   3 apple\n   1 fig\n   1 pear"
    assert shell.execute("uniq -c fruit.txt").stdout.splitlines()[1] == "   2 apple"


def test_grep_basic_and_flags(shell):
    assert shell.execute("grep ERROR log.txt").stdout == "ERROR disk"
    assert shell.execute("grep -i error log.txt").stdout == "ERROR disk\nerror net"
    assert shell.execute("grep -v ok log.txt").stdout == "ERROR disk\nerror net"
    assert shell.execute("grep -n done log.txt").stdout == "3:ok done"
    assert shell.execute("grep -in ERROR log.txt").stdout == "2:ERROR disk\n4:error net"


def test_grep_regex_and_stdin(shell):
    assert shell.execute('grep "^ok" log.txt').stdout == "ok start\nok done"
    assert shell.execute("cat fruit.txt | grep fi").stdout == "fig"


def test_grep_multiple_files_prefix_names(shell):
    result = shell.execute("grep ap fruit.txt log.txt")
    assert result.stdout.splitlines()[0] == "fruit.txt:apple"


def test_grep_no_match_and_errors(shell):
    result = shell.execute("grep zebra fruit.txt")
    assert result.exit_code == 1
    assert result.stdout == ""
    assert result.stderr == ""
    assert shell.execute("grep").stderr == "grep: missing pattern"
    assert "invalid pattern" in shell.execute('grep "(" fruit.txt').stderr
    assert "No such file or directory" in shell.execute("grep x nope.txt").stderr
