from retroshell.shell.args import parse_args


def test_long_flags_and_values():
    parsed = parse_args(["--recursive", "--name=foo", "path"])
    assert parsed.flags == {"recursive": True, "name": "foo"}
    assert parsed.positional == ["path"]


def test_short_flag_bundle_sets_each_letter():
    parsed = parse_args(["-rf", "target"])
    assert parsed.has("r") and parsed.has("f")
    assert parsed.positional == ["target"]


def test_value_flags_take_next_argument():
    parsed = parse_args(["-n", "5", "notes.txt"])
    assert parsed.get("n") == "5"
    assert parsed.positional == ["notes.txt"]


def test_value_flag_followed_by_flag_stays_boolean():
    parsed = parse_args(["-n", "-r"])
    assert parsed.get("n") is True
    assert parsed.has("r")


def test_lone_dash_is_positional():
    assert parse_args(["-"]).positional == ["-"]


def test_as_switch_returns_consumed_operand():
    parsed = parse_args(["-i", "-n", "pattern", "file.txt"])
    assert parsed.as_switch("n") is True
    assert parsed.positional == ["pattern", "file.txt"]
    assert parsed.get("n") is True


def test_as_switch_restores_operand_position():
    parsed = parse_args(["first", "-c", "second"])
    assert parsed.as_switch("c") is True
    assert parsed.positional == ["first", "second"]


def test_as_switch_absent_flag():
    parsed = parse_args(["file.txt"])
    assert parsed.as_switch("n") is False
    assert parsed.positional == ["file.txt"]
