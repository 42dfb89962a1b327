import pytest

from maakit.cmdline import args_to_cmd, cmd_to_args, escape_one


def test_escape_empty_argument():
    assert escape_one("") == '""'


def test_escape_plain_argument_unchanged():
    assert escape_one("plain") == "plain"


def test_escape_argument_with_space():
    assert escape_one("a b") == '"a b"'


def test_escape_embedded_quote():
    assert escape_one('x"y') == 'x\\"y'


def test_backslashes_without_quotes_are_kept():
    assert escape_one("c:\\dir\\") == "c:\\dir\\"


def test_args_to_cmd_empty():
    assert args_to_cmd([]) == ""


def test_args_to_cmd_joins_with_spaces():
    assert args_to_cmd(["a", "b c"]) == 'a "b c"'


@pytest.mark.parametrize(
    "args",
    [
        ["prog", "a b", 'x"y', "c:\\dir\\", ""],
        ["prog", "c:\\my dir\\"],
        ["prog", 'say "hi" now'],
        ["prog", "tab\there"],
        ["prog", 'a\\"b'],
        ["prog"],
    ],
)
def test_round_trip(args):
    assert cmd_to_args(args_to_cmd(args)) == args


def test_quoted_program_name():
    cmd = '"C:\\Program Files\\app.exe" -v'
    assert cmd_to_args(cmd) == ["C:\\Program Files\\app.exe", "-v"]


def test_empty_command_line():
    assert cmd_to_args("") == []


def test_repeated_whitespace_separates_once():
    result = cmd_to_args("prog  a \t b")
    assert result == ["prog", "a", "b"]