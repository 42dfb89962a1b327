import pytest

from maakit.strings import ArgvWrapper, replace_all, trim


def test_replace_all_pairs_applied_in_given_order():
    result = replace_all("{ADB} -s {ADB_SERIAL}", [("{ADB_SERIAL}", "emu"), ("{ADB}", "adb")])
    assert result == "adb -s emu"


def test_replace_all_mapping_applied_in_key_order():
    # "a" sorts first: "ab" -> "bb", then "b" -> "c" on everything.
    assert replace_all("ab", {"b": "c", "a": "b"}) == "cc"


def test_replacement_text_is_not_rescanned():
    result = replace_all("aa", [("a", "aa")])
    assert result.count("a") == 2 * len("aa")
    assert set(result) == {"a"}


def test_replace_all_without_match_returns_same_text():
    assert replace_all("nothing here", {"{X}": "1"}) == "nothing here"


def test_replace_all_empty_pattern_raises():
    with pytest.raises(ValueError):
        replace_all("abc", {"": "x"})


def test_trim_removes_only_spaces():
    assert trim("  x y  ") == "x y"
    assert trim("\tx ") == "\tx"


@pytest.mark.parametrize("text", ["", "   ", " a ", "a", "  a  b  "])
def test_trim_is_idempotent(text):
    once = trim(text)
    assert trim(once) == once
    assert not once.startswith(" ")
    assert not once.endswith(" ")


def test_argv_parse_and_gen():
    wrapper = ArgvWrapper()
    wrapper.parse(["{ADB}", "-s", "{ADB_SERIAL}", "devices"])
    assert wrapper.argv == ["{ADB}", "-s", "{ADB_SERIAL}", "devices"]
    generated = wrapper.gen({"{ADB}": "adb", "{ADB_SERIAL}": "emu"})
    assert generated == ["adb", "-s", "emu", "devices"]
    assert wrapper.argv == ["{ADB}", "-s", "{ADB_SERIAL}", "devices"]


def test_argv_parse_rejects_non_array():
    wrapper = ArgvWrapper(["keep"])
    with pytest.raises(ValueError):
        wrapper.parse("not a list")
    assert wrapper.argv == ["keep"]


def test_argv_parse_rejects_non_string_items():
    wrapper = ArgvWrapper(["keep"])
    with pytest.raises(ValueError):
        wrapper.parse(["ok", 3])
    assert wrapper.argv == ["keep"]


def test_argv_parse_empty_array_clears():
    wrapper = ArgvWrapper(["old"])
    wrapper.parse([])
    assert wrapper.argv == []
    assert wrapper.gen({"a": "b"}) == []