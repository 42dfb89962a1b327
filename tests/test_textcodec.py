from maakit.textcodec import (
    ansi_to_utf8,
    load_file_without_bom,
    utf8_to_ansi,
    utf8_to_unicode_escape,
)


def test_ansi_round_trip():
    text = "中文 text"
    assert ansi_to_utf8(utf8_to_ansi(text)) == text


def test_utf8_to_ansi_uses_gbk():
    assert utf8_to_ansi("中文") == "中文".encode("gbk")


def test_ascii_is_unchanged_both_ways():
    assert utf8_to_ansi("plain") == b"plain"
    assert ansi_to_utf8(b"plain") == "plain"


def test_utf8_to_ansi_falls_back_for_unencodable_text():
    text = "\U0001f600"
    assert utf8_to_ansi(text) == text.encode("utf-8")


def test_unicode_escape_of_cjk():
    assert utf8_to_unicode_escape("a中") == "a\\u4e2d"


def test_unicode_escape_keeps_latin1():
    assert utf8_to_unicode_escape("café") == "café"


def test_unicode_escape_outside_bmp_uses_surrogates():
    assert utf8_to_unicode_escape("\U0001f600") == "\\ud83d\\ude00"


def test_load_file_strips_bom(tmp_path):
    path = tmp_path / "with_bom.json"
    path.write_bytes(b"\xef\xbb\xbf" + '{"k": "中"}'.encode("utf-8"))
    assert load_file_without_bom(path) == '{"k": "中"}'


def test_load_file_without_bom_keeps_content(tmp_path):
    path = tmp_path / "plain.txt"
    path.write_bytes("line one\nline two".encode("utf-8"))
    assert load_file_without_bom(path) == "line one\nline two"


def test_load_missing_file_returns_empty(tmp_path):
    assert load_file_without_bom(tmp_path / "missing.txt") == ""