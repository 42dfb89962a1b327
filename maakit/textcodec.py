"""Conversions between the legacy Chinese code page and Unicode text."""

from __future__ import annotations

import os

ANSI_ENCODING = "gbk"
_BOM = b"\xef\xbb\xbf"
_HEX = "0123456789abcdef"


def ansi_to_utf8(data: bytes) -> str:
    """Decode GBK bytes; bytes that are not valid GBK are read as UTF-8 instead."""
    try:
        return data.decode(ANSI_ENCODING)
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def utf8_to_ansi(text: str) -> bytes:
    """Encode text as GBK; text GBK cannot hold is encoded as UTF-8 instead."""
    try:
        return text.encode(ANSI_ENCODING)
    except UnicodeEncodeError:
        return text.encode("utf-8")


def _escape_unit(unit: int) -> str:
    return "\\u" + "".join(_HEX[(unit >> shift) & 15] for shift in (12, 8, 4, 0))


def utf8_to_unicode_escape(text: str) -> str:
    """Write characters above U+00FF as lowercase ``\\uXXXX`` escapes.

    Characters outside the basic plane become a pair of surrogate escapes.
    """
    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if code <= 0xFF:
            out.append(ch)
        elif code <= 0xFFFF:
            out.append(_escape_unit(code))
        else:
            code -= 0x10000
            out.append(_escape_unit(0xD800 + (code >> 10)))
            out.append(_escape_unit(0xDC00 + (code & 0x3FF)))
    return "".join(out)


def load_file_without_bom(path: str | os.PathLike[str]) -> str:
    """Read a UTF-8 text file, dropping a leading byte order mark.

    Returns an empty string if the file cannot be opened.
    """
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError:
        return ""
    if raw.startswith(_BOM):
        raw = raw[len(_BOM):]
    return raw.decode("utf-8", errors="replace")