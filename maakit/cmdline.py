"""Quoting of argument lists into a single command line and back."""

from __future__ import annotations

from collections.abc import Iterable

_WHITESPACE = " \t"


def escape_one(arg: str) -> str:
    """Quote one argument so that the command-line parser reads it back intact."""
    if not arg:
        return '""'
    needs_quotes = any(ch in _WHITESPACE for ch in arg)
    if not needs_quotes and '"' not in arg and "\\" not in arg:
        return arg

    out: list[str] = ['"'] if needs_quotes else []
    slashes = 0
    for ch in arg:
        if ch == "\\":
            slashes += 1
            out.append("\\")
        elif ch == '"':
            out.append("\\" * (slashes + 1))
            out.append('"')
            slashes = 0
        else:
            slashes = 0
            out.append(ch)
    if needs_quotes:
        out.append("\\" * slashes)
        out.append('"')
    return "".join(out)


def args_to_cmd(args: Iterable[str]) -> str:
    """Join arguments into one command line, quoting each as needed."""
    return " ".join(escape_one(arg) for arg in args)


def _split_program(cmd: str) -> tuple[str, int]:
    # The program name takes no backslash escapes.
    if cmd.startswith('"'):
        end = cmd.find('"', 1)
        if end < 0:
            return cmd[1:], len(cmd)
        return cmd[1:end], end + 1
    end = 0
    while end < len(cmd) and cmd[end] not in _WHITESPACE:
        end += 1
    return cmd[:end], end


def cmd_to_args(cmd: str) -> list[str]:
    """Split a command line into arguments by the standard quoting rules.

    An empty command line gives an empty list.
    """
    if not cmd:
        return []
    program, pos = _split_program(cmd)
    args = [program]
    length = len(cmd)
    while pos < length and cmd[pos] in _WHITESPACE:
        pos += 1

    current: list[str] = []
    in_token = False
    quoted = False
    while pos < length:
        ch = cmd[pos]
        if ch in _WHITESPACE and not quoted:
            if in_token:
                args.append("".join(current))
                current = []
                in_token = False
            pos += 1
            continue
        in_token = True
        if ch == "\\":
            end = pos
            while end < length and cmd[end] == "\\":
                end += 1
            count = end - pos
            if end < length and cmd[end] == '"':
                current.append("\\" * (count // 2))
                if count % 2:
                    current.append('"')
                    pos = end + 1
                else:
                    pos = end
            else:
                current.append("\\" * count)
                pos = end
            continue
        if ch == '"':
            if quoted and pos + 1 < length and cmd[pos + 1] == '"':
                current.append('"')
                pos += 2
            else:
                quoted = not quoted
                pos += 1
            continue
        current.append(ch)
        pos += 1
    if in_token:
        args.append("".join(current))
    return args