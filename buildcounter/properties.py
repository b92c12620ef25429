"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.

Reading and writing of the simple ``key=value`` property file format used to
persist the version record.
"""

from collections import OrderedDict
import re
from typing import Iterable, Iterator, Mapping, Optional, Tuple


WHITESPACE = " \t\f"
SEPARATORS = "=:"
COMMENT_CHARS = "#!"

_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {value: f"\\{key}" for key, value in _UNESCAPES.items()}
_UNICODE_ESCAPE_RE = re.compile(r"[0-9a-fA-F]{4}")


def _has_continuation(line: str) -> bool:
    """A line continues onto the next when it ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    buffer = None
    for raw_line in text.splitlines():
        line = raw_line.lstrip(WHITESPACE)
        if buffer is None:
            if not line or line[0] in COMMENT_CHARS:
                continue
            buffer = ""
        if _has_continuation(line):
            buffer += line[:-1]
            continue
        yield buffer + line
        buffer = None
    if buffer:
        yield buffer


def _unescape(text: str) -> str:
    chars = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        index += 1
        if char != "\\":
            chars.append(char)
            continue
        if index >= length:
            # A lone trailing backslash is dropped
            break
        char = text[index]
        index += 1
        if char == "u":
            digits = text[index : index + 4]
            if not _UNICODE_ESCAPE_RE.fullmatch(digits):
                # Not a \uXXXX escape, keep it as written
                chars.append("\\u")
                continue
            chars.append(chr(int(digits, 16)))
            index += 4
        else:
            chars.append(_UNESCAPES.get(char, char))
    return "".join(chars)


def _split_key_value(line: str) -> Tuple[str, str]:
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in SEPARATORS or char in WHITESPACE:
            break
        index += 1
    index = min(index, length)

    value = line[index:].lstrip(WHITESPACE)
    if value and value[0] in SEPARATORS:
        value = value[1:].lstrip(WHITESPACE)
    return _unescape(line[:index]), _unescape(value)


def load_properties(text: str) -> OrderedDict:
    """
    Parse property file contents into an ordered mapping.

    :param text: the file contents
    :return: the key/values in file order, later duplicate keys win, a malformed
        \\uXXXX escape is kept as written
    """
    properties = OrderedDict()
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[key] = value
    return properties


def _escape(text: str, is_key: bool) -> str:
    chars = []
    for index, char in enumerate(text):
        if char == "\\":
            chars.append("\\\\")
        elif char in _ESCAPES:
            chars.append(_ESCAPES[char])
        elif char in SEPARATORS or char in COMMENT_CHARS:
            chars.append(f"\\{char}")
        elif char == " " and (is_key or index == 0):
            chars.append("\\ ")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chars.append(f"\\u{ord(char):04x}")
        else:
            chars.append(char)
    return "".join(chars)


def dump_properties(
    values: Mapping[str, str],
    comments: Iterable[str] = (),
    timestamp: Optional[str] = None,
) -> str:
    """
    Format a mapping as property file contents.

    :param values: the key/values to write, in order
    :param comments: comment lines written before the values
    :param timestamp: an optional timestamp written as a comment after the other comments
    :return: the file contents, each line terminated by a newline
    """
    lines = []
    for comment in comments:
        lines.extend(f"#{line}" for line in comment.splitlines())
    if timestamp:
        lines.append(f"#{timestamp}")
    for key, value in values.items():
        lines.append(f"{_escape(str(key), True)}={_escape(str(value), False)}")
    return "".join(f"{line}\n" for line in lines)
