"""
Generic JSON tree.

Thin layer over the standard library decoder. The tree is made of plain
Python values (dict, list, str, int, float, bool, None); this module adds
the two things the element parser needs on top of that:

- a classification of every value into a JsonType, keeping integers and
  reals apart and never confusing booleans with integers
- member lookup that yields MISSING for absent members, so "absent" and
  "present but null" stay distinguishable
"""

from __future__ import annotations

import json
import re
import sys
from enum import Enum
from typing import Any

from .errors import JsonSyntaxError


class _Missing:
    """Sentinel for a member that does not exist."""

    _instance: _Missing | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class JsonType(Enum):
    NONE = "none"  # absent
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_type(value: Any) -> JsonType:
    """Classify a tree value."""
    if value is MISSING:
        return JsonType.NONE
    if value is None:
        return JsonType.NULL
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, int):
        return JsonType.INTEGER
    if isinstance(value, float):
        return JsonType.REAL
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, list):
        return JsonType.ARRAY
    if isinstance(value, dict):
        return JsonType.OBJECT
    raise TypeError(f"Not a JSON tree value: {value!r}")


def child(value: Any, name: str) -> Any:
    """
    Look up a member by name.

    Returns MISSING when the member does not exist or when value is not an
    object at all.
    """
    if isinstance(value, dict):
        return value.get(name, MISSING)
    return MISSING


class _InvalidConstant(ValueError):
    pass


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise _InvalidConstant(f"Invalid literal {name}")


# strings are matched first so literals inside them are skipped
_STRING = r'"(?:[^"\\]|\\.)*"'
_CONSTANT = re.compile(rf"({_STRING})|(-?Infinity|NaN)")


def _long_integer() -> re.Pattern:
    return re.compile(rf"({_STRING})|(-?\d{{{sys.get_int_max_str_digits() + 1},}})")


def _locate(text: str, pattern: re.Pattern) -> int | None:
    """Character index of the first token matched by group 2 outside strings."""
    for match in pattern.finditer(text):
        if match.group(2):
            return match.start(2)
    return None


def _position_error(reason: str, text: str, pos: int | None) -> JsonSyntaxError:
    if pos is None:
        return JsonSyntaxError(f"{reason} (position unknown)", 0, 1, 1)
    offset = len(text[:pos].encode("utf-8", errors="surrogatepass"))
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return JsonSyntaxError(reason, offset, line, column)


def load_tree(data: bytes | str) -> Any:
    """
    Parse raw text into a tree.

    Raises JsonSyntaxError with the byte offset of the failure.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            prefix = raw[: e.start].decode("utf-8", errors="replace")
            line = prefix.count("\n") + 1
            column = e.start - (raw.rfind(b"\n", 0, e.start) + 1) + 1
            raise JsonSyntaxError("Invalid UTF-8 sequence", e.start, line, column) from e
    else:
        text = data

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        offset = len(text[: e.pos].encode("utf-8", errors="surrogatepass"))
        raise JsonSyntaxError(e.msg, offset, e.lineno, e.colno) from e
    except RecursionError as e:
        raise _position_error("Nesting too deep", text, None) from e
    except _InvalidConstant as e:
        # the decoder does not report a position for these
        raise _position_error(str(e), text, _locate(text, _CONSTANT)) from e
    except ValueError as e:
        # integer literal over the interpreter's digit limit
        raise _position_error(str(e), text, _locate(text, _long_integer())) from e
