"""Primitive value rendering and parsing for TOON."""

import math
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import JsonValue

NULL_LITERAL = "null"
TRUE_LITERAL = "yes"
FALSE_LITERAL = "no"
EMPTY_ARRAY = "[]"
EMPTY_OBJECT = "{}"

LIST_MARKER = "-"
KEY_SEPARATOR = ":"
DEFAULT_INDENT = 2

# JSON number grammar; leading zeros ("007") stay strings
NUMBER_PATTERN = re.compile(r"^-?(?:0|[1-9][0-9]*)(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?$")


def encode_primitive(value: "JsonValue") -> str:
    """
    Render a scalar (or an empty container) as TOON text.

    Args:
        value: None, bool, int, float, str, [] or {}.

    Returns:
        The rendered text. Strings are returned verbatim.

    Raises:
        TypeError: For non-empty containers or non-JSON types.
    """
    if value is None:
        return NULL_LITERAL

    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL

    if isinstance(value, (int, float)):
        return _encode_number(value)

    if isinstance(value, str):
        return value

    if isinstance(value, list) and not value:
        return EMPTY_ARRAY

    if isinstance(value, dict) and not value:
        return EMPTY_OBJECT

    raise TypeError(f"Cannot render value of type {type(value).__name__} inline")


def _encode_number(value: int | float) -> str:
    """Encode a number in canonical decimal form."""
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return NULL_LITERAL
        # Normalize -0 to 0
        if value == 0.0:
            return "0"
        s = repr(value)
        if s.endswith(".0") and "e" not in s.lower():
            return s[:-2]
        return s

    return str(value)


def parse_scalar(token: str | None) -> "JsonValue":
    """
    Parse an inline TOON value into a Python value.

    Case-sensitive: ``null`` and empty text become None, ``yes``/``no`` become
    booleans, ``[]``/``{}`` become empty containers, JSON-style numbers become
    int or float, and everything else is returned as the string itself.

    Args:
        token: The trimmed inline text, or None when the line had none.

    Returns:
        The parsed Python value.
    """
    if token is None or token == "" or token == NULL_LITERAL:
        return None
    if token == TRUE_LITERAL:
        return True
    if token == FALSE_LITERAL:
        return False
    if token == EMPTY_ARRAY:
        return []
    if token == EMPTY_OBJECT:
        return {}

    number = try_parse_number(token)
    if number is not None:
        return number

    return token


def try_parse_number(token: str) -> int | float | None:
    """
    Try to parse a token as a number.

    Returns None if it's not a valid number.
    """
    match = NUMBER_PATTERN.match(token)
    if not match:
        return None

    if match.group("frac") is None and match.group("exp") is None:
        try:
            return int(token)
        except ValueError:
            # Past the interpreter's int digit limit, keep the text
            return None

    value = float(token)
    if math.isinf(value):
        # Out of float range, keep the text
        return None
    return value


def is_number_literal(token: str) -> bool:
    """Check whether text would be read back as a number."""
    return try_parse_number(token) is not None
