"""String utilities for TOON encoding/decoding."""

from .primitives import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    FALSE_LITERAL,
    KEY_SEPARATOR,
    LIST_MARKER,
    NULL_LITERAL,
    TRUE_LITERAL,
    is_number_literal,
)

# Literals the decoder turns into non-string values
RESERVED_LITERALS = frozenset({NULL_LITERAL, TRUE_LITERAL, FALSE_LITERAL, EMPTY_ARRAY, EMPTY_OBJECT})

LINE_BREAKS = frozenset("\n\r")


def count_indent(line: str) -> int:
    """
    Count the leading whitespace characters of a line.

    Tabs count as a single character, the same as spaces.

    Args:
        line: The raw line.

    Returns:
        Number of leading whitespace characters.
    """
    return len(line) - len(line.lstrip())


def survives_roundtrip(value: str) -> bool:
    """
    Check if a string decodes back to itself when written verbatim.

    TOON has no quoting, so a string fails when it:
    - Is empty or has leading/trailing whitespace
    - Reads back as null, yes, no, [], {} or a number
    - Contains the key separator (':') or a line break
    - Starts with the list marker ('-')

    Args:
        value: The string to check.

    Returns:
        True if the string is safe to emit unquoted.
    """
    if not value:
        return False

    if value != value.strip():
        return False

    if value in RESERVED_LITERALS:
        return False

    if is_number_literal(value):
        return False

    if KEY_SEPARATOR in value:
        return False

    if any(c in LINE_BREAKS for c in value):
        return False

    if value.startswith(LIST_MARKER):
        return False

    return True


def describe_unsafe_string(value: str) -> str:
    """Explain why a string does not survive a round trip."""
    if not value:
        return "empty string decodes as null"
    if value != value.strip():
        return "surrounding whitespace is trimmed"
    if value in RESERVED_LITERALS or is_number_literal(value):
        return "reads back as a literal"
    if KEY_SEPARATOR in value:
        return "contains the key separator"
    if any(c in LINE_BREAKS for c in value):
        return "contains a line break"
    if value.startswith(LIST_MARKER):
        return "starts with the list marker"
    return "safe"
