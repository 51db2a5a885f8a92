"""TOON encoder implementation."""

import logging
import math
from collections.abc import Generator
from typing import Any

from .dictionary import TokenDictionary
from .errors import ToonDepthError, ToonEncodeError
from .primitives import KEY_SEPARATOR, LIST_MARKER, encode_primitive
from .string_utils import describe_unsafe_string, survives_roundtrip
from .types import EncodeOptions, JsonValue

logger = logging.getLogger(__name__)


def encode(
    value: Any,
    dictionary: TokenDictionary | None = None,
    options: EncodeOptions | None = None,
) -> str:
    """
    Encode a Python value to TOON format.

    Args:
        value: The value to encode (dict, list, or primitive).
        dictionary: Token dictionary to mint keys from. A fresh one is used
            when omitted.
        options: Encoding options.

    Returns:
        The TOON-formatted string, lines joined without a trailing newline.

    Raises:
        ToonDepthError: If nesting exceeds ``options.max_depth``.
        ToonEncodeError: In strict mode, for strings that cannot round-trip.
    """
    lines = list(encode_lines(value, dictionary, options))
    logger.debug("Encoded value into %d TOON line(s)", len(lines))
    return "\n".join(lines)


def encode_lines(
    value: Any,
    dictionary: TokenDictionary | None = None,
    options: EncodeOptions | None = None,
) -> Generator[str, None, None]:
    """
    Encode a Python value to TOON format, yielding lines.

    Args:
        value: The value to encode.
        dictionary: Token dictionary to mint keys from.
        options: Encoding options.

    Yields:
        Lines of TOON output.
    """
    encoder = _Encoder(dictionary if dictionary is not None else TokenDictionary(), options or EncodeOptions())
    normalized = _normalize_value(value, max_depth=encoder.options.max_depth)

    if _is_container(normalized):
        yield from encoder.encode_container(normalized, 0)
    else:
        # Root primitive (or empty container)
        yield encoder.render(normalized)


class _Encoder:
    """Walks a normalized value, minting tokens through one dictionary."""

    def __init__(self, dictionary: TokenDictionary, options: EncodeOptions):
        self.dictionary = dictionary
        self.options = options
        self.warned = False

    def indent(self, depth: int) -> str:
        return " " * (self.options.indent * depth)

    def check_depth(self, depth: int) -> None:
        max_depth = self.options.max_depth
        if max_depth is not None and depth >= max_depth:
            raise ToonDepthError(depth + 1, max_depth)

    def render(self, value: JsonValue) -> str:
        """Render a scalar or empty container, flagging lossy strings."""
        if isinstance(value, str) and not survives_roundtrip(value):
            reason = describe_unsafe_string(value)
            if self.options.strict:
                raise ToonEncodeError(f"String {value!r} cannot be encoded losslessly: {reason}")
            if not self.warned:
                logger.warning("String %r will not decode back unchanged: %s", value, reason)
                self.warned = True
        return encode_primitive(value)

    def encode_container(self, value: dict | list, depth: int) -> Generator[str, None, None]:
        if isinstance(value, dict):
            yield from self.encode_object(value, depth)
        else:
            yield from self.encode_array(value, depth)

    def encode_object(self, obj: dict, depth: int) -> Generator[str, None, None]:
        """Encode an object's entries, one token line each."""
        self.check_depth(depth)
        indent = self.indent(depth)

        for key, value in obj.items():
            yield from self.encode_entry(key, value, indent, depth + 1)

    def encode_entry(
        self, key: str, value: JsonValue, indent: str, child_depth: int
    ) -> Generator[str, None, None]:
        """Encode one ``token: value`` entry; nested containers go to ``child_depth``."""
        token = self.dictionary.token_for(key)

        if _is_container(value):
            yield f"{indent}{token}{KEY_SEPARATOR}"
            yield from self.encode_container(value, child_depth)
        else:
            yield f"{indent}{token}{KEY_SEPARATOR} {self.render(value)}"

    def encode_array(self, arr: list, depth: int) -> Generator[str, None, None]:
        """Encode array elements behind list markers."""
        self.check_depth(depth)
        indent = self.indent(depth)

        for item in arr:
            if isinstance(item, list) and item:
                # Nested array: bare marker, elements one level deeper
                yield f"{indent}{LIST_MARKER}"
                yield from self.encode_array(item, depth + 1)
            elif isinstance(item, dict) and item:
                # Object element: bare marker, keys indented under it
                yield f"{indent}{LIST_MARKER}"
                self.check_depth(depth + 1)
                key_indent = self.indent(depth + 1)
                for key, value in item.items():
                    yield from self.encode_entry(key, value, key_indent, depth + 2)
            else:
                yield f"{indent}{LIST_MARKER} {self.render(item)}"


def _is_container(value: JsonValue) -> bool:
    """Check if value is a non-empty dict or list."""
    return isinstance(value, (dict, list)) and bool(value)


def _normalize_value(value: Any, depth: int = 0, max_depth: int | None = None) -> JsonValue:
    """
    Normalize a value for JSON compatibility.

    Converts:
    - NaN and infinities to None, -0.0 to 0
    - Non-string keys to strings
    - Tuples, sets and other iterables to lists
    - Objects with isoformat() (dates, datetimes) to ISO strings

    Raw bytes are rejected rather than read as a list of byte values.

    Args:
        value: The value to normalize.
        depth: Container nesting depth of ``value``.
        max_depth: Nesting limit, checked before descending into containers.

    Returns:
        A JSON-compatible value.

    Raises:
        ToonDepthError: If containers nest deeper than ``max_depth``.
        TypeError: For bytes or bytearray values.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                return None
            if value == 0.0:
                return 0
        return value

    if isinstance(value, str):
        return value

    is_nested = isinstance(value, (dict, list, tuple, set, frozenset)) and len(value) > 0
    if is_nested and max_depth is not None and depth >= max_depth:
        raise ToonDepthError(depth + 1, max_depth)

    if isinstance(value, dict):
        return {_normalize_key(k): _normalize_value(v, depth + 1, max_depth) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_normalize_value(v, depth + 1, max_depth) for v in value]

    if isinstance(value, (set, frozenset)):
        return [_normalize_value(v, depth + 1, max_depth) for v in sorted(value, key=str)]

    if isinstance(value, (bytes, bytearray)):
        raise TypeError(f"Cannot encode {type(value).__name__}; decode it to text first")

    if hasattr(value, "isoformat"):
        return value.isoformat()

    if hasattr(value, "__iter__"):
        return [_normalize_value(v, depth + 1, max_depth) for v in value]

    # Last resort: string conversion
    return str(value)


def _normalize_key(key: Any) -> str:
    """Convert a mapping key to the string JSON would use."""
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)
