"""Converter that keeps one token dictionary across encode/decode calls."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from .decode import decode
from .dictionary import DictionarySnapshot, TokenDictionary
from .encode import encode
from .errors import InvalidJsonError
from .types import DecodeOptions, EncodeOptions, JsonValue

logger = logging.getLogger(__name__)


class ToonConverter:
    """
    JSON <-> TOON converter bound to a single token dictionary.

    Keys encoded by this converter decode back through the same instance.
    Separate instances never share tokens.

    Args:
        initial_map: Optional key -> token seed for the dictionary.
        encode_options: Options applied to every encode call.
        decode_options: Options applied to every decode call.
    """

    def __init__(
        self,
        initial_map: Mapping[str, str] | None = None,
        encode_options: EncodeOptions | None = None,
        decode_options: DecodeOptions | None = None,
    ):
        self._dictionary = TokenDictionary(initial_map)
        self.encode_options = encode_options or EncodeOptions()
        self.decode_options = decode_options or DecodeOptions()

    @property
    def dictionary(self) -> TokenDictionary:
        return self._dictionary

    def encode(self, value: Any) -> str:
        """Encode an in-memory value to TOON."""
        return encode(value, self._dictionary, self.encode_options)

    def decode(self, text: str) -> JsonValue:
        """Decode TOON text to a Python value."""
        return decode(text, self._dictionary, self.decode_options)

    def json_to_toon(self, json_input: Any) -> str:
        """
        Convert JSON to TOON.

        Args:
            json_input: JSON text (``str``, or UTF-8 ``bytes``) or an already-parsed value.

        Returns:
            The TOON text.

        Raises:
            InvalidJsonError: If ``json_input`` is text or bytes that is not valid JSON.
        """
        if isinstance(json_input, (str, bytes, bytearray)):
            try:
                data = json.loads(json_input)
            except ValueError as e:
                # JSONDecodeError, bad UTF-8, or an integer past the digit limit
                logger.debug("Rejected JSON input: %s", e)
                raise InvalidJsonError(
                    f"Invalid JSON input: {getattr(e, 'msg', e)}",
                    lineno=getattr(e, "lineno", None),
                    colno=getattr(e, "colno", None),
                ) from e
        else:
            data = json_input
        return self.encode(data)

    def toon_to_json(self, toon_input: str) -> str:
        """Convert TOON text to JSON text indented by two spaces."""
        return json.dumps(self.decode(toon_input), indent=2, ensure_ascii=False)

    def dictionary_snapshot(self) -> DictionarySnapshot:
        """Read-only copy of the current key/token mappings."""
        return self._dictionary.snapshot()

    get_mapping = dictionary_snapshot
