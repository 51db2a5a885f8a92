"""
keytoon - Token Object Notation for Python

Shortens JSON object keys to numeric tokens from a session dictionary and
writes values as indented lines instead of braces, brackets and quotes.

Usage:
    import keytoon

    converter = keytoon.ToonConverter()

    # Encode Python data to TOON
    encoded = converter.encode({"name": "Goku", "powerLevel": 9001})
    # 01: Goku
    # 02: 9001

    # Decode TOON back with the same dictionary
    decoded = converter.decode(encoded)

    # JSON text in, JSON text out
    toon_text = converter.json_to_toon('{"name": "Goku"}')
    json_text = converter.toon_to_json(toon_text)

    # Inspect the dictionary
    snapshot = converter.dictionary_snapshot()
    snapshot.key_to_token  # {"name": "01", "powerLevel": "02"}
"""

import logging

__version__ = "0.1.0"

from .converter import ToonConverter
from .decode import build_tree, decode, decode_lines, parse_lines, tree_to_value
from .dictionary import DictionarySnapshot, TokenDictionary
from .encode import encode, encode_lines
from .errors import InvalidJsonError, ToonDepthError, ToonEncodeError, ToonError, ToonSyntaxError
from .types import DecodeOptions, EncodeOptions, JsonValue

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Main API
    "ToonConverter",
    "encode",
    "encode_lines",
    "decode",
    "decode_lines",
    # Decoder passes
    "parse_lines",
    "build_tree",
    "tree_to_value",
    # Dictionary
    "TokenDictionary",
    "DictionarySnapshot",
    # Options
    "EncodeOptions",
    "DecodeOptions",
    # Errors
    "ToonError",
    "InvalidJsonError",
    "ToonEncodeError",
    "ToonSyntaxError",
    "ToonDepthError",
    # Types
    "JsonValue",
]
