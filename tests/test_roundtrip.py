"""Round-trip tests for TOON encode/decode."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from keytoon import TokenDictionary, decode, encode


def roundtrip(data, dictionary=None):
    """Encode then decode through one dictionary, returning the result."""
    d = dictionary if dictionary is not None else TokenDictionary()
    encoded = encode(data, d)
    return decode(encoded, d)


class TestRoundtripPrimitives:
    """Test round-trip for primitive values."""

    def test_null(self):
        assert roundtrip(None) is None

    def test_booleans(self):
        assert roundtrip(True) is True
        assert roundtrip(False) is False

    def test_integers(self):
        assert roundtrip(42) == 42
        assert roundtrip(-17) == -17
        assert roundtrip(0) == 0

    def test_floats(self):
        assert roundtrip(3.14) == 3.14
        assert roundtrip(-2.5) == -2.5
        assert roundtrip(1e-7) == 1e-7

    def test_strings(self):
        assert roundtrip("hello") == "hello"
        assert roundtrip("hello world") == "hello world"

    def test_empty_containers(self):
        assert roundtrip([]) == []
        assert roundtrip({}) == {}


class TestRoundtripObjects:
    """Test round-trip for objects."""

    def test_simple_object(self):
        data = {"name": "Goku", "powerLevel": 9001}
        assert roundtrip(data) == data

    def test_nested_object(self):
        data = {"user": {"name": "Bob", "role": "admin"}}
        assert roundtrip(data) == data

    def test_empty_values(self):
        data = {"data": {}, "items": [], "nothing": None}
        assert roundtrip(data) == data

    def test_deeply_nested(self):
        data = {"a": {"b": {"c": {"d": {"e": 1}}}}}
        assert roundtrip(data) == data

    def test_key_order_preserved(self):
        data = {"z": 1, "a": 2, "m": 3}
        assert list(roundtrip(data)) == ["z", "a", "m"]


class TestRoundtripArrays:
    """Test round-trip for arrays."""

    def test_primitive_array(self):
        data = {"items": [1, 2, 3]}
        assert roundtrip(data) == data

    def test_string_array(self):
        data = {"techniques": ["Kamehameha", "Spirit Bomb"]}
        assert roundtrip(data) == data

    def test_object_array(self):
        data = {"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}
        assert roundtrip(data) == data

    def test_nested_arrays(self):
        data = [[1, [2, 3]], [], [{"a": [4]}]]
        assert roundtrip(data) == data

    def test_objects_with_nested_values(self):
        data = [{"tags": ["x", "y"], "meta": {"ok": True}, "empty": {}}]
        assert roundtrip(data) == data


class TestRoundtripSession:
    """Test round-trip across calls sharing a dictionary."""

    EXAMPLE = {
        "name": "Goku",
        "powerLevel": 9001,
        "isSuperSaiyan": True,
        "techniques": ["Kamehameha", "Spirit Bomb"],
        "stats": {"strength": 100, "speed": 95},
    }

    def test_example_document(self):
        assert roundtrip(self.EXAMPLE) == self.EXAMPLE

    def test_second_encode_is_identical(self):
        d = TokenDictionary()
        first = encode(self.EXAMPLE, d)
        second = encode(decode(first, d), d)
        assert first == second
        assert decode(second, d) == self.EXAMPLE

    def test_other_dictionary_gives_unknown_keys(self):
        encoded = encode({"name": "Goku"}, TokenDictionary())
        assert decode(encoded, TokenDictionary()) == {"UNKNOWN_01": "Goku"}


class TestKnownLimits:
    """Strings TOON cannot carry without quoting."""

    @pytest.mark.parametrize(
        "value, decoded",
        [
            ("42", 42),
            ("yes", True),
            ("null", None),
            ("", None),
            ("  padded  ", "padded"),
        ],
    )
    def test_literal_like_strings(self, value, decoded):
        assert roundtrip({"k": value}) == {"k": decoded}

    def test_string_starting_with_dash_in_array(self):
        assert roundtrip(["-1"]) == [-1]
