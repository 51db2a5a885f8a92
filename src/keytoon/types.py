"""Type definitions for the keytoon encoder/decoder."""

from dataclasses import dataclass, field
from enum import Enum

# JSON type aliases
JsonPrimitive = str | int | float | bool | None
JsonArray = list["JsonValue"]
JsonObject = dict[str, "JsonValue"]
JsonValue = JsonPrimitive | JsonArray | JsonObject

DEFAULT_MAX_DEPTH = 256


def _check_max_depth(max_depth: int | None) -> None:
    if max_depth is not None and max_depth < 1:
        raise ValueError(f"max_depth must be None or >= 1, got {max_depth}")


@dataclass
class EncodeOptions:
    """Options for TOON encoding."""

    indent: int = 2
    """Number of spaces per indentation level."""

    max_depth: int | None = DEFAULT_MAX_DEPTH
    """Deepest container nesting accepted before ToonDepthError. None disables the guard."""

    strict: bool = False
    """Reject strings that would not survive a decode instead of logging them."""

    def __post_init__(self) -> None:
        if self.indent < 1:
            raise ValueError(f"indent must be >= 1, got {self.indent}")
        _check_max_depth(self.max_depth)


@dataclass
class DecodeOptions:
    """Options for TOON decoding."""

    strict: bool = False
    """Raise on unclassifiable lines and mixed sibling shapes instead of falling back."""

    max_depth: int | None = DEFAULT_MAX_DEPTH
    """Deepest tree nesting accepted before ToonDepthError. None disables the guard."""

    def __post_init__(self) -> None:
        _check_max_depth(self.max_depth)


class LineKind(str, Enum):
    """Classification of a single TOON source line."""

    ARRAY_ITEM = "array_item"
    OBJECT_ENTRY = "object_entry"
    UNCLASSIFIED = "unclassified"


@dataclass
class ParsedLine:
    """A classified line with indentation info."""

    raw: str
    """Original line content."""

    content: str
    """Content after stripping surrounding whitespace."""

    indent: int
    """Number of leading whitespace characters."""

    line_number: int
    """1-based line number in the source text."""

    kind: LineKind
    """Array item, object entry, or neither."""

    key: str | None = None
    """Token to the left of the first colon (object entries only)."""

    value: str | None = None
    """Inline scalar text, or None when the line owns nested children."""


@dataclass(eq=False)
class TreeNode:
    """A node of the intermediate indentation tree built by the decoder."""

    indent: int
    key: str | None = None
    value: str | None = None
    is_array_item: bool = False
    line_number: int = 0
    depth: int = 0
    parent: "TreeNode | None" = field(default=None, repr=False)
    children: list["TreeNode"] = field(default_factory=list)

    @classmethod
    def root(cls) -> "TreeNode":
        """Create the synthetic root sentinel."""
        return cls(indent=-1, depth=-1)

    def add_child(self, node: "TreeNode") -> None:
        node.parent = self
        self.children.append(node)
