"""TOON decoder implementation.

Decoding runs in separate passes that can each be used on their own:

1. ``parse_lines`` classifies every non-blank line as an array item
   (``- value``), an object entry (``token: value``) or neither.
2. ``build_tree`` hangs each classified line under the nearest preceding line
   with a smaller indentation.
3. ``tree_to_value`` turns the tree into Python values, resolving tokens
   through a ``TokenDictionary``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .dictionary import TokenDictionary
from .errors import ToonDepthError, ToonSyntaxError
from .primitives import KEY_SEPARATOR, LIST_MARKER, is_number_literal, parse_scalar
from .string_utils import count_indent
from .types import DecodeOptions, JsonValue, LineKind, ParsedLine, TreeNode

if TYPE_CHECKING:
    from collections.abc import Generator

logger = logging.getLogger(__name__)

# Returned by _root_scalar when the document is not a bare scalar
_NOT_SCALAR = object()


def decode(
    text: str,
    dictionary: TokenDictionary | None = None,
    options: DecodeOptions | None = None,
) -> JsonValue:
    """
    Decode TOON text to a Python value.

    Decoding is best-effort: unknown tokens become ``UNKNOWN_<token>`` keys and
    ambiguous structure falls back to an object instead of failing.

    Args:
        text: The TOON-formatted string.
        dictionary: Token dictionary used to resolve keys. Never modified.
        options: Decoding options.

    Returns:
        The decoded Python value.

    Raises:
        ToonSyntaxError: In strict mode, for unclassifiable lines or mixed
            sibling shapes.
        ToonDepthError: If nesting exceeds ``options.max_depth``.
    """
    lines = text.split("\n")
    return decode_lines(lines, dictionary, options)


def decode_lines(
    lines: Iterable[str],
    dictionary: TokenDictionary | None = None,
    options: DecodeOptions | None = None,
) -> JsonValue:
    """
    Decode TOON from pre-split lines.

    Args:
        lines: Iterable of line strings.
        dictionary: Token dictionary used to resolve keys.
        options: Decoding options.

    Returns:
        The decoded Python value.
    """
    opts = options or DecodeOptions()
    if dictionary is None:
        dictionary = TokenDictionary()

    parsed_lines = list(parse_lines(lines))

    scalar = _root_scalar(parsed_lines)
    if scalar is not _NOT_SCALAR:
        return scalar

    root = build_tree(parsed_lines, max_depth=opts.max_depth, strict=opts.strict)
    return tree_to_value(root, dictionary, strict=opts.strict)


def parse_lines(lines: Iterable[str]) -> Generator[ParsedLine, None, None]:
    """Classify raw lines, skipping blank ones."""
    for i, raw in enumerate(lines, start=1):
        content = raw.strip()
        if not content:
            continue

        indent = count_indent(raw)

        if content.startswith(LIST_MARKER):
            value = content[len(LIST_MARKER) :].strip()
            yield ParsedLine(
                raw=raw,
                content=content,
                indent=indent,
                line_number=i,
                kind=LineKind.ARRAY_ITEM,
                value=value or None,
            )
        elif KEY_SEPARATOR in content:
            key, _, value = content.partition(KEY_SEPARATOR)
            yield ParsedLine(
                raw=raw,
                content=content,
                indent=indent,
                line_number=i,
                kind=LineKind.OBJECT_ENTRY,
                key=key.strip(),
                value=value.strip() or None,
            )
        else:
            yield ParsedLine(
                raw=raw,
                content=content,
                indent=indent,
                line_number=i,
                kind=LineKind.UNCLASSIFIED,
            )


def build_tree(
    lines: Iterable[ParsedLine],
    max_depth: int | None = None,
    strict: bool = False,
) -> TreeNode:
    """
    Build the indentation tree for classified lines.

    Each node's parent is the closest earlier node with a smaller indentation.
    Nodes at the same or deeper indentation are popped off the walk for good,
    so the whole build is linear in the number of lines.

    Args:
        lines: Classified lines in source order.
        max_depth: Deepest node level accepted, or None for no limit.
        strict: Raise on unclassified lines instead of dropping them.

    Returns:
        The synthetic root node (indent -1).

    Raises:
        ToonSyntaxError: In strict mode, for unclassified lines.
        ToonDepthError: If nesting exceeds ``max_depth``.
    """
    root = TreeNode.root()
    last = root

    for line in lines:
        if line.kind is LineKind.UNCLASSIFIED:
            if strict:
                raise ToonSyntaxError(
                    f"Expected '{LIST_MARKER} value' or 'token{KEY_SEPARATOR} value', got {line.content!r}",
                    line.line_number,
                )
            logger.warning("Line %d: dropping unclassifiable line %r", line.line_number, line.content)
            continue

        parent = last
        while parent.indent >= line.indent:
            parent = parent.parent

        node = TreeNode(
            indent=line.indent,
            key=line.key,
            value=line.value,
            is_array_item=line.kind is LineKind.ARRAY_ITEM,
            line_number=line.line_number,
            depth=parent.depth + 1,
        )
        if max_depth is not None and node.depth >= max_depth:
            raise ToonDepthError(node.depth + 1, max_depth)

        parent.add_child(node)
        last = node

    return root


def tree_to_value(node: TreeNode, dictionary: TokenDictionary, strict: bool = False) -> JsonValue:
    """
    Convert an indentation tree (or any subtree) to a Python value.

    A node without children is a scalar. Children that are all array items
    make a list; otherwise the node is an object keyed by resolved tokens.

    Args:
        node: The node to convert, usually the root from ``build_tree``.
        dictionary: Resolves tokens back to keys.
        strict: Raise on mixed sibling shapes instead of falling back.

    Returns:
        The converted value. A root without children converts to ``[]``.
    """
    if not node.children and node.parent is not None:
        return parse_scalar(node.value)

    if node.value is not None and node.children:
        logger.warning(
            "Line %d: inline value %r ignored in favour of nested lines",
            node.line_number,
            node.value,
        )

    children = node.children
    if all(child.is_array_item for child in children):
        return [tree_to_value(child, dictionary, strict) for child in children]

    if any(child.is_array_item for child in children):
        if strict:
            raise ToonSyntaxError(
                "Mixed list items and keyed entries at the same level",
                children[0].line_number,
            )
        logger.warning(
            "Line %d: mixed list items and keyed entries, decoding as object and dropping list items",
            children[0].line_number,
        )

    result = {}
    for child in children:
        if child.key is None:
            continue
        result[dictionary.key_for(child.key)] = tree_to_value(child, dictionary, strict)
    return result


def _root_scalar(lines: list[ParsedLine]) -> JsonValue | object:
    """
    Return the scalar for a single-line scalar document.

    ``yes``, ``Goku`` and ``-5`` are scalar documents; ``- 5`` is a one-item
    list and ``01: 5`` an object.
    """
    if len(lines) != 1:
        return _NOT_SCALAR

    line = lines[0]
    if line.kind is LineKind.OBJECT_ENTRY:
        return _NOT_SCALAR
    if line.kind is LineKind.ARRAY_ITEM and not is_number_literal(line.content):
        return _NOT_SCALAR

    return parse_scalar(line.content)
