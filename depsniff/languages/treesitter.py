"""Shared tree-sitter helpers for the extractors."""

from __future__ import annotations

import re
from collections.abc import Iterator
from functools import lru_cache

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import get_parser

from depsniff.core.exceptions import ParseError

# Anonymous and declared function nodes across grammar versions.
FUNCTION_TYPES = frozenset(
    {
        "function",
        "function_expression",
        "function_declaration",
        "generator_function",
        "generator_function_declaration",
        "arrow_function",
        "method_definition",
    }
)


@lru_cache(maxsize=None)
def parser_for(grammar: str) -> Parser:
    """Return a cached tree-sitter parser for ``grammar``."""
    return get_parser(grammar)  # type: ignore[arg-type]


def parse_source(text: str, grammar: str, strict: bool = True) -> Tree:
    """Parse ``text`` with ``grammar``.

    tree-sitter always produces a tree; with ``strict`` a tree containing
    error nodes is rejected with ParseError.
    """
    try:
        tree = parser_for(grammar).parse(text.encode("utf-8"))
    except (ValueError, UnicodeEncodeError) as e:
        raise ParseError(f"Cannot parse {grammar} source: {e}") from e

    if strict and tree.root_node.has_error:
        line = _first_error_line(tree.root_node)
        raise ParseError(f"Syntax error in {grammar} source near line {line}")
    return tree


def _first_error_line(root: Node) -> int:
    for node in walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return root.start_point[0] + 1


def root_of(tree: Tree | Node) -> Node:
    """Accept either a Tree or a Node and return the node to walk."""
    return tree.root_node if isinstance(tree, Tree) else tree


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def is_identifier(node: Node | None, name: str) -> bool:
    return node is not None and node.type == "identifier" and node_text(node) == name


def arguments(call: Node) -> list[Node]:
    """Argument nodes of a call expression, without comments."""
    args = call.child_by_field_name("arguments")
    if args is None:
        return []
    return [child for child in args.named_children if child.type != "comment"]


_ESCAPE = re.compile(
    r"\\(?:u\{(?P<code>[0-9a-fA-F]+)\}|u(?P<u4>[0-9a-fA-F]{4})|x(?P<x2>[0-9a-fA-F]{2})"
    r"|(?P<newline>\r\n|[\r\n\u2028\u2029])|(?P<char>.))",
    re.DOTALL,
)

_SINGLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}


def _replace_escape(match: re.Match[str]) -> str:
    hex_digits = match.group("code") or match.group("u4") or match.group("x2")
    if hex_digits:
        code = int(hex_digits, 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    if match.group("newline"):
        return ""
    char = match.group("char")
    return _SINGLE_ESCAPES.get(char, char)


def unescape(raw: str) -> str:
    """Decode the escape sequences of a JavaScript string literal body."""
    if "\\" not in raw:
        return raw
    return _ESCAPE.sub(_replace_escape, raw)


def string_value(node: Node | None) -> str | None:
    """Value of a string literal node, or None for anything else.

    Template literals count only when they have no substitutions.
    """
    if node is None:
        return None
    if node.type == "string":
        return unescape(node_text(node)[1:-1])
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return unescape(node_text(node)[1:-1])
    return None


def array_strings(node: Node) -> list[str]:
    """String elements of an array literal, skipping anything dynamic."""
    values = []
    for element in node.named_children:
        value = string_value(element)
        if value is not None:
            values.append(value)
    return values


def is_require_call(node: Node) -> bool:
    """``require(...)`` with a plain identifier callee."""
    return node.type == "call_expression" and is_identifier(
        node.child_by_field_name("function"), "require"
    )


def is_main_require_call(node: Node) -> bool:
    """``require.main.require(...)``."""
    if node.type != "call_expression":
        return False
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return False
    return node_text(callee).replace(" ", "") == "require.main.require"


def is_dynamic_import(node: Node) -> bool:
    """``import(...)``."""
    if node.type != "call_expression":
        return False
    callee = node.child_by_field_name("function")
    return callee is not None and callee.type == "import"


def enclosing_function(node: Node) -> Node | None:
    parent = node.parent
    while parent is not None and parent.type not in FUNCTION_TYPES:
        parent = parent.parent
    return parent


class TreeSitterExtractor:
    """Base for extractors backed by a tree-sitter grammar."""

    grammar = "javascript"
    strict = True

    def parse(self, text: str) -> Tree:
        """Parse source text with this extractor's grammar."""
        return parse_source(text, self.grammar, strict=self.strict)
