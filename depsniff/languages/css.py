"""CSS and SCSS dependency extraction."""

from __future__ import annotations

from tree_sitter import Node, Tree

from depsniff.core.config import CssOptions, DialectOptions
from depsniff.core.models import Dialect
from depsniff.languages.treesitter import TreeSitterExtractor, node_text, root_of

_IMPORT_STATEMENTS = {
    Dialect.CSS: frozenset({"import_statement"}),
    Dialect.SCSS: frozenset({"import_statement", "use_statement", "forward_statement"}),
}


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def is_url_call(node: Node) -> bool:
    if node.type != "call_expression":
        return False
    name = next((c for c in node.named_children if c.type == "function_name"), None)
    return name is not None and node_text(name).lower() == "url"


def url_target(node: Node) -> str | None:
    """Target of ``url(...)``, quoted or bare."""
    args = next((c for c in node.named_children if c.type == "arguments"), None)
    if args is None:
        return None
    for arg in args.named_children:
        if arg.type in ("string_value", "plain_value"):
            return _unquote(node_text(arg))
    return None


def statement_targets(statement: Node) -> list[str]:
    """String and ``url()`` targets of one ``@import``-like statement.

    Strings the grammar could not place (multi-target ``@import a, b``) end
    up under ERROR nodes; they are still collected in source order.
    """
    targets = []
    stack = list(reversed(statement.children))
    while stack:
        node = stack.pop()
        if node.type == "string_value":
            targets.append(_unquote(node_text(node)))
        elif is_url_call(node):
            target = url_target(node)
            if target is not None:
                targets.append(target)
        elif node.type == "arguments" or node.type.endswith("_query"):
            # media queries and arguments of non-url functions (layer(), supports())
            continue
        else:
            stack.extend(reversed(node.children))
    return targets


class CssExtractor(TreeSitterExtractor):
    """Extracts ``@import`` targets (and ``@use``/``@forward`` for scss)."""

    strict = False

    def __init__(self, dialect: Dialect = Dialect.CSS) -> None:
        if dialect not in _IMPORT_STATEMENTS:
            raise ValueError(f"CssExtractor does not handle {dialect.value}")
        self.dialect = dialect
        self.grammar = dialect.value
        self._statements = _IMPORT_STATEMENTS[dialect]

    def extract(self, tree: Tree | Node, options: DialectOptions) -> list[str]:
        include_urls = isinstance(options, CssOptions) and options.url

        dependencies: list[str] = []
        stack = [root_of(tree)]
        while stack:
            node = stack.pop()
            if node.type in self._statements:
                dependencies.extend(statement_targets(node))
                continue
            if include_urls and is_url_call(node):
                target = url_target(node)
                if target:
                    dependencies.append(target)
                continue
            stack.extend(reversed(node.children))
        return dependencies
