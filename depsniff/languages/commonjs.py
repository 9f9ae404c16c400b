"""CommonJS dependency extraction."""

from __future__ import annotations

from tree_sitter import Node, Tree

from depsniff.core.config import DialectOptions
from depsniff.core.models import Dialect
from depsniff.languages.treesitter import (
    TreeSitterExtractor,
    arguments,
    is_main_require_call,
    is_require_call,
    root_of,
    string_value,
    walk,
)


def require_calls(root: Node) -> list[str]:
    """Literal targets of every ``require('x')`` and ``require.main.require('x')``.

    Requires nested in functions (lazy requires) are included; calls with a
    non-literal argument are skipped.
    """
    dependencies = []
    for node in walk(root):
        if not (is_require_call(node) or is_main_require_call(node)):
            continue
        args = arguments(node)
        value = string_value(args[0]) if args else None
        if value is not None:
            dependencies.append(value)
    return dependencies


class CommonJsExtractor(TreeSitterExtractor):
    """Extracts ``require`` calls from CommonJS modules."""

    dialect = Dialect.COMMONJS

    def extract(self, tree: Tree | Node, options: DialectOptions) -> list[str]:
        return require_calls(root_of(tree))
