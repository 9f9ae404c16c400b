"""ES module dependency extraction."""

from __future__ import annotations

from tree_sitter import Node, Tree

from depsniff.core.config import DialectOptions
from depsniff.core.models import Dialect
from depsniff.languages.treesitter import (
    TreeSitterExtractor,
    arguments,
    is_dynamic_import,
    is_main_require_call,
    is_require_call,
    root_of,
    string_value,
    walk,
)


def is_type_import(node: Node) -> bool:
    """``import type ... from 'x'`` (TypeScript and Flow)."""
    return any(child.type in ("type", "typeof") for child in node.children)


def _import_source(node: Node) -> Node | None:
    source = node.child_by_field_name("source")
    if source is not None:
        return source
    # import x = require('y')
    for child in node.named_children:
        if child.type == "import_require_clause":
            source = child.child_by_field_name("source")
            if source is not None:
                return source
            for grandchild in child.named_children:
                if grandchild.type == "string":
                    return grandchild
    return None


def module_imports(
    root: Node,
    skip_type_imports: bool = False,
    include_requires: bool = False,
) -> list[str]:
    """Collect import/export sources and dynamic imports in source order.

    With ``include_requires`` CommonJS ``require`` calls are collected in the
    same pass, interleaved with the imports.
    """
    dependencies = []
    for node in walk(root):
        value = None
        if node.type == "import_statement":
            if skip_type_imports and is_type_import(node):
                continue
            value = string_value(_import_source(node))
        elif node.type == "export_statement":
            value = string_value(node.child_by_field_name("source"))
        elif is_dynamic_import(node) or (
            include_requires and (is_require_call(node) or is_main_require_call(node))
        ):
            args = arguments(node)
            value = string_value(args[0]) if args else None

        if value is not None:
            dependencies.append(value)
    return dependencies


class Es6Extractor(TreeSitterExtractor):
    """Extracts ``import``/``export ... from`` sources from ES modules."""

    dialect = Dialect.ES6

    def extract(self, tree: Tree | Node, options: DialectOptions) -> list[str]:
        return module_imports(
            root_of(tree),
            skip_type_imports=getattr(options, "skip_type_imports", False),
        )
