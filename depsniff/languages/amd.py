"""AMD (RequireJS) dependency extraction."""

from __future__ import annotations

from tree_sitter import Node, Tree

from depsniff.core.config import AmdOptions, DialectOptions
from depsniff.core.models import Dialect
from depsniff.languages.treesitter import (
    FUNCTION_TYPES,
    TreeSitterExtractor,
    arguments,
    array_strings,
    enclosing_function,
    is_identifier,
    is_require_call,
    node_text,
    root_of,
    string_value,
    walk,
)


def is_define_call(node: Node) -> bool:
    """``define(...)`` with one of the AMD signatures.

    Accepted: define(deps, factory), define(name, deps, factory),
    define(name, factory), define(factory), define(object).
    """
    if node.type != "call_expression":
        return False
    if not is_identifier(node.child_by_field_name("function"), "define"):
        return False

    shapes = [arg.type for arg in arguments(node)]
    if len(shapes) == 1:
        return shapes[0] in FUNCTION_TYPES or shapes[0] == "object"
    if len(shapes) == 2:
        return shapes[0] in ("array", "string") and (
            shapes[1] in FUNCTION_TYPES or shapes[1] == "object"
        )
    if len(shapes) == 3:
        return shapes[0] == "string" and shapes[1] == "array"
    return False


def is_driver_require(node: Node) -> bool:
    """``require([deps], callback)``."""
    if not is_require_call(node):
        return False
    args = arguments(node)
    return bool(args) and args[0].type == "array"


def is_top_level(node: Node) -> bool:
    parent = node.parent
    return (
        parent is not None
        and parent.type == "expression_statement"
        and parent.parent is not None
        and parent.parent.type == "program"
    )


def _is_wrapper_factory(function: Node | None) -> bool:
    """A factory passed straight to ``define`` whose first parameter is ``require``.

    This is the simplified CommonJS wrapper: ``define(function (require) {...})``.
    """
    if function is None:
        return False
    args = function.parent
    if args is None or args.type != "arguments":
        return False
    call = args.parent
    if call is None or not is_define_call(call):
        return False

    params = function.child_by_field_name("parameters")
    if params is None:
        params = function.child_by_field_name("parameter")
        return params is not None and node_text(params) == "require"
    names = [p for p in params.named_children if p.type != "comment"]
    return bool(names) and node_text(names[0]) == "require"


def _define_dependencies(node: Node) -> list[str]:
    for arg in arguments(node):
        if arg.type == "array":
            return array_strings(arg)
    return []


class AmdExtractor(TreeSitterExtractor):
    """Extracts dependencies from ``define`` and ``require`` calls."""

    dialect = Dialect.AMD

    def extract(self, tree: Tree | Node, options: DialectOptions) -> list[str]:
        skip_lazy = isinstance(options, AmdOptions) and options.skip_lazy_loaded

        dependencies: list[str] = []
        for node in walk(root_of(tree)):
            if is_define_call(node):
                dependencies.extend(_define_dependencies(node))
            elif is_driver_require(node):
                if is_top_level(node) or not skip_lazy:
                    dependencies.extend(array_strings(arguments(node)[0]))
            elif is_require_call(node):
                if skip_lazy and not _is_wrapper_factory(enclosing_function(node)):
                    continue
                args = arguments(node)
                value = string_value(args[0]) if args else None
                if value is not None:
                    dependencies.append(value)

        return list(dict.fromkeys(dependencies))
