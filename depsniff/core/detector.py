"""Classify JavaScript sources as AMD, ES module or CommonJS."""

from __future__ import annotations

import logging

from tree_sitter import Node, Tree

from depsniff.core.models import Dialect
from depsniff.languages.amd import is_define_call, is_driver_require, is_top_level
from depsniff.languages.treesitter import is_dynamic_import, parse_source, root_of, walk

log = logging.getLogger(__name__)

_ES6_STATEMENTS = frozenset({"import_statement", "export_statement"})


def is_amd(tree: Tree | Node) -> bool:
    """Whether the tree has a ``define`` call or a top-level driver ``require([...])``."""
    return any(
        is_define_call(node) or (is_driver_require(node) and is_top_level(node))
        for node in walk(root_of(tree))
    )


def is_es6(tree: Tree | Node) -> bool:
    """Whether the tree has an import/export declaration or a dynamic ``import()``."""
    return any(
        node.type in _ES6_STATEMENTS or is_dynamic_import(node) for node in walk(root_of(tree))
    )


def parse_javascript(text: str, strict: bool = True) -> Tree:
    """Parse JavaScript text (JSX included) with the javascript grammar."""
    return parse_source(text, "javascript", strict=strict)


def detect_module_system(source: str | Tree | Node) -> Dialect:
    """Return the module system of a JavaScript source.

    Precedence: AMD, then ES6, then CommonJS. CommonJS is the fallback, so a
    file without any module syntax is CommonJS.

    Text is parsed leniently here; rejecting malformed files is the
    dispatcher's job.
    """
    tree = parse_javascript(source, strict=False) if isinstance(source, str) else source

    if is_amd(tree):
        dialect = Dialect.AMD
    elif is_es6(tree):
        dialect = Dialect.ES6
    else:
        dialect = Dialect.COMMONJS

    log.debug("Detected module system: %s", dialect.value)
    return dialect
