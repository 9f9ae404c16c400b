"""TypeScript and TSX dependency extraction."""

from __future__ import annotations

from tree_sitter import Node, Tree

from depsniff.core.config import DialectOptions
from depsniff.core.models import Dialect
from depsniff.languages.es6 import module_imports
from depsniff.languages.treesitter import TreeSitterExtractor, root_of


class TypeScriptExtractor(TreeSitterExtractor):
    """Extracts imports from TypeScript sources.

    Reports everything the ES module extractor does plus
    ``import x = require('y')``. With ``mixed_imports`` plain ``require``
    calls are reported too.
    """

    dialect = Dialect.TYPESCRIPT
    grammar = "typescript"

    def __init__(self, tsx: bool = False) -> None:
        if tsx:
            self.dialect = Dialect.TSX
            self.grammar = "tsx"

    def extract(self, tree: Tree | Node, options: DialectOptions) -> list[str]:
        return module_imports(
            root_of(tree),
            skip_type_imports=getattr(options, "skip_type_imports", False),
            include_requires=getattr(options, "mixed_imports", False),
        )
