"""
Dependency extractors: one per dialect.

Each extractor turns source text into a tree (``parse``) and reports the
dependency identifiers that tree references (``extract``).

Components:
    - DependencyExtractor: Protocol defining the extractor interface
    - CommonJsExtractor, AmdExtractor, Es6Extractor: JavaScript module systems
    - TypeScriptExtractor: typescript and tsx grammars
    - CssExtractor: css and scss, on tree-sitter grammars
    - SassExtractor, LessExtractor, StylusExtractor: statement scanners

Adding a new dialect:
    1. Add a member to depsniff.core.models.Dialect
    2. Implement parse() and extract() on a new extractor class
    3. Register it in depsniff.core.dispatcher.default_registry()
"""

from depsniff.languages.amd import AmdExtractor
from depsniff.languages.base import DependencyExtractor
from depsniff.languages.commonjs import CommonJsExtractor
from depsniff.languages.css import CssExtractor
from depsniff.languages.es6 import Es6Extractor
from depsniff.languages.models import ImportStatement, StylesheetTree
from depsniff.languages.stylesheets import LessExtractor, SassExtractor, StylusExtractor
from depsniff.languages.typescript import TypeScriptExtractor

__all__ = [
    "DependencyExtractor",
    "AmdExtractor",
    "CommonJsExtractor",
    "CssExtractor",
    "Es6Extractor",
    "ImportStatement",
    "LessExtractor",
    "SassExtractor",
    "StylesheetTree",
    "StylusExtractor",
    "TypeScriptExtractor",
]
