"""
Core module: data models, exceptions, configuration and dialect resolution.

This module provides the foundational types the extractors and the
dispatcher share:

Models (models.py):
    - Dialect: The languages and module systems with an extractor
    - Detection: Dependencies, parsed tree and dialect of one source
    - ScanReport: Per-file results of a directory scan

Exceptions (exceptions.py):
    - DepsniffError: Base exception for all depsniff errors
    - ParseError: Source could not be parsed under its dialect
    - UnsupportedDialectError: Unknown dialect or no extractor for it
    - ConfigurationError: Configuration of an unsupported shape

Configuration (config.py):
    - normalize: Bare dialect names or mappings to a DetectConfig
    - AmdOptions, Es6Options, ...: Per-dialect options

Resolution (resolver.py, builtins.py):
    - lookup_dialect / resolve_type / dialect_for_path
    - is_core_module: Node.js and Sass built-in module names

Dispatch lives in depsniff.core.dispatcher, file handling in
depsniff.core.paperwork and depsniff.core.scanner; those depend on
depsniff.languages and are exported from the top-level package.
"""

from depsniff.core.builtins import is_core_module
from depsniff.core.config import (
    AmdOptions,
    CommonJsOptions,
    CssOptions,
    DetectConfig,
    Es6Options,
    StylesheetOptions,
    TypeScriptOptions,
    normalize,
)
from depsniff.core.exceptions import (
    ConfigurationError,
    DepsniffError,
    ParseError,
    UnsupportedDialectError,
)
from depsniff.core.models import Detection, Dialect, ScanReport
from depsniff.core.resolver import dialect_for_path, lookup_dialect, resolve_type

__all__ = [
    # Models
    "Detection",
    "Dialect",
    "ScanReport",
    # Exceptions
    "DepsniffError",
    "ParseError",
    "UnsupportedDialectError",
    "ConfigurationError",
    # Configuration
    "DetectConfig",
    "AmdOptions",
    "CommonJsOptions",
    "CssOptions",
    "Es6Options",
    "StylesheetOptions",
    "TypeScriptOptions",
    "normalize",
    # Resolution
    "lookup_dialect",
    "resolve_type",
    "dialect_for_path",
    "is_core_module",
]
