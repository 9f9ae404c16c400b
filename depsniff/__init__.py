"""
Depsniff: Dependency detection for JavaScript, TypeScript and stylesheets.

Depsniff reads a single source file (or an already-parsed tree) and lists the
module identifiers it depends on, whatever its module system:
- CommonJS, AMD and ES modules, detected automatically
- TypeScript and TSX
- CSS, SCSS, Sass, Less and Stylus

Usage:
    from depsniff import detect_dependencies, paperwork

    detect_dependencies("import x from 'lib';")        # ['lib']
    detect_dependencies(source, {"es6": {"mixedImports": True}})
    paperwork("src/index.ts", {"includeCore": False})
"""

from depsniff.core.dispatcher import (
    Dispatcher,
    ExtractorRegistry,
    default_registry,
    detect,
    detect_dependencies,
    last_tree,
)
from depsniff.core.paperwork import FileSystem, LocalFileSystem, paperwork
from depsniff.core.scanner import Scanner

__version__ = "0.1.0"

__all__ = [
    "Dispatcher",
    "ExtractorRegistry",
    "FileSystem",
    "LocalFileSystem",
    "Scanner",
    "default_registry",
    "detect",
    "detect_dependencies",
    "last_tree",
    "paperwork",
]
