"""Map type tokens and file extensions to dialects."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from depsniff.core.models import Dialect

_ALIASES: dict[str, Dialect] = {
    "cjs": Dialect.COMMONJS,
    "esm": Dialect.ES6,
    "ts": Dialect.TYPESCRIPT,
    "styl": Dialect.STYLUS,
}

# None means "JavaScript family": the module-system detector decides.
EXTENSION_MAP: dict[str, Dialect | None] = {
    ".js": None,
    ".jsx": None,
    ".mjs": None,
    ".cjs": Dialect.COMMONJS,
    ".ts": Dialect.TYPESCRIPT,
    ".tsx": Dialect.TSX,
    ".css": Dialect.CSS,
    ".scss": Dialect.SCSS,
    ".sass": Dialect.SASS,
    ".less": Dialect.LESS,
    ".styl": Dialect.STYLUS,
}

SUPPORTED_EXTENSIONS = frozenset(EXTENSION_MAP)


def lookup_dialect(token: str | Dialect | None) -> Dialect | None:
    """Return the dialect named by ``token``, or None if it names none."""
    if token is None or isinstance(token, Dialect):
        return token
    name = token.strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return Dialect(name)
    except ValueError:
        return None


def resolve_type(explicit: str | Dialect | Mapping[str, Any] | None) -> Dialect | None:
    """Resolve an explicit type token, or a mapping carrying a ``type`` key."""
    if isinstance(explicit, Mapping):
        explicit = explicit.get("type")
    return lookup_dialect(explicit)


def dialect_for_path(path: str | os.PathLike[str]) -> Dialect | None:
    """Dialect implied by a file extension.

    Returns None for JavaScript files and for unrecognized extensions; both
    fall back to module-system detection.
    """
    return EXTENSION_MAP.get(Path(path).suffix.lower())
