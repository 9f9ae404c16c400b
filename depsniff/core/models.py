"""Data models for Depsniff."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Dialect(Enum):
    """Language and module-system variants that have an extractor."""

    COMMONJS = "commonjs"
    AMD = "amd"
    ES6 = "es6"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    CSS = "css"
    SCSS = "scss"
    SASS = "sass"
    LESS = "less"
    STYLUS = "stylus"

    @property
    def is_javascript(self) -> bool:
        """True for the JavaScript module systems (commonjs, amd, es6)."""
        return self in JAVASCRIPT_FAMILY

    @property
    def is_typescript(self) -> bool:
        """True for typescript and tsx."""
        return self in TYPESCRIPT_FAMILY

    @property
    def is_stylesheet(self) -> bool:
        """True for the CSS family."""
        return self in STYLESHEET_FAMILY

    @property
    def recovers_parse_errors(self) -> bool:
        """Whether a syntax error in this dialect degrades to no dependencies."""
        return self.is_javascript or self.is_typescript


JAVASCRIPT_FAMILY = frozenset({Dialect.COMMONJS, Dialect.AMD, Dialect.ES6})
TYPESCRIPT_FAMILY = frozenset({Dialect.TYPESCRIPT, Dialect.TSX})
STYLESHEET_FAMILY = frozenset(
    {Dialect.CSS, Dialect.SCSS, Dialect.SASS, Dialect.LESS, Dialect.STYLUS}
)


@dataclass(frozen=True)
class Detection:
    """Result of running dependency detection on one source.

    ``tree`` is whatever the extractor parsed (or the tree the caller passed
    in); it is ``None`` when the source could not be parsed.
    """

    dependencies: list[str] = field(default_factory=list)
    tree: Any = None
    dialect: Dialect | None = None


class ScanReport:
    """Results of scanning a directory."""

    def __init__(self) -> None:
        self.dependencies: dict[str, list[str]] = {}
        self.skipped: int = 0
        self.errors: list[str] = []

    @property
    def files(self) -> int:
        return len(self.dependencies)

    def __repr__(self) -> str:
        return (
            f"ScanReport(files={self.files}, skipped={self.skipped}, "
            f"errors={len(self.errors)})"
        )
