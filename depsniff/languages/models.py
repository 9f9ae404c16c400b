"""Data models for extractor parse results."""

from __future__ import annotations

from dataclasses import dataclass, field

from depsniff.core.models import Dialect


@dataclass
class ImportStatement:
    """One import-like statement found by a stylesheet scanner."""

    keyword: str
    line: int
    targets: list[str]
    options: str | None = None


@dataclass
class StylesheetTree:
    """Parse result for the scanned stylesheet dialects (sass, less, stylus)."""

    dialect: Dialect
    statements: list[ImportStatement] = field(default_factory=list)

    @property
    def targets(self) -> list[str]:
        return [target for statement in self.statements for target in statement.targets]
