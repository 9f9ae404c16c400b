"""Sass, Less and Stylus dependency extraction.

These dialects have loose, indentation- or line-oriented syntax, so they are
read with a comment-aware statement scanner instead of a grammar.
"""

from __future__ import annotations

import re

from depsniff.core.config import DialectOptions
from depsniff.core.exceptions import ParseError
from depsniff.core.models import Dialect
from depsniff.languages.models import ImportStatement, StylesheetTree


def strip_comments(text: str) -> str:
    """Blank out comments, keeping line numbers intact.

    Comment markers inside quoted strings are left alone, and ``//`` right
    after a colon (``url(http://...)``) is not a comment. Strings end at the
    end of their line.
    """
    out: list[str] = []
    quote: str | None = None
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if quote:
            if char == "\\" and i + 1 < length and text[i + 1] != "\n":
                out.append(text[i : i + 2])
                i += 2
                continue
            if char == quote or char == "\n":
                quote = None
            out.append(char)
        elif char in "'\"":
            quote = char
            out.append(char)
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            out.append("\n" * text.count("\n", i, end))
            i = end
            continue
        elif text.startswith("//", i) and (i == 0 or text[i - 1] != ":"):
            end = text.find("\n", i)
            i = length if end == -1 else end
            continue
        else:
            out.append(char)
        i += 1
    return "".join(out)


def split_statements(line: str) -> list[str]:
    """Split a line on semicolons outside quotes."""
    chunks: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for char in line:
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == ";":
            chunks.append("".join(current))
            current = []
            continue
        current.append(char)
    chunks.append("".join(current))
    return chunks


def split_targets(body: str) -> list[str]:
    """Split a comma-separated import list, respecting quotes and parentheses."""
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    depth = 0
    for char in body:
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))

    targets = []
    for part in parts:
        target = _target(part)
        if target:
            targets.append(target)
    return targets


def _target(part: str) -> str:
    part = part.strip().rstrip(";").strip()
    if part.lower().startswith("url(") and ")" in part:
        part = part[4 : part.rindex(")")].strip()
    if part[:1] in ("'", '"'):
        end = part.find(part[0], 1)
        return part[1:end] if end != -1 else part[1:]
    return part.split()[0] if part else ""


class StatementScanner:
    """Finds ``@keyword target[, target]`` statements line by line."""

    dialect: Dialect
    keywords: tuple[str, ...] = ("import",)
    allow_import_options = False

    def __init__(self) -> None:
        options = r"(?:\((?P<options>[^)]*)\)\s*)?" if self.allow_import_options else ""
        self._pattern = re.compile(
            r"^\s*@(?P<keyword>" + "|".join(self.keywords) + r")\b\s*" + options + r"(?P<body>.*)$"
        )

    def parse(self, text: str) -> StylesheetTree:
        if not isinstance(text, str):
            raise ParseError(f"Cannot scan {self.dialect.value} source of type {type(text).__name__}")

        tree = StylesheetTree(dialect=self.dialect)
        for number, line in enumerate(strip_comments(text).splitlines(), start=1):
            for chunk in split_statements(line):
                match = self._pattern.match(chunk)
                if match is None:
                    continue
                targets = split_targets(match.group("body"))
                if targets:
                    tree.statements.append(
                        ImportStatement(
                            keyword=match.group("keyword"),
                            line=number,
                            targets=targets,
                            options=match.groupdict().get("options"),
                        )
                    )
        return tree

    def extract(self, tree: StylesheetTree, options: DialectOptions) -> list[str]:
        return tree.targets


class SassExtractor(StatementScanner):
    """Indented Sass: ``@import``, ``@use`` and ``@forward``."""

    dialect = Dialect.SASS
    keywords = ("import", "use", "forward")


class LessExtractor(StatementScanner):
    """Less ``@import``, including ``@import (reference) "x";``."""

    dialect = Dialect.LESS
    allow_import_options = True


class StylusExtractor(StatementScanner):
    """Stylus ``@import`` and ``@require``."""

    dialect = Dialect.STYLUS
    keywords = ("import", "require")
