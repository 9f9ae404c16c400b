"""Dispatch sources to the extractor for their dialect."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from depsniff.core.config import DetectConfig, normalize
from depsniff.core.detector import detect_module_system, parse_javascript
from depsniff.core.exceptions import ParseError, UnsupportedDialectError
from depsniff.core.models import Detection, Dialect
from depsniff.languages import (
    AmdExtractor,
    CommonJsExtractor,
    CssExtractor,
    DependencyExtractor,
    Es6Extractor,
    LessExtractor,
    SassExtractor,
    StylusExtractor,
    TypeScriptExtractor,
)

log = logging.getLogger(__name__)

Config = str | Dialect | Mapping[str, Any] | DetectConfig | None

_MIXABLE = frozenset({Dialect.ES6, Dialect.COMMONJS})


class ExtractorRegistry:
    """Static table from dialect to extractor.

    A complete registry has exactly one extractor per dialect; a missing
    dialect is reported when the registry is built, not when a file of that
    dialect shows up.
    """

    def __init__(self, extractors: Iterable[DependencyExtractor], complete: bool = True) -> None:
        self._table: dict[Dialect, DependencyExtractor] = {}
        for extractor in extractors:
            if extractor.dialect in self._table:
                raise ValueError(f"Duplicate extractor for {extractor.dialect.value}")
            self._table[extractor.dialect] = extractor

        if complete:
            missing = [dialect.value for dialect in Dialect if dialect not in self._table]
            if missing:
                raise UnsupportedDialectError(
                    f"No extractor registered for: {', '.join(missing)}"
                )

    def __getitem__(self, dialect: Dialect) -> DependencyExtractor:
        try:
            return self._table[dialect]
        except KeyError:
            raise UnsupportedDialectError(
                f"No extractor registered for {dialect.value}"
            ) from None

    def __contains__(self, dialect: object) -> bool:
        return dialect in self._table

    def __iter__(self) -> Iterator[Dialect]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def replace(self, extractor: DependencyExtractor) -> ExtractorRegistry:
        """Return a copy with ``extractor`` registered for its dialect."""
        table = dict(self._table)
        table[extractor.dialect] = extractor
        return ExtractorRegistry(table.values(), complete=False)


def default_registry() -> ExtractorRegistry:
    """Registry with the built-in extractor for every dialect."""
    return ExtractorRegistry(
        [
            CommonJsExtractor(),
            AmdExtractor(),
            Es6Extractor(),
            TypeScriptExtractor(),
            TypeScriptExtractor(tsx=True),
            CssExtractor(Dialect.CSS),
            CssExtractor(Dialect.SCSS),
            SassExtractor(),
            LessExtractor(),
            StylusExtractor(),
        ]
    )


class Dispatcher:
    """Resolves the dialect of a source and runs its extractor.

    ``last_tree`` holds the tree from the most recent successful detection.
    """

    def __init__(self, registry: ExtractorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()
        self.last_tree: Any = None

    @property
    def registry(self) -> ExtractorRegistry:
        return self._registry

    def detect(self, source: Any, config: Config = None) -> Detection:
        """Detect the dependencies of ``source``.

        Args:
            source: Source text, or a tree already parsed by an extractor
            config: Dialect name or configuration mapping (see depsniff.core.config)

        Returns:
            Detection with the dependencies, the tree and the resolved dialect.
            Unparsable JavaScript or TypeScript gives an empty Detection.

        Raises:
            UnsupportedDialectError: The configured dialect is unknown
        """
        cfg = normalize(config)
        dialect = cfg.type
        tree = None if isinstance(source, str) else source

        if dialect is None:
            if tree is None:
                try:
                    tree = parse_javascript(source)
                except ParseError as e:
                    log.debug("Could not parse content: %s", e)
                    return Detection()
            dialect = detect_module_system(tree)

        try:
            if tree is None:
                tree = self._registry[dialect].parse(source)
            dependencies = self._extract(dialect, tree, cfg)
        except ParseError as e:
            if not dialect.recovers_parse_errors:
                raise
            log.debug("Could not parse %s content: %s", dialect.value, e)
            return Detection(dialect=dialect)

        self.last_tree = tree
        return Detection(dependencies=list(dependencies), tree=tree, dialect=dialect)

    def detect_dependencies(self, source: Any, config: Config = None) -> list[str]:
        """Detect the dependencies of ``source`` and return them as a list."""
        return self.detect(source, config).dependencies

    def paperwork(
        self, path: str | os.PathLike[str], options: Config = None
    ) -> list[str]:
        """Read a file and detect its dependencies (see depsniff.core.paperwork)."""
        from depsniff.core.paperwork import paperwork

        return paperwork(path, options, dispatcher=self)

    def _extract(self, dialect: Dialect, tree: Any, cfg: DetectConfig) -> list[str]:
        if cfg.mixed_imports and dialect in _MIXABLE:
            es6 = self._registry[Dialect.ES6].extract(tree, cfg.options_for(Dialect.ES6))
            cjs = self._registry[Dialect.COMMONJS].extract(
                tree, cfg.options_for(Dialect.COMMONJS)
            )
            return list(es6) + list(cjs)

        return self._registry[dialect].extract(tree, cfg.options_for(dialect))


_default_dispatcher: Dispatcher | None = None


def default_dispatcher() -> Dispatcher:
    """Process-wide dispatcher behind the module-level functions."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = Dispatcher()
    return _default_dispatcher


def detect(source: Any, config: Config = None) -> Detection:
    """Detect dependencies with the default dispatcher."""
    return default_dispatcher().detect(source, config)


def detect_dependencies(source: Any, config: Config = None) -> list[str]:
    """Return the dependencies of ``source`` using the default dispatcher."""
    return default_dispatcher().detect_dependencies(source, config)


def last_tree() -> Any:
    """Tree produced by the most recent successful module-level detection."""
    return default_dispatcher().last_tree
