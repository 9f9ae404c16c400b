"""Configuration normalization.

Callers configure detection either with a bare dialect token (``"amd"``) or
with a mapping such as::

    {
        "type": "es6",
        "includeCore": False,
        "es6": {"mixedImports": True},
        "amd": {"skipLazyLoaded": True},
    }

``normalize`` turns either form into a :class:`DetectConfig`. Dialect-named
sub-bundles become that dialect's options dataclass; the normalizer only
routes them, each extractor decides what its options mean.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Union

from depsniff.core.exceptions import ConfigurationError, UnsupportedDialectError
from depsniff.core.models import Dialect
from depsniff.core.resolver import lookup_dialect

if TYPE_CHECKING:
    from depsniff.core.paperwork import FileSystem

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommonJsOptions:
    """CommonJS extraction has no options."""


@dataclass(frozen=True)
class AmdOptions:
    """Options for AMD extraction."""

    skip_lazy_loaded: bool = False


@dataclass(frozen=True)
class Es6Options:
    """Options for ES module extraction."""

    mixed_imports: bool = False
    skip_type_imports: bool = False


@dataclass(frozen=True)
class TypeScriptOptions:
    """Options for typescript and tsx extraction."""

    mixed_imports: bool = False
    skip_type_imports: bool = False


@dataclass(frozen=True)
class CssOptions:
    """Options for plain CSS extraction."""

    url: bool = False


@dataclass(frozen=True)
class StylesheetOptions:
    """Preprocessor stylesheets (scss, sass, less, stylus) have no options."""


DialectOptions = Union[
    CommonJsOptions,
    AmdOptions,
    Es6Options,
    TypeScriptOptions,
    CssOptions,
    StylesheetOptions,
]

OPTION_TYPES: dict[Dialect, type] = {
    Dialect.COMMONJS: CommonJsOptions,
    Dialect.AMD: AmdOptions,
    Dialect.ES6: Es6Options,
    Dialect.TYPESCRIPT: TypeScriptOptions,
    Dialect.TSX: TypeScriptOptions,
    Dialect.CSS: CssOptions,
    Dialect.SCSS: StylesheetOptions,
    Dialect.SASS: StylesheetOptions,
    Dialect.LESS: StylesheetOptions,
    Dialect.STYLUS: StylesheetOptions,
}

_TYPE_KEYS = ("type",)
_INCLUDE_CORE_KEYS = ("includeCore", "include_core")
_FILE_SYSTEM_KEYS = ("fileSystem", "file_system")


@dataclass(frozen=True)
class DetectConfig:
    """Normalized configuration for one detection call."""

    type: Dialect | None = None
    options: Mapping[Dialect, DialectOptions] = field(default_factory=dict)
    include_core: bool = True
    file_system: FileSystem | None = None

    def options_for(self, dialect: Dialect) -> DialectOptions:
        """Options routed to ``dialect``, or its defaults."""
        options = self.options.get(dialect)
        if options is None:
            options = OPTION_TYPES[dialect]()
        return options

    @property
    def mixed_imports(self) -> bool:
        """Whether ES6 and CommonJS results are combined."""
        es6 = self.options_for(Dialect.ES6)
        return bool(getattr(es6, "mixed_imports", False))

    def with_type(self, dialect: Dialect | None) -> DetectConfig:
        """Return a copy with ``type`` replaced."""
        return replace(self, type=dialect)


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def build_options(dialect: Dialect, bundle: Any) -> DialectOptions:
    """Build the options dataclass for ``dialect`` from a sub-bundle."""
    option_type = OPTION_TYPES[dialect]
    if isinstance(bundle, option_type):
        return bundle
    if bundle is None:
        return option_type()
    if not isinstance(bundle, Mapping):
        raise ConfigurationError(
            f"Options for {dialect.value} must be a mapping, got {type(bundle).__name__}"
        )

    values: dict[str, Any] = {}
    known: set[str] = set()
    for option in fields(option_type):
        for key in (option.name, _camel_case(option.name)):
            known.add(key)
            if key in bundle:
                value = bundle[key]
                if not isinstance(value, bool):
                    raise ConfigurationError(
                        f"{dialect.value}.{key} must be a boolean, got {value!r}"
                    )
                values[option.name] = value

    unknown = sorted(str(key) for key in bundle if key not in known)
    if unknown:
        log.debug("Ignoring unknown %s options: %s", dialect.value, ", ".join(unknown))

    return option_type(**values)


def _first(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def normalize(raw: str | Dialect | Mapping[str, Any] | DetectConfig | None) -> DetectConfig:
    """Normalize caller configuration into a DetectConfig.

    Raises:
        UnsupportedDialectError: ``type`` names no known dialect.
        ConfigurationError: the configuration has an unsupported shape.
    """
    if isinstance(raw, DetectConfig):
        return raw
    if raw is None:
        return DetectConfig()
    if isinstance(raw, (str, Dialect)):
        raw = {"type": raw}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Configuration must be a dialect name or a mapping, got {type(raw).__name__}"
        )

    type_token = _first(raw, _TYPE_KEYS)
    if not isinstance(type_token, (str, Dialect, type(None))):
        raise ConfigurationError(f"type must be a dialect name, got {type_token!r}")
    dialect = lookup_dialect(type_token)
    if dialect is None and type_token not in (None, ""):
        raise UnsupportedDialectError(f"Unsupported dialect: {type_token!r}")

    include_core = _first(raw, _INCLUDE_CORE_KEYS)
    if include_core is None:
        include_core = True
    elif not isinstance(include_core, bool):
        raise ConfigurationError(f"includeCore must be a boolean, got {include_core!r}")

    options: dict[Dialect, DialectOptions] = {}
    reserved = set(_TYPE_KEYS + _INCLUDE_CORE_KEYS + _FILE_SYSTEM_KEYS)
    for key, bundle in raw.items():
        if key in reserved:
            continue
        target = lookup_dialect(key) if isinstance(key, (str, Dialect)) else None
        if target is None:
            log.debug("Ignoring unknown configuration key: %r", key)
            continue
        options[target] = build_options(target, bundle)

    return DetectConfig(
        type=dialect,
        options=options,
        include_core=include_core,
        file_system=_first(raw, _FILE_SYSTEM_KEYS),
    )
