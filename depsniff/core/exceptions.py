"""Depsniff Custom exceptions."""


class DepsniffError(Exception):
    """Base exception for Depsniff errors."""


class ParseError(DepsniffError):
    """Source could not be parsed under the resolved dialect."""


class UnsupportedDialectError(DepsniffError):
    """Dialect is unknown or has no registered extractor."""


class ConfigurationError(DepsniffError):
    """Configuration has an unsupported shape or option value."""
