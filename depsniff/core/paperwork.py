"""File-level entry point: read a file and detect its dependencies."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from depsniff.core.builtins import is_core_module
from depsniff.core.config import DetectConfig, normalize
from depsniff.core.exceptions import ConfigurationError
from depsniff.core.resolver import dialect_for_path

if TYPE_CHECKING:
    from depsniff.core.dispatcher import Dispatcher
    from depsniff.core.models import Dialect

log = logging.getLogger(__name__)


@runtime_checkable
class FileSystem(Protocol):
    """The one file operation paperwork needs."""

    def read_text(self, path: str) -> str:
        """Return the contents of ``path`` as text.

        Raises OSError when the file cannot be read.
        """
        ...


class LocalFileSystem:
    """Reads files from the local disk as UTF-8.

    Undecodable bytes become U+FFFD instead of failing the read.
    """

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8", errors="replace")


def paperwork(
    path: str | os.PathLike[str],
    options: str | Dialect | Mapping[str, Any] | DetectConfig | None = None,
    dispatcher: Dispatcher | None = None,
) -> list[str]:
    """Return the dependencies of the file at ``path``.

    The dialect comes from the ``type`` option when given, otherwise from the
    file extension. Built-in modules are kept unless ``includeCore`` is False.

    Raises:
        OSError: The file cannot be read
    """
    if dispatcher is None:
        from depsniff.core.dispatcher import default_dispatcher

        dispatcher = default_dispatcher()

    cfg = normalize(options)
    file_system = cfg.file_system if cfg.file_system is not None else LocalFileSystem()
    if not isinstance(file_system, FileSystem):
        raise ConfigurationError(
            f"fileSystem must provide read_text(path), got {type(file_system).__name__}"
        )

    content = file_system.read_text(os.fspath(path))

    if cfg.type is None:
        cfg = cfg.with_type(dialect_for_path(path))

    dependencies = dispatcher.detect(content, cfg).dependencies

    if not cfg.include_core:
        kept = [dep for dep in dependencies if not is_core_module(dep)]
        if len(kept) != len(dependencies):
            log.debug("Filtered %d core modules from %s", len(dependencies) - len(kept), path)
        dependencies = kept

    return dependencies
