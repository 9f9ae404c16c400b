"""Scanner that runs paperwork over a directory tree."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from depsniff.core.dispatcher import Dispatcher, default_dispatcher
from depsniff.core.exceptions import DepsniffError
from depsniff.core.models import ScanReport
from depsniff.core.resolver import SUPPORTED_EXTENSIONS

log = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, int, int], None]

DEFAULT_EXCLUDES = [
    "node_modules",
    "bower_components",
    "build",
    "dist",
    "coverage",
    "*.min.js",
]


class Scanner:
    """Collects the dependencies of every supported file under a directory."""

    def __init__(
        self,
        dispatcher: Dispatcher | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize with a dispatcher and the options passed to paperwork."""
        self._dispatcher = dispatcher if dispatcher is not None else default_dispatcher()
        self._options = dict(options or {})

    def scan_directory(
        self,
        directory: Path,
        exclude_patterns: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ScanReport:
        """Scan all supported files in a directory.

        A file that cannot be read or parsed is recorded in ``errors`` and the
        scan carries on.

        Args:
            directory: Directory to scan
            exclude_patterns: Additional glob patterns to exclude (e.g., "vendor")
            on_progress: Optional callback for progress updates (file, current, total)

        Returns:
            ScanReport mapping relative paths to their dependencies
        """
        all_excludes = DEFAULT_EXCLUDES + (exclude_patterns or [])
        report = ScanReport()

        files = sorted(
            path
            for path in directory.rglob("*")
            if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS
        )
        total_files = len(files)

        for i, file in enumerate(files):
            relative_path = file.relative_to(directory).as_posix()
            if self._should_exclude(relative_path, all_excludes):
                report.skipped += 1
            else:
                try:
                    report.dependencies[relative_path] = self._dispatcher.paperwork(
                        file, self._options
                    )
                except (OSError, DepsniffError) as e:
                    log.warning("Could not scan %s: %s", relative_path, e)
                    report.errors.append(f"{relative_path}: {e}")

            if on_progress:
                on_progress(file, i + 1, total_files)

        return report

    def _should_exclude(self, path: str, patterns: list[str]) -> bool:
        """Check if a path matches any exclusion pattern.

        Excludes:
        - Any path component starting with '.' (hidden files/directories)
        - Any path component matching the exclusion patterns
        """
        parts = Path(path).parts
        for part in parts:
            if part.startswith("."):
                return True
            for pattern in patterns:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
