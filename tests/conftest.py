"""Shared fixtures for depsniff tests."""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from depsniff.core.dispatcher import Dispatcher
from depsniff.core.models import Dialect


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def dispatcher() -> Dispatcher:
    """A dispatcher with its own last-tree slot."""
    return Dispatcher()


class RecordingExtractor:
    """Extractor double that records what it is called with."""

    def __init__(self, dialect: Dialect, result: list[str] | None = None) -> None:
        self.dialect = dialect
        self.result = result or []
        self.parsed: list[str] = []
        self.calls: list[tuple[Any, Any]] = []

    def parse(self, text: str) -> Any:
        self.parsed.append(text)
        return {"parsed": text}

    def extract(self, tree: Any, options: Any) -> list[str]:
        self.calls.append((tree, options))
        return list(self.result)


@pytest.fixture
def recording_extractor():
    """Factory for RecordingExtractor instances."""
    return RecordingExtractor
