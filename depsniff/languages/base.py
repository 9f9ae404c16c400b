"""Protocol for dependency extractors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from depsniff.core.config import DialectOptions
    from depsniff.core.models import Dialect


class DependencyExtractor(Protocol):
    """Protocol for dialect-specific dependency extractors."""

    dialect: Dialect

    def parse(self, text: str) -> Any:
        """Parse source text into the tree ``extract`` consumes.

        Raises ParseError when the text is not valid in this dialect.
        """
        ...

    def extract(self, tree: Any, options: DialectOptions) -> list[str]:
        """Return the dependency identifiers referenced by ``tree``."""
        ...
