"""ExtractionEngine - Port interface for open information extraction backends.

Defines the only capability the HTTP layer needs from an NLP toolkit.
Core layer defines this interface; adapters (packages/extraction/engines)
implement it, and tests substitute their own doubles.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from packages.schemas.extraction import Extraction


@runtime_checkable
class ExtractionEngine(Protocol):
    """Port interface for extraction engines.

    Implementations are built once at startup and shared across concurrent
    requests, so ``extract`` must be safe to call from several threads.
    """

    name: str

    def extract(self, text: str) -> Sequence[Extraction]:
        """Extract relations from text.

        Args:
            text: Raw natural language text.

        Returns:
            Sequence[Extraction]: Extractions in engine order (may be empty).

        Raises:
            Exception: Any engine failure; callers treat it as an internal error.
        """
        ...
