"""Helper classes and functions for constructing common test doubles."""

import time
from collections.abc import Iterable
from typing import Any

from packages.schemas.extraction import Extraction


class StubExtractionEngine:
    """Extraction engine returning canned extractions and recording its inputs."""

    name = "stub"

    def __init__(
        self,
        extractions: Iterable[Extraction] = (),
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.extractions = list(extractions)
        self.error = error
        self.delay = delay
        self.calls: list[str] = []

    def extract(self, text: str) -> list[Extraction]:
        self.calls.append(text)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.extractions)


def make_obama_extraction(**overrides: Any) -> Extraction:
    """Create the reference "Obama gave a speech" extraction."""

    fields: dict[str, Any] = {
        "confidence": 0.8,
        "context": "",
        "negated": False,
        "passive": False,
        "triple_text": "(Obama; gave; a speech)",
        "relation": "gave",
        "subject": "Obama",
        "objects": ["a speech"],
    }
    fields.update(overrides)
    return Extraction(**fields)


def create_mock_engine(mocker: Any, extractions: Iterable[Extraction] = ()) -> Any:
    """Create a MagicMock engine whose extract() returns ``extractions``."""

    engine = mocker.MagicMock()
    engine.name = "mock"
    engine.extract.return_value = list(extractions)
    return engine
