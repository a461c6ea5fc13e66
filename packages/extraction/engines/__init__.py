"""Extraction engine backends and the factory selecting one from config."""

from __future__ import annotations

import logging

from packages.common.config import OpenIEConfig
from packages.core.ports.extraction_engine import ExtractionEngine
from packages.extraction.engines.pattern_engine import PatternExtractionEngine

logger = logging.getLogger(__name__)


def build_engine(config: OpenIEConfig) -> ExtractionEngine:
    """Build the extraction engine named by ``config.extraction_backend``.

    The spaCy backend is imported lazily so the pattern backend works without
    loading spaCy at all.

    Args:
        config: Application configuration.

    Returns:
        ExtractionEngine: Ready-to-use engine.

    Raises:
        ValueError: If the backend name is unknown.
        EngineInitializationError: If the spaCy model cannot be loaded.
    """
    backend = config.extraction_backend
    logger.info("Building extraction engine", extra={"backend": backend})

    if backend == "pattern":
        return PatternExtractionEngine()
    if backend == "spacy":
        from packages.extraction.engines.spacy_engine import SpacyExtractionEngine

        return SpacyExtractionEngine(model=config.spacy_model)

    raise ValueError(f"Unknown extraction backend: {backend}")


__all__ = ["PatternExtractionEngine", "build_engine"]
