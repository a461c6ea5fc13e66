"""Extraction-related dependency providers for the API layer."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from packages.common.config import OpenIEConfig, get_config
from packages.core.ports.extraction_engine import ExtractionEngine
from packages.core.use_cases.extract_relations import ExtractRelationsUseCase

logger = logging.getLogger(__name__)


def get_app_config(request: Request) -> OpenIEConfig:
    """Return the configuration the application was built with."""
    config: OpenIEConfig | None = getattr(request.app.state, "config", None)
    return config if config is not None else get_config()


def get_extraction_engine(request: Request) -> ExtractionEngine:
    """Return the application-scoped extraction engine loaded at startup.

    Raises:
        HTTPException: 503 if the engine has not been loaded (startup not run or failed).
    """
    engine: ExtractionEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        logger.error("Extraction engine requested before it was loaded")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction engine not loaded",
        )
    return engine


def get_extract_relations_use_case(
    engine: Annotated[ExtractionEngine, Depends(get_extraction_engine)],
    config: Annotated[OpenIEConfig, Depends(get_app_config)],
) -> ExtractRelationsUseCase:
    """Construct the extract relations use case with the shared engine."""
    return ExtractRelationsUseCase(engine=engine, timeout=config.request_timeout)


__all__ = [
    "get_app_config",
    "get_extract_relations_use_case",
    "get_extraction_engine",
]
