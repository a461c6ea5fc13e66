"""Dependency injection helpers for the API layer."""

from __future__ import annotations

from .extraction import (
    get_app_config,
    get_extract_relations_use_case,
    get_extraction_engine,
)

__all__ = [
    "get_app_config",
    "get_extract_relations_use_case",
    "get_extraction_engine",
]
