"""Ports for core use-cases."""

from __future__ import annotations

from packages.core.ports.extraction_engine import ExtractionEngine

__all__ = ["ExtractionEngine"]
