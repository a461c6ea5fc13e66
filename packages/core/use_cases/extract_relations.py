"""ExtractRelationsUseCase - Run an extraction engine over one piece of text."""

from __future__ import annotations

import asyncio
import contextvars
import logging
import time

from packages.common.metrics import (
    extraction_duration_seconds,
    extraction_failures_total,
    extractions_total,
)
from packages.core.ports.extraction_engine import ExtractionEngine
from packages.schemas.extraction import Extraction

logger = logging.getLogger(__name__)


class ExtractionTimeoutError(Exception):
    """Raised when the engine does not finish within the request timeout."""

    def __init__(self, timeout: float | None) -> None:
        super().__init__(f"Extraction did not finish within {timeout} seconds")
        self.timeout = timeout


class ExtractRelationsUseCase:
    """Use case for extracting relations from text.

    The engine call is blocking (NLP inference), so it runs on the event loop's
    default thread pool. An optional timeout bounds how long the caller waits;
    the worker thread itself cannot be interrupted and finishes in the background.
    """

    def __init__(self, engine: ExtractionEngine, timeout: float | None = None) -> None:
        """Initialize ExtractRelationsUseCase.

        Args:
            engine: Shared extraction engine.
            timeout: Seconds to wait for the engine, or None to wait indefinitely.
        """
        self.engine = engine
        self.timeout = timeout

    @property
    def backend(self) -> str:
        return getattr(self.engine, "name", type(self.engine).__name__)

    async def execute(self, text: str) -> list[Extraction]:
        """Extract relations from ``text``.

        Args:
            text: Raw natural language text.

        Returns:
            list[Extraction]: Extractions in engine order.

        Raises:
            ExtractionTimeoutError: If the engine does not finish within ``timeout``.
            Exception: Any error raised by the engine, unchanged (including its
                own ``TimeoutError``).
        """
        backend = self.backend
        logger.info(
            "Extracting relations",
            extra={"backend": backend, "text_length": len(text)},
        )
        logger.debug("Extraction input", extra={"text": text})

        loop = asyncio.get_running_loop()
        # run_in_executor does not carry context vars (correlation id) over
        ctx = contextvars.copy_context()
        start = time.perf_counter()
        try:
            async with asyncio.timeout(self.timeout) as deadline:
                extractions = await loop.run_in_executor(
                    None, ctx.run, self.engine.extract, text
                )
        except TimeoutError as e:
            if not deadline.expired():
                # raised by the engine itself, not by the request deadline
                extraction_failures_total.labels(backend=backend, reason=type(e).__name__).inc()
                raise
            extraction_failures_total.labels(backend=backend, reason="timeout").inc()
            logger.warning(
                "Extraction timed out",
                extra={"backend": backend, "timeout": self.timeout},
            )
            raise ExtractionTimeoutError(self.timeout) from e
        except Exception as e:
            extraction_failures_total.labels(backend=backend, reason=type(e).__name__).inc()
            raise

        elapsed = time.perf_counter() - start
        extraction_duration_seconds.labels(backend=backend).observe(elapsed)
        extractions_total.labels(backend=backend).inc(len(extractions))

        logger.info(
            "Extraction complete",
            extra={
                "backend": backend,
                "extractions": len(extractions),
                "elapsed_ms": int(elapsed * 1000),
            },
        )
        return list(extractions)


__all__ = ["ExtractRelationsUseCase", "ExtractionTimeoutError"]
