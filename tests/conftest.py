"""Shared pytest fixtures for the OpenIE test suite.

Provides test configurations, stub extraction engines, and reference
extractions used across all test modules.
"""

import os
from typing import Any

# Must be set before packages.common.config caches its first instance
os.environ.setdefault("OPENIE_EXTRACTION_BACKEND", "pattern")
os.environ.setdefault("OPENIE_LOG_LEVEL", "DEBUG")

import pytest  # noqa: E402

from packages.common.config import OpenIEConfig  # noqa: E402
from packages.common.tracing import clear_correlation_id  # noqa: E402
from packages.schemas.extraction import Extraction  # noqa: E402
from tests.utils.mocks import (  # noqa: E402
    StubExtractionEngine,
    create_mock_engine,
    make_obama_extraction,
)

# ========== Configuration Fixtures ==========


@pytest.fixture
def test_config() -> OpenIEConfig:
    """Provide a configuration using the model-free pattern backend.

    Returns:
        OpenIEConfig: Configuration instance for testing.
    """
    return OpenIEConfig(
        host="localhost",
        port=8080,
        extraction_backend="pattern",
        log_level="DEBUG",
        request_timeout=None,
        metrics_port=None,
    )


@pytest.fixture(autouse=True)
def reset_correlation_id() -> Any:
    """Make sure no correlation ID leaks between tests."""
    clear_correlation_id()
    yield
    clear_correlation_id()


# ========== Extraction Fixtures ==========


@pytest.fixture
def obama_extraction() -> Extraction:
    """Reference extraction for "Obama gave a speech"."""
    return make_obama_extraction()


@pytest.fixture
def stub_engine(obama_extraction: Extraction) -> StubExtractionEngine:
    """Stub engine returning the reference extraction.

    Returns:
        StubExtractionEngine: Engine recording every text it receives.
    """
    return StubExtractionEngine([obama_extraction])


@pytest.fixture
def mock_engine(mocker: Any) -> Any:
    """MagicMock engine returning no extractions."""
    return create_mock_engine(mocker)


# ========== Pytest Configuration ==========


def pytest_configure(config: Any) -> None:
    """Configure pytest markers.

    Args:
        config: pytest config object.
    """
    config.addinivalue_line(
        "markers",
        "unit: Fast unit tests with mocked dependencies",
    )
    config.addinivalue_line(
        "markers",
        "integration: Tests requiring an installed spaCy model",
    )
    config.addinivalue_line(
        "markers",
        "slow: Long-running tests (>5 seconds)",
    )
