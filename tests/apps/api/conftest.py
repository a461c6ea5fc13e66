"""Fixtures for API tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from apps.api.app import create_app
from packages.common.config import OpenIEConfig
from tests.utils.mocks import StubExtractionEngine


@pytest.fixture
def make_client(test_config: OpenIEConfig) -> Iterator[Callable[..., TestClient]]:
    """Factory building a TestClient around a preloaded engine.

    Keyword arguments are applied as config overrides.
    """
    clients: list[TestClient] = []

    def _make(engine: Any, **overrides: Any) -> TestClient:
        config = test_config.model_copy(update=overrides)
        client = TestClient(create_app(config, engine=engine))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(
    make_client: Callable[..., TestClient], stub_engine: StubExtractionEngine
) -> TestClient:
    """TestClient serving the reference extraction for every request."""
    return make_client(stub_engine)
