"""Tests for application startup and shutdown."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from apps.api.app import create_app
from packages.common.config import OpenIEConfig
from packages.extraction.engines.pattern_engine import PatternExtractionEngine
from packages.extraction.engines.spacy_engine import EngineInitializationError
from tests.utils.mocks import StubExtractionEngine


@pytest.mark.unit
class TestLifespan:
    """Test engine loading in the application lifespan."""

    def test_builds_configured_engine_on_startup(self, test_config: OpenIEConfig) -> None:
        app = create_app(test_config)

        with TestClient(app) as client:
            assert isinstance(app.state.engine, PatternExtractionEngine)
            response = client.get("/?text=Obama+gave+a+speech")

        assert response.status_code == 200
        assert response.json()[0]["rel"] == "gave"
        assert response.json()[0]["arg2s"] == ["a speech"]
        assert app.state.engine is None

    def test_keeps_injected_engine(
        self, test_config: OpenIEConfig, stub_engine: StubExtractionEngine
    ) -> None:
        app = create_app(test_config, engine=stub_engine)

        with TestClient(app):
            assert app.state.engine is stub_engine

        assert app.state.engine is stub_engine

    def test_engine_not_loaded_returns_503(self, test_config: OpenIEConfig) -> None:
        # Without entering the client, startup never runs
        client = TestClient(create_app(test_config))

        response = client.get("/?text=hi")

        assert response.status_code == 503
        assert response.json() == {"detail": "Extraction engine not loaded"}

    def test_engine_load_failure_aborts_startup(
        self, test_config: OpenIEConfig, mocker: Any
    ) -> None:
        mocker.patch(
            "packages.extraction.engines.spacy_engine.spacy.load",
            side_effect=OSError("[E050] Can't find model"),
        )
        config = test_config.model_copy(update={"extraction_backend": "spacy"})

        with pytest.raises(EngineInitializationError):
            with TestClient(create_app(config)):
                pass

    def test_starts_metrics_server_when_configured(
        self, test_config: OpenIEConfig, stub_engine: StubExtractionEngine, mocker: Any
    ) -> None:
        start = mocker.patch("apps.api.app.start_metrics_server")
        config = test_config.model_copy(update={"metrics_port": 9464})

        with TestClient(create_app(config, engine=stub_engine)):
            pass

        start.assert_called_once_with(9464, addr="localhost")

    def test_docs_paths_are_extraction_requests(
        self, test_config: OpenIEConfig, stub_engine: StubExtractionEngine
    ) -> None:
        with TestClient(create_app(test_config, engine=stub_engine)) as client:
            assert client.get("/docs").status_code == 400
            assert client.get("/openapi.json?text=hi").status_code == 200

        assert stub_engine.calls == ["hi"]
