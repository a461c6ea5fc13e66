"""Tests for the extraction engine factory."""

from typing import Any

import pytest

from packages.common.config import OpenIEConfig
from packages.extraction.engines import build_engine
from packages.extraction.engines.pattern_engine import PatternExtractionEngine


@pytest.mark.unit
class TestBuildEngine:
    """Test build_engine backend selection."""

    def test_pattern_backend(self, test_config: OpenIEConfig) -> None:
        engine = build_engine(test_config)

        assert isinstance(engine, PatternExtractionEngine)

    def test_spacy_backend_uses_configured_model(
        self, test_config: OpenIEConfig, mocker: Any
    ) -> None:
        load = mocker.patch("packages.extraction.engines.spacy_engine.spacy.load")
        config = test_config.model_copy(
            update={"extraction_backend": "spacy", "spacy_model": "en_core_web_lg"}
        )

        engine = build_engine(config)

        assert engine.name == "spacy"
        load.assert_called_once_with("en_core_web_lg")

    def test_unknown_backend_raises(self, test_config: OpenIEConfig) -> None:
        config = test_config.model_copy(update={"extraction_backend": "stanford"})

        with pytest.raises(ValueError, match="Unknown extraction backend"):
            build_engine(config)
