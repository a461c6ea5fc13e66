"""Tests for JSON structured logging."""

import json
import logging
from collections.abc import Iterator

import pytest

from packages.common.logging import CustomJsonFormatter, get_logger, setup_logging
from packages.common.tracing import TracingContext


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestSetupLogging:
    """Test setup_logging output."""

    def test_emits_json_with_correlation_id(
        self, restore_root_logger: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logging("INFO")
        logger = get_logger("tests.logging")

        with TracingContext("req-42"):
            logger.info("Extracting relations", extra={"text_length": 19})

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "Extracting relations"
        assert record["level"] == "INFO"
        assert record["logger"] == "tests.logging"
        assert record["correlation_id"] == "req-42"
        assert record["text_length"] == 19

    def test_level_override_filters_records(
        self, restore_root_logger: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logging("warning")

        get_logger("tests.logging").info("hidden")

        assert capsys.readouterr().out == ""

    def test_replaces_existing_handlers(self, restore_root_logger: None) -> None:
        setup_logging("INFO")
        setup_logging("INFO")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, CustomJsonFormatter)
