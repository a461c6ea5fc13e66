"""Tests for the serve CLI command."""

from typing import Any

import pytest
from fastapi import FastAPI
from typer.testing import CliRunner

from apps.cli.openie_cli.main import app
from packages.common.config import get_config

runner = CliRunner()


@pytest.fixture
def uvicorn_run(mocker: Any) -> Any:
    mocker.patch("apps.cli.openie_cli.commands.serve.setup_logging")
    return mocker.patch("apps.cli.openie_cli.commands.serve.uvicorn.run")


@pytest.mark.unit
class TestServeCommand:
    """Test `openie serve`."""

    def test_uses_configured_port_by_default(self, uvicorn_run: Any) -> None:
        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        uvicorn_run.assert_called_once()
        args, kwargs = uvicorn_run.call_args
        assert isinstance(args[0], FastAPI)
        assert kwargs["port"] == get_config().port
        assert kwargs["host"] == get_config().host
        assert kwargs["log_config"] is None

    def test_positional_port_overrides_config(self, uvicorn_run: Any) -> None:
        result = runner.invoke(app, ["serve", "9000"])

        assert result.exit_code == 0
        assert uvicorn_run.call_args.kwargs["port"] == 9000

    def test_app_receives_startup_config(self, uvicorn_run: Any) -> None:
        runner.invoke(app, ["serve", "9001", "--host", "0.0.0.0", "--log-level", "warning"])

        served_app = uvicorn_run.call_args.args[0]
        assert served_app.state.config.port == 9001
        assert served_app.state.config.host == "0.0.0.0"
        assert uvicorn_run.call_args.kwargs["log_level"] == "warning"

    def test_non_numeric_port_is_rejected(self, uvicorn_run: Any) -> None:
        result = runner.invoke(app, ["serve", "http"])

        assert result.exit_code == 2
        uvicorn_run.assert_not_called()

    def test_out_of_range_port_is_rejected(self, uvicorn_run: Any) -> None:
        result = runner.invoke(app, ["serve", "70000"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout
        uvicorn_run.assert_not_called()
