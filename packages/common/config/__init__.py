"""Configuration management for the OpenIE server.

Loads environment variables using pydantic-settings for type-safe configuration.
All settings use the ``OPENIE_`` prefix (e.g. ``OPENIE_PORT=9000``).
"""

import os
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_LOADED = False
_ENV_LOCK = Lock()

ExtractionBackend = Literal["spacy", "pattern"]


def _resolve_env_file() -> str | None:
    """Locate the .env file regardless of the current working directory.

    Preference order:
        1. OPENIE_ENV_FILE environment variable (explicit override)
        2. Current working directory (common for local runs)
        3. Ancestors of this file (covers package execution within Docker)
    """
    override = os.getenv("OPENIE_ENV_FILE")
    if override:
        override_path = Path(override).expanduser()
        if override_path.is_file():
            return str(override_path)

    cwd_candidate = Path.cwd() / ".env"
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    for parent in Path(__file__).resolve().parents:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)

    return None


_DEFAULT_ENV_FILE = _resolve_env_file()


def ensure_env_loaded() -> None:
    """Load environment variables from disk exactly once."""
    global _ENV_LOADED

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = _DEFAULT_ENV_FILE or _resolve_env_file()
        if env_path:
            load_dotenv(env_path, override=False)

        _ENV_LOADED = True


ensure_env_loaded()


class OpenIEConfig(BaseSettings):
    """Main configuration class for the OpenIE server.

    The listen address is an explicit value handed to the server at startup;
    nothing here is mutated after construction.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENIE_",
        env_file=_DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== HTTP Server ==========
    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    request_timeout: float | None = Field(default=None, gt=0)
    max_text_length: int = Field(default=100_000, ge=1)

    # ========== Extraction Engine ==========
    extraction_backend: ExtractionBackend = "spacy"
    spacy_model: str = "en_core_web_sm"

    # ========== Observability ==========
    log_level: str = "INFO"
    metrics_port: int | None = Field(default=None, ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return normalized


@lru_cache(maxsize=1)
def get_config() -> OpenIEConfig:
    """Return cached Settings instance (thread-safe, process-local).

    Uses lru_cache to ensure a single instance is created and reused.

    Returns:
        OpenIEConfig: The configuration instance loaded from environment variables.
    """
    return OpenIEConfig()


# Export convenience accessors
__all__ = ["ExtractionBackend", "OpenIEConfig", "ensure_env_loaded", "get_config"]
