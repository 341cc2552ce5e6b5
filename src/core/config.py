"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP/cargo) read the same config consistently.

The registry token is NOT part of these settings: it is a CLI option
(`--token` / `CARGO_REGISTRY_TOKEN`) carried in `Options` as a secret.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_LEVEL = "INFO"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed + validated at the edge (env vars) without polluting the core.
    - A single config contract for the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SMOKE_TEST_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    registry_base_url: str = Field(
        default="https://staging.crates.io",
        min_length=8,
        description="Base URL of the registry web API.",
    )
    registry_name: str = Field(
        default="staging",
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Alternative registry name passed to `cargo publish --registry`.",
    )
    registry_index_url: str = Field(
        default="https://github.com/rust-lang/staging.crates.io-index",
        min_length=8,
        description="Index URL cargo uses for the alternative registry.",
    )
    user_agent: str = Field(
        default="crates.io smoke test",
        min_length=1,
        description="User-Agent sent with every registry request.",
    )
    cargo_bin: str = Field(
        default="cargo",
        min_length=1,
        description="cargo executable (name on PATH or absolute path).",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Console log level (debug/info/warning/error).",
    )

    @field_validator("registry_base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        # Rejected here so a bad URL is a configuration error, not an httpx crash later.
        try:
            url = httpx.URL(value)
        except (httpx.InvalidURL, ValueError) as exc:
            raise ValueError(f"invalid registry URL: {value!r} ({exc})") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"registry URL must be an absolute http(s) URL: {value!r}")
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _lossy_log_level(cls, value: object) -> str:
        # Unknown levels fall back to the default instead of aborting the run.
        if not isinstance(value, str):
            return DEFAULT_LOG_LEVEL
        name = value.strip().upper()
        if name == "WARN":
            name = "WARNING"
        if isinstance(logging.getLevelName(name), int):
            return name
        return DEFAULT_LOG_LEVEL

    @property
    def registry_host(self) -> str:
        """Host name of the registry, used in user-facing messages."""

        return urlparse(self.registry_base_url).netloc or self.registry_base_url

    def registry_env_var(self, suffix: str) -> str:
        """Name of cargo's per-registry env var, e.g. `CARGO_REGISTRIES_STAGING_TOKEN`."""

        key = self.registry_name.upper().replace("-", "_")
        return f"CARGO_REGISTRIES_{key}_{suffix.upper()}"
