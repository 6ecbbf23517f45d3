"""Environment driven configuration for cmstools.

Values are read from ``CMSTOOLS_*`` variables. The JWT client secret can be
given inline (``CMSTOOLS_JWT_SECRET``) or, preferably, as a file kept out of
source control (``CMSTOOLS_JWT_SECRET_FILE``); the file wins when both are set.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60


class AppConfig(BaseSettings):
    """Pydantic settings container for the auth utilities."""

    model_config = SettingsConfigDict(env_prefix="CMSTOOLS_")

    jwt_secret: str = Field(
        default="",
        description="Client secret used to sign session tokens.",
    )
    jwt_secret_file: Path | None = Field(
        default=None,
        description="File holding the client secret; overrides jwt_secret.",
    )
    token_ttl_seconds: int = Field(
        default=DEFAULT_TOKEN_TTL_SECONDS,
        ge=60,
        description="Lifetime of session tokens in seconds.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to logging.basicConfig.",
    )

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def build_default(cls) -> "AppConfig":
        """Construct configuration from the current environment."""

        return cls()

    def resolve_secret(self) -> bytes:
        """Return the signing secret as bytes (empty when nothing is configured)."""

        if self.jwt_secret_file is not None:
            try:
                raw = self.jwt_secret_file.read_bytes()
            except OSError as exc:
                raise RuntimeError(
                    f"cannot read JWT secret file {self.jwt_secret_file}"
                ) from exc
            return raw.rstrip(b"\r\n")
        return self.jwt_secret.encode("utf-8")


__all__ = ["AppConfig", "DEFAULT_TOKEN_TTL_SECONDS"]
