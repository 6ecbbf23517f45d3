"""Base infrastructure: configuration."""

from .config import AppConfig, DEFAULT_TOKEN_TTL_SECONDS

__all__ = ["AppConfig", "DEFAULT_TOKEN_TTL_SECONDS"]
