from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.cmstools.core.config import AppConfig, DEFAULT_TOKEN_TTL_SECONDS

pytestmark = pytest.mark.unit


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CMSTOOLS_JWT_SECRET", raising=False)

    config = AppConfig.build_default()

    assert config.jwt_secret == ""
    assert config.jwt_secret_file is None
    assert config.token_ttl_seconds == DEFAULT_TOKEN_TTL_SECONDS == 604800
    assert config.log_level == "INFO"
    assert config.resolve_secret() == b""


def test_values_are_read_from_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CMSTOOLS_JWT_SECRET", "from-env")
    monkeypatch.setenv("CMSTOOLS_TOKEN_TTL_SECONDS", "3600")
    monkeypatch.setenv("CMSTOOLS_LOG_LEVEL", "debug")

    config = AppConfig.build_default()

    assert config.resolve_secret() == b"from-env"
    assert config.token_ttl_seconds == 3600
    assert config.log_level == "DEBUG"


def test_secret_file_takes_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret_file = tmp_path / "client_secret"
    secret_file.write_bytes(b"file-secret\n")
    monkeypatch.setenv("CMSTOOLS_JWT_SECRET", "inline")
    monkeypatch.setenv("CMSTOOLS_JWT_SECRET_FILE", str(secret_file))

    config = AppConfig.build_default()

    assert config.resolve_secret() == b"file-secret"


def test_missing_secret_file_is_reported(tmp_path: Path) -> None:
    config = AppConfig(jwt_secret_file=tmp_path / "missing")

    with pytest.raises(RuntimeError, match="cannot read JWT secret file"):
        config.resolve_secret()


@pytest.mark.parametrize(
    ("field", "value"),
    [("token_ttl_seconds", 10), ("log_level", "verbose")],
)
def test_invalid_values_are_rejected(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        AppConfig(**{field: value})
