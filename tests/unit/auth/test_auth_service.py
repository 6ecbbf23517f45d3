from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.cmstools.auth.auth_service import AuthService
from src.cmstools.exceptions import InvalidTokenError, NotConfiguredError
from src.cmstools.security.jwt import TokenService

pytestmark = pytest.mark.unit


def build_service(ttl: timedelta = timedelta(days=7)) -> AuthService:
    tokens = TokenService()
    tokens.configure(b"client-secret")
    return AuthService(tokens=tokens, token_ttl=ttl)


def test_new_token_carries_user_and_expiry() -> None:
    service = build_service()
    before = datetime.now(timezone.utc)

    token, expires_at = service.new_token("alice@example.com")

    assert service.is_token_valid(token) is True
    claims = service.tokens.read_unverified_claims(token)
    assert claims is not None
    assert claims["user"] == "alice@example.com"
    assert claims["exp"] == int(expires_at.timestamp())
    assert timedelta(days=7) - timedelta(seconds=5) <= expires_at - before <= timedelta(
        days=7, seconds=5
    )


def test_user_from_token_returns_email() -> None:
    service = build_service()
    token, _ = service.new_token("alice@example.com")

    assert service.user_from_token(token) == "alice@example.com"


def test_user_from_token_rejects_invalid_token() -> None:
    service = build_service()
    token, _ = service.new_token("alice@example.com")
    header, payload, _ = token.split(".")

    with pytest.raises(InvalidTokenError):
        service.user_from_token(f"{header}.{payload}.AAAA")


def test_user_from_token_requires_user_claim() -> None:
    service = build_service()
    token = service.tokens.issue({"sub": "alice"})

    with pytest.raises(InvalidTokenError, match="no user data"):
        service.user_from_token(token)


def test_expired_session_is_invalid() -> None:
    service = build_service(ttl=timedelta(seconds=-5))
    token, _ = service.new_token("alice@example.com")

    assert service.is_token_valid(token) is False
    with pytest.raises(InvalidTokenError):
        service.verified_claims(token)


def test_new_token_validates_input_and_configuration() -> None:
    service = build_service()
    with pytest.raises(ValueError):
        service.new_token("")

    unconfigured = AuthService(tokens=TokenService())
    with pytest.raises(NotConfiguredError):
        unconfigured.new_token("alice@example.com")


def test_verified_claims_come_from_the_verified_parse(monkeypatch: pytest.MonkeyPatch) -> None:
    service = build_service()
    token, expires_at = service.new_token("alice@example.com")

    def unexpected(_: str) -> None:
        raise AssertionError("verified claims must not use the unverified accessor")

    monkeypatch.setattr(service.tokens, "read_unverified_claims", unexpected)

    claims = service.verified_claims(token)

    assert claims["user"] == "alice@example.com"
    assert claims["exp"] == int(expires_at.timestamp())
