"""Cross-check tokens against PyJWT as an independent RFC 7519 implementation."""

from __future__ import annotations

import jwt
import pytest

from src.cmstools.security.jwt import TokenService

pytestmark = pytest.mark.unit


def test_issued_tokens_decode_with_pyjwt(token_service: TokenService, clock) -> None:
    token = token_service.issue({"sub": "alice", "exp": 9999999999, "role": "admin"})

    payload = jwt.decode(
        token,
        "secret",
        algorithms=["HS256"],
        options={
            "verify_nbf": False,
            "verify_iat": False,
            "verify_aud": False,
            "verify_jti": False,
        },
    )
    header = jwt.get_unverified_header(token)

    assert header == {"typ": "JWT", "alg": "HS256"}
    assert payload["sub"] == "alice"
    assert payload["role"] == "admin"


def test_pyjwt_tokens_verify(token_service: TokenService, clock) -> None:
    token = jwt.encode(
        {"sub": "alice", "exp": int(clock.now) + 60, "nbf": int(clock.now)},
        "secret",
        algorithm="HS256",
    )

    assert token_service.verify(token) is True
    assert token_service.read_unverified_claims(token) == {
        "sub": "alice",
        "exp": int(clock.now) + 60,
        "nbf": int(clock.now),
    }


def test_pyjwt_tokens_with_other_algorithms_fail(token_service: TokenService, clock) -> None:
    token = jwt.encode({"sub": "alice"}, "secret", algorithm="HS512")

    assert token_service.verify(token) is False
