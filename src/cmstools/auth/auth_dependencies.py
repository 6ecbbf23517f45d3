"""Authentication dependencies for FastAPI routers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog
from fastapi import Request

from ..api.errors import AuthFailure, unauthorized_error
from ..exceptions import InvalidTokenError
from .auth_service import AuthService, USER_CLAIM


logger = structlog.get_logger(__name__)

TOKEN_COOKIE = "_token"


@dataclass(slots=True, frozen=True)
class SessionPrincipal:
    """User extracted from a verified session token."""

    user: str
    claims: dict[str, Any] = field(default_factory=dict)


def get_auth_service(request: Request) -> AuthService:
    service = getattr(request.app.state, "auth_service", None)
    if not isinstance(service, AuthService):
        raise RuntimeError("AuthService is not configured")
    return service


def _extract_token(request: Request) -> str | None:
    header = request.headers.get("Authorization")
    if header:
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise unauthorized_error(AuthFailure.BAD_SCHEME)
        return token.strip()
    return request.cookies.get(TOKEN_COOKIE) or None


async def require_session(request: Request) -> SessionPrincipal:
    """Validate the bearer token (or legacy cookie) and return the session user."""

    token = _extract_token(request)
    if token is None:
        raise unauthorized_error(AuthFailure.MISSING)

    service = get_auth_service(request)
    try:
        claims = service.verified_claims(token)
    except InvalidTokenError:
        logger.info("auth.bearer.rejected", path=request.url.path)
        raise unauthorized_error(AuthFailure.REJECTED) from None

    user = claims.get(USER_CLAIM)
    if not isinstance(user, str) or not user:
        logger.info("auth.bearer.rejected", path=request.url.path, reason="no_user")
        raise unauthorized_error(AuthFailure.REJECTED)

    principal = SessionPrincipal(user=user, claims=claims)
    request.state.session_principal = principal
    return principal


__all__ = ["SessionPrincipal", "TOKEN_COOKIE", "get_auth_service", "require_session"]
