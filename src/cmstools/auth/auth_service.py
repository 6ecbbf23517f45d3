"""Session tokens for CMS users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import structlog

from ..core.config import DEFAULT_TOKEN_TTL_SECONDS
from ..exceptions import InvalidTokenError
from ..security.jwt import TokenService


logger = structlog.get_logger(__name__)

USER_CLAIM = "user"


def _utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(tz=timezone.utc)


@dataclass(slots=True)
class AuthService:
    """Issue session tokens and resolve the user behind a verified token."""

    tokens: TokenService
    token_ttl: timedelta = timedelta(seconds=DEFAULT_TOKEN_TTL_SECONDS)

    def new_token(self, email: str) -> tuple[str, datetime]:
        """Return a signed token for ``email`` and its expiry time."""

        if not isinstance(email, str) or not email:
            raise ValueError("email must be a non-empty string")
        expires_at = _utcnow() + self.token_ttl
        claims = {"exp": int(expires_at.timestamp()), USER_CLAIM: email}
        token = self.tokens.issue(claims)
        logger.info("auth.token.issued", expires_at=expires_at.isoformat())
        return token, expires_at

    def is_token_valid(self, token: str) -> bool:
        return self.tokens.verify(token)

    def verified_claims(self, token: str) -> dict[str, Any]:
        """Return the claims of ``token`` once its signature and lifetime check out."""

        claims = self.tokens.verified_payload(token)
        if claims is None:
            raise InvalidTokenError("invalid token")
        return claims

    def user_from_token(self, token: str) -> str:
        """Return the user identifier carried by a verified token."""

        user = self.verified_claims(token).get(USER_CLAIM)
        if not isinstance(user, str) or not user:
            raise InvalidTokenError("no user data found in token")
        return user


__all__ = ["AuthService", "USER_CLAIM"]
