"""Domain level exceptions for token handling."""

from __future__ import annotations

__all__ = [
    "AppError",
    "TokenError",
    "NotConfiguredError",
    "TokenEncodingError",
    "MalformedTokenError",
    "BadHeaderError",
    "BadSignatureError",
    "TokenExpiredError",
    "TokenNotYetValidError",
    "InvalidTokenError",
]


class AppError(Exception):
    """Base class for application specific errors."""


class TokenError(AppError):
    """Base class for JWT failures.

    ``reason`` is a stable identifier used in structured logs. Verification
    never exposes it to callers.
    """

    reason = "token_error"


class NotConfiguredError(TokenError):
    """Raised when no signing key has been installed."""

    reason = "not_configured"


class TokenEncodingError(TokenError):
    """Raised when claims cannot be serialized to JSON."""

    reason = "encoding_error"


class MalformedTokenError(TokenError):
    """Raised when segment count, base64, JSON or tag length is invalid."""

    reason = "malformed"


class BadHeaderError(TokenError):
    """Raised when the header is not ``{"typ":"JWT","alg":"HS256"}``."""

    reason = "bad_header"


class BadSignatureError(TokenError):
    """Raised when the HMAC tag does not match."""

    reason = "bad_signature"


class TokenExpiredError(TokenError):
    """Raised when ``exp`` is not in the future."""

    reason = "expired"


class TokenNotYetValidError(TokenError):
    """Raised when ``nbf`` is still in the future."""

    reason = "not_yet_valid"


class InvalidTokenError(AppError):
    """Raised by the auth service when a session token cannot be trusted."""
