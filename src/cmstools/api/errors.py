"""HTTP error bodies for the session API.

Authentication failures are reported with a small fixed vocabulary: a client
learns that its credentials were missing, sent with the wrong scheme, or
rejected, and nothing about which token check failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AuthFailure(str, Enum):
    """Client-facing messages for a ``401`` answer."""

    MISSING = "Authentication required"
    BAD_SCHEME = "Authorization header must use Bearer scheme"
    REJECTED = "Invalid or expired token"


@dataclass(slots=True)
class ApiError(Exception):
    status_code: int
    code: str
    message: str
    challenge: str | None = None

    def to_response(self) -> JSONResponse:
        headers = {"WWW-Authenticate": self.challenge} if self.challenge else None
        return JSONResponse(
            status_code=self.status_code,
            content={"error": {"code": self.code, "message": self.message}},
            headers=headers,
        )


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return exc.to_response()


def unauthorized_error(failure: AuthFailure) -> ApiError:
    """Bearer challenge carrying one of the fixed :class:`AuthFailure` messages."""

    return ApiError(
        status.HTTP_401_UNAUTHORIZED,
        "unauthorized",
        AuthFailure(failure).value,
        challenge="Bearer",
    )


__all__ = ["ApiError", "AuthFailure", "api_error_handler", "unauthorized_error"]
