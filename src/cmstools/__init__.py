"""Authentication support utilities for a content-management system.

The package centres on an HS256 JWT service (:mod:`.security.jwt`) and wraps
it with an environment driven configuration, a random-bytes helper used for
secret generation and a small FastAPI session layer.
"""

from .security.jwt import (
    TokenService,
    configure,
    issue_token,
    read_unverified_claims,
    verify_token,
)

__all__ = [
    "TokenService",
    "configure",
    "issue_token",
    "read_unverified_claims",
    "verify_token",
]
