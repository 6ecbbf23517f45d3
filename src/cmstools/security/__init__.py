"""Security utilities: JWT service, signing key store and random bytes."""

from .entropy import generate_secret, recovery_key
from .jwt import (
    TokenService,
    configure,
    issue_token,
    read_unverified_claims,
    verify_token,
)
from .keys import KeyStore

__all__ = [
    "KeyStore",
    "TokenService",
    "configure",
    "generate_secret",
    "issue_token",
    "read_unverified_claims",
    "recovery_key",
    "verify_token",
]
