"""Random bytes with a non-cryptographic fallback.

:func:`read` prefers the operating system CSPRNG. When it is unavailable the
buffer is filled from a time-seeded :class:`random.Random` instead and a
warning is logged, so callers always receive ``size`` bytes.
"""

from __future__ import annotations

import random
import secrets
import time

import structlog


logger = structlog.get_logger(__name__)

_fallback = random.Random(int(time.time()))


def read(size: int) -> bytes:
    """Return ``size`` random bytes."""

    if size < 0:
        raise ValueError("size must be non-negative")
    try:
        data = secrets.token_bytes(size)
    except OSError as exc:
        logger.warning("entropy.fallback", size=size, error=str(exc))
        return bytes(_fallback.randrange(256) for _ in range(size))
    if len(data) != size:  # pragma: no cover - os.urandom contract
        logger.warning("entropy.fallback", size=size, error="short read")
        return bytes(_fallback.randrange(256) for _ in range(size))
    return data


def int63() -> int:
    """Return a non-negative integer that fits in 63 bits."""

    raw = bytearray(read(8))
    raw[0] &= 0x7F
    return int.from_bytes(raw, "big")


def generate_secret(size: int = 32) -> bytes:
    """Return a fresh signing secret for install-time key generation."""

    if size < 1:
        raise ValueError("secret size must be positive")
    return read(size)


def recovery_key() -> str:
    """Return a decimal account recovery key."""

    return str(int63())


__all__ = ["generate_secret", "int63", "read", "recovery_key"]
