"""Process-wide storage for the HMAC signing key."""

from __future__ import annotations

import threading
from typing import Union

import structlog


logger = structlog.get_logger(__name__)

SecretInput = Union[bytes, bytearray, memoryview, str]


def _coerce_secret(secret: SecretInput) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    raise TypeError(f"secret must be bytes or str, not {type(secret).__name__}")


class KeyStore:
    """Hold the signing key behind a single published reference.

    The key is an immutable ``bytes`` object. ``install`` swaps the reference
    under a lock; readers call :meth:`snapshot` once per operation and keep
    using that value, so they observe either the old or the new key as a whole.
    """

    __slots__ = ("_key", "_lock")

    def __init__(self, secret: SecretInput = b"") -> None:
        self._key: bytes = _coerce_secret(secret)
        self._lock = threading.Lock()

    def install(self, secret: SecretInput) -> None:
        """Publish ``secret``; an empty value disarms the store."""

        key = _coerce_secret(secret)
        with self._lock:
            if key == self._key:
                return
            self._key = key
        if key:
            logger.info("jwt.configure", state="armed", key_length=len(key))
        else:
            logger.warning("jwt.configure", state="unset")

    def snapshot(self) -> bytes:
        return self._key

    @property
    def armed(self) -> bool:
        return bool(self._key)


__all__ = ["KeyStore", "SecretInput"]
