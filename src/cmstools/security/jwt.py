"""HS256 JSON Web Tokens in compact serialization.

Tokens have the form ``b64(header) "." b64(payload) "." b64(tag)`` where every
segment is base64url without padding and ``tag`` is HMAC-SHA-256 of the first
two segments, exactly as they appear on the wire.

Only three operations are meant for request handlers:

* :func:`issue_token` signs a claim mapping and raises on failure;
* :func:`verify_token` answers ``True``/``False`` and never tells *why* a token
  was rejected (the reason is only logged);
* :func:`read_unverified_claims` decodes the payload without any check and
  must never be used to authorize a request.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import math
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import structlog

from ..exceptions import (
    BadHeaderError,
    BadSignatureError,
    MalformedTokenError,
    NotConfiguredError,
    TokenEncodingError,
    TokenError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from .keys import KeyStore, SecretInput


logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"
TAG_SIZE = hashlib.sha256().digest_size
REGISTERED_CLAIMS = ("iss", "sub", "aud", "exp", "nbf", "iat", "jti")

_HEADER = {"typ": "JWT", "alg": ALGORITHM}
_SEGMENT_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Decode an unpadded base64url segment, rejecting any non-canonical form."""

    if not isinstance(segment, str) or not _SEGMENT_ALPHABET.fullmatch(segment):
        raise MalformedTokenError("segment contains characters outside base64url")
    if len(segment) % 4 == 1:
        raise MalformedTokenError("segment has an impossible length")
    try:
        data = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("segment is not valid base64url") from exc
    # unused trailing bits must be zero
    if b64url_encode(data) != segment:
        raise MalformedTokenError("segment is not canonically encoded")
    return data


def _dump_json(value: Mapping[str, Any], *, sort_keys: bool) -> bytes:
    return json.dumps(
        value,
        separators=(",", ":"),
        sort_keys=sort_keys,
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported JSON constant {name}")


def _parse_finite_float(literal: str) -> float:
    # 1e400 overflows to inf without ever spelling "Infinity"
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"JSON number out of range: {literal}")
    return value


def _load_json_object(segment: str) -> dict[str, Any]:
    raw = b64url_decode(segment)
    try:
        value = json.loads(
            raw.decode("utf-8"),
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedTokenError("segment is not valid UTF-8 JSON") from exc
    if not isinstance(value, dict):
        raise MalformedTokenError("segment must contain a JSON object")
    return value


_HEADER_SEGMENT = b64url_encode(_dump_json(_HEADER, sort_keys=False))


def sign(key: bytes, data: bytes) -> bytes:
    """Return the 32-byte HMAC-SHA-256 tag of ``data``."""

    return hmac.new(key, data, hashlib.sha256).digest()


def tags_equal(expected: bytes, actual: bytes) -> bool:
    """Compare two tags in constant time."""

    return hmac.compare_digest(expected, actual)


@dataclass(frozen=True, slots=True)
class ParsedToken:
    """Compact token split into its decoded parts."""

    header_segment: str
    payload_segment: str
    header: dict[str, Any]
    payload: dict[str, Any]
    signature: bytes

    @property
    def signing_input(self) -> bytes:
        return f"{self.header_segment}.{self.payload_segment}".encode("ascii")


def parse_token(token: str) -> ParsedToken:
    """Split ``token`` and decode all three segments without verifying them."""

    if not isinstance(token, str):
        raise MalformedTokenError("token must be a string")
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise MalformedTokenError("token must have three non-empty segments")
    header_segment, payload_segment, signature_segment = parts
    return ParsedToken(
        header_segment=header_segment,
        payload_segment=payload_segment,
        header=_load_json_object(header_segment),
        payload=_load_json_object(payload_segment),
        signature=b64url_decode(signature_segment),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_temporal_claims(payload: Mapping[str, Any], now: float) -> None:
    # null means absent: issue pads missing registered claims with None
    exp = payload.get("exp")
    if exp is not None and (not _is_number(exp) or exp <= now):
        raise TokenExpiredError("token expired")
    nbf = payload.get("nbf")
    if nbf is not None and (not _is_number(nbf) or nbf > now):
        raise TokenNotYetValidError("token not yet valid")


class TokenService:
    """Issue and verify HS256 tokens with the key held by a :class:`KeyStore`."""

    def __init__(
        self,
        keys: KeyStore | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._keys = keys if keys is not None else KeyStore()
        self._clock = clock

    @property
    def configured(self) -> bool:
        return self._keys.armed

    def configure(self, secret: SecretInput) -> None:
        """Install the signing key; an empty secret disarms the service.

        Every token signed with a previous key stops verifying.
        """

        self._keys.install(secret)

    def issue(self, claims: Mapping[str, Any]) -> str:
        """Serialize and sign ``claims``; the caller's mapping is left untouched."""

        key = self._keys.snapshot()
        if not key:
            raise NotConfiguredError("signing key is not configured")
        if not isinstance(claims, Mapping):
            raise TokenEncodingError("claims must be a mapping")

        payload = dict(claims)
        if not all(isinstance(name, str) for name in payload):
            raise TokenEncodingError("claim names must be strings")
        # Legacy quirk: absent registered claims travel as explicit nulls.
        for name in REGISTERED_CLAIMS:
            payload.setdefault(name, None)

        try:
            payload_json = _dump_json(payload, sort_keys=True)
        except (TypeError, ValueError, RecursionError) as exc:
            raise TokenEncodingError(f"claims are not JSON serializable: {exc}") from exc

        signing_input = f"{_HEADER_SEGMENT}.{b64url_encode(payload_json)}"
        tag = sign(key, signing_input.encode("ascii"))
        logger.debug("jwt.issue", payload_bytes=len(payload_json))
        return f"{signing_input}.{b64url_encode(tag)}"

    def verify(self, token: str) -> bool:
        """Return ``True`` only for an authentic token that is valid right now."""

        return self.verified_payload(token) is not None

    def verified_payload(self, token: str) -> dict[str, Any] | None:
        """Return the payload of an authentic, currently valid token, else ``None``.

        The token is parsed once; the claims returned are the ones the tag
        covered.
        """

        key = self._keys.snapshot()
        try:
            return self._verify(token, key)
        except TokenError as exc:
            logger.info("jwt.verify.failure", reason=exc.reason)
            return None

    def read_unverified_claims(self, token: str) -> dict[str, Any] | None:
        """Decode the payload WITHOUT checking signature, header or expiry.

        The result is untrusted input; use :meth:`verify` to authenticate.
        """

        try:
            return parse_token(token).payload
        except MalformedTokenError:
            return None

    def _verify(self, token: str, key: bytes) -> dict[str, Any]:
        if not key:
            raise NotConfiguredError("signing key is not configured")
        parsed = parse_token(token)
        if parsed.header != _HEADER:
            raise BadHeaderError("unexpected token header")
        if len(parsed.signature) != TAG_SIZE:
            raise MalformedTokenError("signature has the wrong length")
        if not tags_equal(sign(key, parsed.signing_input), parsed.signature):
            raise BadSignatureError("signature mismatch")
        _check_temporal_claims(parsed.payload, self._clock())
        return parsed.payload


default_service = TokenService()


def configure(secret: SecretInput) -> None:
    """Install the process-wide signing key."""

    default_service.configure(secret)


def issue_token(claims: Mapping[str, Any]) -> str:
    return default_service.issue(claims)


def verify_token(token: str) -> bool:
    return default_service.verify(token)


def read_unverified_claims(token: str) -> dict[str, Any] | None:
    return default_service.read_unverified_claims(token)


__all__ = [
    "ALGORITHM",
    "REGISTERED_CLAIMS",
    "TAG_SIZE",
    "ParsedToken",
    "TokenService",
    "b64url_decode",
    "b64url_encode",
    "configure",
    "default_service",
    "issue_token",
    "parse_token",
    "read_unverified_claims",
    "sign",
    "tags_equal",
    "verify_token",
]
