"""Verification of the HS256 bearer tokens issued by the login service.

The API never mints tokens. It checks the header, the signature and the
``exp`` claim, then hands the claims to :func:`caller_context.from_claims`.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any

from leadflow.core.exceptions import AuthenticationError

SUPPORTED_ALGORITHM = "HS256"
DEFAULT_LEEWAY_SECONDS = 30


def _segment_json(segment: str, label: str) -> dict[str, Any]:
    try:
        raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
        value = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise AuthenticationError(f"Invalid token {label}.") from exc
    if not isinstance(value, dict):
        raise AuthenticationError(f"Invalid token {label}.")
    return value


def _signature_for(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def decode_jwt(
    token: str,
    secret: str,
    verify_exp: bool = True,
    leeway: int = DEFAULT_LEEWAY_SECONDS,
) -> dict[str, Any]:
    """Return the claims of a valid token or raise :class:`AuthenticationError`."""
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")

    segments = token.split(".")
    if len(segments) != 3 or not all(segments):
        raise AuthenticationError("Invalid token format.")
    header_segment, payload_segment, signature_segment = segments

    header = _segment_json(header_segment, "header")
    if header.get("alg") != SUPPORTED_ALGORITHM:
        raise AuthenticationError("Unsupported token algorithm.")

    try:
        signature = base64.urlsafe_b64decode(signature_segment + "=" * (-len(signature_segment) % 4))
    except (binascii.Error, ValueError) as exc:
        raise AuthenticationError("Invalid token signature.") from exc
    expected = _signature_for(f"{header_segment}.{payload_segment}".encode("ascii"), secret)
    if not hmac.compare_digest(expected, signature):
        raise AuthenticationError("Invalid token signature.")

    claims = _segment_json(payload_segment, "payload")
    if verify_exp:
        exp = claims.get("exp")
        if exp is None:
            raise AuthenticationError("Token is missing exp claim.")
        try:
            expires_at = int(exp)
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid exp claim.") from exc
        if expires_at + leeway < int(time.time()):
            raise AuthenticationError("Token has expired.")
    return claims
