"""Admin bearer token verification.

Tokens are compact ``header.payload.signature`` strings signed with
HMAC-SHA256 over ``header.payload`` using a shared secret. Only the
standard library ``hmac``/``hashlib`` primitives are used.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
ADMIN_ROLE = "admin"


def base64url_decode(segment: str) -> bytes:
    """Decode a base64url segment, restoring any stripped padding.

    Raises:
        binascii.Error: If the segment is not valid base64url
    """
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


def _split_token(token: str) -> Optional[tuple[str, str, str]]:
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return None
    return parts[0], parts[1], parts[2]


def _signature_matches(header_b64: str, payload_b64: str, signature_b64: str, secret: str) -> bool:
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    expected = hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()
    return hmac.compare_digest(expected, base64url_decode(signature_b64))


def decode_payload(payload_b64: str) -> dict[str, Any]:
    """Decode the payload segment into a claims dict.

    Raises:
        ValueError: If the payload is not a base64url-encoded JSON object
    """
    try:
        claims = json.loads(base64url_decode(payload_b64).decode("utf-8"))
    except binascii.Error as e:
        raise ValueError(f"Invalid payload encoding: {e}") from e
    if not isinstance(claims, dict):
        raise ValueError("Token payload must be a JSON object")
    return claims


def verify_admin_token(
    authorization: Optional[str],
    secret: Optional[str],
    now: Optional[float] = None,
) -> bool:
    """Check that an Authorization header carries a valid admin token.

    Args:
        authorization: Raw ``Authorization`` header value
        secret: Shared HMAC secret
        now: Current unix time, defaults to ``time.time()``

    Returns:
        True only for a correctly signed, unexpired token whose ``role``
        claim is ``"admin"``. Every failure, including malformed input,
        returns False.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return False
    if not secret:
        logger.error("Token secret is not configured; rejecting request")
        return False

    try:
        parts = _split_token(authorization[len(BEARER_PREFIX):].strip())
        if parts is None:
            return False
        header_b64, payload_b64, signature_b64 = parts

        if not _signature_matches(header_b64, payload_b64, signature_b64, secret):
            logger.info("Token signature mismatch")
            return False

        claims = decode_payload(payload_b64)

        exp = claims.get("exp")
        current = time.time() if now is None else now
        if exp is not None and float(exp) < current:
            logger.info("Token expired", extra={"exp": exp})
            return False

        return claims.get("role") == ADMIN_ROLE
    except Exception as e:
        logger.info(
            "Token verification failed",
            extra={"error_type": type(e).__name__},
        )
        return False
