"""Token Check: pure admission decision for the shared-secret bearer gate.

Invariants:
    - Admission iff the header equals exactly "Bearer <secret>" (case-sensitive)
    - Comparison is constant-time (hmac.compare_digest)
    - The received value is never echoed raw: control chars stripped, length capped
    - No state: same inputs always produce the same decision

Design Decisions:
    - Pure functions of (secret, header) so the gate is testable without ASGI
"""

import hmac
import re

from app.core.errors import AuthRejectedError

BEARER_PREFIX = "Bearer "
ECHO_MAX_LENGTH = 64

DETAIL_MISSING = "Tidak ada token"
DETAIL_RECEIVED = "Diterima: {received}"
DETAIL_REJECTED = "Token ditolak"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def expected_header(secret: str) -> str:
    return f"{BEARER_PREFIX}{secret}"


def is_authorized(secret: str, header: str | None) -> bool:
    """True when the Authorization header carries the configured secret."""
    if not header or not secret:
        return False
    return hmac.compare_digest(
        header.encode("utf-8"), expected_header(secret).encode("utf-8"),
    )


def sanitize_received(header: str) -> str:
    """Strip control characters and cap length for the diagnostic echo."""
    cleaned = _CONTROL_CHARS.sub("", header)
    if len(cleaned) > ECHO_MAX_LENGTH:
        return cleaned[:ECHO_MAX_LENGTH] + "..."
    return cleaned


def describe_received(header: str | None, echo: bool = True) -> str:
    """Build the `detail` field of a rejection."""
    if not header:
        return DETAIL_MISSING
    if not echo:
        return DETAIL_REJECTED
    return DETAIL_RECEIVED.format(received=sanitize_received(header))


def check_token(secret: str, header: str | None, echo: bool = True) -> None:
    """Raise AuthRejectedError unless the header carries the secret."""
    if not is_authorized(secret, header):
        raise AuthRejectedError(describe_received(header, echo))
