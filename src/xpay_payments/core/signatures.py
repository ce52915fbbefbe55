"""
HMAC-SHA256 signing and verification of webhook payloads.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from .errors import CryptoUnavailableError

__all__ = [
    "SIGNATURE_PREFIX",
    "compute_signature",
    "timing_safe_equal",
    "verify_signature",
]

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


def _require_sha256() -> None:
    if "sha256" not in hashlib.algorithms_available:
        raise CryptoUnavailableError(
            "SHA-256 is not available in this Python runtime; "
            "webhook signatures cannot be verified."
        )


def compute_signature(payload: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of the UTF-8 ``payload`` keyed by ``secret``."""
    _require_sha256()
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def timing_safe_equal(a: str, b: str) -> bool:
    """
    Compare two strings in time that depends only on their length.

    Every position is visited even after a mismatch is found.
    """
    if len(a) != len(b):
        return False
    result = 0
    for left, right in zip(a, b):
        result |= ord(left) ^ ord(right)
    return result == 0


def verify_signature(payload: str, signature: str, secret: str) -> bool:
    """
    Check a webhook ``signature`` against the raw request body.

    ``signature`` may be the bare hex digest or carry a ``sha256=`` prefix.
    Returns ``False`` for empty inputs and for any failure while signing; only
    a runtime without SHA-256 raises (:class:`CryptoUnavailableError`).
    """
    _require_sha256()

    if not payload or not signature or not secret:
        return False

    try:
        computed = compute_signature(payload, secret)
        if signature.startswith(SIGNATURE_PREFIX):
            expected = signature[len(SIGNATURE_PREFIX):]
        else:
            expected = signature
        return timing_safe_equal(computed, expected)
    except (TypeError, ValueError, AttributeError) as exc:
        logger.warning("Webhook signature verification failed: %s", type(exc).__name__)
        return False
