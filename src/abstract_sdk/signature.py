"""Webhook payload signatures.

Deliveries are signed with HMAC-SHA256 over the JSON body using the webhook's
signing key, hex encoded. Verification is local and never touches a transport.
"""

from __future__ import annotations

import hmac
import json
from hashlib import sha256
from typing import Any

from .errors import SignatureMismatch


def canonical_json(payload: Any) -> bytes:
    """Serialize ``payload`` the way the service does before signing.

    Compact separators, key order preserved, non-ASCII left as is. ``str`` and
    ``bytes`` payloads are taken to be the raw body and used verbatim.

    Re-serializing a parsed body is only safe for payloads without floats:
    Python writes ``1.0`` where the service writes ``1``. Pass the raw request
    body when verifying real deliveries.
    """
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_signature(payload: Any, signing_key: str) -> str:
    return hmac.new(signing_key.encode("utf-8"), canonical_json(payload), sha256).hexdigest()


def verify(payload: Any, expected_signature: str, signing_key: str) -> bool:
    """Return whether ``expected_signature`` matches ``payload``.

    Comparison is constant time. ``payload`` should be the raw delivery body
    (``str`` or ``bytes``); see :func:`canonical_json`.
    """
    if not expected_signature:
        return False
    computed = compute_signature(payload, signing_key)
    return hmac.compare_digest(
        computed.encode("ascii"), expected_signature.encode("utf-8")
    )


def require_valid_signature(payload: Any, expected_signature: str, signing_key: str) -> None:
    if not verify(payload, expected_signature, signing_key):
        raise SignatureMismatch("Webhook payload signature does not match")


__all__ = [
    "canonical_json",
    "compute_signature",
    "verify",
    "require_valid_signature",
]
