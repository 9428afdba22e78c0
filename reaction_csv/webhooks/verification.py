"""Interaction signature verification — Ed25519 over timestamp + raw body.

Security contract:
- Verification runs on the exact raw body bytes, never a re-serialized form
- Missing signature/timestamp header -> reject without touching the key
- Malformed hex (signature or public key) -> reject, never raise
- Missing public key -> verification always fails (fail-closed)
"""

from __future__ import annotations

import binascii
import logging
from typing import Mapping

from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import VerifyKey

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-signature-ed25519"
TIMESTAMP_HEADER = "x-signature-timestamp"


def verify_key(
    body: bytes,
    signature: str | None,
    timestamp: str | None,
    public_key: str | None,
) -> bool:
    """Verify a Discord interaction signature.

    Args:
        body: Raw request body bytes
        signature: Hex Ed25519 signature (X-Signature-Ed25519)
        timestamp: X-Signature-Timestamp value, concatenated as-is
        public_key: Application public key, hex

    Returns:
        True if the signature is valid for timestamp || body
    """
    if not public_key:
        logger.warning("DISCORD_PUBLIC_KEY not set — rejecting interaction")
        return False
    if not signature or not timestamp:
        return False

    try:
        signature_bytes = bytes.fromhex(signature)
        key = VerifyKey(bytes.fromhex(public_key))
    except (ValueError, TypeError, binascii.Error, CryptoError):
        return False

    try:
        key.verify(timestamp.encode("utf-8") + body, signature_bytes)
    except (BadSignatureError, ValueError, CryptoError):
        return False
    return True


def verify_interaction_request(
    body: bytes,
    headers: Mapping[str, str],
    public_key: str | None,
) -> bool:
    """Verify an inbound request given its headers (lowercase keys)."""
    return verify_key(
        body,
        headers.get(SIGNATURE_HEADER),
        headers.get(TIMESTAMP_HEADER),
        public_key,
    )
