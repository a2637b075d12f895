"""HMAC-SHA256 request signing shared by outbound requests and inbound notifications.

Signatures are always computed over the exact bytes that travel on the wire,
never over a re-serialization of the parsed payload.
"""

import hashlib
import hmac

from src.shared.errors import SignatureError

SIGNATURE_HEADER = "X-Signature-HMAC-SHA256"
SHOP_DOMAIN_HEADER = "X-Shop-Domain"


def _key(secret: bytes | str) -> bytes:
    return secret.encode("utf-8") if isinstance(secret, str) else secret


def sign(body: bytes, secret: bytes | str) -> str:
    """Return the hex-encoded HMAC-SHA256 of ``body`` under ``secret``."""
    return hmac.new(_key(secret), body, hashlib.sha256).hexdigest()


def verify(body: bytes, signature: str | bytes | None, secret: bytes | str) -> bool:
    """Check ``signature`` against ``body`` in constant time."""
    if not signature:
        return False
    if isinstance(signature, str):
        signature = signature.encode("utf-8")
    expected = sign(body, secret).encode("ascii")
    return hmac.compare_digest(expected, signature)


def require_valid_signature(body: bytes, signature: str | None, secret: bytes | str) -> None:
    """Raise ``SignatureError`` unless ``signature`` matches ``body``."""
    if not signature:
        raise SignatureError("Missing signature header")
    if not verify(body, signature, secret):
        raise SignatureError("Signature mismatch")
