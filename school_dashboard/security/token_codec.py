# PUBLIC_INTERFACE
"""
XOR identity token codec shared with the dashboard frontend.

Wire format: ``base64(iv) + "." + base64(cipher)``. The IV is random per
token and is never used when decoding. XOR masking is obfuscation, not
encryption; see aead_codec for the authenticated alternative.
"""
from __future__ import annotations

import base64
import binascii
import secrets

from ..core.errors import IdentityConfigError
from ..core.logging import warning

IV_LENGTH = 16
SEPARATOR = "."
# Returned for every token that cannot be decoded.
DECODE_FAILURE = ""


def _xor_bytes(data: bytes, key: bytes) -> bytes:
    return bytes([b ^ key[i % len(key)] for i, b in enumerate(data)])


def _require_key(key: bytes) -> bytes:
    if key is None or len(key) == 0:
        raise IdentityConfigError("Identity key material is empty")
    return key


# PUBLIC_INTERFACE
def encode(plaintext: str, key: bytes) -> str:
    """Mask an identifier for storage in a cookie."""
    _require_key(key)
    iv = secrets.token_bytes(IV_LENGTH)
    masked = _xor_bytes(plaintext.encode("utf-8"), key)
    return SEPARATOR.join(
        (
            base64.b64encode(iv).decode("ascii"),
            base64.b64encode(masked).decode("ascii"),
        )
    )


# PUBLIC_INTERFACE
def decode(token: str, key: bytes) -> str:
    """Recover an identifier from a token, or DECODE_FAILURE."""
    _require_key(key)
    if not isinstance(token, str):
        return DECODE_FAILURE
    parts = token.split(SEPARATOR)
    if len(parts) != 2 or not parts[0]:
        warning("Identity token has an unexpected shape", segments=len(parts))
        return DECODE_FAILURE
    iv_b64, masked_b64 = parts
    try:
        # The IV only has to be well-formed.
        base64.b64decode(iv_b64, validate=True)
        masked = base64.b64decode(masked_b64, validate=True)
        return _xor_bytes(masked, key).decode("utf-8")
    except (binascii.Error, ValueError):
        # UnicodeDecodeError is a ValueError; do not leak the token content in logs
        warning("Failed to decode identity token; treating as missing.")
        return DECODE_FAILURE
