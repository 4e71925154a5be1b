# PUBLIC_INTERFACE
"""
Authenticated identity tokens (AES-GCM).

Same two-segment shape as the XOR tokens, ``base64(nonce).base64(ct|tag)``,
but the nonce is used and tampering is detected. Tokens issued by one
scheme never decode under the other.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import secrets
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.errors import IdentityConfigError
from ..core.logging import warning
from .token_codec import DECODE_FAILURE, SEPARATOR

NONCE_LENGTH = 12


# PUBLIC_INTERFACE
def aead_key(secret: Optional[str]) -> bytes:
    """Stretch the server-side secret into a 32-byte AES key."""
    if not secret:
        raise IdentityConfigError("Identity pass-phrase is not configured (set IDENTITY_SECRET_KEY)")
    return hashlib.sha256(secret.encode("utf-8")).digest()


# PUBLIC_INTERFACE
def encrypt_identity(plaintext: str, key: bytes) -> str:
    """Encrypt an identifier with a fresh random nonce."""
    aead = AESGCM(key)
    nonce = secrets.token_bytes(NONCE_LENGTH)
    ct = aead.encrypt(nonce, plaintext.encode("utf-8"), associated_data=None)
    return SEPARATOR.join(
        (
            base64.b64encode(nonce).decode("ascii"),
            base64.b64encode(ct).decode("ascii"),
        )
    )


# PUBLIC_INTERFACE
def decrypt_identity(token: str, key: bytes) -> str:
    """Decrypt and authenticate a token; DECODE_FAILURE on any problem."""
    if not isinstance(token, str):
        return DECODE_FAILURE
    parts = token.split(SEPARATOR)
    if len(parts) != 2 or not all(parts):
        return DECODE_FAILURE
    try:
        nonce = base64.b64decode(parts[0], validate=True)
        ct = base64.b64decode(parts[1], validate=True)
        if len(nonce) != NONCE_LENGTH:
            return DECODE_FAILURE
        return AESGCM(key).decrypt(nonce, ct, associated_data=None).decode("utf-8")
    except (binascii.Error, ValueError, InvalidTag):
        warning("Failed to authenticate identity token; treating as missing.")
        return DECODE_FAILURE
