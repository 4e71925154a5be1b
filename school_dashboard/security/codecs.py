# PUBLIC_INTERFACE
"""
Token codec selection.

Both schemes are bound to their key once, at application start, so a
missing pass-phrase fails there instead of on the first login.
"""
from __future__ import annotations

from typing import Protocol

from ..core.errors import IdentityConfigError
from ..core.settings import Settings
from . import aead_codec, token_codec
from .keys import derive_key


class TokenCodec(Protocol):
    scheme: str

    def encode(self, plaintext: str) -> str: ...

    def decode(self, token: str) -> str: ...


class XorTokenCodec:
    """Frontend-compatible masking keyed by the first 16 pass-phrase bytes."""

    scheme = "xor"

    def __init__(self, pass_phrase: str | None) -> None:
        self._key = derive_key(pass_phrase)

    def encode(self, plaintext: str) -> str:
        return token_codec.encode(plaintext, self._key)

    def decode(self, token: str) -> str:
        return token_codec.decode(token, self._key)


class AesGcmTokenCodec:
    """Authenticated tokens keyed by SHA-256 of the pass-phrase."""

    scheme = "aesgcm"

    def __init__(self, pass_phrase: str | None) -> None:
        self._key = aead_codec.aead_key(pass_phrase)

    def encode(self, plaintext: str) -> str:
        return aead_codec.encrypt_identity(plaintext, self._key)

    def decode(self, token: str) -> str:
        return aead_codec.decrypt_identity(token, self._key)


_SCHEMES = {
    XorTokenCodec.scheme: XorTokenCodec,
    AesGcmTokenCodec.scheme: AesGcmTokenCodec,
}


# PUBLIC_INTERFACE
def build_codec(settings: Settings) -> TokenCodec:
    """Return the codec named by IDENTITY_TOKEN_SCHEME, bound to the pass-phrase."""
    factory = _SCHEMES.get(settings.identity_token_scheme)
    if factory is None:
        raise IdentityConfigError(
            f"Unknown identity token scheme '{settings.identity_token_scheme}' (expected one of {sorted(_SCHEMES)})"
        )
    return factory(settings.identity_secret_key)
