# PUBLIC_INTERFACE
"""
Key material for identity tokens.
"""
from __future__ import annotations

from typing import Optional

from ..core.errors import IdentityConfigError

KEY_LENGTH = 16


# PUBLIC_INTERFACE
def derive_key(pass_phrase: Optional[str]) -> bytes:
    """Return the first 16 UTF-8 bytes of the pass-phrase.

    Shorter pass-phrases give a shorter key; callers cycle over the real
    length. A missing or empty pass-phrase is a deployment fault.
    """
    if not pass_phrase:
        raise IdentityConfigError("Identity pass-phrase is not configured (set IDENTITY_SECRET_KEY)")
    return pass_phrase.encode("utf-8")[:KEY_LENGTH]
