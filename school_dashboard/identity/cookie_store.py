# PUBLIC_INTERFACE
"""
Cookie-backed identity store.

Persists a role's identifier as a masked token cookie at login and recovers
it on every later request. Recovery failures are soft: callers get None and
send the user back to the login page.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional
from urllib.parse import unquote

from fastapi import Response

from ..core.logging import info
from ..core.settings import Settings
from ..security.codecs import TokenCodec, build_codec
from ..security.token_codec import DECODE_FAILURE

ROLE_TEACHER = "teacher"
ROLE_PRINCIPAL = "principal"

ROLE_COOKIES: Dict[str, str] = {
    ROLE_TEACHER: "teacherId",
    ROLE_PRINCIPAL: "principalId",
}
# Readable by the frontend to decide whether to show the dashboard shell.
ROLE_MARKERS: Dict[str, str] = {
    ROLE_TEACHER: "teacherFound",
}
LOGIN_PAGES: Dict[str, str] = {
    ROLE_TEACHER: "/Teacher/login",
    ROLE_PRINCIPAL: "/Principal/login",
}


class IdentityStore:
    def __init__(
        self,
        cookie_name: str,
        codec: TokenCodec,
        *,
        max_age: int = 3600,
        secure: bool = False,
        same_site: str = "strict",
        marker_cookie: Optional[str] = None,
        login_url: str = "/",
    ) -> None:
        self.cookie_name = cookie_name
        self.marker_cookie = marker_cookie
        self.login_url = login_url
        self._codec = codec
        self._max_age = max_age
        self._secure = secure
        self._same_site = same_site

    def persist_identity(self, response: Response, plaintext_id: str) -> None:
        token = self._codec.encode(plaintext_id)
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self._max_age,
            expires=self._max_age,
            path="/",
            secure=self._secure,
            httponly=True,
            samesite=self._same_site,
        )
        if self.marker_cookie:
            response.set_cookie(
                self.marker_cookie,
                "true",
                max_age=self._max_age,
                expires=self._max_age,
                path="/",
                secure=self._secure,
                httponly=False,
                samesite=self._same_site,
            )
        info("Identity persisted", cookie_name=self.cookie_name, scheme=self._codec.scheme)

    def recover_identity(self, cookies: Mapping[str, str]) -> Optional[str]:
        raw = cookies.get(self.cookie_name)
        if not raw:
            return None
        # Browsers that percent-encode cookie values still round-trip; base64 never contains '%'.
        plaintext = self._codec.decode(unquote(raw))
        if plaintext == DECODE_FAILURE:
            return None
        return plaintext

    def forget_identity(self, response: Response) -> None:
        for name in (self.cookie_name, self.marker_cookie):
            if name:
                response.delete_cookie(name, path="/", secure=self._secure, samesite=self._same_site)


# PUBLIC_INTERFACE
def identity_stores(settings: Settings, codec: Optional[TokenCodec] = None) -> Dict[str, IdentityStore]:
    """Build one store per role sharing a single codec."""
    codec = codec or build_codec(settings)
    return {
        role: IdentityStore(
            cookie_name,
            codec,
            max_age=settings.identity_cookie_max_age,
            secure=settings.cookie_secure,
            marker_cookie=ROLE_MARKERS.get(role),
            login_url=LOGIN_PAGES[role],
        )
        for role, cookie_name in ROLE_COOKIES.items()
    }
