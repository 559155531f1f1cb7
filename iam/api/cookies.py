"""
Cookie Transport

Two cookies per session: the signed token and its encrypted twin. Both share
the same flags; clearing sets Max-Age -1.
"""

from typing import Optional

from fastapi import Response

ACCESS_TOKEN_COOKIE = "access_token"
ENCRYPTED_TOKEN_COOKIE = "encrypted_token"

SAME_SITE_VALUES = {"strict": "strict", "lax": "lax", "none": "none"}
DEFAULT_SAME_SITE = "strict"


def resolve_same_site(value: Optional[str]) -> str:
    """Strict, Lax or None (case-insensitive); anything else means Strict"""
    return SAME_SITE_VALUES.get((value or "").strip().lower(), DEFAULT_SAME_SITE)


class CookieSettings:
    def __init__(
        self,
        domain: Optional[str] = None,
        secure: bool = True,
        http_only: bool = True,
        same_site: Optional[str] = "Strict",
    ):
        self.domain = domain or None
        self.secure = secure
        self.http_only = http_only
        self.same_site = resolve_same_site(same_site)

    @classmethod
    def from_config(cls, config) -> "CookieSettings":
        return cls(
            domain=config.COOKIE_DOMAIN,
            secure=config.COOKIE_SECURE,
            http_only=config.COOKIE_HTTP_ONLY,
            same_site=config.COOKIE_SAME_SITE,
        )


def _set(response: Response, name: str, value: str, max_age: int, settings: CookieSettings):
    response.set_cookie(
        key=name,
        value=value,
        max_age=max_age,
        path="/",
        domain=settings.domain,
        secure=settings.secure,
        httponly=settings.http_only,
        samesite=settings.same_site,
    )


def set_auth_cookies(
    response: Response,
    access_token: str,
    encrypted_token: str,
    max_age: int,
    settings: CookieSettings,
) -> None:
    _set(response, ACCESS_TOKEN_COOKIE, access_token, max_age, settings)
    _set(response, ENCRYPTED_TOKEN_COOKIE, encrypted_token, max_age, settings)


def clear_auth_cookies(response: Response, settings: CookieSettings) -> None:
    _set(response, ACCESS_TOKEN_COOKIE, "", -1, settings)
    _set(response, ENCRYPTED_TOKEN_COOKIE, "", -1, settings)
