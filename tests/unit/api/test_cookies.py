import pytest
from fastapi import Response

from iam.api.cookies import CookieSettings, clear_auth_cookies, resolve_same_site, set_auth_cookies


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Strict", "strict"),
        ("Lax", "lax"),
        ("None", "none"),
        ("lax", "lax"),
        ("", "strict"),
        (None, "strict"),
        ("sometimes", "strict"),
    ],
)
def test_same_site_resolution(value, expected):
    assert resolve_same_site(value) == expected


def _set_cookie_headers(response):
    return [v for k, v in response.raw_headers if k == b"set-cookie"]


def test_set_auth_cookies():
    response = Response()
    settings = CookieSettings(domain="example.com", secure=True, http_only=True, same_site="Lax")

    set_auth_cookies(response, "signed", "sealed", max_age=3600, settings=settings)

    headers = [h.decode() for h in _set_cookie_headers(response)]
    assert len(headers) == 2
    access, encrypted = headers
    assert access.startswith("access_token=signed")
    assert encrypted.startswith("encrypted_token=sealed")
    for header in headers:
        assert "Max-Age=3600" in header
        assert "Domain=example.com" in header
        assert "HttpOnly" in header
        assert "Secure" in header
        assert "SameSite=lax" in header


def test_clear_auth_cookies_uses_negative_max_age():
    response = Response()

    clear_auth_cookies(response, CookieSettings())

    headers = [h.decode() for h in _set_cookie_headers(response)]
    assert len(headers) == 2
    assert all("Max-Age=-1" in h for h in headers)
    assert all("SameSite=strict" in h for h in headers)
