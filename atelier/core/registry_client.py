"""Fetch theme CSS from a TweakCN-style registry URL."""

from __future__ import annotations

from urllib.parse import urlparse
from urllib.request import Request, urlopen

from atelier import __version__
from atelier.errors import AtelierError, ErrorCode, classify_exception

DEFAULT_TIMEOUT = 15.0
_ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_registry_url(url: str) -> str:
    """Return the cleaned URL or raise a validation AtelierError."""
    cleaned = (url or "").strip()
    if not cleaned:
        raise AtelierError(ErrorCode.VALIDATION_EMPTY_URL)
    parsed = urlparse(cleaned)
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not parsed.netloc:
        raise AtelierError(ErrorCode.VALIDATION_INVALID_URL, url=cleaned)
    return cleaned


def fetch_theme_css(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """GET the URL and return the body as text.

    Content type is not checked; the parser decides whether the text is usable.
    """
    req = Request(
        url,
        headers={
            "User-Agent": f"Atelier/{__version__}",
            "Accept": "text/css, application/json, text/plain, */*",
        },
    )
    try:
        with urlopen(req, timeout=timeout) as resp:
            data = resp.read()
            charset = resp.headers.get_content_charset() or "utf-8"
    except AtelierError:
        raise
    except Exception as exc:
        raise classify_exception(exc, url=url) from exc
    try:
        return data.decode(charset, errors="replace")
    except LookupError:
        return data.decode("utf-8", errors="replace")
