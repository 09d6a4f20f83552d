"""Token extraction from the current Flask request.

Implementations of the Extractor protocol:
- BearerExtractor: ``Authorization: Bearer <token>`` (the default)
- CookieExtractor: a named cookie, for browser sessions

Extractors only locate the compact token string. They never decode it; a
present but malformed value is returned as-is and rejected later by
``RawJwt.decode``.
"""

from __future__ import annotations

import logging

from flask import request

from .errors import MissingToken

logger = logging.getLogger(__name__)


class BearerExtractor:
    """Reads the token from an ``Authorization``-style header.

    Expected format::

        Authorization: Bearer <token>

    The scheme comparison is case-insensitive (RFC 7235); the token is
    returned exactly as sent, minus surrounding whitespace.

    Args:
        header_name: Header to read. Defaults to "Authorization".
        scheme: Authentication scheme to require. Defaults to "Bearer".
    """

    def __init__(self, header_name: str = "Authorization", scheme: str = "Bearer") -> None:
        if not header_name.strip() or not scheme.strip():
            raise ValueError("header_name and scheme cannot be empty")
        self._header_name = header_name
        self._scheme = scheme

    def extract(self) -> str:
        """Return the token from the configured header.

        Raises:
            MissingToken: The header is absent, uses another scheme or carries
                an empty token.
        """
        value = request.headers.get(self._header_name, "").strip()
        if not value:
            raise MissingToken(f"Missing {self._header_name} header")

        scheme, _, token = value.partition(" ")
        if scheme.lower() != self._scheme.lower():
            logger.debug("Unexpected authorization scheme in %s header", self._header_name)
            raise MissingToken(f"Invalid authorization scheme (expected '{self._scheme}')")

        token = token.strip()
        if not token:
            raise MissingToken(f"{self._scheme} token is empty")
        return token


class CookieExtractor:
    """Reads the token from a cookie.

    Cookie-based tokens need CSRF protection and should be set with the
    HttpOnly, Secure and SameSite attributes; none of that is checked here.

    Args:
        cookie_name: Cookie holding the token. Defaults to "access_token".
    """

    def __init__(self, cookie_name: str = "access_token") -> None:
        if not cookie_name or not cookie_name.strip():
            raise ValueError("cookie_name cannot be empty")
        self._name = cookie_name

    def extract(self) -> str:
        token = request.cookies.get(self._name)
        if not token:
            raise MissingToken(f"Missing cookie '{self._name}'")
        return token
