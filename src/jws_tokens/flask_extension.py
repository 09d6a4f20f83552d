"""Flask extension protecting routes with signed tokens.

Per request, ``TokenAuth.require()``:

1. Extracts the compact token (``Authorization: Bearer`` by default).
2. Splits and decodes it with ``RawJwt.decode``.
3. Verifies it against the configured verifiers, in order
   (``RawJwt.verify_signature_multi``).
4. Parses the claims into the configured claims type.
5. Stores the resulting ``JwtData`` in ``flask.g.jws`` and calls the view.

Any failure aborts with HTTP 401. Responses only carry a short generic
description; the detailed reason is logged server-side at WARNING.

Claim semantics (expiry, audience, issuer...) are the application's
business: validate them in the claims type (e.g. a pydantic model) or in the
view.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import wraps
from typing import TYPE_CHECKING, Any, Final

from flask import Flask, abort, g, request

from .errors import AuthError, DecodeError, InvalidToken
from .extractors import BearerExtractor
from .token import DEFAULT_CLAIMS_TYPE, JwtData, RawJwt

if TYPE_CHECKING:
    from collections.abc import Callable

    from .protocols import Extractor, JwsVerifier, ViewFunc

logger = logging.getLogger(__name__)

_EXT_KEY: Final[str] = "jws_tokens"
"""Flask extensions registry key for TokenAuth."""

MALFORMED_TOKEN: Final[str] = "Malformed token"
INVALID_SIGNATURE: Final[str] = "Invalid signature"
INVALID_CLAIMS: Final[str] = "Invalid claims"
AUTHENTICATION_FAILED: Final[str] = "Authentication failed"


class TokenAuth:
    """Flask decorator glue for token authentication.

    Pattern:
        auth = TokenAuth([HS256(secret)])
        auth.init_app(app)

    Usage:
        @app.get("/me")
        @auth.require()
        def me():
            return {"sub": g.jws.claims["sub"]}

    Args:
        verifiers: Verifiers tried in order for every request. Accepts any
            iterable; it is copied to a tuple so it can be reused.
        claims_type: Type the claims are parsed into. Defaults to
            ``dict[str, Any]``.
        extractor: Where to find the token. Defaults to BearerExtractor.
    """

    def __init__(
        self,
        verifiers: Iterable[JwsVerifier] = (),
        claims_type: Any = DEFAULT_CLAIMS_TYPE,
        extractor: Extractor | None = None,
    ) -> None:
        self._verifiers: tuple[JwsVerifier, ...] = tuple(verifiers)
        self._claims_type = claims_type
        self._extractor: Extractor = extractor or BearerExtractor()

    def init_app(
        self,
        app: Flask,
        *,
        verifiers: Iterable[JwsVerifier] | None = None,
        claims_type: Any = None,
        extractor: Extractor | None = None,
    ) -> None:
        """Register the extension on ``app``, optionally overriding settings.

        Args:
            app: The Flask application instance.
            verifiers: Replaces the configured verifiers.
            claims_type: Replaces the configured claims type.
            extractor: Replaces the configured extractor.
        """
        if verifiers is not None:
            self._verifiers = tuple(verifiers)
        if claims_type is not None:
            self._claims_type = claims_type
        if extractor is not None:
            self._extractor = extractor

        app.extensions[_EXT_KEY] = self

    def authenticate(self) -> JwtData[Any]:
        """Authenticate the current request and return its token data.

        Raises:
            MissingToken: No token in the request.
            InvalidToken: The token is malformed, no verifier accepts it, or
                the claims do not match the claims type.
        """
        token = self._extractor.extract()

        try:
            raw = RawJwt.decode(token)
        except DecodeError as e:
            raise InvalidToken(f"malformed token: {e}", description=MALFORMED_TOKEN) from e

        if not self._verifiers:
            logger.warning("No verifiers configured; rejecting every token")
        if not raw.verify_signature_multi(self._verifiers):
            raise InvalidToken("no verifier accepted the token", description=INVALID_SIGNATURE)

        try:
            return raw.parse_owned(self._claims_type)
        except DecodeError as e:
            raise InvalidToken(f"claims rejected ({type(e).__name__})", description=INVALID_CLAIMS) from e

    def require(self) -> Callable[[ViewFunc], ViewFunc]:
        """Decorator authenticating the request before the view runs.

        Error mapping:
        - ``MissingToken``  -> HTTP 401 ("Missing token")
        - malformed token   -> HTTP 401 ("Malformed token")
        - no verifier match -> HTTP 401 ("Invalid signature")
        - claims mismatch   -> HTTP 401 ("Invalid claims")
        - anything else raised by an extractor or verifier
                            -> HTTP 401 ("Authentication failed")

        Side Effects:
            Writes the verified ``JwtData`` to ``flask.g.jws`` before calling
            the view. May end the request early via ``flask.abort``.
        """

        def decorator(view: ViewFunc) -> ViewFunc:
            @wraps(view)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    g.jws = self.authenticate()
                except AuthError as e:
                    logger.warning("Rejected request to %s: %s", request.path, e)
                    abort(e.error_code, description=e.description)
                except Exception as e:
                    logger.warning("Authentication failed for %s: %s", request.path, type(e).__name__)
                    abort(401, description=AUTHENTICATION_FAILED)

                return view(*args, **kwargs)

            return wrapper

        return decorator


def current_token() -> JwtData[Any] | None:
    """The token data stored by ``TokenAuth.require`` for this request, if any."""
    return g.get("jws")
