"""Error taxonomy for JWS encoding, decoding and key construction.

All errors inherit from JWSError so application code can catch every
library failure with one except clause. The three outcomes a caller must be
able to tell apart map onto this hierarchy as follows:

- The token is malformed: ``RawJwt.decode`` raises a DecodeError.
- The token is well-formed but not authentic: verification returns False.
  This is not an exception.
- The claims do not match the expected schema: ``RawJwt.parse`` raises
  JsonDecodeError.

Security Note:
    Messages never include key material or signature bytes. Underlying
    library errors are chained with ``raise ... from`` for server-side logs.
"""

from __future__ import annotations

from collections.abc import Sequence


class JWSError(Exception):
    """Base exception for every failure raised by this package."""


# ============================================================================
# Decoding
# ============================================================================


class DecodeError(JWSError):
    """Raised when a token or one of its segments cannot be decoded.

    Application code that only needs "malformed or not" can catch this class
    instead of the individual subclasses.
    """


class InvalidFormat(DecodeError):  # noqa: N818
    """Raised when a token does not split into three dot-separated segments."""

    def __init__(self, message: str = "the JWT is formatted incorrectly (not 3 parts separated by dots)") -> None:
        super().__init__(message)


class Base64DecodeError(DecodeError):
    """Raised when a segment is not valid unpadded base64url.

    This occurs when:
    - The segment contains characters outside the URL-safe alphabet
    - The segment carries ``=`` padding or whitespace
    - The segment length cannot come from any byte string (length % 4 == 1)
    """


class JsonDecodeError(DecodeError):
    """Raised when decoded bytes are not JSON or do not match the target shape.

    This covers both the protected header (wrong ``alg``, non-string ``kid``,
    ...) and the caller's claims type.
    """


# ============================================================================
# Encoding
# ============================================================================


class EncodeError(JWSError):
    """Raised when a header or claims value cannot be serialized to JSON."""


# ============================================================================
# Algorithms and keys
# ============================================================================


class UnrecognizedAlgorithm(JWSError, ValueError):  # noqa: N818
    """Raised when a name does not match any enabled signing algorithm.

    Attributes:
        name: The rejected algorithm name, exactly as given.
        accepted: Names that would have been accepted, in registry order.
    """

    def __init__(self, name: object, accepted: Sequence[str]) -> None:
        self.name = name
        self.accepted = tuple(accepted)
        super().__init__(
            f"unrecognized algorithm {name!r}, expected one of: {', '.join(self.accepted)}"
        )


class AlgorithmDisabled(JWSError):  # noqa: N818
    """Raised when constructing a backend whose algorithm is disabled.

    Algorithms are disabled either because their cryptographic library is not
    installed or through the ``JWS_DISABLED_ALGORITHMS`` setting.
    """


class KeyConstructionError(JWSError):
    """Base class for malformed or unsuitable key material."""


class HmacKeyError(KeyConstructionError):
    """Raised when an HMAC secret is empty or looks like an asymmetric key."""


class RsaKeyError(KeyConstructionError):
    """Raised when RSA key material is malformed or is not an RSA key."""


class EcdsaKeyError(KeyConstructionError):
    """Raised when EC key material is malformed or uses the wrong curve."""


# ============================================================================
# Flask layer
# ============================================================================


class AuthError(JWSError):
    """Base exception for request authentication failures.

    ``str(error)`` is the detailed message meant for server logs;
    ``description`` is what the client gets in the HTTP response.

    Attributes:
        error_code: HTTP status the Flask extension aborts with.
        description: Client-facing message. Generic, never the detail.
    """

    error_code: int = 401
    description: str = "Authentication failed"

    def __init__(self, message: str | None = None, *, description: str | None = None) -> None:
        if description is not None:
            self.description = description
        super().__init__(message if message is not None else self.description)


class MissingToken(AuthError):  # noqa: N818
    """Raised when no token is found in the request.

    This occurs when:
    - The Authorization header is missing
    - The Authorization header is not "Bearer <token>"
    - The configured cookie is missing

    This should result in an HTTP 401 Unauthorized response.
    """

    description = "Missing token"


class InvalidToken(AuthError):  # noqa: N818
    """Raised when a token is present but is rejected.

    This occurs when:
    - The token is malformed (DecodeError)
    - No configured verifier accepts the header and signature
    - The claims do not match the configured claims type

    This should result in an HTTP 401 Unauthorized response.
    """

    description = "Invalid token"
