"""Protocol definitions for signers, verifiers and token extraction.

This module defines structural interfaces using Protocol (PEP 544) for:
- Signing (JwsSigner)
- Verification (JwsVerifier)
- Algorithm identity (AlgorithmIdentity)
- Token extraction from Flask requests (Extractor)

Any object with the right methods satisfies a protocol; no inheritance is
required. This is what lets unrelated cryptographic backends, decorators such
as WithKeyId, and test doubles be used interchangeably.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .algorithms import SigningAlgorithm
    from .header import Header

# ============================================================================
# Type Aliases
# ============================================================================

type ViewFunc = Callable[..., Any]
"""Type alias for Flask view functions."""


# ============================================================================
# Core Protocols
# ============================================================================


@runtime_checkable
class JwsSigner(Protocol):
    """Something that can sign a JWS signing input.

    Signers know nothing about headers: the signature is a function of the
    signing input and the key material held by the signer. HMAC signatures are
    deterministic; ECDSA signatures are not, so verifiers must never compare
    signatures byte-for-byte against a freshly computed one.
    """

    def sign(self, data: bytes) -> bytes:
        """Return the signature of ``data`` (the ``header.payload`` bytes)."""
        ...


@runtime_checkable
class JwsVerifier(Protocol):
    """Something that can verify a JWS signature.

    Verification is a two-step contract:

    1. ``check_header``: does this verifier apply to the header's declared
       algorithm (and, for decorators, its key id)?
    2. ``verify_signature``: the cryptographic check alone.

    ``verify_signature`` says nothing about whether the algorithm claimed by
    the header is the one this verifier implements. Always call
    ``check_header`` first, otherwise a token can be checked with an algorithm
    its issuer never used (algorithm confusion). ``RawJwt.verify_signature``
    enforces this ordering.
    """

    def check_header(self, header: Header) -> bool:
        """Return True if this verifier should be used for ``header``."""
        ...

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        """Return True if ``signature`` is valid for ``data``.

        Malformed signatures return False; they never raise.
        """
        ...


@runtime_checkable
class AlgorithmIdentity(Protocol):
    """Something that knows which signing algorithm it implements.

    Used by ``Header.for_signer`` to build a matching header.
    """

    @property
    def algorithm(self) -> SigningAlgorithm: ...


class Extractor(Protocol):
    """Protocol for extracting a raw token from the current Flask request.

    Common implementations:
    - Authorization: Bearer <token> header
    - Cookie-based storage
    """

    def extract(self) -> str:
        """Extract the raw token string from the Flask request.

        Raises:
            MissingToken: Token not found or improperly formatted.
        """
        ...
