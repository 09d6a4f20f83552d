"""Registry of JWS signing algorithm identifiers.

The SigningAlgorithm enum below is the single table every other code path
reads from: parsing, serialization, display, header decoding and the list of
accepted names in error messages. Adding an algorithm means adding one
member line here and one backend class under ``jws_tokens.backends``.

See section 3 of RFC 7518 for the algorithm names this registry follows.
"""

from __future__ import annotations

from enum import Enum

from jwt.algorithms import has_crypto

from .errors import AlgorithmDisabled, UnrecognizedAlgorithm
from .settings import get_settings


class Backend(Enum):
    """Family of cryptographic implementations an algorithm belongs to.

    Attributes:
        label: Human-readable backend name.
        requires_crypto: Whether the backend needs the ``cryptography`` package.
            PyJWT reports its presence through ``jwt.algorithms.has_crypto``.
    """

    HMAC_SHA2 = ("hmac-sha2", False)
    RSA_PKCS1 = ("rsa-pkcs1", True)
    ECDSA = ("ecdsa", True)

    def __init__(self, label: str, requires_crypto: bool) -> None:
        self.label = label
        self.requires_crypto = requires_crypto

    @property
    def available(self) -> bool:
        return has_crypto or not self.requires_crypto


class SigningAlgorithm(Enum):
    """JWS signing algorithms.

    The member value is the exact, case-sensitive ``alg`` header value.
    Equality and hashing are by member identity.

    Members whose backend is unavailable, or which are listed in the
    ``JWS_DISABLED_ALGORITHMS`` setting, still exist as Python objects but are
    not *enabled*: ``parse`` rejects them and backends refuse to construct.
    """

    backend: Backend

    # HMAC using SHA-2. HS256 is the one algorithm RFC 7518 requires.
    HS256 = ("HS256", Backend.HMAC_SHA2)
    HS384 = ("HS384", Backend.HMAC_SHA2)
    HS512 = ("HS512", Backend.HMAC_SHA2)

    # RSASSA-PKCS1-v1_5 using SHA-2.
    RS256 = ("RS256", Backend.RSA_PKCS1)
    RS384 = ("RS384", Backend.RSA_PKCS1)
    RS512 = ("RS512", Backend.RSA_PKCS1)

    # ECDSA over P-256, P-384 and P-521.
    ES256 = ("ES256", Backend.ECDSA)
    ES384 = ("ES384", Backend.ECDSA)
    ES512 = ("ES512", Backend.ECDSA)

    def __new__(cls, name: str, backend: Backend) -> SigningAlgorithm:
        member = object.__new__(cls)
        member._value_ = name
        member.backend = backend
        return member

    def __str__(self) -> str:
        return self.value

    @property
    def enabled(self) -> bool:
        """Whether this algorithm can currently be parsed and constructed."""
        return (
            self.backend.available
            and self.value not in get_settings().disabled_algorithm_names()
        )

    def require_enabled(self) -> None:
        """Raise AlgorithmDisabled unless this algorithm is enabled."""
        if not self.enabled:
            raise AlgorithmDisabled(
                f"algorithm {self.value} is disabled "
                f"(backend {self.backend.label!r} unavailable or turned off in settings)"
            )

    @classmethod
    def enabled_members(cls) -> list[SigningAlgorithm]:
        """Enabled algorithms in declaration order."""
        return [member for member in cls if member.enabled]

    @classmethod
    def parse(cls, name: str) -> SigningAlgorithm:
        """Look up an algorithm by its exact ``alg`` name.

        RFC 7515 makes algorithm names case-sensitive, so ``"hs256"`` is
        rejected.

        Raises:
            UnrecognizedAlgorithm: The name is unknown or the algorithm is
                disabled. The error lists the names that are accepted.
        """
        member = cls._value2member_map_.get(name) if isinstance(name, str) else None
        if member is None or not member.enabled:
            raise UnrecognizedAlgorithm(name, [m.value for m in cls.enabled_members()])
        return member  # type: ignore[return-value]
