"""ECDSA with SHA-2 (ES256 on P-256, ES384 on P-384, ES512 on P-521).

Mirrors ``rsa_pkcs1``: ``ES256`` signs and verifies, ``ES256Public`` only
verifies. Signatures use the JWS form, the fixed-width concatenation
``r || s``; PyJWT converts to and from the DER encoding ``cryptography``
works with. ECDSA signatures are randomized, so signing the same input twice
gives different bytes that both verify.

Each algorithm is tied to one curve (RFC 7518 section 3.4). PyJWT does not
check this, so the key's curve is validated here on construction.
"""

from __future__ import annotations

from typing import ClassVar, Self

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from jwt.algorithms import ECAlgorithm

from ..algorithms import SigningAlgorithm
from ..errors import EcdsaKeyError
from ._base import AlgorithmBackend
from ._pem import load_private_pem, load_public_pem, private_to_pem, public_to_pem


def _check_curve(
    key: ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey,
    expected: type[ec.EllipticCurve],
    algorithm: SigningAlgorithm,
) -> None:
    if not isinstance(key.curve, expected):
        raise EcdsaKeyError(f"{algorithm} requires curve {expected.name}, got {key.curve.name}")


class EcdsaPublic(AlgorithmBackend):
    """Verify-only ECDSA backend.

    Raises:
        AlgorithmDisabled: The algorithm is disabled.
        EcdsaKeyError: ``key`` is not an EC public key on the algorithm's curve.
    """

    hash_alg: ClassVar[type[hashes.HashAlgorithm]]
    curve: ClassVar[type[ec.EllipticCurve]]

    def __init__(self, key: ec.EllipticCurvePublicKey) -> None:
        super().__init__()
        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise EcdsaKeyError(f"expected an EC public key, got {type(key).__name__}")
        _check_curve(key, self.curve, self.algorithm)
        self._public_key = key
        self._impl = ECAlgorithm(self.hash_alg)

    @classmethod
    def from_pem(cls, pem: str | bytes) -> Self:
        return cls(load_public_pem(pem, EcdsaKeyError))

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._public_key

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        return self._impl.verify(data, self._public_key, signature)

    def to_pem(self) -> bytes:
        return public_to_pem(self._public_key)


class Ecdsa(AlgorithmBackend):
    """ECDSA signer and verifier holding a private key.

    Raises:
        AlgorithmDisabled: The algorithm is disabled.
        EcdsaKeyError: ``key`` is not an EC private key on the algorithm's curve.
    """

    hash_alg: ClassVar[type[hashes.HashAlgorithm]]
    curve: ClassVar[type[ec.EllipticCurve]]
    public_cls: ClassVar[type[EcdsaPublic]]

    def __init__(self, key: ec.EllipticCurvePrivateKey) -> None:
        super().__init__()
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise EcdsaKeyError(f"expected an EC private key, got {type(key).__name__}")
        _check_curve(key, self.curve, self.algorithm)
        self._key = key
        self._public_key = key.public_key()
        self._impl = ECAlgorithm(self.hash_alg)

    @classmethod
    def from_pem(cls, pem: str | bytes) -> Self:
        return cls(load_private_pem(pem, EcdsaKeyError))

    @classmethod
    def generate(cls) -> Self:
        """Create a signer around a fresh key on the algorithm's curve."""
        return cls(ec.generate_private_key(cls.curve()))

    def public(self) -> EcdsaPublic:
        """The verify-only counterpart for this key."""
        return self.public_cls(self._public_key)

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._public_key

    def sign(self, data: bytes) -> bytes:
        return self._impl.sign(data, self._key)

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        return self._impl.verify(data, self._public_key, signature)

    def to_pem(self) -> bytes:
        return private_to_pem(self._key)


class ES256Public(EcdsaPublic):
    algorithm = SigningAlgorithm.ES256
    hash_alg = hashes.SHA256
    curve = ec.SECP256R1


class ES384Public(EcdsaPublic):
    algorithm = SigningAlgorithm.ES384
    hash_alg = hashes.SHA384
    curve = ec.SECP384R1


class ES512Public(EcdsaPublic):
    algorithm = SigningAlgorithm.ES512
    hash_alg = hashes.SHA512
    curve = ec.SECP521R1


class ES256(Ecdsa):
    algorithm = SigningAlgorithm.ES256
    hash_alg = hashes.SHA256
    curve = ec.SECP256R1
    public_cls = ES256Public


class ES384(Ecdsa):
    algorithm = SigningAlgorithm.ES384
    hash_alg = hashes.SHA384
    curve = ec.SECP384R1
    public_cls = ES384Public


class ES512(Ecdsa):
    algorithm = SigningAlgorithm.ES512
    hash_alg = hashes.SHA512
    curve = ec.SECP521R1
    public_cls = ES512Public
