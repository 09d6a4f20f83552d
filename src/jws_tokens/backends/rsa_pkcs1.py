"""RSASSA-PKCS1-v1_5 with SHA-2 (RS256, RS384, RS512).

Each algorithm comes as a pair:

- ``RS256`` holds a private key; it signs and verifies.
- ``RS256Public`` holds a public key; it only verifies.

Keys are ``cryptography`` key objects. ``from_pem`` loads PKCS#1 or PKCS#8
private keys and SubjectPublicKeyInfo or PKCS#1 public keys; ``to_pem``
always exports PKCS#8 / SubjectPublicKeyInfo.

Example:
    ```python
    signer = RS256.generate()
    verifier = signer.public()

    token = JwtData.for_signer(signer, {"sub": "42"}).sign_with(signer)
    assert RawJwt.decode(token).verify_signature(verifier)
    ```
"""

from __future__ import annotations

from typing import ClassVar, Self

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from ..algorithms import SigningAlgorithm
from ..errors import RsaKeyError
from ._base import AlgorithmBackend
from ._pem import load_private_pem, load_public_pem, private_to_pem, public_to_pem

DEFAULT_KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537


class RsaPkcs1Public(AlgorithmBackend):
    """Verify-only RSA backend.

    Raises:
        AlgorithmDisabled: The algorithm is disabled.
        RsaKeyError: ``key`` is not an RSA public key.
    """

    hash_alg: ClassVar[type[hashes.HashAlgorithm]]

    def __init__(self, key: rsa.RSAPublicKey) -> None:
        super().__init__()
        if not isinstance(key, rsa.RSAPublicKey):
            raise RsaKeyError(f"expected an RSA public key, got {type(key).__name__}")
        self._public_key = key
        self._impl = RSAAlgorithm(self.hash_alg)

    @classmethod
    def from_pem(cls, pem: str | bytes) -> Self:
        return cls(load_public_pem(pem, RsaKeyError))

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._public_key

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        # cryptography reports wrong-length signatures as InvalidSignature too
        return self._impl.verify(data, self._public_key, signature)

    def to_pem(self) -> bytes:
        return public_to_pem(self._public_key)


class RsaPkcs1(AlgorithmBackend):
    """RSA signer and verifier holding a private key.

    Raises:
        AlgorithmDisabled: The algorithm is disabled.
        RsaKeyError: ``key`` is not an RSA private key.
    """

    hash_alg: ClassVar[type[hashes.HashAlgorithm]]
    public_cls: ClassVar[type[RsaPkcs1Public]]

    def __init__(self, key: rsa.RSAPrivateKey) -> None:
        super().__init__()
        if not isinstance(key, rsa.RSAPrivateKey):
            raise RsaKeyError(f"expected an RSA private key, got {type(key).__name__}")
        self._key = key
        self._public_key = key.public_key()
        self._impl = RSAAlgorithm(self.hash_alg)

    @classmethod
    def from_pem(cls, pem: str | bytes) -> Self:
        return cls(load_private_pem(pem, RsaKeyError))

    @classmethod
    def generate(cls, key_size: int = DEFAULT_KEY_SIZE) -> Self:
        """Create a signer around a freshly generated private key."""
        try:
            key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_size)
        except ValueError as e:
            raise RsaKeyError(f"could not generate key: {e}") from e
        return cls(key)

    def public(self) -> RsaPkcs1Public:
        """The verify-only counterpart for this key."""
        return self.public_cls(self._public_key)

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._public_key

    def sign(self, data: bytes) -> bytes:
        return self._impl.sign(data, self._key)

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        return self._impl.verify(data, self._public_key, signature)

    def to_pem(self) -> bytes:
        return private_to_pem(self._key)


class RS256Public(RsaPkcs1Public):
    algorithm = SigningAlgorithm.RS256
    hash_alg = hashes.SHA256


class RS384Public(RsaPkcs1Public):
    algorithm = SigningAlgorithm.RS384
    hash_alg = hashes.SHA384


class RS512Public(RsaPkcs1Public):
    algorithm = SigningAlgorithm.RS512
    hash_alg = hashes.SHA512


class RS256(RsaPkcs1):
    algorithm = SigningAlgorithm.RS256
    hash_alg = hashes.SHA256
    public_cls = RS256Public


class RS384(RsaPkcs1):
    algorithm = SigningAlgorithm.RS384
    hash_alg = hashes.SHA384
    public_cls = RS384Public


class RS512(RsaPkcs1):
    algorithm = SigningAlgorithm.RS512
    hash_alg = hashes.SHA512
    public_cls = RS512Public
