"""HMAC with SHA-2 (HS256, HS384, HS512).

Signing and verification are delegated to PyJWT's ``HMACAlgorithm``, which
compares digests with ``hmac.compare_digest``. Every call builds its own HMAC
context, so one instance can be shared between threads.
"""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Callable
from typing import Any, ClassVar, Self

from jwt.algorithms import HMACAlgorithm
from jwt.exceptions import InvalidKeyError

from ..algorithms import SigningAlgorithm
from ..errors import HmacKeyError
from ._base import AlgorithmBackend

type RandBytes = Callable[[int], bytes]
"""Randomness source: takes a length, returns that many random bytes."""


class HmacSha2(AlgorithmBackend):
    """HMAC signer and verifier.

    Args:
        key: The shared secret. Text is UTF-8 encoded.

    Raises:
        AlgorithmDisabled: The algorithm is disabled.
        HmacKeyError: The key is empty or looks like a PEM/SSH asymmetric key.
    """

    hash_alg: ClassVar[Any]
    key_size: ClassVar[int]
    """Length of generated keys: the block size of the hash function."""

    def __init__(self, key: str | bytes) -> None:
        super().__init__()
        if isinstance(key, str):
            key = key.encode("utf-8")
        if not isinstance(key, bytes | bytearray):
            raise HmacKeyError(f"HMAC key must be str or bytes, not {type(key).__name__}")
        if not key:
            raise HmacKeyError("HMAC key must not be empty")

        self._impl = HMACAlgorithm(self.hash_alg)
        try:
            self._key: bytes = self._impl.prepare_key(bytes(key))
        except InvalidKeyError as e:
            raise HmacKeyError(str(e)) from e

    @classmethod
    def generate_key(cls, randbytes: RandBytes = secrets.token_bytes) -> bytes:
        """Return ``key_size`` random bytes suitable as a secret for this algorithm."""
        return randbytes(cls.key_size)

    @classmethod
    def generate(cls, randbytes: RandBytes = secrets.token_bytes) -> Self:
        return cls(cls.generate_key(randbytes))

    def sign(self, data: bytes) -> bytes:
        return self._impl.sign(data, self._key)

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        return self._impl.verify(data, self._key, signature)


class HS256(HmacSha2):
    algorithm = SigningAlgorithm.HS256
    hash_alg = hashlib.sha256
    key_size = 64


class HS384(HmacSha2):
    algorithm = SigningAlgorithm.HS384
    hash_alg = hashlib.sha384
    key_size = 128


class HS512(HmacSha2):
    algorithm = SigningAlgorithm.HS512
    hash_alg = hashlib.sha512
    key_size = 128
