"""PEM import and export helpers for the asymmetric backends."""

from __future__ import annotations

from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from ..errors import KeyConstructionError


def _as_pem_bytes(pem: str | bytes, error: type[KeyConstructionError]) -> bytes:
    if isinstance(pem, str):
        try:
            return pem.encode("ascii")
        except UnicodeEncodeError as e:
            raise error("PEM text must be ASCII") from e
    if isinstance(pem, bytes):
        return pem
    raise error(f"PEM must be str or bytes, not {type(pem).__name__}")


def load_private_pem(pem: str | bytes, error: type[KeyConstructionError]) -> Any:
    """Load an unencrypted PKCS#1, SEC1 or PKCS#8 private key.

    Raises:
        error: The PEM is malformed, encrypted or not a private key.
    """
    try:
        return serialization.load_pem_private_key(_as_pem_bytes(pem, error), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise error(f"could not load private key: {e}") from e


def load_public_pem(pem: str | bytes, error: type[KeyConstructionError]) -> Any:
    """Load a SubjectPublicKeyInfo (or PKCS#1 RSA) public key.

    Raises:
        error: The PEM is malformed or not a public key.
    """
    try:
        return serialization.load_pem_public_key(_as_pem_bytes(pem, error))
    except (ValueError, UnsupportedAlgorithm) as e:
        raise error(f"could not load public key: {e}") from e


def private_to_pem(key: Any) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def public_to_pem(key: Any) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
