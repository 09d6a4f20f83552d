"""Concrete signing and verification backends.

HMAC backends only need PyJWT. The RSA and ECDSA backends additionally need
the ``cryptography`` package (installed through ``PyJWT[crypto]``); without
it they are not exported and their algorithms are reported as disabled.
"""

from jwt.algorithms import has_crypto

from ._base import AlgorithmBackend
from .hmac_sha2 import HS256, HS384, HS512, HmacSha2

__all__ = [
    "AlgorithmBackend",
    # HMAC
    "HmacSha2",
    "HS256",
    "HS384",
    "HS512",
]

if has_crypto:
    from .ecdsa import (
        ES256,
        ES384,
        ES512,
        Ecdsa,
        EcdsaPublic,
        ES256Public,
        ES384Public,
        ES512Public,
    )
    from .rsa_pkcs1 import (
        RS256,
        RS384,
        RS512,
        RsaPkcs1,
        RsaPkcs1Public,
        RS256Public,
        RS384Public,
        RS512Public,
    )

    __all__ += [
        # RSA
        "RsaPkcs1",
        "RsaPkcs1Public",
        "RS256",
        "RS384",
        "RS512",
        "RS256Public",
        "RS384Public",
        "RS512Public",
        # ECDSA
        "Ecdsa",
        "EcdsaPublic",
        "ES256",
        "ES384",
        "ES512",
        "ES256Public",
        "ES384Public",
        "ES512Public",
    ]
