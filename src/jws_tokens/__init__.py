"""
JSON Web Signature (JWS) tokens in compact serialization.

High-level flow
---------------
Creating a token:

1. `JwtData.new(alg, claims)` (or `JwtData.for_signer`) pairs a `Header`
   with caller-defined claims.
2. `JwtData.sign_with(signer)` serializes both, signs
   `<b64(header)>.<b64(claims)>` and appends the signature.

Receiving a token:

1. `RawJwt.decode(token)` splits it and decodes header and signature.
2. `RawJwt.verify_signature(verifier)` (or `verify_signature_multi`) checks
   the header against the verifier, then the signature.
3. `RawJwt.parse(claims_type)` decodes and validates the claims.

Security notes
--------------
- Never trust claims until verification succeeds.
- A verifier's header check always runs before its signature check, so a
  token cannot be verified with an algorithm other than the one it declares.
- Verification only proves authenticity. Claim semantics (`exp`, `aud`,
  `iss`...) belong to the caller's claims type or application code.

Example usage
-------------

.. code-block:: python

    from flask import g
    from jws_tokens import JwtData, RawJwt, TokenAuth, WithKeyId
    from jws_tokens.backends import HS256, RS256

    signer = WithKeyId("main", HS256(b"a-long-random-secret"))
    token = JwtData.for_signer(signer, {"sub": "1234567890"}).sign_with(signer)

    raw = RawJwt.decode(token)
    if raw.verify_signature_multi([RS256.generate().public(), signer]):
        data = raw.parse()
        print(data.claims["sub"])

    # Flask
    auth = TokenAuth([signer])
    auth.init_app(app)

    @app.get("/me")
    @auth.require()
    def me():
        return {"sub": g.jws.claims["sub"]}
"""

# Algorithms
from .algorithms import Backend, SigningAlgorithm

# Codec
from .codec import decode_bytes, decode_value, encode_bytes, encode_value

# Errors
from .errors import (
    AlgorithmDisabled,
    AuthError,
    Base64DecodeError,
    DecodeError,
    EcdsaKeyError,
    EncodeError,
    HmacKeyError,
    InvalidFormat,
    InvalidToken,
    JsonDecodeError,
    JWSError,
    KeyConstructionError,
    MissingToken,
    RsaKeyError,
    UnrecognizedAlgorithm,
)

# Extractors
from .extractors import BearerExtractor, CookieExtractor

# Flask extension
from .flask_extension import TokenAuth, current_token

# Header
from .header import Algorithm, Header

# Key id
from .key_id import WithKeyId

# Protocols
from .protocols import AlgorithmIdentity, Extractor, JwsSigner, JwsVerifier, ViewFunc

# Settings
from .settings import JWSSettings, get_settings

# Tokens
from .token import JwtData, RawJwt

__all__ = [
    # Algorithms
    "Algorithm",
    "Backend",
    "SigningAlgorithm",
    # Codec
    "decode_bytes",
    "decode_value",
    "encode_bytes",
    "encode_value",
    # Errors
    "JWSError",
    "DecodeError",
    "InvalidFormat",
    "Base64DecodeError",
    "JsonDecodeError",
    "EncodeError",
    "UnrecognizedAlgorithm",
    "AlgorithmDisabled",
    "KeyConstructionError",
    "HmacKeyError",
    "RsaKeyError",
    "EcdsaKeyError",
    "AuthError",
    "MissingToken",
    "InvalidToken",
    # Protocols
    "AlgorithmIdentity",
    "Extractor",
    "JwsSigner",
    "JwsVerifier",
    "ViewFunc",
    # Header and tokens
    "Header",
    "JwtData",
    "RawJwt",
    # Key id
    "WithKeyId",
    # Settings
    "JWSSettings",
    "get_settings",
    # Extractors
    "BearerExtractor",
    "CookieExtractor",
    # Flask extension
    "TokenAuth",
    "current_token",
]
