"""Token assembly, splitting, verification and parsing.

Creation::

    claims -> JwtData -> signing input (b64(header) "." b64(claims))
           -> signer.sign(signing input) -> signing input "." b64(signature)

Verification::

    token -> RawJwt.decode (split, decode header and signature)
          -> RawJwt.verify_signature / verify_signature_multi
          -> RawJwt.parse (decode claims into the caller's type)

The payload is decoded lazily so one RawJwt can be parsed into different
claims types, and verification always runs over the exact ``header.payload``
substring received, never a re-serialization of the decoded header.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .codec import decode_bytes, decode_value, encode_bytes, encode_value
from .errors import DecodeError, InvalidFormat
from .header import Header, display_algorithm

if TYPE_CHECKING:
    from .header import Algorithm
    from .protocols import AlgorithmIdentity, JwsSigner, JwsVerifier

logger = logging.getLogger(__name__)

DEFAULT_CLAIMS_TYPE: Any = dict[str, Any]


@dataclass
class JwtData[ClaimsT]:
    """A header and its claims, before signing or after parsing.

    Claims may be any value pydantic can serialize: a dict, a dataclass, a
    ``BaseModel``, a ``TypedDict``... The header may be edited freely
    (e.g. ``data.header.obj_type = "JWT"``) before calling ``sign_with``.
    """

    header: Header
    claims: ClaimsT

    @classmethod
    def new(cls, algorithm: Algorithm, claims: ClaimsT) -> JwtData[ClaimsT]:
        """Create token data with a fresh header for ``algorithm``."""
        return cls(header=Header(algorithm), claims=claims)

    @classmethod
    def for_signer(cls, signer: AlgorithmIdentity, claims: ClaimsT) -> JwtData[ClaimsT]:
        """Create token data whose header matches ``signer`` (``alg`` and ``kid``)."""
        return cls(header=Header.for_signer(signer), claims=claims)

    def to_signing_input(self) -> str:
        """Return ``<base64url(header)>.<base64url(claims)>``.

        Raises:
            EncodeError: The claims cannot be serialized.
        """
        return f"{self.header.encode()}.{encode_value(self.claims)}"

    def sign_with(self, signer: JwsSigner) -> str:
        """Sign and return the compact token.

        The signer receives the signing input, never the three-part token.

        Raises:
            EncodeError: The claims cannot be serialized.
        """
        signing_input = self.to_signing_input()
        signature = signer.sign(signing_input.encode("ascii"))
        return f"{signing_input}.{encode_bytes(signature)}"


@dataclass(frozen=True, slots=True)
class RawJwt:
    """A split token whose payload has not been decoded yet.

    Attributes:
        header_and_payload: The received ``header.payload`` substring. This is
            the signing input signatures are verified against.
        header: The decoded protected header.
        payload: The payload segment, still base64url-encoded.
        signature: The decoded signature bytes.
    """

    header_and_payload: str
    header: Header
    payload: str
    signature: bytes

    @classmethod
    def decode(cls, token: str) -> RawJwt:
        """Split ``token`` and decode its header and signature.

        The signature is isolated at the last dot and the header at the first
        dot of what remains.

        Raises:
            InvalidFormat: The token is not three dot-separated segments.
            Base64DecodeError: A segment is not unpadded base64url.
            JsonDecodeError: The header is not a valid header object.
        """
        try:
            return cls._decode(token)
        except DecodeError as e:
            logger.debug("Rejected malformed token: %s", type(e).__name__)
            raise

    @classmethod
    def _decode(cls, token: str) -> RawJwt:
        if not isinstance(token, str):
            raise InvalidFormat("the JWT must be a string")

        header_and_payload, sep, signature = token.rpartition(".")
        if not sep:
            raise InvalidFormat()
        header, sep, payload = header_and_payload.partition(".")
        if not sep or "." in payload:
            raise InvalidFormat()

        return cls(
            header_and_payload=header_and_payload,
            header=Header.decode(header),
            payload=payload,
            signature=decode_bytes(signature),
        )

    def parse(self, claims_type: Any = DEFAULT_CLAIMS_TYPE) -> JwtData[Any]:
        """Decode the payload into ``claims_type``; the header is copied.

        Raises:
            Base64DecodeError: The payload is not base64url.
            JsonDecodeError: The payload is not JSON or does not match
                ``claims_type``.
        """
        return JwtData(header=self.header.copy(), claims=decode_value(self.payload, claims_type))

    def parse_owned(self, claims_type: Any = DEFAULT_CLAIMS_TYPE) -> JwtData[Any]:
        """Like ``parse`` but the returned data shares this token's header.

        Use when the RawJwt is discarded right after parsing.
        """
        return JwtData(header=self.header, claims=decode_value(self.payload, claims_type))

    def verify_signature(self, verifier: JwsVerifier) -> bool:
        """Check the header against ``verifier``, then the signature.

        Returns False without touching the signature if the verifier does not
        accept the header.
        """
        if not verifier.check_header(self.header):
            logger.debug(
                "%s does not accept alg=%s",
                type(verifier).__name__,
                display_algorithm(self.header.algorithm),
            )
            return False
        return verifier.verify_signature(self.header_and_payload.encode("utf-8"), self.signature)

    def verify_signature_multi(self, verifiers: Iterable[JwsVerifier]) -> bool:
        """Verify against the first suitable verifier that accepts the signature.

        Verifiers are tried in order. One whose ``check_header`` fails is
        skipped without evaluating its ``verify_signature``; one whose header
        check passes but whose signature check fails does not end the search,
        so several keys for the same algorithm can be tried in turn. Returns
        False if no verifier passes both checks.
        """
        data = self.header_and_payload.encode("utf-8")
        for verifier in verifiers:
            if not verifier.check_header(self.header):
                continue
            if verifier.verify_signature(data, self.signature):
                logger.debug("Signature verified by %s", type(verifier).__name__)
                return True
        logger.debug(
            "No verifier accepted token with alg=%s kid=%s",
            display_algorithm(self.header.algorithm),
            self.header.key_id,
        )
        return False
