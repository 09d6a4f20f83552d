"""JWS protected header model.

Wire shape (section 4.1 of RFC 7515)::

    {"alg": "<algorithm name or 'none'>", "kid"?: str, "typ"?: str, "crit"?: [str]}

Serialization is strict: ``alg`` is always written as a bare string and the
optional parameters only when set. Deserialization is liberal: optional
parameters may be ``null`` and unknown header parameters are ignored, but the
shape of the known ones is enforced.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError

from .algorithms import SigningAlgorithm
from .codec import decode_value, encode_value
from .errors import JsonDecodeError, UnrecognizedAlgorithm

if TYPE_CHECKING:
    from .protocols import AlgorithmIdentity

type Algorithm = SigningAlgorithm | None
"""Value of the ``alg`` parameter. ``None`` stands for the unsigned ``"none"`` algorithm."""

NONE_ALGORITHM: Final[str] = "none"


def parse_algorithm(name: str) -> Algorithm:
    """Map an ``alg`` value to an Algorithm (``"none"`` becomes ``None``).

    Raises:
        UnrecognizedAlgorithm: ``name`` is neither ``"none"`` nor an enabled
            signing algorithm.
    """
    if name == NONE_ALGORITHM:
        return None
    return SigningAlgorithm.parse(name)


def algorithm_name(algorithm: Algorithm) -> str:
    """Map an Algorithm to its ``alg`` value."""
    return NONE_ALGORITHM if algorithm is None else algorithm.value


def display_algorithm(algorithm: Algorithm) -> str:
    return "<none>" if algorithm is None else str(algorithm)


class _WireHeader(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    alg: str
    kid: str | None = None
    typ: str | None = None
    crit: list[str] | None = None


@dataclass(slots=True)
class Header:
    """The JWS protected header.

    Attributes:
        algorithm: ``alg``. The algorithm the token is (or will be) signed with.
        key_id: ``kid``. Hint for which key verifies the token.
        obj_type: ``typ``. Media type of the complete token, usually "JWT".
        required_extensions: ``crit``. Header parameters the recipient must
            understand. Kept for standards compliance; see
            ``supports_required_extensions``.
    """

    algorithm: Algorithm
    key_id: str | None = None
    obj_type: str | None = None
    required_extensions: list[str] | None = None

    @classmethod
    def for_signer(cls, signer: AlgorithmIdentity) -> Header:
        """Build the header a signer recommends.

        Takes ``alg`` from ``signer.algorithm`` and ``kid`` from
        ``signer.key_id`` when the signer has one (e.g. ``WithKeyId``).
        """
        return cls(algorithm=signer.algorithm, key_id=getattr(signer, "key_id", None))

    def uses(self, algorithm: SigningAlgorithm) -> bool:
        """Whether this header declares ``algorithm``.

        A header declaring ``"none"`` never matches a signing algorithm.
        """
        return self.algorithm is not None and self.algorithm is algorithm

    def supports_required_extensions(self) -> bool:
        """Whether the ``crit`` parameter can be considered handled.

        Simplification: returns True whenever ``crit`` is present. It does not
        check the listed names against supported extensions, so callers must
        not rely on it to validate ``crit`` lists.
        """
        return self.required_extensions is not None

    def copy(self) -> Header:
        crit = None if self.required_extensions is None else list(self.required_extensions)
        return dataclasses.replace(self, required_extensions=crit)

    # ------------------------------------------------------------------
    # Wire representation
    # ------------------------------------------------------------------

    def to_json_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"alg": algorithm_name(self.algorithm)}
        if self.key_id is not None:
            data["kid"] = self.key_id
        if self.obj_type is not None:
            data["typ"] = self.obj_type
        if self.required_extensions is not None:
            data["crit"] = list(self.required_extensions)
        return data

    @classmethod
    def from_json_dict(cls, obj: Any) -> Header:
        """Build a header from decoded JSON.

        Raises:
            JsonDecodeError: ``obj`` is not an object, ``alg`` is missing or
                unrecognized, or a known parameter has the wrong type.
        """
        try:
            wire = _WireHeader.model_validate(obj)
        except ValidationError as e:
            raise JsonDecodeError(f"invalid header: {e}") from e

        try:
            algorithm = parse_algorithm(wire.alg)
        except UnrecognizedAlgorithm as e:
            raise JsonDecodeError(f"invalid header: {e}") from e

        return cls(
            algorithm=algorithm,
            key_id=wire.kid,
            obj_type=wire.typ,
            required_extensions=wire.crit,
        )

    def encode(self) -> str:
        """The base64url header segment."""
        return encode_value(self.to_json_dict())

    @classmethod
    def decode(cls, segment: str) -> Header:
        """Parse a base64url header segment.

        Raises:
            Base64DecodeError: The segment is not base64url.
            JsonDecodeError: The segment is not a valid header object.
        """
        return cls.from_json_dict(decode_value(segment))
