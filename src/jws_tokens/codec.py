"""Base64url and JSON encoding used by every token segment.

RFC 7515 prescribes base64 with the URL- and filename-safe alphabet of
RFC 4648 section 5, all trailing ``=`` omitted and no line breaks, whitespace
or other characters. Encoding is delegated to PyJWT's helpers; decoding adds
the strictness PyJWT leaves out (``base64.urlsafe_b64decode`` silently skips
characters outside the alphabet).

JSON values go through pydantic: ``pydantic_core.to_json`` gives compact,
order-preserving output for dicts, dataclasses and models alike, and a
``TypeAdapter`` both parses and validates on the way back in.
"""

from __future__ import annotations

import binascii
import re
from functools import lru_cache
from typing import Any

import pydantic_core
from jwt.utils import base64url_decode, base64url_encode
from pydantic import TypeAdapter

from .errors import Base64DecodeError, EncodeError, JsonDecodeError

_BASE64URL_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode_bytes(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64url_encode(data).decode("ascii")


def decode_bytes(text: str | bytes) -> bytes:
    """Decode unpadded base64url text.

    Raises:
        Base64DecodeError: ``text`` contains padding, whitespace or characters
            outside the URL-safe alphabet, has an impossible length, or
            sets bits past the end of the data.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as e:
            raise Base64DecodeError("invalid base64: non-ASCII input") from e

    if not _BASE64URL_ALPHABET.fullmatch(text):
        raise Base64DecodeError("invalid base64: unexpected character or padding")
    # 4n+1 characters cannot encode a whole number of bytes
    if len(text) % 4 == 1:
        raise Base64DecodeError("invalid base64: invalid length")

    try:
        out = base64url_decode(text)
    except (binascii.Error, ValueError) as e:
        raise Base64DecodeError(f"invalid base64: {e}") from e

    # unused trailing bits must be zero, so each byte string has one encoding
    if encode_bytes(out) != text:
        raise Base64DecodeError("invalid base64: non-canonical encoding")
    return out


def encode_value(value: Any) -> str:
    """Serialize ``value`` to compact JSON, then base64url-encode it.

    Raises:
        EncodeError: ``value`` (or something nested in it) is not serializable.
    """
    try:
        data = pydantic_core.to_json(value)
    except pydantic_core.PydanticSerializationError as e:
        raise EncodeError(f"could not encode value: {e}") from e
    return encode_bytes(data)


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def decode_value(text: str | bytes, target: Any = Any) -> Any:
    """Decode a base64url JSON segment and validate it against ``target``.

    Args:
        text: The encoded segment.
        target: Any type pydantic can validate (``dict``, a dataclass, a
            ``BaseModel`` subclass, a ``TypedDict``...). Defaults to ``Any``,
            which returns plain JSON values.

    Raises:
        Base64DecodeError: The segment is not valid base64url.
        JsonDecodeError: The bytes are not JSON or do not match ``target``.
    """
    raw = decode_bytes(text)
    try:
        return _adapter(target).validate_json(raw)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        raise JsonDecodeError(f"invalid json: {e}") from e
