"""
Tests for token creation, decoding, verification and claims parsing.
"""

from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel

import jws_tokens as m
from jws_tokens import Header, JwtData, RawJwt, SigningAlgorithm
from jws_tokens.backends import HS256, HS384, RS256

JWTIO_HS256_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
    ".SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)
JWTIO_HS256_KEY = "your-256-bit-secret"

# RFC 7515 Appendix A.1 complete example.
RFC7515_A1_TOKEN = (
    "eyJ0eXAiOiJKV1QiLA0KICJhbGciOiJIUzI1NiJ9"
    ".eyJpc3MiOiJqb2UiLA0KICJleHAiOjEzMDA4MTkzODAsDQogImh0dHA6Ly9leGFtcGxlLmNvbS9pc19yb290Ijp0cnVlfQ"
    ".dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
)
RFC7515_A1_KEY = m.decode_bytes(
    "AyM1SysPpbyDfgZld3umj1qzKObwVMkoqQ-EstJQLr_T-1qS0gZH75aKtMN3Yj0iPS4hcgUuTwjAzZr1Z9CAow"
)


class JwtIoClaims(BaseModel):
    sub: str
    name: str
    iat: int


class AdminClaims(BaseModel):
    sub: str
    admin: bool


@dataclass
class Subject:
    sub: str


class RecordingVerifier:
    """Duck-typed JwsVerifier that records how it was used."""

    def __init__(self, accepts_header: bool, accepts_signature: bool):
        self.accepts_header = accepts_header
        self.accepts_signature = accepts_signature
        self.header_checks = 0
        self.signature_checks = 0

    def check_header(self, header: Header) -> bool:
        self.header_checks += 1
        return self.accepts_header

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        self.signature_checks += 1
        return self.accepts_signature


class TestKnownTokens:
    def test_jwtio_hs256(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)

        assert raw.header == Header(SigningAlgorithm.HS256, obj_type="JWT")
        assert raw.verify_signature(HS256(JWTIO_HS256_KEY))

        data = raw.parse(JwtIoClaims)
        assert data.claims == JwtIoClaims(sub="1234567890", name="John Doe", iat=1516239022)

    def test_rfc7515_verifies_over_received_bytes(self):
        # The header contains CRLF whitespace: a re-serialization would not verify.
        raw = RawJwt.decode(RFC7515_A1_TOKEN)

        assert raw.verify_signature(HS256(RFC7515_A1_KEY))
        assert raw.parse().claims == {
            "iss": "joe",
            "exp": 1300819380,
            "http://example.com/is_root": True,
        }

    def test_wrong_key(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        assert not raw.verify_signature(HS256("another-secret"))


class TestCreate:
    def test_sign_matches_jwtio(self):
        data = JwtData(
            header=Header(SigningAlgorithm.HS256, obj_type="JWT"),
            claims={"sub": "1234567890", "name": "John Doe", "iat": 1516239022},
        )
        assert data.sign_with(HS256(JWTIO_HS256_KEY)) == JWTIO_HS256_TOKEN

    def test_signing_input(self):
        data = JwtData.new(SigningAlgorithm.HS256, {"a": 1})
        header, payload = data.to_signing_input().split(".")
        assert m.decode_bytes(header) == b'{"alg":"HS256"}'
        assert m.decode_bytes(payload) == b'{"a":1}'

    def test_for_signer(self):
        signer = m.WithKeyId("k1", HS384(b"secret"))
        data = JwtData.for_signer(signer, Subject("s"))
        assert data.header == Header(SigningAlgorithm.HS384, key_id="k1")

        raw = RawJwt.decode(data.sign_with(signer))
        assert raw.verify_signature(signer)
        assert raw.parse(Subject).claims == Subject("s")

    def test_unserializable_claims(self):
        with pytest.raises(m.EncodeError):
            JwtData.new(SigningAlgorithm.HS256, {"a": object()}).sign_with(HS256(b"k"))


class TestDecode:
    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "...."])
    def test_not_three_segments(self, token: str):
        with pytest.raises(m.InvalidFormat):
            RawJwt.decode(token)

    def test_non_string(self):
        with pytest.raises(m.InvalidFormat):
            RawJwt.decode(b"a.b.c")  # type: ignore[arg-type]

    def test_bad_signature_encoding(self):
        header_and_payload = JWTIO_HS256_TOKEN.rpartition(".")[0]
        with pytest.raises(m.Base64DecodeError):
            RawJwt.decode(header_and_payload + ".sig=")

    def test_bad_header(self):
        with pytest.raises(m.JsonDecodeError):
            RawJwt.decode(m.encode_bytes(b"{}") + ".e30.")

    def test_payload_not_decoded_until_parse(self):
        # "!!" is not base64url; decode() must not look at the payload
        header = Header(SigningAlgorithm.HS256).encode()
        raw = RawJwt.decode(f"{header}.!!.")

        assert raw.payload == "!!"
        assert raw.signature == b""
        with pytest.raises(m.Base64DecodeError):
            raw.parse()

    def test_claims_schema_mismatch(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        with pytest.raises(m.JsonDecodeError):
            raw.parse(int)
        with pytest.raises(m.JsonDecodeError):
            raw.parse(list[Any])
        with pytest.raises(m.JsonDecodeError):
            raw.parse(AdminClaims)

    def test_parse_copies_header(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)

        copied = raw.parse()
        copied.header.key_id = "changed"
        assert raw.header.key_id is None

        owned = raw.parse_owned()
        assert owned.header is raw.header


class TestVerify:
    def test_header_mismatch_skips_signature(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        verifier = RecordingVerifier(accepts_header=False, accepts_signature=True)

        assert not raw.verify_signature(verifier)
        assert verifier.signature_checks == 0

    def test_tampered_payload(self):
        header, payload, signature = JWTIO_HS256_TOKEN.split(".")
        flipped = payload[:-1] + ("A" if payload[-1] != "A" else "B")
        raw = RawJwt.decode(f"{header}.{flipped}.{signature}")

        assert not raw.verify_signature(HS256(JWTIO_HS256_KEY))

    def test_signature_with_altered_trailing_bits_is_rejected(self):
        # "c" and "d" differ only in the two bits past the 32-byte signature
        assert JWTIO_HS256_TOKEN.endswith("c")
        altered = JWTIO_HS256_TOKEN[:-1] + "d"

        with pytest.raises(m.Base64DecodeError):
            RawJwt.decode(altered)

    def test_rs256_verifier_rejects_hs256_header(self, rsa_signer):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        assert not rsa_signer.check_header(raw.header)
        assert not raw.verify_signature(rsa_signer.public())

    def test_none_algorithm_never_verifies(self):
        token = JwtData.new(None, {"sub": "x"}).to_signing_input() + "."
        raw = RawJwt.decode(token)

        assert raw.header.algorithm is None
        assert not raw.verify_signature(HS256(b"secret"))


class TestVerifyMulti:
    def test_second_verifier_matches(self, rsa_signer):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        assert raw.verify_signature_multi([rsa_signer.public(), HS256(JWTIO_HS256_KEY)])

    def test_search_continues_after_bad_signature(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        old_key = HS256("rotated-out-secret")

        assert raw.verify_signature_multi([old_key, HS256(JWTIO_HS256_KEY)])

    def test_order_and_short_circuit(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        skipped = RecordingVerifier(accepts_header=False, accepts_signature=True)
        failing = RecordingVerifier(accepts_header=True, accepts_signature=False)
        passing = RecordingVerifier(accepts_header=True, accepts_signature=True)
        unused = RecordingVerifier(accepts_header=True, accepts_signature=True)

        assert raw.verify_signature_multi([skipped, failing, passing, unused])

        assert (skipped.header_checks, skipped.signature_checks) == (1, 0)
        assert (failing.header_checks, failing.signature_checks) == (1, 1)
        assert (passing.header_checks, passing.signature_checks) == (1, 1)
        assert (unused.header_checks, unused.signature_checks) == (0, 0)

    def test_no_verifier(self):
        raw = RawJwt.decode(JWTIO_HS256_TOKEN)
        assert not raw.verify_signature_multi([])
        assert not raw.verify_signature_multi(iter([HS256("nope"), RecordingVerifier(False, True)]))

    def test_roundtrip_mixed_algorithms(self, rsa_signer: RS256):
        token = JwtData.for_signer(rsa_signer, {"sub": "u1"}).sign_with(rsa_signer)
        raw = RawJwt.decode(token)

        assert raw.verify_signature_multi([HS256(b"k"), rsa_signer.public()])
        assert raw.parse().claims == {"sub": "u1"}
