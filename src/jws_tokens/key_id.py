"""Key-id decorator for signers and verifiers.

WithKeyId adds one header constraint on top of any verifier: the token's
``kid`` must equal the configured key id. Everything else is delegated to the
wrapped object, so the decorator composes with every backend without
touching it.

Example:
    ```python
    current = WithKeyId("2024-10", HS256(current_secret))
    previous = WithKeyId("2024-04", HS256(previous_secret))

    token = JwtData.for_signer(current, claims).sign_with(current)

    raw = RawJwt.decode(token)
    assert raw.verify_signature_multi([previous, current])
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .algorithms import SigningAlgorithm
    from .header import Header

logger = logging.getLogger(__name__)


@dataclass
class WithKeyId[InnerT]:
    """Wraps a signer and/or verifier with a required key id.

    Verification:
        - Header without ``kid``: returns ``accept_missing_key_id``. The
          inner header check is not consulted here, so an accepted header
          may name any algorithm; ``verify_signature`` still has to pass.
        - ``kid`` different from ``key_id``: rejected.
        - ``kid`` equal to ``key_id``: delegated to ``inner.check_header``.

    Signing is passed straight through; the decorator never writes the key id
    into outgoing headers itself. Use ``Header.for_signer`` (or
    ``JwtData.for_signer``) to build a header carrying it.

    Attributes:
        key_id: Expected ``kid`` value.
        inner: The wrapped signer/verifier.
        accept_missing_key_id: Policy for headers without ``kid``. Default
            False, i.e. the key id is required.
    """

    key_id: str
    inner: InnerT
    accept_missing_key_id: bool = False

    @classmethod
    def accept_missing(cls, key_id: str, inner: InnerT) -> WithKeyId[InnerT]:
        """Build a wrapper that also accepts headers without ``kid``."""
        return cls(key_id=key_id, inner=inner, accept_missing_key_id=True)

    @property
    def algorithm(self) -> SigningAlgorithm:
        inner: Any = self.inner
        return inner.algorithm

    def check_header(self, header: Header) -> bool:
        if header.key_id is None:
            return self.accept_missing_key_id

        if header.key_id != self.key_id:
            logger.debug("Key id mismatch (expected %s)", self.key_id)
            return False

        inner: Any = self.inner
        return inner.check_header(header)

    def verify_signature(self, data: bytes, signature: bytes) -> bool:
        inner: Any = self.inner
        return inner.verify_signature(data, signature)

    def sign(self, data: bytes) -> bytes:
        inner: Any = self.inner
        return inner.sign(data)
