"""Behaviour shared by every concrete backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from ..algorithms import SigningAlgorithm
    from ..header import Header


class AlgorithmBackend:
    """Base class binding a backend to one signing algorithm.

    Subclasses set ``algorithm``. Construction fails with AlgorithmDisabled
    when that algorithm is not enabled, and ``check_header`` accepts exactly
    the headers declaring it.
    """

    algorithm: ClassVar[SigningAlgorithm]

    def __init__(self) -> None:
        self.algorithm.require_enabled()

    def check_header(self, header: Header) -> bool:
        return header.uses(self.algorithm)

    def __repr__(self) -> str:
        # Key material stays out of reprs and therefore out of logs.
        return f"{type(self).__name__}()"
