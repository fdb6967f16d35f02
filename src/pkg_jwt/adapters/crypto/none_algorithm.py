from __future__ import annotations

from typing import Optional

from .base import Algorithm


class NoneAlgorithm(Algorithm):
    """Unsecured JWS (`alg: none`): valid only with an empty signature."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("none", "none")

    def _sign(self, content: bytes) -> bytes:
        return b""

    def _verify(self, content: bytes, signature: bytes, key_id: Optional[str]) -> bool:
        return len(signature) == 0


NONE = NoneAlgorithm()
