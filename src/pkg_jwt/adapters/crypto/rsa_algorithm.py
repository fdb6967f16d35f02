from __future__ import annotations

from typing import Any, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from .base import Algorithm
from .keys import require_private_key, require_public_key


class RSAAlgorithm(Algorithm):
    """RS256/384/512: RSASSA-PKCS1-v1_5 with the chosen SHA-2 digest."""

    __slots__ = ("_key_provider", "_hash")

    def __init__(
        self,
        name: str,
        description: str,
        key_provider: Any,
        hash_algorithm: hashes.HashAlgorithm,
    ) -> None:
        super().__init__(name, description)
        self._key_provider = key_provider
        self._hash = hash_algorithm

    @property
    def signing_key_id(self) -> Optional[str]:
        return self._key_provider.private_key_id

    def _sign(self, content: bytes) -> bytes:
        private_key = require_private_key(self._key_provider)
        return private_key.sign(content, padding.PKCS1v15(), self._hash)

    def _verify(self, content: bytes, signature: bytes, key_id: Optional[str]) -> bool:
        public_key = require_public_key(self._key_provider, key_id)
        try:
            public_key.verify(signature, content, padding.PKCS1v15(), self._hash)
        except InvalidSignature:
            return False
        return True
