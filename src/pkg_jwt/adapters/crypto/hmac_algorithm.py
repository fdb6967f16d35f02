from __future__ import annotations

from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from ...domain.exceptions import InvalidArgumentError
from .base import Algorithm


def secret_bytes(secret: Union[str, bytes, None]) -> bytes:
    if secret is None:
        raise InvalidArgumentError("The Secret cannot be null.")
    data = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
    if not data:
        raise InvalidArgumentError("The Secret cannot be empty.")
    return data


class HMACAlgorithm(Algorithm):
    """HS256/384/512 over a shared secret."""

    __slots__ = ("_secret", "_hash")

    def __init__(
        self,
        name: str,
        description: str,
        secret: Union[str, bytes, None],
        hash_algorithm: hashes.HashAlgorithm,
    ) -> None:
        super().__init__(name, description)
        self._secret = secret_bytes(secret)
        self._hash = hash_algorithm

    def _mac(self, content: bytes) -> hmac.HMAC:
        mac = hmac.HMAC(self._secret, self._hash)
        mac.update(content)
        return mac

    def _sign(self, content: bytes) -> bytes:
        return self._mac(content).finalize()

    def _verify(self, content: bytes, signature: bytes, key_id: Optional[str]) -> bool:
        # HMAC.verify compares in constant time
        try:
            self._mac(content).verify(signature)
        except InvalidSignature:
            return False
        return True
