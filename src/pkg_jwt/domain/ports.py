from __future__ import annotations

from typing import Any, Optional, Protocol, TypeVar

from .entities import Header, Payload

PublicKeyT = TypeVar("PublicKeyT", covariant=True)
PrivateKeyT = TypeVar("PrivateKeyT", covariant=True)


class KeyProvider(Protocol[PublicKeyT, PrivateKeyT]):
    """
    Port supplying key material to asymmetric algorithms.

    Keys are opaque handles the crypto provider consumes; a provider may be
    verify-only (no private key) or sign-only (no public key).
    """

    def get_public_key_by_id(self, key_id: Optional[str]) -> Optional[PublicKeyT]:
        """Public key for the token's `kid` header (may be None)."""
        ...

    @property
    def private_key(self) -> Optional[PrivateKeyT]:
        ...

    @property
    def private_key_id(self) -> Optional[str]:
        """Value written to the `kid` header when signing."""
        ...


class TokenParser(Protocol):
    """
    Port turning the decoded JSON text of a token part into the domain model.

    Implementations live in the adapters layer.
    """

    def parse_header(self, json_text: str) -> Header:
        """
        Raises:
          - JWTDecodeError on malformed or non-object JSON
        """
        ...

    def parse_payload(self, json_text: str) -> Payload:
        """
        Raises:
          - JWTDecodeError on malformed or non-object JSON
        """
        ...


def is_key_provider(candidate: Any) -> bool:
    return callable(getattr(candidate, "get_public_key_by_id", None))
