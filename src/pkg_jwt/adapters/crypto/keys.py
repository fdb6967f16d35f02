from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type

from ...domain.exceptions import InvalidArgumentError
from ...domain.ports import is_key_provider


@dataclass(frozen=True, slots=True)
class StaticKeyProvider:
    """
    KeyProvider over a fixed key pair; ignores the token's `kid`.

    At least one of the two keys is required.
    """
    public_key: Any = None
    private_key: Any = None
    private_key_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.public_key is None and self.private_key is None:
            raise InvalidArgumentError("Both provided Keys cannot be null.")

    def get_public_key_by_id(self, key_id: Optional[str]) -> Any:
        return self.public_key


def resolve_key_provider(
    key: Any,
    public_key: Any,
    private_key: Any,
    public_type: Type[Any],
    private_type: Type[Any],
) -> Any:
    """
    Normalize the accepted argument shapes into a KeyProvider.

    `key` may be a KeyProvider, a public key or a private key; a private
    key also supplies its public half. Keys of the wrong family are
    rejected up front.
    """
    if key is not None and is_key_provider(key):
        return key

    if key is not None:
        if isinstance(key, private_type):
            private_key = private_key or key
        elif isinstance(key, public_type):
            public_key = public_key or key
        else:
            raise InvalidArgumentError(
                f"Unsupported key type {type(key).__name__}; "
                f"expected {public_type.__name__} or {private_type.__name__}"
            )

    _check_type(public_key, (public_type,), "public")
    _check_type(private_key, (private_type,), "private")

    if public_key is None and private_key is not None:
        public_key = private_key.public_key()

    return StaticKeyProvider(public_key=public_key, private_key=private_key)


def _check_type(key: Any, expected: Tuple[Type[Any], ...], kind: str) -> None:
    if key is not None and not isinstance(key, expected):
        raise InvalidArgumentError(
            f"Unsupported {kind} key type {type(key).__name__}"
        )


def require_public_key(provider: Any, key_id: Optional[str]) -> Any:
    public_key = provider.get_public_key_by_id(key_id)
    if public_key is None:
        raise InvalidArgumentError("The given Public Key is null.")
    return public_key


def require_private_key(provider: Any) -> Any:
    private_key = provider.private_key
    if private_key is None:
        raise InvalidArgumentError("The given Private Key is null.")
    return private_key
