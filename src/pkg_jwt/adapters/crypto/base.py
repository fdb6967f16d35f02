from __future__ import annotations

import binascii
import re
from abc import ABC, abstractmethod
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from jwt.utils import base64url_decode

from ...domain.entities import DecodedJWT
from ...domain.exceptions import (
    InvalidArgumentError,
    SignatureGenerationError,
    SignatureVerificationError,
)

Segment = Union[str, bytes]

# Unpadded base64url alphabet shared by all three token segments.
BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]*")

# Errors the crypto provider raises for keys or signatures it cannot use.
PROVIDER_ERRORS = (InvalidSignature, ValueError, TypeError)


def _as_bytes(segment: Segment) -> bytes:
    return segment.encode("utf-8") if isinstance(segment, str) else segment


def signing_input(header: Segment, payload: Segment) -> bytes:
    """`header.payload` exactly as it appears in the compact token."""
    return _as_bytes(header) + b"." + _as_bytes(payload)


class Algorithm(ABC):
    """
    A JWS signing/verification unit.

    `name` is the JWT `alg` value matched against token headers;
    `description` is the provider-level identifier (e.g. "SHA256withRSA").
    Instances hold no per-call state and can be shared across threads.
    """

    __slots__ = ("_name", "_description")

    def __init__(self, name: str, description: str) -> None:
        self._name = name
        self._description = description

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def signing_key_id(self) -> Optional[str]:
        """Key id to advertise in the `kid` header when signing."""
        return None

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, description={self._description!r})"

    # ------------------------------------------------------------------ #
    # Signing
    # ------------------------------------------------------------------ #

    def sign(self, header: Segment, payload: Segment) -> bytes:
        """Sign the base64url header and payload segments."""
        return self.sign_content(signing_input(header, payload))

    def sign_content(self, content: bytes) -> bytes:
        """
        Raises:
            InvalidArgumentError if no private key/secret is available
            SignatureGenerationError if the provider fails
        """
        try:
            return self._sign(content)
        except InvalidArgumentError:
            raise
        except PROVIDER_ERRORS as exc:
            raise SignatureGenerationError(self) from exc

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify_signature(
        self,
        header: Segment,
        payload: Segment,
        signature: bytes,
        key_id: Optional[str] = None,
    ) -> bool:
        """
        Check `signature` over `header.payload`.

        Returns False on a cryptographic mismatch. Structurally invalid
        signatures raise SignatureFormatError; a missing key raises
        InvalidArgumentError.
        """
        return self._verify(signing_input(header, payload), signature, key_id)

    def verify(self, jwt: DecodedJWT) -> None:
        """
        Verify the signature segment of a decoded token.

        Raises:
            SignatureVerificationError (or SignatureFormatError)
            InvalidArgumentError if no public key/secret is available
        """
        try:
            if not BASE64URL_RE.fullmatch(jwt.signature):
                raise ValueError("Illegal character in base64url segment")
            signature = base64url_decode(jwt.signature)
        except (binascii.Error, ValueError) as exc:
            raise SignatureVerificationError(self) from exc

        try:
            valid = self.verify_signature(jwt.header, jwt.payload, signature, jwt.key_id)
        except (SignatureVerificationError, InvalidArgumentError):
            raise
        except PROVIDER_ERRORS as exc:
            raise SignatureVerificationError(self) from exc

        if not valid:
            raise SignatureVerificationError(self)

    # ------------------------------------------------------------------ #
    # Provider calls
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _sign(self, content: bytes) -> bytes:
        ...

    @abstractmethod
    def _verify(self, content: bytes, signature: bytes, key_id: Optional[str]) -> bool:
        ...
