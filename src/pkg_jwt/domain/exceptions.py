from __future__ import annotations

from datetime import datetime
from typing import Any, Optional


class JWTError(Exception):
    """Root of every error raised by pkg_jwt."""
    pass


class JWTVerificationError(JWTError):
    """Raised when a token cannot be trusted."""
    pass


class JWTDecodeError(JWTVerificationError):
    """Raised when a token is malformed (part count, base64url, JSON)."""
    pass


DecodeError = JWTDecodeError


class InvalidArgumentError(JWTError, ValueError):
    """Raised on API misuse: no usable key, empty secret, negative leeway."""
    pass


class AlgorithmMismatchError(JWTVerificationError):
    """Raised when the header `alg` differs from the verifying algorithm."""
    pass


class SignatureVerificationError(JWTVerificationError):
    """Raised when the signature does not match the signing input."""

    def __init__(self, algorithm: Any = None, message: Optional[str] = None) -> None:
        if message is None:
            message = (
                "The Token's Signature resulted invalid when verified "
                f"using the Algorithm: {algorithm}"
            )
        super().__init__(message)
        self.algorithm = algorithm


class SignatureFormatError(SignatureVerificationError):
    """Raised when signature bytes are structurally invalid (e.g. ECDSA R/S out of range)."""

    def __init__(self, message: str = "Invalid signature format.", algorithm: Any = None) -> None:
        super().__init__(algorithm=algorithm, message=message)


class TokenExpiredError(JWTVerificationError):
    """Raised when the `exp` claim lies in the past."""

    def __init__(self, message: str, expired_on: Optional[datetime] = None) -> None:
        super().__init__(message)
        self.expired_on = expired_on


class InvalidClaimError(JWTVerificationError):
    """Base for claim expectation failures."""
    pass


class MissingClaimError(InvalidClaimError):
    """Raised when an expected claim is absent from the token."""

    def __init__(self, claim_name: str) -> None:
        super().__init__(f"The Claim '{claim_name}' is not present in the JWT.")
        self.claim_name = claim_name


class IncorrectClaimError(InvalidClaimError):
    """Raised when a claim is present but does not hold the expected value."""

    def __init__(self, message: str, claim_name: str, claim: Any = None) -> None:
        super().__init__(message)
        self.claim_name = claim_name
        self.claim = claim


class JWTCreationError(JWTError):
    """Raised when a token cannot be built."""
    pass


class SignatureGenerationError(JWTCreationError):
    """Raised when the crypto provider fails to produce a signature."""

    def __init__(self, algorithm: Any) -> None:
        super().__init__(
            "The Token's Signature couldn't be generated when signing "
            f"using the Algorithm: {algorithm}"
        )
        self.algorithm = algorithm
