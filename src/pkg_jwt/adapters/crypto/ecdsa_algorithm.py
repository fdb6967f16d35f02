from __future__ import annotations

from typing import Any, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from jwt.utils import bytes_to_number, der_to_raw_signature, raw_to_der_signature

from ...domain.exceptions import InvalidArgumentError, SignatureFormatError
from .base import Algorithm
from .keys import require_private_key, require_public_key

# Group orders (n) of the NIST prime curves, from SEC 2.
CURVE_ORDERS = {
    ec.SECP256R1.name: int(
        "FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551", 16
    ),
    ec.SECP384R1.name: int(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
        "C7634D81F4372DDF581A0DB248B0A77AECEC196ACCC52973",
        16,
    ),
    ec.SECP521R1.name: int(
        "01FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
        "A51868783BF2F966B7FCC0148F709A5D03BB5C9B8899C47AEBB6FB71E91386409",
        16,
    ),
}


def curve_order(curve: ec.EllipticCurve) -> int:
    try:
        return CURVE_ORDERS[curve.name]
    except KeyError:
        raise InvalidArgumentError(f"Unsupported curve {curve.name}") from None


class ECDSAAlgorithm(Algorithm):
    """
    ES256/384/512.

    Tokens carry JOSE signatures (R || S, fixed width); the provider works
    with DER, so signatures are converted at the boundary. R and S are
    bounds-checked against the curve order before the provider is called.
    """

    __slots__ = ("_key_provider", "_hash", "_curve", "_number_size")

    def __init__(
        self,
        name: str,
        description: str,
        key_provider: Any,
        hash_algorithm: hashes.HashAlgorithm,
        curve: ec.EllipticCurve,
    ) -> None:
        super().__init__(name, description)
        self._key_provider = key_provider
        self._hash = hash_algorithm
        self._curve = curve
        self._number_size = (curve.key_size + 7) // 8

    @property
    def signing_key_id(self) -> Optional[str]:
        return self._key_provider.private_key_id

    @property
    def number_size(self) -> int:
        """Byte width of each of R and S in a JOSE signature."""
        return self._number_size

    def _check_curve(self, key: Any) -> None:
        if not isinstance(key, (ec.EllipticCurvePublicKey, ec.EllipticCurvePrivateKey)):
            raise InvalidArgumentError(
                f"{self.name} requires an EC key, got {type(key).__name__}"
            )
        if key.curve.name != self._curve.name:
            raise InvalidArgumentError(
                f"{self.name} requires a {self._curve.name} key, got {key.curve.name}"
            )

    def _sign(self, content: bytes) -> bytes:
        private_key = require_private_key(self._key_provider)
        self._check_curve(private_key)
        der_signature = private_key.sign(content, ec.ECDSA(self._hash))
        return der_to_raw_signature(der_signature, self._curve)

    def _verify(self, content: bytes, signature: bytes, key_id: Optional[str]) -> bool:
        public_key = require_public_key(self._key_provider, key_id)
        self._check_curve(public_key)
        self.validate_signature_structure(signature)

        der_signature = raw_to_der_signature(signature, self._curve)
        try:
            public_key.verify(der_signature, content, ec.ECDSA(self._hash))
        except InvalidSignature:
            return False
        return True

    def validate_signature_structure(self, signature: bytes) -> None:
        """
        Reject JOSE signatures that no honest signer produces.

        Raises:
            SignatureFormatError on wrong length, zero components, or a
            component that is not strictly below the curve order.
        """
        size = self._number_size
        if len(signature) != size * 2:
            raise SignatureFormatError("Invalid JOSE signature format.", algorithm=self)

        r = bytes_to_number(signature[:size])
        s = bytes_to_number(signature[size:])
        if r == 0 or s == 0:
            raise SignatureFormatError(algorithm=self)

        order = curve_order(self._curve)
        if r >= order or s >= order:
            raise SignatureFormatError(algorithm=self)
