"""
Factory functions for the supported JWS algorithms.

    hmac256(secret)                         HS256 / HmacSHA256
    rsa256(key) / rsa256(public_key=...)    RS256 / SHA256withRSA
    ecdsa256(key_provider)                  ES256 / SHA256withECDSA

`key` may be a KeyProvider, a public key or a private key object from
`cryptography`. Loading PEM/DER/JWK material is left to the caller.
"""

from __future__ import annotations

from typing import Any, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .base import Algorithm
from .ecdsa_algorithm import ECDSAAlgorithm
from .hmac_algorithm import HMACAlgorithm
from .keys import resolve_key_provider
from .rsa_algorithm import RSAAlgorithm

Secret = Union[str, bytes]


# --- HMAC ----------------------------------------------------------------


def hmac256(secret: Secret) -> Algorithm:
    return HMACAlgorithm("HS256", "HmacSHA256", secret, hashes.SHA256())


def hmac384(secret: Secret) -> Algorithm:
    return HMACAlgorithm("HS384", "HmacSHA384", secret, hashes.SHA384())


def hmac512(secret: Secret) -> Algorithm:
    return HMACAlgorithm("HS512", "HmacSHA512", secret, hashes.SHA512())


# --- RSA -----------------------------------------------------------------


def _rsa(name: str, description: str, hash_algorithm: hashes.HashAlgorithm,
         key: Any, public_key: Any, private_key: Any) -> Algorithm:
    provider = resolve_key_provider(
        key, public_key, private_key, rsa.RSAPublicKey, rsa.RSAPrivateKey
    )
    return RSAAlgorithm(name, description, provider, hash_algorithm)


def rsa256(key: Any = None, *, public_key: Any = None, private_key: Any = None) -> Algorithm:
    return _rsa("RS256", "SHA256withRSA", hashes.SHA256(), key, public_key, private_key)


def rsa384(key: Any = None, *, public_key: Any = None, private_key: Any = None) -> Algorithm:
    return _rsa("RS384", "SHA384withRSA", hashes.SHA384(), key, public_key, private_key)


def rsa512(key: Any = None, *, public_key: Any = None, private_key: Any = None) -> Algorithm:
    return _rsa("RS512", "SHA512withRSA", hashes.SHA512(), key, public_key, private_key)


# --- ECDSA ---------------------------------------------------------------


def _ecdsa(name: str, description: str, hash_algorithm: hashes.HashAlgorithm,
           curve: ec.EllipticCurve, key: Any, public_key: Any, private_key: Any) -> Algorithm:
    provider = resolve_key_provider(
        key, public_key, private_key,
        ec.EllipticCurvePublicKey, ec.EllipticCurvePrivateKey,
    )
    return ECDSAAlgorithm(name, description, provider, hash_algorithm, curve)


def ecdsa256(key: Any = None, *, public_key: Any = None, private_key: Any = None) -> Algorithm:
    return _ecdsa("ES256", "SHA256withECDSA", hashes.SHA256(), ec.SECP256R1(),
                  key, public_key, private_key)


def ecdsa384(key: Any = None, *, public_key: Any = None, private_key: Any = None) -> Algorithm:
    return _ecdsa("ES384", "SHA384withECDSA", hashes.SHA384(), ec.SECP384R1(),
                  key, public_key, private_key)


def ecdsa512(key: Any = None, *, public_key: Any = None, private_key: Any = None) -> Algorithm:
    return _ecdsa("ES512", "SHA512withECDSA", hashes.SHA512(), ec.SECP521R1(),
                  key, public_key, private_key)
