"""
pkg_jwt

Clean-architecture JSON Web Token core: decode, verify and create compact
JWS tokens signed with HMAC, RSA or ECDSA, with optional FastAPI
integration.
"""

__version__ = "0.1.0"

from .domain.claims import Claim, JsonClaim, EmptyClaim, EMPTY_CLAIM
from .domain.constants import RegisteredClaim, HeaderParam
from .domain.entities import Header, Payload, DecodedJWT
from .domain.exceptions import (
    JWTError,
    JWTVerificationError,
    JWTDecodeError,
    DecodeError,
    InvalidArgumentError,
    AlgorithmMismatchError,
    SignatureVerificationError,
    SignatureFormatError,
    TokenExpiredError,
    InvalidClaimError,
    MissingClaimError,
    IncorrectClaimError,
    JWTCreationError,
    SignatureGenerationError,
)
from .domain.ports import KeyProvider, TokenParser

from .adapters.json_parser import JSONTokenParser
from .adapters.crypto.base import Algorithm
from .adapters.crypto.hmac_algorithm import HMACAlgorithm
from .adapters.crypto.rsa_algorithm import RSAAlgorithm
from .adapters.crypto.ecdsa_algorithm import ECDSAAlgorithm
from .adapters.crypto.none_algorithm import NoneAlgorithm, NONE
from .adapters.crypto.keys import StaticKeyProvider
from .adapters.crypto.factory import (
    hmac256,
    hmac384,
    hmac512,
    rsa256,
    rsa384,
    rsa512,
    ecdsa256,
    ecdsa384,
    ecdsa512,
)

from .application.use_cases.decode import JWTDecoder, decode
from .application.use_cases.verify import JWTVerifier, Verification, require
from .application.use_cases.create import JWTCreator, create

__all__ = [
    "__version__",
    # domain core
    "Claim",
    "JsonClaim",
    "EmptyClaim",
    "EMPTY_CLAIM",
    "RegisteredClaim",
    "HeaderParam",
    "Header",
    "Payload",
    "DecodedJWT",
    "KeyProvider",
    "TokenParser",
    # exceptions
    "JWTError",
    "JWTVerificationError",
    "JWTDecodeError",
    "DecodeError",
    "InvalidArgumentError",
    "AlgorithmMismatchError",
    "SignatureVerificationError",
    "SignatureFormatError",
    "TokenExpiredError",
    "InvalidClaimError",
    "MissingClaimError",
    "IncorrectClaimError",
    "JWTCreationError",
    "SignatureGenerationError",
    # algorithms
    "Algorithm",
    "HMACAlgorithm",
    "RSAAlgorithm",
    "ECDSAAlgorithm",
    "NoneAlgorithm",
    "NONE",
    "StaticKeyProvider",
    "hmac256",
    "hmac384",
    "hmac512",
    "rsa256",
    "rsa384",
    "rsa512",
    "ecdsa256",
    "ecdsa384",
    "ecdsa512",
    # use cases
    "JWTDecoder",
    "JWTVerifier",
    "Verification",
    "JWTCreator",
    "decode",
    "require",
    "create",
    # adapters
    "JSONTokenParser",
]
