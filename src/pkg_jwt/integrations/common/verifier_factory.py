from __future__ import annotations

from typing import Callable, Dict, Optional

from ...adapters.crypto.base import Algorithm
from ...adapters.crypto.factory import hmac256, hmac384, hmac512
from ...application.use_cases.verify import JWTVerifier, require
from ...domain.exceptions import InvalidArgumentError
from .settings import VerifierSettings

_HMAC_FACTORIES: Dict[str, Callable[[str], Algorithm]] = {
    "HS256": hmac256,
    "HS384": hmac384,
    "HS512": hmac512,
}


def algorithm_from_settings(settings: VerifierSettings) -> Algorithm:
    """
    Build an HMAC algorithm from the configured secret.

    Asymmetric algorithms need key objects, which settings do not carry.
    """
    factory = _HMAC_FACTORIES.get(settings.algorithm.upper())
    if factory is None:
        raise InvalidArgumentError(
            f"An Algorithm instance is required for {settings.algorithm}"
        )
    if not settings.secret:
        raise InvalidArgumentError(f"A secret is required for {settings.algorithm}")
    return factory(settings.secret)


def create_verifier(
        settings: VerifierSettings,
        algorithm: Optional[Algorithm] = None,
) -> JWTVerifier:
    """
    High-level factory: VerifierSettings (+ optional Algorithm) -> JWTVerifier.

    - uses `algorithm` when given, otherwise builds HS* from the secret
    - wires issuer/audience expectations and the leeway
    """
    if algorithm is None:
        algorithm = algorithm_from_settings(settings)
    elif algorithm.name.upper() != settings.algorithm.upper():
        raise InvalidArgumentError(
            f"Configured algorithm {settings.algorithm} doesn't match {algorithm.name}"
        )

    verification = require(algorithm).accept_leeway(settings.leeway)
    if settings.issuers:
        verification.with_issuer(*settings.issuers)
    if settings.audiences:
        verification.with_any_of_audience(*settings.audiences)
    if settings.ignore_issued_at:
        verification.ignore_issued_at()

    return verification.build()
