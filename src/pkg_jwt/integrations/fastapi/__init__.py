from __future__ import annotations

from typing import Optional

from .deps import FastAPIJWTAuth
from .security import bearer_scheme, extract_token_from_request
from ..common.settings import VerifierSettings, settings_from_env
from ..common.verifier_factory import create_verifier
from ...adapters.crypto.base import Algorithm


def create_fastapi_auth(
    settings: Optional[VerifierSettings] = None,
    algorithm: Optional[Algorithm] = None,
) -> FastAPIJWTAuth:
    """
    High-level helper for FastAPI apps:

    - Reads VerifierSettings from the environment unless given
    - Builds a JWTVerifier (HS* from the secret, or the given Algorithm)
    - Wraps it in FastAPIJWTAuth, exposing dependencies like:

        jwt_auth.get_current_token
        jwt_auth.get_optional_token
        jwt_auth.require_claim(...)
    """
    settings = settings or settings_from_env()
    verifier = create_verifier(settings, algorithm)
    return FastAPIJWTAuth(verifier=verifier, cookie_name=settings.cookie_name)


__all__ = [
    "FastAPIJWTAuth",
    "bearer_scheme",
    "create_fastapi_auth",
    "extract_token_from_request",
]
