from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from ...application.use_cases.verify import JWTVerifier, claim_predicate
from ...domain.entities import DecodedJWT
from ...domain.exceptions import InvalidArgumentError, JWTVerificationError, TokenExpiredError
from .security import DEFAULT_COOKIE_NAME, bearer_scheme, extract_token_from_request


@dataclass(slots=True)
class FastAPIJWTAuth:
    """
    FastAPI integration for pkg_jwt.

    Wraps a framework-agnostic JWTVerifier in FastAPI dependencies:

        jwt_auth = create_fastapi_auth()

        @app.get("/me")
        async def me(jwt: DecodedJWT = Depends(jwt_auth.get_current_token)):
            return {"sub": jwt.subject}

        @app.get("/admin")
        async def admin(jwt: DecodedJWT = Depends(jwt_auth.require_claim("admin", True))):
            ...
    """

    verifier: JWTVerifier
    cookie_name: str = DEFAULT_COOKIE_NAME

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_current_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> DecodedJWT:
        """Dependency: require a verified token."""
        token = extract_token_from_request(request, credentials, self.cookie_name)
        try:
            return self.verifier.verify(token)
        except TokenExpiredError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token expired",
            ) from exc
        except JWTVerificationError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exc),
            ) from exc
        except InvalidArgumentError as exc:
            # no key for the token's kid
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="No key available to verify the token",
            ) from exc

    async def get_optional_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> DecodedJWT | None:
        """Dependency: verified token, or None for anonymous/invalid requests."""
        try:
            token = extract_token_from_request(request, credentials, self.cookie_name)
        except HTTPException:
            return None

        try:
            return self.verifier.verify(token)
        except (JWTVerificationError, InvalidArgumentError):
            return None

    # ------------------------------------------------------------------ #
    # Claim dependency factories
    # ------------------------------------------------------------------ #

    def require_claim(self, name: str, value: Any) -> Callable:
        """
        Dependency factory: the verified token must carry `name` equal to
        `value` (or satisfying it, when `value` is a predicate).
        """
        predicate = claim_predicate(value)

        async def dependency(
                jwt: DecodedJWT = Depends(self.get_current_token),
        ) -> DecodedJWT:
            claim = jwt.get_claim(name)
            if claim.is_missing or not predicate(claim, jwt):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"The Claim '{name}' doesn't match the required value.",
                )
            return jwt

        return dependency
