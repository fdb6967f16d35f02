from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ...adapters.crypto.base import Algorithm
from ...domain.claims import Claim
from ...domain.constants import RegisteredClaim
from ...domain.entities import DecodedJWT, Leeway, leeway_seconds, utc_now
from ...domain.exceptions import (
    AlgorithmMismatchError,
    IncorrectClaimError,
    InvalidArgumentError,
    JWTVerificationError,
    MissingClaimError,
    TokenExpiredError,
)
from .decode import JWTDecoder

logger = logging.getLogger(__name__)

ClaimPredicate = Callable[[Claim, DecodedJWT], bool]
Clock = Callable[[], datetime]

_ISS = RegisteredClaim.ISSUER.value
_SUB = RegisteredClaim.SUBJECT.value
_AUD = RegisteredClaim.AUDIENCE.value
_EXP = RegisteredClaim.EXPIRES_AT.value
_NBF = RegisteredClaim.NOT_BEFORE.value
_IAT = RegisteredClaim.ISSUED_AT.value
_JTI = RegisteredClaim.JWT_ID.value


@dataclass(frozen=True, slots=True)
class ExpectedCheck:
    """
    One claim expectation.

    `check` receives the claim (EMPTY_CLAIM when absent), the token and
    the verification time; it returns False or raises an
    InvalidClaimError / TokenExpiredError subtype on failure.
    """
    claim_name: str
    check: Callable[[Claim, DecodedJWT, datetime], bool]

    def verify(self, jwt: DecodedJWT, now: datetime) -> None:
        claim = jwt.get_claim(self.claim_name)
        if not self.check(claim, jwt, now):
            raise IncorrectClaimError(
                f"The Claim '{self.claim_name}' value doesn't match the required one.",
                self.claim_name,
                claim,
            )


def _require_name(name: str) -> str:
    if not name:
        raise InvalidArgumentError("The Custom Claim's name can't be empty.")
    return name


def _require_values(values: Tuple[str, ...], claim_name: str) -> List[str]:
    if not values:
        raise InvalidArgumentError(f"At least one expected '{claim_name}' value is required.")
    return list(values)


def claim_predicate(value: Any) -> ClaimPredicate:
    """Equality predicate for a typed expected value; callables pass through."""
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return lambda claim, jwt: claim.as_boolean() == value
    if isinstance(value, int):
        return lambda claim, jwt: claim.as_long() == value
    if isinstance(value, float):
        return lambda claim, jwt: claim.as_double() == value
    if isinstance(value, str):
        return lambda claim, jwt: claim.as_string() == value
    if isinstance(value, datetime):
        # dates travel as whole epoch seconds
        expected = int(value.timestamp())
        return lambda claim, jwt: (
            claim.as_instant() is not None
            and int(claim.as_instant().timestamp()) == expected
        )
    if callable(value):
        return value
    raise InvalidArgumentError(
        f"Unsupported expected value type {type(value).__name__}"
    )


class Verification:
    """
    Builder collecting the expectations a JWTVerifier enforces.

    Usage:

        verifier = (
            require(hmac256("secret"))
            .with_issuer("auth0")
            .with_audience("api")
            .accept_leeway(5)
            .build()
        )
        jwt = verifier.verify(token)

    The time window (`exp`, `nbf`, `iat`) is always checked; claims that
    are absent from the token pass.
    """

    def __init__(self, algorithm: Algorithm) -> None:
        if algorithm is None:
            raise InvalidArgumentError("The Algorithm cannot be null.")
        self._algorithm = algorithm
        self._checks: List[ExpectedCheck] = []
        self._default_leeway: float = 0
        self._custom_leeway: Dict[str, float] = {}
        self._ignore_issued_at = False

    # ------------------------------------------------------------------ #
    # Registered claims
    # ------------------------------------------------------------------ #

    def with_issuer(self, *issuers: str) -> "Verification":
        expected = _require_values(issuers, _ISS)

        def check(claim: Claim, jwt: DecodedJWT) -> bool:
            if claim.as_string() not in expected:
                raise IncorrectClaimError(
                    "The Claim 'iss' value doesn't match the required issuer.",
                    _ISS,
                    claim,
                )
            return True

        return self._add_check(_ISS, check)

    def with_subject(self, subject: str) -> "Verification":
        return self._add_check(_SUB, lambda claim, jwt: claim.as_string() == subject)

    def with_audience(self, *audience: str) -> "Verification":
        """The token audience must contain every given value."""
        expected = _require_values(audience, _AUD)
        return self._add_audience_check(lambda actual: all(a in actual for a in expected))

    def with_any_of_audience(self, *audience: str) -> "Verification":
        """The token audience must contain at least one of the given values."""
        expected = _require_values(audience, _AUD)
        return self._add_audience_check(lambda actual: any(a in actual for a in expected))

    def with_jwt_id(self, jwt_id: str) -> "Verification":
        return self._add_check(_JTI, lambda claim, jwt: claim.as_string() == jwt_id)

    # ------------------------------------------------------------------ #
    # Time window
    # ------------------------------------------------------------------ #

    def accept_leeway(self, leeway: Leeway) -> "Verification":
        """Default leeway for `exp`, `nbf` and `iat`."""
        self._default_leeway = leeway_seconds(leeway)
        return self

    def accept_expires_at(self, leeway: Leeway) -> "Verification":
        self._custom_leeway[_EXP] = leeway_seconds(leeway)
        return self

    def accept_not_before(self, leeway: Leeway) -> "Verification":
        self._custom_leeway[_NBF] = leeway_seconds(leeway)
        return self

    def accept_issued_at(self, leeway: Leeway) -> "Verification":
        self._custom_leeway[_IAT] = leeway_seconds(leeway)
        return self

    def ignore_issued_at(self) -> "Verification":
        self._ignore_issued_at = True
        return self

    def get_leeway_for(self, name: str) -> float:
        return self._custom_leeway.get(name, self._default_leeway)

    # ------------------------------------------------------------------ #
    # Custom claims
    # ------------------------------------------------------------------ #

    def with_claim(self, name: str, value: Union[bool, int, float, str, datetime, ClaimPredicate]) -> "Verification":
        """
        Expect a claim to equal `value`, or to satisfy `value(claim, jwt)`
        when a callable is given.
        """
        return self._add_check(_require_name(name), claim_predicate(value))

    def with_claim_presence(self, name: str) -> "Verification":
        # presence is enforced by _add_check itself
        return self._add_check(_require_name(name), lambda claim, jwt: True)

    def with_null_claim(self, name: str) -> "Verification":
        return self._add_check(_require_name(name), lambda claim, jwt: claim.is_null)

    def with_array_claim(self, name: str, *items: Any) -> "Verification":
        """The claim must be an array containing every given item."""
        _require_name(name)

        def check(claim: Claim, jwt: DecodedJWT) -> bool:
            actual = claim.as_list(lambda item: item)
            return all(item in actual for item in items)

        return self._add_check(name, check)

    # ------------------------------------------------------------------ #
    # Build
    # ------------------------------------------------------------------ #

    def build(self, clock: Optional[Clock] = None) -> "JWTVerifier":
        """
        Freeze the expectations into a reusable, thread-safe verifier.

        `clock` returns the current aware datetime; it is called once per
        verification.
        """
        checks = list(self._checks)
        checks.append(self._expires_at_check(self.get_leeway_for(_EXP)))
        checks.append(self._not_after_now_check(_NBF, self.get_leeway_for(_NBF)))
        if not self._ignore_issued_at:
            checks.append(self._not_after_now_check(_IAT, self.get_leeway_for(_IAT)))

        return JWTVerifier(
            algorithm=self._algorithm,
            checks=tuple(checks),
            clock=clock or utc_now,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _add_check(self, name: str, predicate: ClaimPredicate) -> "Verification":
        def check(claim: Claim, jwt: DecodedJWT, now: datetime) -> bool:
            if claim.is_missing:
                raise MissingClaimError(name)
            return predicate(claim, jwt)

        self._checks.append(ExpectedCheck(name, check))
        return self

    def _add_audience_check(self, matches: Callable[[List[str]], bool]) -> "Verification":
        def check(claim: Claim, jwt: DecodedJWT) -> bool:
            actual = jwt.audience
            if actual is None or not matches(actual):
                raise IncorrectClaimError(
                    "The Claim 'aud' value doesn't contain the required audience.",
                    _AUD,
                    claim,
                )
            return True

        return self._add_check(_AUD, check)

    @staticmethod
    def _expires_at_check(leeway: float) -> ExpectedCheck:
        window = timedelta(seconds=leeway)

        def check(claim: Claim, jwt: DecodedJWT, now: datetime) -> bool:
            expires_at = claim.as_instant()
            if expires_at is not None and now - window > expires_at:
                raise TokenExpiredError(
                    f"The Token has expired on {expires_at.isoformat()}.",
                    expires_at,
                )
            return True

        return ExpectedCheck(_EXP, check)

    @staticmethod
    def _not_after_now_check(name: str, leeway: float) -> ExpectedCheck:
        window = timedelta(seconds=leeway)

        def check(claim: Claim, jwt: DecodedJWT, now: datetime) -> bool:
            value = claim.as_instant()
            if value is not None and now + window < value:
                raise IncorrectClaimError(
                    f"The Token can't be used before {value.isoformat()}.",
                    name,
                    claim,
                )
            return True

        return ExpectedCheck(name, check)


@dataclass(frozen=True, slots=True)
class JWTVerifier:
    """
    Application use case: token -> verified DecodedJWT.

    Stages run in order and the first failure aborts:
    decode -> algorithm match -> signature -> claim expectations.
    """

    algorithm: Algorithm
    checks: Tuple[ExpectedCheck, ...] = ()
    clock: Clock = utc_now
    decoder: JWTDecoder = field(default_factory=JWTDecoder)

    def verify(self, token: Union[str, DecodedJWT]) -> DecodedJWT:
        """
        Raises:
            JWTDecodeError
            AlgorithmMismatchError
            SignatureVerificationError / SignatureFormatError
            TokenExpiredError
            InvalidClaimError subtypes
        """
        try:
            jwt = token if isinstance(token, DecodedJWT) else self.decoder.execute(token)
            self._verify_algorithm(jwt)
            self.algorithm.verify(jwt)
            self._verify_claims(jwt)
        except JWTVerificationError as exc:
            logger.debug("Token rejected by %s verifier: %s", self.algorithm.name, type(exc).__name__)
            raise
        return jwt

    def _verify_algorithm(self, jwt: DecodedJWT) -> None:
        if jwt.algorithm != self.algorithm.name:
            raise AlgorithmMismatchError(
                "The provided Algorithm doesn't match the one defined in the JWT's Header."
            )

    def _verify_claims(self, jwt: DecodedJWT) -> None:
        now = self.clock()
        for expected in self.checks:
            expected.verify(jwt, now)


def require(algorithm: Algorithm) -> Verification:
    """Start building a verifier for tokens signed with `algorithm`."""
    return Verification(algorithm)

