from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .claims import EMPTY_CLAIM, Claim, JsonClaim, parse_epoch_seconds, primitive_content
from .constants import HeaderParam, RegisteredClaim
from .exceptions import InvalidArgumentError

Leeway = Union[int, float, timedelta]


def _freeze(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(tree))


def _string_or_none(tree: Mapping[str, Any], name: str) -> Optional[str]:
    return primitive_content(tree.get(name))


def _audience(value: Any) -> Optional[List[str]]:
    """
    Some issuers emit a bare string when there is exactly one audience,
    so both forms are accepted.
    """
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [c for c in (primitive_content(v) for v in value) if c is not None]
    return None


def leeway_seconds(leeway: Leeway) -> float:
    """Normalize a leeway and reject negative values."""
    seconds = leeway.total_seconds() if isinstance(leeway, timedelta) else leeway
    if seconds < 0:
        raise InvalidArgumentError("The leeway must be a positive value.")
    return seconds


def utc_now() -> datetime:
    """Current time truncated to whole seconds, as claims carry no fractions."""
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True, slots=True)
class Header:
    """
    JOSE header of a token.

    Registered parameters are views over `tree`, which also keeps every
    private header parameter.
    """
    tree: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tree", _freeze(self.tree))

    @property
    def algorithm(self) -> Optional[str]:
        return _string_or_none(self.tree, HeaderParam.ALGORITHM.value)

    @property
    def type(self) -> Optional[str]:
        return _string_or_none(self.tree, HeaderParam.TYPE.value)

    @property
    def content_type(self) -> Optional[str]:
        return _string_or_none(self.tree, HeaderParam.CONTENT_TYPE.value)

    @property
    def key_id(self) -> Optional[str]:
        return _string_or_none(self.tree, HeaderParam.KEY_ID.value)

    def get_header_claim(self, name: str) -> Claim:
        if name not in self.tree:
            return EMPTY_CLAIM
        return JsonClaim(self.tree[name])


@dataclass(frozen=True, slots=True)
class Payload:
    """
    Claims set of a token.

    The seven registered claims are typed views over `tree`; private
    claims stay reachable through `get_claim`.
    """
    tree: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tree", _freeze(self.tree))

    @property
    def issuer(self) -> Optional[str]:
        return _string_or_none(self.tree, RegisteredClaim.ISSUER.value)

    @property
    def subject(self) -> Optional[str]:
        return _string_or_none(self.tree, RegisteredClaim.SUBJECT.value)

    @property
    def audience(self) -> Optional[List[str]]:
        return _audience(self.tree.get(RegisteredClaim.AUDIENCE.value))

    @property
    def expires_at(self) -> Optional[datetime]:
        return parse_epoch_seconds(self.tree.get(RegisteredClaim.EXPIRES_AT.value))

    @property
    def not_before(self) -> Optional[datetime]:
        return parse_epoch_seconds(self.tree.get(RegisteredClaim.NOT_BEFORE.value))

    @property
    def issued_at(self) -> Optional[datetime]:
        return parse_epoch_seconds(self.tree.get(RegisteredClaim.ISSUED_AT.value))

    @property
    def id(self) -> Optional[str]:
        return _string_or_none(self.tree, RegisteredClaim.JWT_ID.value)

    def get_claim(self, name: str) -> Claim:
        if name not in self.tree:
            return EMPTY_CLAIM
        return JsonClaim(self.tree[name])

    @property
    def claims(self) -> Dict[str, Claim]:
        return {name: JsonClaim(value) for name, value in self.tree.items()}


@dataclass(frozen=True, slots=True)
class DecodedJWT:
    """
    A token that was split and parsed, but not necessarily verified.

    Keeps the three received base64url segments so that the signing input
    can be rebuilt byte for byte.
    """
    header: str
    payload: str
    signature: str
    jwt_header: Header
    jwt_payload: Payload

    @property
    def token(self) -> str:
        return f"{self.header}.{self.payload}.{self.signature}"

    def __str__(self) -> str:
        return self.token

    # --- Header shortcuts -------------------------------------------------

    @property
    def algorithm(self) -> Optional[str]:
        return self.jwt_header.algorithm

    @property
    def type(self) -> Optional[str]:
        return self.jwt_header.type

    @property
    def content_type(self) -> Optional[str]:
        return self.jwt_header.content_type

    @property
    def key_id(self) -> Optional[str]:
        return self.jwt_header.key_id

    def get_header_claim(self, name: str) -> Claim:
        return self.jwt_header.get_header_claim(name)

    # --- Payload shortcuts ------------------------------------------------

    @property
    def issuer(self) -> Optional[str]:
        return self.jwt_payload.issuer

    @property
    def subject(self) -> Optional[str]:
        return self.jwt_payload.subject

    @property
    def audience(self) -> Optional[List[str]]:
        return self.jwt_payload.audience

    @property
    def expires_at(self) -> Optional[datetime]:
        return self.jwt_payload.expires_at

    @property
    def not_before(self) -> Optional[datetime]:
        return self.jwt_payload.not_before

    @property
    def issued_at(self) -> Optional[datetime]:
        return self.jwt_payload.issued_at

    @property
    def id(self) -> Optional[str]:
        return self.jwt_payload.id

    def get_claim(self, name: str) -> Claim:
        return self.jwt_payload.get_claim(name)

    @property
    def claims(self) -> Dict[str, Claim]:
        return self.jwt_payload.claims

    # --- Validity ---------------------------------------------------------

    def is_expired(self, leeway: Leeway = 0, *, now: Optional[datetime] = None) -> bool:
        """
        True if `exp` has passed or `iat` lies in the future.

        The leeway (seconds or timedelta) widens both bounds to tolerate
        clock skew. Absent claims pass.

        Raises:
            InvalidArgumentError if leeway is negative.
        """
        window = timedelta(seconds=leeway_seconds(leeway))
        current = now if now is not None else utc_now()
        expires_at = self.expires_at
        issued_at = self.issued_at

        exp_valid = expires_at is None or current - window <= expires_at
        iat_valid = issued_at is None or current + window >= issued_at
        return not exp_valid or not iat_valid
