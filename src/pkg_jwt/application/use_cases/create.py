from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from jwt.utils import base64url_encode

from ...adapters.crypto.base import Algorithm
from ...domain.constants import HeaderParam, RegisteredClaim
from ...domain.exceptions import InvalidArgumentError, JWTCreationError


def _to_json_value(value: Any) -> Any:
    """
    Convert a claim value to its JSON form.

    datetimes become whole epoch seconds; tuples become arrays; map keys
    must be strings.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, Mapping):
        result: Dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidArgumentError("Map keys must be Strings")
            result[key] = _to_json_value(item)
        return result
    raise InvalidArgumentError(
        "Claim values must only be of types dict, list, bool, int, float, "
        f"str, datetime and None; got {type(value).__name__}"
    )


def _encode_part(claims: Mapping[str, Any]) -> str:
    try:
        text = json.dumps(claims, separators=(",", ":"), allow_nan=False)
    except ValueError as exc:
        raise JWTCreationError(
            "Some of the Claims couldn't be converted to a valid JSON format."
        ) from exc
    return base64url_encode(text.encode("utf-8")).decode("ascii")


class JWTCreator:
    """
    Builder for signed compact tokens.

        token = (
            create()
            .with_issuer("auth0")
            .with_expires_at(datetime.now(timezone.utc) + timedelta(minutes=5))
            .with_claim("admin", True)
            .sign(hmac256("secret"))
        )

    Values are validated as they are added, so a rejected value leaves the
    builder unchanged.
    """

    def __init__(self) -> None:
        self._header: Dict[str, Any] = {}
        self._payload: Dict[str, Any] = {}

    # --- Header -----------------------------------------------------------

    def with_header(self, claims: Optional[Mapping[str, Any]]) -> "JWTCreator":
        if claims:
            converted = {_name(k): _to_json_value(v) for k, v in claims.items()}
            self._header.update(converted)
        return self

    def with_key_id(self, key_id: Optional[str]) -> "JWTCreator":
        self._header[HeaderParam.KEY_ID.value] = key_id
        return self

    # --- Registered claims --------------------------------------------------

    def with_issuer(self, issuer: Optional[str]) -> "JWTCreator":
        return self._set(RegisteredClaim.ISSUER.value, issuer)

    def with_subject(self, subject: Optional[str]) -> "JWTCreator":
        return self._set(RegisteredClaim.SUBJECT.value, subject)

    def with_audience(self, *audience: str) -> "JWTCreator":
        """A single audience is written as a string, several as an array."""
        value: Any = audience[0] if len(audience) == 1 else list(audience)
        return self._set(RegisteredClaim.AUDIENCE.value, value)

    def with_expires_at(self, expires_at: Optional[datetime]) -> "JWTCreator":
        return self._set(RegisteredClaim.EXPIRES_AT.value, expires_at)

    def with_not_before(self, not_before: Optional[datetime]) -> "JWTCreator":
        return self._set(RegisteredClaim.NOT_BEFORE.value, not_before)

    def with_issued_at(self, issued_at: Optional[datetime]) -> "JWTCreator":
        return self._set(RegisteredClaim.ISSUED_AT.value, issued_at)

    def with_jwt_id(self, jwt_id: Optional[str]) -> "JWTCreator":
        return self._set(RegisteredClaim.JWT_ID.value, jwt_id)

    # --- Private claims -----------------------------------------------------

    def with_claim(self, name: str, value: Any) -> "JWTCreator":
        return self._set(_name(name), value)

    def with_null_claim(self, name: str) -> "JWTCreator":
        return self._set(_name(name), None)

    def with_payload(self, claims: Mapping[str, Any]) -> "JWTCreator":
        # convert everything first so a bad value adds nothing
        converted = {_name(k): _to_json_value(v) for k, v in claims.items()}
        self._payload.update(converted)
        return self

    # --- Sign ---------------------------------------------------------------

    def sign(self, algorithm: Algorithm) -> str:
        """
        Raises:
            InvalidArgumentError if `algorithm` is missing or has no signing key
            JWTCreationError / SignatureGenerationError
        """
        if algorithm is None:
            raise InvalidArgumentError("The Algorithm cannot be null.")

        header = dict(self._header)
        header[HeaderParam.ALGORITHM.value] = algorithm.name
        header.setdefault(HeaderParam.TYPE.value, "JWT")
        if algorithm.signing_key_id is not None:
            header[HeaderParam.KEY_ID.value] = algorithm.signing_key_id

        header_part = _encode_part(header)
        payload_part = _encode_part(self._payload)
        signature = algorithm.sign(header_part, payload_part)
        signature_part = base64url_encode(signature).decode("ascii")
        return f"{header_part}.{payload_part}.{signature_part}"

    def _set(self, name: str, value: Any) -> "JWTCreator":
        self._payload[name] = _to_json_value(value)
        return self


def _name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Claim names must be non-empty strings")
    return name


def create() -> JWTCreator:
    return JWTCreator()
