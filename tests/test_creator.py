# tests/test_creator.py
import math
from datetime import datetime, timezone

import jwt as pyjwt
import pytest

from pkg_jwt import NONE, create, decode, hmac256, require
from pkg_jwt.domain.exceptions import InvalidArgumentError, JWTCreationError

SECRET = "a-sufficiently-long-shared-secret-for-hs256-tokens"


def test_header_defaults():
    jwt = decode(create().sign(hmac256(SECRET)))

    assert jwt.algorithm == "HS256"
    assert jwt.type == "JWT"
    assert jwt.key_id is None


def test_custom_header_values():
    token = (
        create()
        .with_header({"typ": "at+jwt", "alg": "ignored", "extra": [1, 2]})
        .with_key_id("key-1")
        .sign(hmac256(SECRET))
    )
    jwt = decode(token)

    # alg always reflects the signing algorithm
    assert jwt.algorithm == "HS256"
    assert jwt.type == "at+jwt"
    assert jwt.key_id == "key-1"
    assert jwt.get_header_claim("extra").as_list(int) == [1, 2]


def test_registered_claims():
    expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)
    token = (
        create()
        .with_issuer("auth0")
        .with_subject("user-1")
        .with_audience("api")
        .with_expires_at(expires_at)
        .with_not_before(datetime(2020, 1, 1, tzinfo=timezone.utc))
        .with_issued_at(datetime(2020, 1, 1, tzinfo=timezone.utc))
        .with_jwt_id("jti-1")
        .sign(hmac256(SECRET))
    )
    jwt = decode(token)

    assert jwt.issuer == "auth0"
    assert jwt.subject == "user-1"
    assert jwt.get_claim("aud").as_string() == "api"
    assert jwt.audience == ["api"]
    assert jwt.expires_at == expires_at
    assert jwt.get_claim("exp").as_long() == int(expires_at.timestamp())
    assert jwt.id == "jti-1"


def test_multiple_audiences_are_written_as_array():
    jwt = decode(create().with_audience("api", "web").sign(NONE))
    assert jwt.get_claim("aud").as_list(str) == ["api", "web"]


def test_private_claims():
    token = (
        create()
        .with_claim("admin", True)
        .with_claim("roles", ("a", "b"))
        .with_claim("profile", {"since": datetime(2022, 3, 15, tzinfo=timezone.utc)})
        .with_null_claim("nothing")
        .with_payload({"count": 3})
        .sign(NONE)
    )
    jwt = decode(token)

    assert jwt.get_claim("admin").as_boolean() is True
    assert jwt.get_claim("roles").as_list(str) == ["a", "b"]
    assert jwt.get_claim("profile").as_object(lambda value: value["since"]) == 1647302400
    assert jwt.get_claim("nothing").is_null
    assert jwt.get_claim("count").as_int() == 3


def test_invalid_values_are_rejected():
    with pytest.raises(InvalidArgumentError):
        create().with_claim("bad", object())

    with pytest.raises(InvalidArgumentError, match="Map keys must be Strings"):
        create().with_claim("bad", {1: "x"})

    with pytest.raises(InvalidArgumentError):
        create().with_claim("", "x")


def test_rejected_payload_adds_nothing():
    builder = create()
    with pytest.raises(InvalidArgumentError):
        builder.with_payload({"ok": 1, "bad": object()})

    assert decode(builder.sign(NONE)).claims == {}


def test_non_finite_numbers_cannot_be_encoded():
    with pytest.raises(JWTCreationError):
        create().with_claim("ratio", math.nan).sign(hmac256(SECRET))


def test_sign_requires_algorithm():
    with pytest.raises(InvalidArgumentError):
        create().sign(None)


def test_created_token_verifies_here_and_with_pyjwt():
    token = create().with_issuer("auth0").with_audience("api").sign(hmac256(SECRET))

    require(hmac256(SECRET)).with_issuer("auth0").with_audience("api").build().verify(token)

    claims = pyjwt.decode(token, SECRET, algorithms=["HS256"], audience="api")
    assert claims == {"iss": "auth0", "aud": "api"}
