from enum import Enum


class RegisteredClaim(Enum):
    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRES_AT = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"
    JWT_ID = "jti"


class HeaderParam(Enum):
    ALGORITHM = "alg"
    TYPE = "typ"
    CONTENT_TYPE = "cty"
    KEY_ID = "kid"
