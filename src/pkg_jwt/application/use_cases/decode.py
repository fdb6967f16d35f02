from __future__ import annotations

import binascii
from dataclasses import dataclass, field
from typing import List, Optional

from jwt.utils import base64url_decode

from ...adapters.crypto.base import BASE64URL_RE
from ...adapters.json_parser import default_parser
from ...domain.entities import DecodedJWT
from ...domain.exceptions import JWTDecodeError
from ...domain.ports import TokenParser


def split_token(token: Optional[str]) -> List[str]:
    """
    Split a compact token into header, payload and signature segments.

    `a.b.` splits into three parts with an empty signature, which is how
    unsecured (`alg: none`) tokens are written.
    """
    if token is None or not isinstance(token, str):
        raise JWTDecodeError("The token is null.")

    parts = token.split(".")
    if len(parts) != 3:
        raise JWTDecodeError(
            f"The token was expected to have 3 parts, but got {len(parts)}."
        )
    return parts


def decode_segment(segment: str) -> str:
    """Unpadded base64url -> UTF-8 text."""
    try:
        if not BASE64URL_RE.fullmatch(segment):
            raise ValueError("Illegal character in base64url segment")
        return base64url_decode(segment).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise JWTDecodeError("The input is not a valid base 64 encoded string.") from exc


@dataclass(slots=True)
class JWTDecoder:
    """
    Application use case: compact token string -> DecodedJWT.

    Does not check the signature or any claim; see JWTVerifier for that.
    """

    parser: TokenParser = field(default=default_parser)

    def execute(self, token: str) -> DecodedJWT:
        """
        Raises:
            JWTDecodeError
        """
        header, payload, signature = split_token(token)

        header_json = decode_segment(header)
        payload_json = decode_segment(payload)

        return DecodedJWT(
            header=header,
            payload=payload,
            signature=signature,
            jwt_header=self.parser.parse_header(header_json),
            jwt_payload=self.parser.parse_payload(payload_json),
        )


def decode(token: str, parser: Optional[TokenParser] = None) -> DecodedJWT:
    """
    Decode a token without verifying it.

    Raises:
        JWTDecodeError on wrong part count, bad base64url or bad JSON.
    """
    return JWTDecoder(parser or default_parser).execute(token)
