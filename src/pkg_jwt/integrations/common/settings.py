from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class VerifierSettings:
    """
    Token verification settings.

    Host code decides how to construct this (env, config file, etc.).
    """
    algorithm: str = "HS256"
    secret: Optional[str] = None

    # Expectations
    issuers: List[str] = field(default_factory=list)
    audiences: List[str] = field(default_factory=list)
    leeway: int = 0
    ignore_issued_at: bool = False

    # HTTP integration
    cookie_name: str = "access_token"

    @property
    def is_hmac(self) -> bool:
        return self.algorithm.upper().startswith("HS")


def settings_from_env(prefix: str = "JWT_") -> VerifierSettings:
    def _bool(key: str, default: bool = False) -> bool:
        raw = os.getenv(prefix + key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _split_csv(key: str) -> list[str]:
        raw = os.getenv(prefix + key)
        if not raw:
            return []
        return [x.strip() for x in raw.split(",") if x and x.strip()]

    raw_leeway = os.getenv(prefix + "LEEWAY", "0").strip()
    try:
        leeway = int(raw_leeway)
    except ValueError:
        leeway = -1
    if leeway < 0:
        raise RuntimeError(
            f"Invalid verifier settings: {prefix}LEEWAY must be a non-negative integer, got {raw_leeway!r}"
        )

    return VerifierSettings(
        algorithm=(os.getenv(prefix + "ALGORITHM") or "HS256").strip(),
        secret=os.getenv(prefix + "SECRET"),
        issuers=_split_csv("ISSUER"),
        audiences=_split_csv("AUDIENCE"),
        leeway=leeway,
        ignore_issued_at=_bool("IGNORE_IAT"),
        cookie_name=os.getenv(prefix + "COOKIE_NAME") or "access_token",
    )
