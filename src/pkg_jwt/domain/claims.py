from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, TypeVar

from .exceptions import JWTDecodeError

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_INT32 = (-(2**31), 2**31 - 1)
_INT64 = (-(2**63), 2**63 - 1)
_MAX_DIGITS = 19


def primitive_content(value: Any) -> Optional[str]:
    """
    Render a JSON primitive the way it appears in JSON text, without quotes.

    Arrays, objects and JSON null have no primitive content and yield None.
    """
    if value is None or isinstance(value, (list, dict)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return None


def parse_epoch_seconds(value: Any) -> Optional[datetime]:
    """
    Number or numeric string of epoch seconds -> aware UTC datetime.

    Fractional seconds are truncated toward zero.
    """
    content = primitive_content(value)
    if content is None:
        return None
    try:
        if _INT_RE.fullmatch(content):
            seconds = int(content)
        elif _DECIMAL_RE.fullmatch(content):
            seconds = int(float(content))
        else:
            return None
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _bounded_int(content: Optional[str], bounds: tuple[int, int]) -> Optional[int]:
    if content is None or not _INT_RE.fullmatch(content):
        return None
    # longer than any 64-bit value
    if len(content.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        return None
    number = int(content)
    low, high = bounds
    return number if low <= number <= high else None


class Claim(ABC):
    """
    Read-only view over a single JSON value from a token header or payload.

    Every `as_*` coercion returns None when the value cannot be represented
    in the requested type; lookups of absent keys yield `EMPTY_CLAIM`.
    """

    @property
    @abstractmethod
    def is_null(self) -> bool:
        """True when the key is present with a JSON null value."""

    @property
    @abstractmethod
    def is_missing(self) -> bool:
        """True when the key is absent."""

    @abstractmethod
    def as_boolean(self) -> Optional[bool]: ...

    @abstractmethod
    def as_int(self) -> Optional[int]: ...

    @abstractmethod
    def as_long(self) -> Optional[int]: ...

    @abstractmethod
    def as_double(self) -> Optional[float]: ...

    @abstractmethod
    def as_string(self) -> Optional[str]: ...

    @abstractmethod
    def as_instant(self) -> Optional[datetime]: ...

    @abstractmethod
    def as_list(self, deserializer: Callable[[Any], T]) -> List[T]:
        """
        Deserialize every element of a JSON array.

        Returns an empty list when the value is not an array.

        Raises:
            JWTDecodeError if the deserializer rejects an element.
        """

    @abstractmethod
    def as_object(self, deserializer: Callable[[Any], T]) -> Optional[T]:
        """
        Deserialize the whole value; None for null or missing claims.

        Raises:
            JWTDecodeError if the deserializer rejects the value.
        """


@dataclass(frozen=True, slots=True)
class JsonClaim(Claim):
    value: Any

    @property
    def is_null(self) -> bool:
        return self.value is None

    @property
    def is_missing(self) -> bool:
        return False

    def as_boolean(self) -> Optional[bool]:
        content = primitive_content(self.value)
        if content == "true":
            return True
        if content == "false":
            return False
        return None

    def as_int(self) -> Optional[int]:
        return _bounded_int(primitive_content(self.value), _INT32)

    def as_long(self) -> Optional[int]:
        return _bounded_int(primitive_content(self.value), _INT64)

    def as_double(self) -> Optional[float]:
        content = primitive_content(self.value)
        if content is None or not _DECIMAL_RE.fullmatch(content):
            return None
        return float(content)

    def as_string(self) -> Optional[str]:
        return primitive_content(self.value)

    def as_instant(self) -> Optional[datetime]:
        return parse_epoch_seconds(self.value)

    def as_list(self, deserializer: Callable[[Any], T]) -> List[T]:
        if not isinstance(self.value, list):
            return []
        try:
            return [deserializer(item) for item in self.value]
        except (ValueError, TypeError, KeyError) as exc:
            raise JWTDecodeError("Failed to decode claim as list") from exc

    def as_object(self, deserializer: Callable[[Any], T]) -> Optional[T]:
        if self.value is None:
            return None
        try:
            return deserializer(self.value)
        except (ValueError, TypeError, KeyError) as exc:
            raise JWTDecodeError("Failed to decode claim") from exc

    def __str__(self) -> str:
        if self.value is None:
            return "Null claim"
        return json.dumps(self.value, separators=(",", ":"))


@dataclass(frozen=True, slots=True)
class EmptyClaim(Claim):
    """Stands in for any claim that is not present in the token."""

    @property
    def is_null(self) -> bool:
        return False

    @property
    def is_missing(self) -> bool:
        return True

    def as_boolean(self) -> Optional[bool]:
        return None

    def as_int(self) -> Optional[int]:
        return None

    def as_long(self) -> Optional[int]:
        return None

    def as_double(self) -> Optional[float]:
        return None

    def as_string(self) -> Optional[str]:
        return None

    def as_instant(self) -> Optional[datetime]:
        return None

    def as_list(self, deserializer: Callable[[Any], T]) -> List[T]:
        return []

    def as_object(self, deserializer: Callable[[Any], T]) -> Optional[T]:
        return None

    def __str__(self) -> str:
        return "Missing claim"


EMPTY_CLAIM = EmptyClaim()
