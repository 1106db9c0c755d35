#procurement/core/validate.py
from __future__ import annotations

from enum import Enum
from typing import Any, Type, TypeVar

from procurement.core.errors import ParseError

E = TypeVar("E", bound=Enum)

USERNAME_MAX = 100
NAME_MAX = 100
DESCRIPTION_MAX = 500
FEEDBACK_MAX = 1000

# versions and paging values are stored as int32
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def check_text(text: str, name: str, limit: int) -> str:
    """Raises ValueError for an empty or over-long value, returns it otherwise."""
    if text == "":
        raise ValueError(f"{name} must not be empty")
    return check_length(text, name, limit)


def check_length(text: str, name: str, limit: int) -> str:
    if len(text) > limit:
        raise ValueError(f"{name} must not be longer than {limit} characters")
    return text


def match_enum(enum: Type[E], raw: Any, reason: str) -> E:
    """Exact literal match against a closed enumeration; no case folding."""
    if isinstance(raw, enum):
        return raw
    for member in enum:
        if member.value == raw:
            return member
    raise ValueError(reason)


# ---------------------------------------------------------------------
# request parameters: failures become ParseError
# ---------------------------------------------------------------------


def require_text(text: str | None, name: str, limit: int, *, user_caused: bool = False) -> str:
    try:
        return check_text(text or "", name, limit)
    except ValueError as e:
        raise ParseError(str(e), user_caused=user_caused) from e


def parse_enum(enum: Type[E], raw: Any, reason: str) -> E:
    try:
        return match_enum(enum, raw, reason)
    except ValueError as e:
        raise ParseError(reason) from e
