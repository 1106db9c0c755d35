#procurement/storage/base.py
from __future__ import annotations

import functools
from datetime import datetime, timezone
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from procurement.core.errors import InfrastructureError

F = TypeVar("F", bound=Callable)


def storage_op(op: str) -> Callable[[F], F]:
    """
    Turn driver failures into InfrastructureError("<op>: <cause>").
    Domain errors raised inside the store pass through unchanged.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError as e:
                raise InfrastructureError(f"{op}: {e}") from e

        return wrapper  # type: ignore[return-value]

    return decorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # sqlite hands back naive values; everything is written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
