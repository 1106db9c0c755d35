from __future__ import annotations

from typing import Any, ClassVar, FrozenSet, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from procurement.core.errors import ParseError

M = TypeVar("M", bound="CamelModel")


class CamelModel(BaseModel):
    """
    Wire models use camelCase keys; python code uses snake_case names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # fields naming the acting user; a bad value there is the caller's identity problem
    USER_FIELDS: ClassVar[FrozenSet[str]] = frozenset()


def parse_body(model: Type[M], data: Any) -> M:
    """
    Validate a request body, reporting the first problem as a ParseError.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else ""
        if first["type"] == "missing":
            message = f"{field} is required"
        else:
            message = first["msg"].removeprefix("Value error, ")
        raise ParseError(message, user_caused=field in model.USER_FIELDS) from e
