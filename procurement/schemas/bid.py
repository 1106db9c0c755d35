from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import field_validator

from procurement.core.validate import DESCRIPTION_MAX, NAME_MAX
from procurement.core.validate import check_length, check_text, match_enum
from procurement.domain.entities import Bid, Review
from procurement.models.enums import AuthorType, BidStatus
from procurement.schemas.primitives import CamelModel


class BidNew(CamelModel):
    tender_id: uuid.UUID
    name: str
    description: str = ""
    author_type: AuthorType
    author_id: uuid.UUID

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return check_text(v, "name", NAME_MAX)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return check_length(v, "description", DESCRIPTION_MAX)

    @field_validator("author_type", mode="before")
    @classmethod
    def _author_type(cls, v: Any) -> Any:
        return match_enum(AuthorType, v, "unknown author type")

    def to_entity(self) -> Bid:
        return Bid(
            tender_id=self.tender_id,
            name=self.name,
            description=self.description,
            author_type=self.author_type,
            author_id=self.author_id,
            status=BidStatus.CREATED,
            version=1,
        )


class BidPatch(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_length(v, "name", NAME_MAX)

    @field_validator("description")
    @classmethod
    def _description(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_length(v, "description", DESCRIPTION_MAX)

    def changes(self) -> Dict[str, Any]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class BidOut(CamelModel):
    id: uuid.UUID
    tender_id: uuid.UUID
    name: str
    description: str
    author_type: AuthorType
    author_id: uuid.UUID
    status: BidStatus
    version: int
    created_at: datetime

    @classmethod
    def from_entity(cls, bid: Bid) -> "BidOut":
        return cls.model_validate(bid, from_attributes=True)


class ReviewOut(CamelModel):
    id: uuid.UUID
    description: str
    created_at: datetime

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewOut":
        return cls.model_validate(review, from_attributes=True)
