from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import field_validator

from procurement.core.validate import DESCRIPTION_MAX, NAME_MAX, USERNAME_MAX
from procurement.core.validate import check_length, check_text, match_enum
from procurement.domain.entities import Tender
from procurement.models.enums import ServiceType, TenderStatus
from procurement.schemas.primitives import CamelModel


def _service_type(v: Any) -> Any:
    if v is None:
        return v
    return match_enum(ServiceType, v, "unknown service type")


class TenderNew(CamelModel):
    USER_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"creatorUsername", "creator_username"})

    organization_id: uuid.UUID
    name: str
    description: str = ""
    service_type: ServiceType
    creator_username: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return check_text(v, "tender name", NAME_MAX)

    @field_validator("creator_username")
    @classmethod
    def _creator(cls, v: str) -> str:
        return check_text(v, "creator username", USERNAME_MAX)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return check_length(v, "description", DESCRIPTION_MAX)

    @field_validator("service_type", mode="before")
    @classmethod
    def _type(cls, v: Any) -> Any:
        return _service_type(v)

    def to_entity(self) -> Tender:
        return Tender(
            organization_id=self.organization_id,
            name=self.name,
            description=self.description,
            service_type=self.service_type,
            status=TenderStatus.CREATED,
            version=1,
        )


class TenderPatch(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    service_type: Optional[ServiceType] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_length(v, "name", NAME_MAX)

    @field_validator("description")
    @classmethod
    def _description(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check_length(v, "description", DESCRIPTION_MAX)

    @field_validator("service_type", mode="before")
    @classmethod
    def _type(cls, v: Any) -> Any:
        return _service_type(v)

    def changes(self) -> Dict[str, Any]:
        """Only the fields that were given a value overwrite."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class TenderOut(CamelModel):
    id: uuid.UUID
    organization_id: uuid.UUID
    name: str
    description: str
    service_type: ServiceType
    status: TenderStatus
    version: int
    created_at: datetime

    @classmethod
    def from_entity(cls, tender: Tender) -> "TenderOut":
        return cls.model_validate(tender, from_attributes=True)
