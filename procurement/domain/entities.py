#procurement/domain/entities.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, ClassVar, FrozenSet, Mapping, Optional

from procurement.models.enums import (
    AuthorType,
    BidStatus,
    DecisionType,
    ServiceType,
    TenderStatus,
)


class Versioned:
    """
    Shared versioning behaviour for tenders and bids.

    Content edits go through `patched`, which never touches id, version,
    status or created_at; the managers own those.
    """

    PATCHABLE: ClassVar[FrozenSet[str]] = frozenset()

    version: int

    def patched(self, changes: Mapping[str, Any]):
        unknown = set(changes) - self.PATCHABLE
        if unknown:
            raise ValueError(f"fields not patchable: {sorted(unknown)}")
        return replace(self, **changes)

    def next_version(self):
        return replace(self, version=self.version + 1)



@dataclass
class Tender(Versioned):
    organization_id: uuid.UUID
    name: str
    description: str
    service_type: ServiceType
    status: TenderStatus = TenderStatus.CREATED
    version: int = 1
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None

    PATCHABLE: ClassVar[FrozenSet[str]] = frozenset({"name", "description", "service_type"})


@dataclass
class Bid(Versioned):
    tender_id: uuid.UUID
    name: str
    description: str
    author_type: AuthorType
    author_id: uuid.UUID
    status: BidStatus = BidStatus.CREATED
    version: int = 1
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None

    # tender_id and the author are fixed at creation
    PATCHABLE: ClassVar[FrozenSet[str]] = frozenset({"name", "description"})


@dataclass(frozen=True)
class Decision:
    user_id: uuid.UUID
    bid_id: uuid.UUID
    decision: DecisionType


@dataclass(frozen=True)
class Review:
    bid_id: uuid.UUID
    author: str
    description: str
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
