#procurement/storage/history_store.py
from __future__ import annotations

import uuid

from procurement.core.errors import VersionNotFound
from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Bid, Tender
from procurement.models.bid import BidHistoryRecord
from procurement.models.tender import TenderHistoryRecord
from procurement.storage.base import storage_op
from procurement.storage.bid_store import to_bid
from procurement.storage.tender_store import to_tender


class TenderHistoryStore:
    """
    Superseded tender versions keyed by (id, version).
    A second save of the same key is an integrity failure, never an overwrite.
    """

    @storage_op("storage.tender_history.save")
    def save(self, uow: UnitOfWork, tender: Tender) -> None:
        uow.session.add(
            TenderHistoryRecord(
                id=tender.id,
                version=tender.version,
                organization_id=tender.organization_id,
                name=tender.name,
                description=tender.description,
                service_type=tender.service_type.value,
                status=tender.status.value,
                created_at=tender.created_at,
            )
        )
        uow.session.flush()

    @storage_op("storage.tender_history.get")
    def get(self, uow: UnitOfWork, tender_id: uuid.UUID, version: int) -> Tender:
        row = uow.session.get(TenderHistoryRecord, (tender_id, version))
        if row is None:
            raise VersionNotFound()
        return to_tender(row)


class BidHistoryStore:
    @storage_op("storage.bid_history.save")
    def save(self, uow: UnitOfWork, bid: Bid) -> None:
        uow.session.add(
            BidHistoryRecord(
                id=bid.id,
                version=bid.version,
                tender_id=bid.tender_id,
                name=bid.name,
                description=bid.description,
                status=bid.status.value,
                author_type=bid.author_type.value,
                author_id=bid.author_id,
                created_at=bid.created_at,
            )
        )
        uow.session.flush()

    @storage_op("storage.bid_history.get")
    def get(self, uow: UnitOfWork, bid_id: uuid.UUID, version: int) -> Bid:
        row = uow.session.get(BidHistoryRecord, (bid_id, version))
        if row is None:
            raise VersionNotFound()
        return to_bid(row)
