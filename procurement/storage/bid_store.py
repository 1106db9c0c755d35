#procurement/storage/bid_store.py
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import select

from procurement.core.errors import BidNotFound
from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Bid
from procurement.models.bid import BidRecord
from procurement.models.employee import Employee
from procurement.models.enums import AuthorType, BidStatus
from procurement.storage.base import as_utc, storage_op, utcnow


def to_bid(row) -> Bid:
    return Bid(
        id=row.id,
        tender_id=row.tender_id,
        name=row.name,
        description=row.description,
        author_type=AuthorType(row.author_type),
        author_id=row.author_id,
        status=BidStatus(row.status),
        version=row.version,
        created_at=as_utc(row.created_at),
    )


def _write(row: BidRecord, bid: Bid) -> None:
    row.tender_id = bid.tender_id
    row.name = bid.name
    row.description = bid.description
    row.author_type = bid.author_type.value
    row.author_id = bid.author_id
    row.status = bid.status.value
    row.version = bid.version


class BidStore:
    @storage_op("storage.bid.insert")
    def insert(self, uow: UnitOfWork, bid: Bid) -> Bid:
        row = BidRecord(id=bid.id or uuid.uuid4(), created_at=bid.created_at or utcnow())
        _write(row, bid)
        uow.session.add(row)
        uow.session.flush()
        return to_bid(row)

    @storage_op("storage.bid.get")
    def get(self, uow: UnitOfWork, bid_id: uuid.UUID) -> Bid:
        return to_bid(self._row(uow, bid_id))

    @storage_op("storage.bid.update")
    def update(self, uow: UnitOfWork, bid: Bid) -> Bid:
        row = self._row(uow, bid.id)
        _write(row, bid)
        uow.session.flush()
        return to_bid(row)

    @storage_op("storage.bid.set_status")
    def set_status(self, uow: UnitOfWork, bid_id: uuid.UUID, status: BidStatus) -> Bid:
        row = self._row(uow, bid_id)
        row.status = status.value
        uow.session.flush()
        return to_bid(row)

    def _row(self, uow: UnitOfWork, bid_id: Optional[uuid.UUID]) -> BidRecord:
        row = uow.session.get(BidRecord, bid_id) if bid_id is not None else None
        if row is None:
            raise BidNotFound()
        return row

    @storage_op("storage.bid.list_published")
    def list_published(
        self, uow: UnitOfWork, *, tender_id: uuid.UUID, limit: int, offset: int
    ) -> List[Bid]:
        q = (
            select(BidRecord)
            .where(
                BidRecord.tender_id == tender_id,
                BidRecord.status == BidStatus.PUBLISHED.value,
            )
            .order_by(BidRecord.name.asc(), BidRecord.id)
            .limit(limit)
            .offset(offset)
        )
        return [to_bid(r) for r in uow.session.execute(q).scalars()]

    @storage_op("storage.bid.list_by_user")
    def list_by_user(
        self, uow: UnitOfWork, *, username: str, limit: int, offset: int
    ) -> List[Bid]:
        q = (
            select(BidRecord)
            .join(Employee, Employee.id == BidRecord.author_id)
            .where(
                BidRecord.author_type == AuthorType.USER.value,
                Employee.username == username,
            )
            .order_by(BidRecord.name.asc(), BidRecord.id)
            .limit(limit)
            .offset(offset)
        )
        return [to_bid(r) for r in uow.session.execute(q).scalars()]
