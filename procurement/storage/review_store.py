#procurement/storage/review_store.py
from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import select

from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Review
from procurement.models.bid import BidRecord
from procurement.models.review import ReviewRecord
from procurement.storage.base import as_utc, storage_op, utcnow


class ReviewStore:
    @storage_op("storage.review.insert")
    def insert(self, uow: UnitOfWork, review: Review) -> uuid.UUID:
        row = ReviewRecord(
            id=review.id or uuid.uuid4(),
            bid_id=review.bid_id,
            author=review.author,
            description=review.description,
            created_at=review.created_at or utcnow(),
        )
        uow.session.add(row)
        uow.session.flush()
        return row.id

    @storage_op("storage.review.list_by_tender_and_author")
    def list_by_tender_and_author(
        self,
        uow: UnitOfWork,
        *,
        tender_id: uuid.UUID,
        author: str,
        limit: int,
        offset: int,
    ) -> List[Review]:
        q = (
            select(ReviewRecord)
            .join(BidRecord, BidRecord.id == ReviewRecord.bid_id)
            .where(BidRecord.tender_id == tender_id, ReviewRecord.author == author)
            .order_by(ReviewRecord.created_at, ReviewRecord.id)
            .limit(limit)
            .offset(offset)
        )
        return [
            Review(
                id=r.id,
                bid_id=r.bid_id,
                author=r.author,
                description=r.description,
                created_at=as_utc(r.created_at),
            )
            for r in uow.session.execute(q).scalars()
        ]
