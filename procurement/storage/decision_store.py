#procurement/storage/decision_store.py
from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import select

from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Decision
from procurement.models.decision import DecisionRecord
from procurement.models.enums import DecisionType
from procurement.storage.base import storage_op


class DecisionStore:
    @storage_op("storage.decision.upsert")
    def upsert(self, uow: UnitOfWork, decision: Decision) -> None:
        row = uow.session.get(DecisionRecord, (decision.user_id, decision.bid_id))
        if row is None:
            uow.session.add(
                DecisionRecord(
                    user_id=decision.user_id,
                    bid_id=decision.bid_id,
                    decision=decision.decision.value,
                )
            )
        else:
            row.decision = decision.decision.value
        uow.session.flush()

    @storage_op("storage.decision.list_by_bid")
    def list_by_bid(self, uow: UnitOfWork, bid_id: uuid.UUID) -> List[Decision]:
        rows = uow.session.execute(
            select(DecisionRecord).where(DecisionRecord.bid_id == bid_id)
        ).scalars()
        return [
            Decision(user_id=r.user_id, bid_id=r.bid_id, decision=DecisionType(r.decision))
            for r in rows
        ]
