#procurement/services/rollback_service.py
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Optional, TypeVar

from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Bid, Tender
from procurement.storage.history_store import BidHistoryStore, TenderHistoryStore

V = TypeVar("V", Tender, Bid)


class RollbackService:
    """
    Version archive for tenders and bids.

    save_*: archive a version that is about to be superseded.
    swap_*: archive the current version and bring back an older one as
    the next version. Content comes from the snapshot; id, created_at and
    status stay those of the current version, and the version counter
    moves forward (current + 1), never back.
    """

    def __init__(
        self,
        tender_history: Optional[TenderHistoryStore] = None,
        bid_history: Optional[BidHistoryStore] = None,
    ) -> None:
        self.tender_history = tender_history or TenderHistoryStore()
        self.bid_history = bid_history or BidHistoryStore()

    # -----------------------------------------------------------------
    # tenders
    # -----------------------------------------------------------------

    def save_tender(self, uow: UnitOfWork, tender: Tender) -> None:
        self.tender_history.save(uow, tender)

    def swap_tender(
        self, uow: UnitOfWork, tender_id: uuid.UUID, version: int, current: Tender
    ) -> Tender:
        self.tender_history.save(uow, current)
        snapshot = self.tender_history.get(uow, tender_id, version)
        return _restored(snapshot, current)

    # -----------------------------------------------------------------
    # bids
    # -----------------------------------------------------------------

    def save_bid(self, uow: UnitOfWork, bid: Bid) -> None:
        self.bid_history.save(uow, bid)

    def swap_bid(self, uow: UnitOfWork, bid_id: uuid.UUID, version: int, current: Bid) -> Bid:
        self.bid_history.save(uow, current)
        snapshot = self.bid_history.get(uow, bid_id, version)
        return _restored(snapshot, current)


def _restored(snapshot: V, current: V) -> V:
    return replace(
        snapshot,
        id=current.id,
        status=current.status,
        version=current.version + 1,
        created_at=current.created_at,
    )
