#procurement/services/registry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from procurement.services.bid_service import BidService
from procurement.services.permission_gate import PermissionGate
from procurement.services.rollback_service import RollbackService
from procurement.services.tender_service import TenderService
from procurement.storage.tender_store import TenderStore


@dataclass(frozen=True)
class Services:
    tenders: TenderService
    bids: BidService


def build_services(session_factory: sessionmaker, *, timeout: Optional[float] = None) -> Services:
    # one gate / archive / tender store shared by both managers
    gate = PermissionGate()
    rollback = RollbackService()
    tender_store = TenderStore()

    return Services(
        tenders=TenderService(
            session_factory, gate=gate, rollback=rollback, tenders=tender_store, timeout=timeout
        ),
        bids=BidService(
            session_factory, gate=gate, rollback=rollback, tenders=tender_store, timeout=timeout
        ),
    )
