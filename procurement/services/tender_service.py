#procurement/services/tender_service.py
from __future__ import annotations

import uuid
from typing import List, Optional, Sequence

from sqlalchemy.orm import sessionmaker

from procurement.core.logging import operation_logger
from procurement.db.unit_of_work import unit_of_work
from procurement.domain.entities import Tender
from procurement.models.enums import ServiceType, TenderStatus
from procurement.schemas.tender import TenderNew, TenderPatch
from procurement.services.permission_gate import PermissionGate
from procurement.services.rollback_service import RollbackService
from procurement.storage.tender_store import TenderStore


class TenderService:
    """
    Tender lifecycle: Created -> Published -> Closed, only via set_status.

    Each public method is one transaction. Nothing is persisted unless the
    method reaches its commit; any failure rolls back.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        gate: Optional[PermissionGate] = None,
        rollback: Optional[RollbackService] = None,
        tenders: Optional[TenderStore] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.session_factory = session_factory
        self.gate = gate or PermissionGate()
        self.rollback_srv = rollback or RollbackService()
        self.tenders = tenders or TenderStore()
        self.timeout = timeout

    def _tx(self, op: str, timeout: Optional[float], **context):
        return unit_of_work(
            self.session_factory,
            op=op,
            timeout=timeout if timeout is not None else self.timeout,
            log=operation_logger(__name__, op, **context),
        )

    # -----------------------------------------------------------------
    # create / read
    # -----------------------------------------------------------------

    def new(self, tender_new: TenderNew, *, timeout: Optional[float] = None) -> Tender:
        with self._tx("tender.new", timeout, username=tender_new.creator_username) as uow:
            self.gate.validate(uow, tender_new.creator_username)
            tender = self.tenders.insert(uow, tender_new.to_entity())
            uow.commit()
        return tender

    def tender(self, tender_id: uuid.UUID, *, timeout: Optional[float] = None) -> Tender:
        with self._tx("tender.get", timeout, id=tender_id) as uow:
            tender = self.tenders.get(uow, tender_id)
            uow.commit()
        return tender

    def all(
        self,
        limit: int,
        offset: int,
        service_types: Sequence[ServiceType] = (),
        *,
        timeout: Optional[float] = None,
    ) -> List[Tender]:
        with self._tx("tender.all", timeout) as uow:
            res = self.tenders.list_published(
                uow, limit=limit, offset=offset, service_types=service_types
            )
            uow.commit()
        return res

    def my(
        self, limit: int, offset: int, username: str, *, timeout: Optional[float] = None
    ) -> List[Tender]:
        with self._tx("tender.my", timeout, username=username) as uow:
            self.gate.validate(uow, username)
            res = self.tenders.list_by_member(uow, username=username, limit=limit, offset=offset)
            uow.commit()
        return res

    # -----------------------------------------------------------------
    # status (no version bump)
    # -----------------------------------------------------------------

    def status(
        self, username: str, tender_id: uuid.UUID, *, timeout: Optional[float] = None
    ) -> TenderStatus:
        with self._tx("tender.status", timeout, username=username, id=tender_id) as uow:
            tender = self._authorized(uow, username, tender_id)
            uow.commit()
        return tender.status

    def set_status(
        self,
        username: str,
        tender_id: uuid.UUID,
        status: TenderStatus,
        *,
        timeout: Optional[float] = None,
    ) -> Tender:
        with self._tx(
            "tender.set_status", timeout, username=username, id=tender_id, status=status.value
        ) as uow:
            self._authorized(uow, username, tender_id)
            tender = self.tenders.set_status(uow, tender_id, status)
            uow.commit()
        return tender

    # -----------------------------------------------------------------
    # versioned mutations
    # -----------------------------------------------------------------

    def edit(
        self,
        username: str,
        tender_id: uuid.UUID,
        patch: TenderPatch,
        *,
        timeout: Optional[float] = None,
    ) -> Tender:
        with self._tx("tender.edit", timeout, username=username, id=tender_id) as uow:
            current = self._authorized(uow, username, tender_id)

            # an empty patch still produces a new version
            edited = current.patched(patch.changes()).next_version()

            self.rollback_srv.save_tender(uow, current)
            tender = self.tenders.update(uow, edited)
            uow.commit()
        return tender

    def rollback(
        self,
        username: str,
        tender_id: uuid.UUID,
        version: int,
        *,
        timeout: Optional[float] = None,
    ) -> Tender:
        """Restores content from `version` as version current+1; the live row keeps its id and created_at."""
        with self._tx(
            "tender.rollback", timeout, username=username, id=tender_id, version=version
        ) as uow:
            current = self._authorized(uow, username, tender_id)
            restored = self.rollback_srv.swap_tender(uow, tender_id, version, current)
            tender = self.tenders.update(uow, restored)
            uow.commit()
        return tender

    def _authorized(self, uow, username: str, tender_id: uuid.UUID) -> Tender:
        self.gate.validate(uow, username)
        tender = self.tenders.get(uow, tender_id)
        self.gate.permission(uow, username, tender.organization_id)
        return tender
