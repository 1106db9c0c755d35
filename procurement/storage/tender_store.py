#procurement/storage/tender_store.py
from __future__ import annotations

import uuid
from typing import List, Optional, Sequence

from sqlalchemy import select

from procurement.core.errors import TenderNotFound
from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Tender
from procurement.models.employee import Employee, OrganizationResponsible
from procurement.models.enums import ServiceType, TenderStatus
from procurement.models.tender import TenderRecord
from procurement.storage.base import as_utc, storage_op, utcnow


def to_tender(row) -> Tender:
    return Tender(
        id=row.id,
        organization_id=row.organization_id,
        name=row.name,
        description=row.description,
        service_type=ServiceType(row.service_type),
        status=TenderStatus(row.status),
        version=row.version,
        created_at=as_utc(row.created_at),
    )


def _write(row: TenderRecord, tender: Tender) -> None:
    row.organization_id = tender.organization_id
    row.name = tender.name
    row.description = tender.description
    row.service_type = tender.service_type.value
    row.status = tender.status.value
    row.version = tender.version


class TenderStore:
    # -----------------------------------------------------------------
    # single row
    # -----------------------------------------------------------------

    @storage_op("storage.tender.insert")
    def insert(self, uow: UnitOfWork, tender: Tender) -> Tender:
        row = TenderRecord(id=tender.id or uuid.uuid4(), created_at=tender.created_at or utcnow())
        _write(row, tender)
        uow.session.add(row)
        uow.session.flush()
        return to_tender(row)

    @storage_op("storage.tender.get")
    def get(self, uow: UnitOfWork, tender_id: uuid.UUID) -> Tender:
        return to_tender(self._row(uow, tender_id))

    @storage_op("storage.tender.update")
    def update(self, uow: UnitOfWork, tender: Tender) -> Tender:
        """Rewrite the live row in place; id and created_at never change."""
        row = self._row(uow, tender.id)
        _write(row, tender)
        uow.session.flush()
        return to_tender(row)

    @storage_op("storage.tender.set_status")
    def set_status(self, uow: UnitOfWork, tender_id: uuid.UUID, status: TenderStatus) -> Tender:
        row = self._row(uow, tender_id)
        row.status = status.value
        uow.session.flush()
        return to_tender(row)

    def _row(self, uow: UnitOfWork, tender_id: Optional[uuid.UUID]) -> TenderRecord:
        row = uow.session.get(TenderRecord, tender_id) if tender_id is not None else None
        if row is None:
            raise TenderNotFound()
        return row

    # -----------------------------------------------------------------
    # listings (ordered by name)
    # -----------------------------------------------------------------

    @storage_op("storage.tender.list_published")
    def list_published(
        self,
        uow: UnitOfWork,
        *,
        limit: int,
        offset: int,
        service_types: Sequence[ServiceType] = (),
    ) -> List[Tender]:
        q = select(TenderRecord).where(TenderRecord.status == TenderStatus.PUBLISHED.value)
        if service_types:
            q = q.where(TenderRecord.service_type.in_([s.value for s in service_types]))
        q = q.order_by(TenderRecord.name.asc(), TenderRecord.id).limit(limit).offset(offset)
        return [to_tender(r) for r in uow.session.execute(q).scalars()]

    @storage_op("storage.tender.list_by_member")
    def list_by_member(
        self, uow: UnitOfWork, *, username: str, limit: int, offset: int
    ) -> List[Tender]:
        q = (
            select(TenderRecord)
            .join(
                OrganizationResponsible,
                OrganizationResponsible.organization_id == TenderRecord.organization_id,
            )
            .join(Employee, Employee.id == OrganizationResponsible.user_id)
            .where(Employee.username == username)
            .order_by(TenderRecord.name.asc(), TenderRecord.id)
            .limit(limit)
            .offset(offset)
        )
        return [to_tender(r) for r in uow.session.execute(q).scalars()]
