#procurement/storage/identity_store.py
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import func, select

from procurement.db.unit_of_work import UnitOfWork
from procurement.models.employee import Employee, Organization, OrganizationResponsible
from procurement.storage.base import storage_op


class IdentityStore:
    """Read-only queries over employees, organizations and their representatives."""

    @storage_op("storage.identity.user_id")
    def user_id(self, uow: UnitOfWork, username: str) -> Optional[uuid.UUID]:
        return uow.session.execute(
            select(Employee.id).where(Employee.username == username)
        ).scalar_one_or_none()

    @storage_op("storage.identity.user_exists")
    def user_exists(self, uow: UnitOfWork, user_id: uuid.UUID) -> bool:
        return uow.session.get(Employee, user_id) is not None

    @storage_op("storage.identity.organization_exists")
    def organization_exists(self, uow: UnitOfWork, org_id: uuid.UUID) -> bool:
        return uow.session.get(Organization, org_id) is not None

    @storage_op("storage.identity.is_responsible")
    def is_responsible(self, uow: UnitOfWork, username: str, org_id: uuid.UUID) -> bool:
        row = uow.session.execute(
            select(OrganizationResponsible.id)
            .join(Employee, Employee.id == OrganizationResponsible.user_id)
            .where(
                Employee.username == username,
                OrganizationResponsible.organization_id == org_id,
            )
            .limit(1)
        ).first()
        return row is not None

    @storage_op("storage.identity.representative_count")
    def representative_count(self, uow: UnitOfWork, org_id: uuid.UUID) -> int:
        count = uow.session.execute(
            select(func.count())
            .select_from(Employee)
            .join(OrganizationResponsible, OrganizationResponsible.user_id == Employee.id)
            .join(Organization, Organization.id == OrganizationResponsible.organization_id)
            .where(Organization.id == org_id)
        ).scalar_one()
        return int(count)
