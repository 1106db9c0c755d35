#procurement/services/permission_gate.py
from __future__ import annotations

import uuid
from typing import Optional

from procurement.core.errors import NotEnoughPrivileges, OrganizationNotFound, UserNotFound
from procurement.db.unit_of_work import UnitOfWork
from procurement.storage.identity_store import IdentityStore


class PermissionGate:
    """
    Identity and membership checks, re-queried on every call (no caching).

    Every failure is a typed error; nothing here returns a default.
    """

    def __init__(self, identity: Optional[IdentityStore] = None) -> None:
        self.identity = identity or IdentityStore()

    def validate(self, uow: UnitOfWork, username: str) -> None:
        self.user_id(uow, username)

    def validate_by_id(self, uow: UnitOfWork, user_id: uuid.UUID) -> None:
        if not self.identity.user_exists(uow, user_id):
            raise UserNotFound()

    def validate_org_by_id(self, uow: UnitOfWork, org_id: uuid.UUID) -> None:
        if not self.identity.organization_exists(uow, org_id):
            raise OrganizationNotFound()

    def user_id(self, uow: UnitOfWork, username: str) -> uuid.UUID:
        user_id = self.identity.user_id(uow, username)
        if user_id is None:
            raise UserNotFound()
        return user_id

    def permission(self, uow: UnitOfWork, username: str, org_id: uuid.UUID) -> None:
        # caller validates the username first; an unknown user simply has no membership
        if not self.identity.is_responsible(uow, username, org_id):
            raise NotEnoughPrivileges()

    def org_size(self, uow: UnitOfWork, org_id: uuid.UUID) -> int:
        # zero representatives is indistinguishable from a missing organization
        size = self.identity.representative_count(uow, org_id)
        if size == 0:
            raise OrganizationNotFound()
        return size
