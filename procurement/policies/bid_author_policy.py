#procurement/policies/bid_author_policy.py
from __future__ import annotations

import uuid
from typing import Dict, Protocol

from procurement.core.errors import NotEnoughPrivileges
from procurement.db.unit_of_work import UnitOfWork
from procurement.domain.entities import Bid
from procurement.models.enums import AuthorType
from procurement.services.permission_gate import PermissionGate


class AuthorPolicy(Protocol):
    """Existence and mutation rights for one kind of bid author."""

    def ensure_exists(self, uow: UnitOfWork, author_id: uuid.UUID) -> None: ...

    def authorize(self, uow: UnitOfWork, username: str, author_id: uuid.UUID) -> None: ...


class UserAuthorPolicy:
    def __init__(self, gate: PermissionGate) -> None:
        self.gate = gate

    def ensure_exists(self, uow: UnitOfWork, author_id: uuid.UUID) -> None:
        self.gate.validate_by_id(uow, author_id)

    def authorize(self, uow: UnitOfWork, username: str, author_id: uuid.UUID) -> None:
        # only the author themselves
        if self.gate.user_id(uow, username) != author_id:
            raise NotEnoughPrivileges()


class OrganizationAuthorPolicy:
    def __init__(self, gate: PermissionGate) -> None:
        self.gate = gate

    def ensure_exists(self, uow: UnitOfWork, author_id: uuid.UUID) -> None:
        self.gate.validate_org_by_id(uow, author_id)

    def authorize(self, uow: UnitOfWork, username: str, author_id: uuid.UUID) -> None:
        # any representative of the authoring organization
        self.gate.permission(uow, username, author_id)


class BidAuthorPolicy:
    """
    Dispatches on the bid's author type; every bid operation goes through here.
    """

    def __init__(self, gate: PermissionGate) -> None:
        self.policies: Dict[AuthorType, AuthorPolicy] = {
            AuthorType.USER: UserAuthorPolicy(gate),
            AuthorType.ORGANIZATION: OrganizationAuthorPolicy(gate),
        }

    def ensure_author_exists(self, uow: UnitOfWork, author_type: AuthorType, author_id: uuid.UUID) -> None:
        self.policies[author_type].ensure_exists(uow, author_id)

    def authorize(self, uow: UnitOfWork, username: str, bid: Bid) -> None:
        self.policies[bid.author_type].authorize(uow, username, bid.author_id)
