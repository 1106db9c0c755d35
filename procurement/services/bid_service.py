#procurement/services/bid_service.py
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from procurement.core.errors import AuthorNotFound, UserNotFound
from procurement.core.logging import operation_logger
from procurement.db.unit_of_work import UnitOfWork, unit_of_work
from procurement.domain.entities import Bid, Decision, Review
from procurement.models.enums import BidStatus, DecisionType
from procurement.policies.bid_author_policy import BidAuthorPolicy
from procurement.schemas.bid import BidNew, BidPatch
from procurement.services.decision_resolver import required_approves, resolve
from procurement.services.permission_gate import PermissionGate
from procurement.services.rollback_service import RollbackService
from procurement.storage.bid_store import BidStore
from procurement.storage.decision_store import DecisionStore
from procurement.storage.review_store import ReviewStore
from procurement.storage.tender_store import TenderStore


class BidService:
    """
    Bid lifecycle, versioning, decisions and reviews.

    Status/edit/rollback are authorized against the bid's author (a user
    or an organization). Decisions and feedback are authorized against
    the organization that owns the bid's tender.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        gate: Optional[PermissionGate] = None,
        rollback: Optional[RollbackService] = None,
        bids: Optional[BidStore] = None,
        tenders: Optional[TenderStore] = None,
        decisions: Optional[DecisionStore] = None,
        reviews: Optional[ReviewStore] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.session_factory = session_factory
        self.gate = gate or PermissionGate()
        self.authors = BidAuthorPolicy(self.gate)
        self.rollback_srv = rollback or RollbackService()
        self.bids = bids or BidStore()
        self.tenders = tenders or TenderStore()
        self.decisions = decisions or DecisionStore()
        self.reviews_store = reviews or ReviewStore()
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

    def new(self, bid_new: BidNew, *, timeout: Optional[float] = None) -> Bid:
        with self._tx(
            "bid.new", timeout, author_type=bid_new.author_type.value, author_id=bid_new.author_id
        ) as uow:
            self.authors.ensure_author_exists(uow, bid_new.author_type, bid_new.author_id)
            self.tenders.get(uow, bid_new.tender_id)
            bid = self.bids.insert(uow, bid_new.to_entity())
            uow.commit()
        return bid

    def list(
        self,
        username: str,
        tender_id: uuid.UUID,
        limit: int,
        offset: int,
        *,
        timeout: Optional[float] = None,
    ) -> List[Bid]:
        with self._tx("bid.list", timeout, username=username, id=tender_id) as uow:
            self.gate.validate(uow, username)
            self.tenders.get(uow, tender_id)
            res = self.bids.list_published(uow, tender_id=tender_id, limit=limit, offset=offset)
            uow.commit()
        return res

    def my(
        self, username: str, limit: int, offset: int, *, timeout: Optional[float] = None
    ) -> List[Bid]:
        with self._tx("bid.my", timeout, username=username) as uow:
            self.gate.validate(uow, username)
            res = self.bids.list_by_user(uow, username=username, limit=limit, offset=offset)
            uow.commit()
        return res

    # -----------------------------------------------------------------
    # status (no version bump)
    # -----------------------------------------------------------------

    def status(self, username: str, bid_id: uuid.UUID, *, timeout: Optional[float] = None) -> BidStatus:
        with self._tx("bid.status", timeout, username=username, id=bid_id) as uow:
            bid = self._authorized(uow, username, bid_id)
            uow.commit()
        return bid.status

    def set_status(
        self,
        username: str,
        bid_id: uuid.UUID,
        status: BidStatus,
        *,
        timeout: Optional[float] = None,
    ) -> Bid:
        with self._tx(
            "bid.set_status", timeout, username=username, id=bid_id, status=status.value
        ) as uow:
            self._authorized(uow, username, bid_id)
            bid = self.bids.set_status(uow, bid_id, status)
            uow.commit()
        return bid

    # -----------------------------------------------------------------
    # versioned mutations
    # -----------------------------------------------------------------

    def edit(
        self,
        username: str,
        bid_id: uuid.UUID,
        patch: BidPatch,
        *,
        timeout: Optional[float] = None,
    ) -> Bid:
        with self._tx("bid.edit", timeout, username=username, id=bid_id) as uow:
            current = self._authorized(uow, username, bid_id)
            edited = current.patched(patch.changes()).next_version()

            self.rollback_srv.save_bid(uow, current)
            bid = self.bids.update(uow, edited)
            uow.commit()
        return bid

    def rollback(
        self,
        username: str,
        bid_id: uuid.UUID,
        version: int,
        *,
        timeout: Optional[float] = None,
    ) -> Bid:
        """Restores content from `version` as version current+1; the live row keeps its id and created_at."""
        with self._tx("bid.rollback", timeout, username=username, id=bid_id, version=version) as uow:
            current = self._authorized(uow, username, bid_id)
            restored = self.rollback_srv.swap_bid(uow, bid_id, version, current)
            bid = self.bids.update(uow, restored)
            uow.commit()
        return bid

    # -----------------------------------------------------------------
    # decisions
    # -----------------------------------------------------------------

    def submit_decision(
        self,
        username: str,
        bid_id: uuid.UUID,
        decision: DecisionType,
        *,
        timeout: Optional[float] = None,
    ) -> Bid:
        """
        Record the vote, then close the bid if the votes so far are conclusive.

        Only representatives of the tender's organization may vote, whoever
        authored the bid. Approved and Rejected both end in Canceled; the
        outcome itself lives in the decision rows.
        """
        with self._tx(
            "bid.submit_decision", timeout, username=username, id=bid_id, decision=decision.value
        ) as uow:
            bid, tender = self._tender_owner_scope(uow, username, bid_id)

            user_id = self.gate.user_id(uow, username)
            self.decisions.upsert(uow, Decision(user_id=user_id, bid_id=bid.id, decision=decision))

            votes = [d.decision for d in self.decisions.list_by_bid(uow, bid.id)]
            required = required_approves(self.gate.org_size(uow, tender.organization_id))

            outcome = resolve(votes, required)
            if outcome is not None:
                bid = self.bids.set_status(uow, bid.id, BidStatus.CANCELED)
            uow.commit()
        return bid

    # -----------------------------------------------------------------
    # reviews
    # -----------------------------------------------------------------

    def reviews(
        self,
        requester: str,
        author: str,
        tender_id: uuid.UUID,
        limit: int,
        offset: int,
        *,
        timeout: Optional[float] = None,
    ) -> List[Review]:
        with self._tx(
            "bid.reviews", timeout, username=requester, author=author, id=tender_id
        ) as uow:
            self.gate.validate(uow, requester)
            try:
                self.gate.validate(uow, author)
            except UserNotFound as e:
                raise AuthorNotFound() from e

            tender = self.tenders.get(uow, tender_id)
            self.gate.permission(uow, requester, tender.organization_id)

            res = self.reviews_store.list_by_tender_and_author(
                uow, tender_id=tender_id, author=author, limit=limit, offset=offset
            )
            uow.commit()
        return res

    def feedback(
        self, username: str, bid_id: uuid.UUID, text: str, *, timeout: Optional[float] = None
    ) -> Bid:
        with self._tx("bid.feedback", timeout, username=username, id=bid_id) as uow:
            bid, _ = self._tender_owner_scope(uow, username, bid_id)
            self.reviews_store.insert(uow, Review(bid_id=bid.id, author=username, description=text))
            uow.commit()
        return bid

    # -----------------------------------------------------------------
    # authorization
    # -----------------------------------------------------------------

    def _authorized(self, uow: UnitOfWork, username: str, bid_id: uuid.UUID) -> Bid:
        self.gate.validate(uow, username)
        bid = self.bids.get(uow, bid_id)
        self.authors.authorize(uow, username, bid)
        return bid

    def _tender_owner_scope(self, uow: UnitOfWork, username: str, bid_id: uuid.UUID):
        self.gate.validate(uow, username)
        bid = self.bids.get(uow, bid_id)
        tender = self.tenders.get(uow, bid.tender_id)
        self.gate.permission(uow, username, tender.organization_id)
        return bid, tender
