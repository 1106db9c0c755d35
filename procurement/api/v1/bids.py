# procurement/api/v1/bids.py
from __future__ import annotations

import uuid
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Query

from procurement.core.deps import acting_username, bid_id_param, get_services, tender_id_param
from procurement.core.validate import FEEDBACK_MAX, INT32_MAX, INT32_MIN, USERNAME_MAX, parse_enum, require_text
from procurement.models.enums import BidStatus, DecisionType
from procurement.schemas.bid import BidNew, BidOut, BidPatch, ReviewOut
from procurement.schemas.primitives import parse_body
from procurement.services.registry import Services

router = APIRouter(prefix="/bids")


@router.post("/new", response_model=BidOut)
def new_bid(
    payload: Any = Body(None),
    services: Services = Depends(get_services),
):
    bid = services.bids.new(parse_body(BidNew, payload))
    return BidOut.from_entity(bid)


@router.get("/my", response_model=List[BidOut])
def my_bids(
    username: str = Depends(acting_username),
    limit: int = Query(5, ge=0, le=INT32_MAX),
    offset: int = Query(0, ge=0, le=INT32_MAX),
    services: Services = Depends(get_services),
):
    res = services.bids.my(username, limit, offset)
    return [BidOut.from_entity(b) for b in res]


@router.get("/{tender_id}/list", response_model=List[BidOut])
def tender_bids(
    username: str = Depends(acting_username),
    tender_id: uuid.UUID = Depends(tender_id_param),
    limit: int = Query(5, ge=0, le=INT32_MAX),
    offset: int = Query(0, ge=0, le=INT32_MAX),
    services: Services = Depends(get_services),
):
    res = services.bids.list(username, tender_id, limit, offset)
    return [BidOut.from_entity(b) for b in res]


# ---------------------------------------------------------------------
# single bid
# ---------------------------------------------------------------------


@router.get("/{bid_id}/status", response_model=BidStatus)
def bid_status(
    username: str = Depends(acting_username),
    bid_id: uuid.UUID = Depends(bid_id_param),
    services: Services = Depends(get_services),
):
    return services.bids.status(username, bid_id)


@router.put("/{bid_id}/status", response_model=BidOut)
def set_bid_status(
    username: str = Depends(acting_username),
    bid_id: uuid.UUID = Depends(bid_id_param),
    status: str = Query(""),
    services: Services = Depends(get_services),
):
    new_status = parse_enum(BidStatus, status, "unknown bid status")
    return BidOut.from_entity(services.bids.set_status(username, bid_id, new_status))


@router.patch("/{bid_id}/edit", response_model=BidOut)
def edit_bid(
    username: str = Depends(acting_username),
    bid_id: uuid.UUID = Depends(bid_id_param),
    payload: Any = Body(None),
    services: Services = Depends(get_services),
):
    patch = parse_body(BidPatch, payload)
    return BidOut.from_entity(services.bids.edit(username, bid_id, patch))


@router.put("/{bid_id}/rollback/{version}", response_model=BidOut)
def rollback_bid(
    version: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    username: str = Depends(acting_username),
    bid_id: uuid.UUID = Depends(bid_id_param),
    services: Services = Depends(get_services),
):
    return BidOut.from_entity(services.bids.rollback(username, bid_id, version))


# ---------------------------------------------------------------------
# decisions / feedback
# ---------------------------------------------------------------------


@router.put("/{bid_id}/submit_decision", response_model=BidOut)
def submit_decision(
    username: str = Depends(acting_username),
    bid_id: uuid.UUID = Depends(bid_id_param),
    decision: str = Query(""),
    services: Services = Depends(get_services),
):
    value = parse_enum(DecisionType, decision, "unknown decision")
    return BidOut.from_entity(services.bids.submit_decision(username, bid_id, value))


@router.get("/{tender_id}/reviews", response_model=List[ReviewOut])
def bid_reviews(
    authorUsername: str = Query(""),
    requesterUsername: str = Query(""),
    tender_id: uuid.UUID = Depends(tender_id_param),
    limit: int = Query(5, ge=0, le=INT32_MAX),
    offset: int = Query(0, ge=0, le=INT32_MAX),
    services: Services = Depends(get_services),
):
    author = require_text(authorUsername, "author username", USERNAME_MAX)
    requester = require_text(
        requesterUsername, "requester username", USERNAME_MAX, user_caused=True
    )
    res = services.bids.reviews(requester, author, tender_id, limit, offset)
    return [ReviewOut.from_entity(r) for r in res]


@router.put("/{bid_id}/feedback", response_model=BidOut)
def bid_feedback(
    bidFeedback: str = Query(""),
    username: str = Depends(acting_username),
    bid_id: uuid.UUID = Depends(bid_id_param),
    services: Services = Depends(get_services),
):
    text = require_text(bidFeedback, "bid feedback", FEEDBACK_MAX)
    return BidOut.from_entity(services.bids.feedback(username, bid_id, text))
