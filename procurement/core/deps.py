# procurement/core/deps.py
import uuid
from typing import Type

from fastapi import Query, Request

from procurement.core.errors import BidNotFound, NotFound, TenderNotFound
from procurement.core.validate import USERNAME_MAX, require_text
from procurement.services.registry import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


def acting_username(username: str = Query("")) -> str:
    """The acting user; a missing or malformed name is an identity failure (401)."""
    return require_text(username, "username", USERNAME_MAX, user_caused=True)


def _path_id(raw: str, not_found: Type[NotFound], what: str) -> uuid.UUID:
    # a malformed id cannot name anything: report it as not found
    try:
        return uuid.UUID(raw)
    except ValueError as e:
        raise not_found(f"invalid {what} id") from e


def tender_id_param(tender_id: str) -> uuid.UUID:
    return _path_id(tender_id, TenderNotFound, "tender")


def bid_id_param(bid_id: str) -> uuid.UUID:
    return _path_id(bid_id, BidNotFound, "bid")
