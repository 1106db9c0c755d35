# procurement/api/v1/tenders.py
from __future__ import annotations

import uuid
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Query

from procurement.core.deps import acting_username, get_services, tender_id_param
from procurement.core.validate import INT32_MAX, INT32_MIN, parse_enum
from procurement.models.enums import ServiceType, TenderStatus
from procurement.schemas.primitives import parse_body
from procurement.schemas.tender import TenderNew, TenderOut, TenderPatch
from procurement.services.registry import Services

router = APIRouter(prefix="/tenders")


def _service_types(raw: List[str]) -> List[ServiceType]:
    # accepts ?service_type=A&service_type=B as well as ?service_type=A,B
    out: List[ServiceType] = []
    for chunk in raw:
        for part in chunk.split(","):
            if part:
                out.append(parse_enum(ServiceType, part, "unknown service type"))
    return out


@router.post("/new", response_model=TenderOut)
def new_tender(
    payload: Any = Body(None),
    services: Services = Depends(get_services),
):
    tender = services.tenders.new(parse_body(TenderNew, payload))
    return TenderOut.from_entity(tender)


@router.get("", response_model=List[TenderOut])
def list_tenders(
    limit: int = Query(5, ge=0, le=INT32_MAX),
    offset: int = Query(0, ge=0, le=INT32_MAX),
    service_type: List[str] = Query(default=[]),
    services: Services = Depends(get_services),
):
    res = services.tenders.all(limit, offset, _service_types(service_type))
    return [TenderOut.from_entity(t) for t in res]


@router.get("/my", response_model=List[TenderOut])
def my_tenders(
    username: str = Depends(acting_username),
    limit: int = Query(5, ge=0, le=INT32_MAX),
    offset: int = Query(0, ge=0, le=INT32_MAX),
    services: Services = Depends(get_services),
):
    res = services.tenders.my(limit, offset, username)
    return [TenderOut.from_entity(t) for t in res]


# ---------------------------------------------------------------------
# single tender
# ---------------------------------------------------------------------


@router.get("/{tender_id}/status", response_model=TenderStatus)
def tender_status(
    username: str = Depends(acting_username),
    tender_id: uuid.UUID = Depends(tender_id_param),
    services: Services = Depends(get_services),
):
    return services.tenders.status(username, tender_id)


@router.put("/{tender_id}/status", response_model=TenderOut)
def set_tender_status(
    username: str = Depends(acting_username),
    tender_id: uuid.UUID = Depends(tender_id_param),
    status: str = Query(""),
    services: Services = Depends(get_services),
):
    new_status = parse_enum(TenderStatus, status, "unknown tender status")
    tender = services.tenders.set_status(username, tender_id, new_status)
    return TenderOut.from_entity(tender)


@router.patch("/{tender_id}/edit", response_model=TenderOut)
def edit_tender(
    username: str = Depends(acting_username),
    tender_id: uuid.UUID = Depends(tender_id_param),
    payload: Any = Body(None),
    services: Services = Depends(get_services),
):
    patch = parse_body(TenderPatch, payload)
    tender = services.tenders.edit(username, tender_id, patch)
    return TenderOut.from_entity(tender)


@router.put("/{tender_id}/rollback/{version}", response_model=TenderOut)
def rollback_tender(
    version: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    username: str = Depends(acting_username),
    tender_id: uuid.UUID = Depends(tender_id_param),
    services: Services = Depends(get_services),
):
    tender = services.tenders.rollback(username, tender_id, version)
    return TenderOut.from_entity(tender)
