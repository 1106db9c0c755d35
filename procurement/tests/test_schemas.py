import uuid

import pytest

from procurement.core.errors import ParseError
from procurement.core.validate import parse_enum
from procurement.models.enums import AuthorType, ServiceType, TenderStatus
from procurement.schemas.bid import BidNew, BidPatch
from procurement.schemas.primitives import parse_body
from procurement.schemas.tender import TenderNew, TenderPatch


def tender_payload(**overrides):
    data = {
        "organizationId": str(uuid.uuid4()),
        "name": "Bridge",
        "description": "Build a bridge",
        "serviceType": "Construction",
        "creatorUsername": "alice",
    }
    data.update(overrides)
    return data


def test_tender_new_reads_camel_case():
    t = parse_body(TenderNew, tender_payload())

    assert t.name == "Bridge"
    assert t.service_type == ServiceType.CONSTRUCTION
    assert t.creator_username == "alice"

    entity = t.to_entity()
    assert entity.version == 1
    assert entity.status == TenderStatus.CREATED


def test_empty_tender_name_is_rejected():
    with pytest.raises(ParseError) as exc:
        parse_body(TenderNew, tender_payload(name=""))

    assert str(exc.value) == "tender name must not be empty"
    assert exc.value.user_caused is False


def test_bad_creator_is_user_caused():
    with pytest.raises(ParseError) as exc:
        parse_body(TenderNew, tender_payload(creatorUsername=""))
    assert exc.value.user_caused is True

    with pytest.raises(ParseError) as exc:
        parse_body(TenderNew, tender_payload(creatorUsername="x" * 101))
    assert exc.value.user_caused is True


def test_description_length_limit():
    parse_body(TenderNew, tender_payload(description="x" * 500))
    with pytest.raises(ParseError):
        parse_body(TenderNew, tender_payload(description="x" * 501))


@pytest.mark.parametrize("raw", ["construction", "CONSTRUCTION", "Building", ""])
def test_service_type_is_exact_match(raw):
    with pytest.raises(ParseError) as exc:
        parse_body(TenderNew, tender_payload(serviceType=raw))
    assert str(exc.value) == "unknown service type"


def test_missing_field_is_reported():
    data = tender_payload()
    del data["organizationId"]
    with pytest.raises(ParseError) as exc:
        parse_body(TenderNew, data)
    assert "organizationId" in str(exc.value)


def test_non_object_body_is_a_parse_error():
    with pytest.raises(ParseError):
        parse_body(TenderNew, None)
    with pytest.raises(ParseError):
        parse_body(TenderNew, ["a"])


def test_patch_changes_only_given_fields():
    patch = parse_body(TenderPatch, {"name": "renamed", "description": None})
    assert patch.changes() == {"name": "renamed"}
    assert parse_body(TenderPatch, {}).changes() == {}

    patch = parse_body(TenderPatch, {"serviceType": "Delivery"})
    assert patch.changes() == {"service_type": ServiceType.DELIVERY}

    with pytest.raises(ParseError):
        parse_body(TenderPatch, {"serviceType": "delivery"})
    with pytest.raises(ParseError):
        parse_body(TenderPatch, {"name": "x" * 101})


def test_bid_new_author_type_is_strict():
    data = {
        "tenderId": str(uuid.uuid4()),
        "name": "Offer",
        "authorType": "User",
        "authorId": str(uuid.uuid4()),
    }
    assert parse_body(BidNew, data).author_type == AuthorType.USER

    with pytest.raises(ParseError) as exc:
        parse_body(BidNew, dict(data, authorType="user"))
    assert str(exc.value) == "unknown author type"

    with pytest.raises(ParseError):
        parse_body(BidNew, dict(data, name=""))


def test_bid_patch_ignores_immutable_fields():
    patch = parse_body(BidPatch, {"name": "n", "tenderId": str(uuid.uuid4())})
    assert patch.changes() == {"name": "n"}


def test_parse_enum_for_query_values():
    assert parse_enum(TenderStatus, "Closed", "unknown tender status") == TenderStatus.CLOSED
    with pytest.raises(ParseError) as exc:
        parse_enum(TenderStatus, "closed", "unknown tender status")
    assert str(exc.value) == "unknown tender status"
