import uuid

import pytest

from procurement.core.errors import (
    DeadlineExceeded,
    NotEnoughPrivileges,
    TenderNotFound,
    UserNotFound,
    VersionNotFound,
)
from procurement.db.unit_of_work import unit_of_work
from procurement.models.enums import ServiceType, TenderStatus
from procurement.models.tender import TenderHistoryRecord, TenderRecord
from procurement.schemas.tender import TenderNew, TenderPatch
from procurement.services.rollback_service import RollbackService
from procurement.tests.factories import count_rows, create_tender


def history(session_factory, tender_id, version):
    with unit_of_work(session_factory, op="test") as uow:
        return RollbackService().tender_history.get(uow, tender_id, version)


# ---------------------------------------------------------------------
# create / list
# ---------------------------------------------------------------------


def test_new_tender_starts_created_at_version_one(services, world):
    tender = create_tender(services, world.orgs["acme"], "alice")

    assert tender.version == 1
    assert tender.status == TenderStatus.CREATED
    assert tender.id is not None
    assert tender.created_at is not None


def test_new_tender_requires_known_creator(services, world, session_factory):
    payload = TenderNew(
        organization_id=world.orgs["acme"],
        name="x",
        service_type=ServiceType.DELIVERY,
        creator_username="nobody",
    )
    with pytest.raises(UserNotFound):
        services.tenders.new(payload)

    assert count_rows(session_factory, TenderRecord) == 0


def test_all_lists_only_published_sorted_by_name(services, world):
    org = world.orgs["acme"]
    create_tender(services, org, "alice", name="charlie", publish=True)
    create_tender(services, org, "alice", name="alpha", publish=True)
    create_tender(services, org, "alice", name="bravo")

    names = [t.name for t in services.tenders.all(10, 0)]
    assert names == ["alpha", "charlie"]


def test_all_filters_by_service_type_and_paginates(services, world):
    org = world.orgs["acme"]
    create_tender(services, org, "alice", name="a", service_type=ServiceType.DELIVERY, publish=True)
    create_tender(services, org, "alice", name="b", service_type=ServiceType.CONSTRUCTION, publish=True)
    create_tender(services, org, "alice", name="c", service_type=ServiceType.MANUFACTURE, publish=True)

    res = services.tenders.all(10, 0, [ServiceType.DELIVERY, ServiceType.MANUFACTURE])
    assert [t.name for t in res] == ["a", "c"]

    assert [t.name for t in services.tenders.all(1, 1)] == ["b"]


def test_my_lists_tenders_of_users_organizations(services, world):
    create_tender(services, world.orgs["acme"], "alice", name="acme tender")
    create_tender(services, world.orgs["duo"], "frank", name="duo tender")

    assert [t.name for t in services.tenders.my(10, 0, "bob")] == ["acme tender"]
    assert services.tenders.my(10, 0, "mallory") == []

    with pytest.raises(UserNotFound):
        services.tenders.my(10, 0, "nobody")


def test_tender_getter(services, world):
    tender = create_tender(services, world.orgs["acme"], "alice")
    assert services.tenders.tender(tender.id) == tender


# ---------------------------------------------------------------------
# status
# ---------------------------------------------------------------------


def test_status_requires_representative(services, world):
    tender = create_tender(services, world.orgs["acme"], "alice")

    assert services.tenders.status("bob", tender.id) == TenderStatus.CREATED
    with pytest.raises(NotEnoughPrivileges):
        services.tenders.status("frank", tender.id)
    with pytest.raises(UserNotFound):
        services.tenders.status("nobody", tender.id)


def test_set_status_does_not_bump_version(services, world):
    tender = create_tender(services, world.orgs["acme"], "alice")

    published = services.tenders.set_status("carol", tender.id, TenderStatus.PUBLISHED)
    closed = services.tenders.set_status("carol", tender.id, TenderStatus.CLOSED)

    assert published.status == TenderStatus.PUBLISHED
    assert closed.status == TenderStatus.CLOSED
    assert closed.version == 1


def test_set_status_by_outsider_changes_nothing(services, world):
    tender = create_tender(services, world.orgs["acme"], "alice")

    with pytest.raises(NotEnoughPrivileges):
        services.tenders.set_status("mallory", tender.id, TenderStatus.PUBLISHED)

    assert services.tenders.tender(tender.id).status == TenderStatus.CREATED


def test_unknown_tender(services, world):
    with pytest.raises(TenderNotFound):
        services.tenders.status("alice", uuid.uuid4())


# ---------------------------------------------------------------------
# edit / rollback
# ---------------------------------------------------------------------


def test_edit_patches_bumps_version_and_archives_predecessor(services, world, session_factory):
    tender = create_tender(services, world.orgs["acme"], "alice", name="old")

    edited = services.tenders.edit(
        "bob", tender.id, TenderPatch(name="new", service_type=ServiceType.DELIVERY)
    )

    assert edited.version == 2
    assert edited.name == "new"
    assert edited.service_type == ServiceType.DELIVERY
    assert edited.description == tender.description
    assert edited.created_at == tender.created_at
    assert history(session_factory, tender.id, 1) == tender


def test_empty_patch_still_bumps_version(services, world, session_factory):
    tender = create_tender(services, world.orgs["acme"], "alice")

    edited = services.tenders.edit("alice", tender.id, TenderPatch())

    assert edited.version == 2
    assert history(session_factory, tender.id, 1) == tender
    assert (edited.name, edited.description) == (tender.name, tender.description)


def test_edit_by_outsider_is_refused_and_not_archived(services, world, session_factory):
    tender = create_tender(services, world.orgs["acme"], "alice")

    with pytest.raises(NotEnoughPrivileges):
        services.tenders.edit("frank", tender.id, TenderPatch(name="hijack"))

    assert services.tenders.tender(tender.id).version == 1
    assert count_rows(session_factory, TenderHistoryRecord) == 0


def test_rollback_is_forward_only_and_keeps_current_status(services, world):
    tender = create_tender(services, world.orgs["acme"], "alice", name="v1")
    services.tenders.edit("alice", tender.id, TenderPatch(name="v2"))
    services.tenders.edit("alice", tender.id, TenderPatch(name="v3", description="changed"))
    services.tenders.set_status("alice", tender.id, TenderStatus.PUBLISHED)

    restored = services.tenders.rollback("alice", tender.id, 1)

    assert restored.version == 4
    assert restored.name == "v1"
    assert restored.description == tender.description
    assert restored.status == TenderStatus.PUBLISHED
    assert restored.id == tender.id
    assert restored.created_at == tender.created_at


def test_rollback_to_missing_version(services, world, session_factory):
    tender = create_tender(services, world.orgs["acme"], "alice")

    with pytest.raises(VersionNotFound):
        services.tenders.rollback("alice", tender.id, 5)

    # the archive written during the failed swap is rolled back too
    assert count_rows(session_factory, TenderHistoryRecord) == 0
    assert services.tenders.tender(tender.id).version == 1


def test_version_is_one_plus_number_of_mutations(services, world, session_factory):
    tender = create_tender(services, world.orgs["acme"], "alice", name="n0")

    services.tenders.edit("alice", tender.id, TenderPatch(name="n1"))
    services.tenders.edit("alice", tender.id, TenderPatch(name="n2"))
    services.tenders.rollback("alice", tender.id, 1)
    services.tenders.edit("alice", tender.id, TenderPatch(name="n4"))
    final = services.tenders.rollback("alice", tender.id, 3)

    assert final.version == 1 + 5
    for version in range(1, final.version):
        assert history(session_factory, tender.id, version).version == version
    with pytest.raises(VersionNotFound):
        history(session_factory, tender.id, final.version)

    # snapshot 3 holds the content live at version 3
    assert final.name == "n2"


def test_expired_deadline_persists_nothing(services, world, session_factory):
    tender = create_tender(services, world.orgs["acme"], "alice")

    with pytest.raises(DeadlineExceeded):
        services.tenders.edit("alice", tender.id, TenderPatch(name="late"), timeout=0)

    assert services.tenders.tender(tender.id).name == tender.name
