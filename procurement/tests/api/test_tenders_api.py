import uuid

import pytest

from procurement.core.errors import InfrastructureError


@pytest.fixture
def tender_body(world):
    return {
        "organizationId": str(world.orgs["acme"]),
        "name": "Bridge",
        "description": "Build a bridge",
        "serviceType": "Construction",
        "creatorUsername": "alice",
    }


def create(client, body):
    r = client.post("/api/tenders/new", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def test_ping(client):
    r = client.get("/api/ping")
    assert r.status_code == 200
    assert r.text == "ok"
    assert r.headers["X-Request-Id"]


def test_request_id_is_echoed(client):
    r = client.get("/api/ping", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"


def test_new_tender(client, tender_body):
    data = create(client, tender_body)

    assert data["name"] == "Bridge"
    assert data["organizationId"] == tender_body["organizationId"]
    assert data["serviceType"] == "Construction"
    assert data["status"] == "Created"
    assert data["version"] == 1
    assert set(data) == {
        "id",
        "organizationId",
        "name",
        "description",
        "serviceType",
        "status",
        "version",
        "createdAt",
    }


@pytest.mark.parametrize(
    "override, status, reason",
    [
        ({"name": ""}, 400, "tender name must not be empty"),
        ({"serviceType": "construction"}, 400, "unknown service type"),
        ({"creatorUsername": ""}, 401, "creator username must not be empty"),
        ({"creatorUsername": "nobody"}, 401, "user not found"),
    ],
)
def test_new_tender_errors(client, tender_body, override, status, reason):
    r = client.post("/api/tenders/new", json=dict(tender_body, **override))
    assert r.status_code == status
    assert r.json() == {"reason": reason}


def test_new_tender_malformed_json(client, world):
    r = client.post(
        "/api/tenders/new",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"reason": "invalid json"}


def test_listing_and_filtering(client, tender_body):
    t1 = create(client, tender_body)
    create(client, dict(tender_body, name="Parcel", serviceType="Delivery"))
    t3 = create(client, dict(tender_body, name="Airport", serviceType="Delivery"))

    for t in (t1, t3):
        r = client.put(
            f"/api/tenders/{t['id']}/status", params={"username": "alice", "status": "Published"}
        )
        assert r.status_code == 200

    r = client.get("/api/tenders")
    assert [t["name"] for t in r.json()] == ["Airport", "Bridge"]

    r = client.get("/api/tenders", params={"service_type": "Delivery,Manufacture"})
    assert [t["name"] for t in r.json()] == ["Airport"]

    r = client.get("/api/tenders", params={"limit": 1, "offset": 1})
    assert [t["name"] for t in r.json()] == ["Bridge"]

    r = client.get("/api/tenders", params={"service_type": "delivery"})
    assert r.status_code == 400

    r = client.get("/api/tenders/my", params={"username": "bob"})
    assert r.status_code == 200
    assert len(r.json()) == 3


def test_status_endpoints(client, tender_body):
    t = create(client, tender_body)
    url = f"/api/tenders/{t['id']}/status"

    r = client.get(url, params={"username": "alice"})
    assert r.status_code == 200
    assert r.json() == "Created"

    assert client.get(url).status_code == 401
    assert client.get(url, params={"username": "nobody"}).status_code == 401
    assert client.get(url, params={"username": "frank"}).status_code == 403
    assert client.get("/api/tenders/not-a-uuid/status", params={"username": "alice"}).status_code == 404
    assert client.get(f"/api/tenders/{uuid.uuid4()}/status", params={"username": "alice"}).status_code == 404

    r = client.put(url, params={"username": "alice", "status": "Closed"})
    assert r.status_code == 200
    assert r.json()["status"] == "Closed"
    assert r.json()["version"] == 1

    r = client.put(url, params={"username": "alice", "status": "closed"})
    assert r.status_code == 400
    assert r.json() == {"reason": "unknown tender status"}


def test_edit_and_rollback(client, tender_body):
    t = create(client, tender_body)

    r = client.patch(
        f"/api/tenders/{t['id']}/edit",
        params={"username": "alice"},
        json={"name": "Tunnel", "serviceType": "Manufacture"},
    )
    assert r.status_code == 200
    assert r.json()["version"] == 2
    assert r.json()["name"] == "Tunnel"

    r = client.put(f"/api/tenders/{t['id']}/rollback/1", params={"username": "alice"})
    assert r.status_code == 200
    data = r.json()
    assert data["version"] == 3
    assert data["name"] == "Bridge"
    assert data["serviceType"] == "Construction"
    assert data["createdAt"] == t["createdAt"]

    r = client.put(f"/api/tenders/{t['id']}/rollback/42", params={"username": "alice"})
    assert r.status_code == 404
    assert r.json() == {"reason": "version not found"}

    r = client.put(f"/api/tenders/{t['id']}/rollback/abc", params={"username": "alice"})
    assert r.status_code == 400

    r = client.patch(
        f"/api/tenders/{t['id']}/edit", params={"username": "mallory"}, json={"name": "x"}
    )
    assert r.status_code == 403


def test_storage_failure_is_internal_error(client, monkeypatch):
    def broken(*args, **kwargs):
        raise InfrastructureError("storage.tender.list_published: connection refused")

    services = client.app.state.services
    monkeypatch.setattr(services.tenders.tenders, "list_published", broken)

    r = client.get("/api/tenders")
    assert r.status_code == 500
    assert r.json() == {"reason": "internal error"}


def test_oversized_paging_and_version_are_rejected(client, tender_body):
    t = create(client, tender_body)

    r = client.put(f"/api/tenders/{t['id']}/rollback/{10**20}", params={"username": "alice"})
    assert r.status_code == 400
    assert "version" in r.json()["reason"]

    r = client.put(f"/api/tenders/{t['id']}/rollback/{2**31}", params={"username": "alice"})
    assert r.status_code == 400

    r = client.get("/api/tenders", params={"limit": str(10**20)})
    assert r.status_code == 400
    assert "limit" in r.json()["reason"]

    r = client.get("/api/tenders/my", params={"username": "alice", "offset": str(2**31)})
    assert r.status_code == 400

    r = client.get("/api/tenders/my", params={"username": "alice", "limit": str(2**31 - 1)})
    assert r.status_code == 200
