"""API tests against the in-memory contact service. No HTTP contact service needed."""

import pytest
from fastapi.testclient import TestClient

from api import main as api_main
from api.main import app
from contactbook.application import NetworkError
from contactbook.domain import Contact
from contactbook.infrastructure import InMemoryContactService

ANN = Contact(id=1, name="Ann", address="1 St", postal_code="A1", city="X")


def _install(source, gateway) -> None:
    app.state.source = source
    app.state.gateway = gateway
    api_main._book_cache.clear()


@pytest.fixture
def service():
    svc = InMemoryContactService([ANN])
    _install(svc, svc)
    yield svc
    _install(None, None)


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_contacts(client, service):
    r = client.get("/contacts")
    assert r.status_code == 200
    assert r.json() == [
        {"id": 1, "name": "Ann", "address": "1 St", "postal_code": "A1", "city": "X"}
    ]


def test_search_contacts(client, service):
    assert [c["id"] for c in client.get("/contacts", params={"q": "An"}).json()] == [1]
    assert client.get("/contacts", params={"q": "zzz"}).json() == []
    assert [c["id"] for c in client.get("/contacts", params={"q": ""}).json()] == [1]


def test_query_state_is_per_user(client, service):
    client.get("/contacts", params={"q": "zzz"}, headers={"X-User-Id": "u1"})
    r = client.get("/contacts", headers={"X-User-Id": "u2"})
    assert [c["id"] for c in r.json()] == [1]


def test_search_sees_contacts_created_by_another_user(client, service):
    bob = {"X-User-Id": "bob"}
    alice = {"X-User-Id": "alice"}
    assert client.get("/contacts", params={"q": "Bobby"}, headers=bob).json() == []

    r = client.post(
        "/contacts",
        json={"name": "Bobby", "address": "3 Ln", "postal_code": "C3", "city": "Z"},
        headers=alice,
    )
    assert r.status_code == 201

    r = client.get("/contacts", params={"q": "Bobby"}, headers=bob)
    assert [c["name"] for c in r.json()] == ["Bobby"]


def test_create_without_duplicates(client, service):
    r = client.post(
        "/contacts",
        json={"name": "Bob", "address": "2 Rd", "postal_code": "B2", "city": "Y"},
    )
    assert r.status_code == 201
    assert r.json() == {"status": "created", "duplicates": []}
    assert [c.name for c in service.created] == ["Bob"]
    assert [c["name"] for c in client.get("/contacts").json()] == ["Ann", "Bob"]


def test_create_duplicate_needs_confirmation(client, service):
    body = {"name": "Ann", "address": "1 St", "postal_code": "A1", "city": "X"}
    r = client.post("/contacts", json=body)
    assert r.status_code == 409
    payload = r.json()
    assert "Ann, 1 St, A1, X" in payload["detail"]
    assert payload["detail"].endswith("Do you still want to create it?")
    assert [d["id"] for d in payload["duplicates"]] == [1]
    assert service.created == []

    r = client.post("/contacts", json={**body, "confirm": True})
    assert r.status_code == 201
    assert len(service.created) == 1


def test_create_fails_when_duplicate_check_fails(client, service):
    class FailingGateway:
        async def find_near_duplicates(self, candidate):
            raise NetworkError("HTTP 500 from GET /contacts/near_duplicates", status_code=500)

        async def create_contact(self, contact):
            raise AssertionError("create must not be called")

    _install(service, FailingGateway())
    r = client.post("/contacts", json={"name": "Bob"})
    assert r.status_code == 502
    assert r.json()["stage"] == "checking"
    assert "HTTP 500" in r.json()["detail"]


def test_list_error_is_reported(client):
    class BrokenSource:
        loading = False
        error = None
        data = None

        async def refetch(self):
            self.error = NetworkError("Request error on POST /graphql")
            return None

    _install(BrokenSource(), InMemoryContactService())
    try:
        r = client.get("/contacts")
        assert r.status_code == 502
        assert "graphql" in r.json()["detail"]
    finally:
        _install(None, None)


def test_refresh(client, service):
    r = client.post("/contacts/refresh")
    assert r.status_code == 200
    assert r.json() == {"count": 1}
