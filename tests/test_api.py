"""
HTTP smoke tests: auth, catalogue, booking flows and admin screens.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from salon.infrastructure.llm.mock_llm import MockMarketingAssistant
from salon.infrastructure.store.memory_store import MemoryDocumentStore
from salon.infrastructure.suggestions.local_suggestions import LocalSuggestionService
from salon.main import app
from salon.wiring.dependencies import get_marketing_assistant, get_store, get_suggestion_service


def _client() -> TestClient:
    store = MemoryDocumentStore()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_suggestion_service] = lambda: LocalSuggestionService(limit=5)
    app.dependency_overrides[get_marketing_assistant] = lambda: MockMarketingAssistant(business_name="Divas AyA")
    return TestClient(app)


def _auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _admin(client: TestClient) -> dict[str, str]:
    resp = client.post("/api/v1/auth/admin/login", json={"email": "owner@salon.com", "password": "secret123"})
    assert resp.status_code == 200
    return _auth_header(resp.json()["access_token"])


def _customer(client: TestClient, email: str = "lucia@example.com") -> tuple[dict[str, str], str]:
    resp = client.post(
        "/api/v1/auth/customer/signup",
        json={"email": email, "password": "secret123", "first_name": "Lucia", "last_name": "Perez"},
    )
    assert resp.status_code == 201
    body = resp.json()
    return _auth_header(body["access_token"]), body["principal"]["uid"]


def _catalogue(client: TestClient, admin: dict[str, str]) -> tuple[str, str]:
    service = client.post(
        "/api/v1/services",
        json={"name": "Corte", "description": "Corte y peinado", "price": 25, "duration": 60},
        headers=admin,
    )
    stylist = client.post(
        "/api/v1/stylists",
        json={"name": "Ana", "availability": {"monday": [{"start": "09:00", "end": "13:00"}]}},
        headers=admin,
    )
    assert service.status_code == 201
    assert stylist.status_code == 201
    return service.json()["id"], stylist.json()["id"]


def test_health():
    client = _client()
    assert client.get("/health").json() == {"status": "ok"}


def test_admin_login_provisions_and_me_reports_role():
    client = _client()
    admin = _admin(client)

    me = client.get("/api/v1/auth/me", headers=admin)

    assert me.status_code == 200
    assert me.json()["role"] == "admin"
    bad = client.post("/api/v1/auth/admin/login", json={"email": "owner@salon.com", "password": "wrong-pass"})
    assert bad.status_code == 401


def test_customer_cannot_reach_admin_routes():
    client = _client()
    customer, _ = _customer(client)

    assert client.get("/api/v1/customers", headers=customer).status_code == 403
    assert client.post("/api/v1/services", json={"name": "x", "price": 1, "duration": 10}, headers=customer).status_code == 403
    assert client.get("/api/v1/admin/appointments").status_code == 401
    assert client.post(
        "/api/v1/auth/admin/login", json={"email": "lucia@example.com", "password": "secret123"}
    ).status_code == 403


def test_catalogue_validation_and_not_found():
    client = _client()
    admin = _admin(client)

    bad_service = client.post("/api/v1/services", json={"name": "Corte", "price": -5, "duration": 30}, headers=admin)
    bad_stylist = client.post(
        "/api/v1/stylists",
        json={"name": "Ana", "availability": {"monday": [{"start": "13:00", "end": "09:00"}]}},
        headers=admin,
    )

    assert bad_service.status_code == 422
    assert bad_stylist.status_code == 422
    assert client.get("/api/v1/services/missing").status_code == 404


def test_customer_request_admin_confirm_then_customer_cancel():
    client = _client()
    admin = _admin(client)
    service_id, stylist_id = _catalogue(client, admin)
    customer, customer_id = _customer(client)

    suggestions = client.post(
        "/api/v1/appointments/suggestions",
        json={"service_id": service_id, "preferred_date": "2030-06-03"},
    ).json()["suggestions"]
    assert len(suggestions) == 5
    assert suggestions[0]["start_time"] == "2030-06-03T09:00:00"

    requested = client.post(
        "/api/v1/appointments/requests",
        json={"service_id": service_id, "stylist_id": stylist_id, "start": suggestions[0]["start_time"]},
        headers=customer,
    )
    assert requested.status_code == 201
    pending_id = requested.json()["appointment"]["id"]
    assert requested.json()["appointment"]["customer_name"] == "Lucia Perez"

    pending = client.get("/api/v1/admin/appointments/pending", headers=admin).json()
    assert [p["id"] for p in pending] == [pending_id]

    confirmed = client.post(f"/api/v1/admin/appointments/{customer_id}/{pending_id}/confirm", headers=admin)
    assert confirmed.status_code == 200
    confirmed_id = confirmed.json()["appointment"]["id"]
    assert confirmed_id != pending_id

    mine = client.get("/api/v1/appointments/mine", headers=customer).json()
    assert [(a["id"], a["status"], a["cancellable"]) for a in mine] == [(confirmed_id, "confirmed", True)]

    next_suggestions = client.post(
        "/api/v1/appointments/suggestions",
        json={"service_id": service_id, "preferred_date": "2030-06-03", "stylist_id": stylist_id},
    ).json()["suggestions"]
    assert next_suggestions[0]["start_time"] == "2030-06-03T10:00:00"

    cancelled = client.post(f"/api/v1/appointments/mine/{confirmed_id}/cancel", headers=customer)
    assert cancelled.status_code == 200
    assert cancelled.json()["appointment"]["status"] == "cancelled"
    assert client.get("/api/v1/admin/appointments", headers=admin).json()[0]["status"] == "cancelled"


def test_admin_books_walk_in_and_conflict_is_409():
    client = _client()
    admin = _admin(client)
    service_id, stylist_id = _catalogue(client, admin)
    payload = {
        "service_id": service_id,
        "stylist_id": stylist_id,
        "start": "2030-06-03T10:00:00",
        "customer_email": "Walk.In@Example.com",
        "customer_first_name": "Rosa",
        "customer_last_name": "Gil",
    }

    first = client.post("/api/v1/admin/appointments", json=payload, headers=admin)
    second = client.post("/api/v1/admin/appointments", json=payload, headers=admin)

    assert first.status_code == 201
    assert first.json()["appointment"]["status"] == "confirmed"
    assert second.status_code == 409
    customers = client.get("/api/v1/customers", headers=admin).json()
    assert [c["email"] for c in customers] == ["walk.in@example.com"]

    dashboard = client.get("/api/v1/dashboard", params={"day": "2030-06-03"}, headers=admin).json()
    assert dashboard["appointments_today_count"] == 1
    assert dashboard["revenue_today"] == 25.0


def test_admin_cancel_with_explicit_ids():
    client = _client()
    admin = _admin(client)
    service_id, stylist_id = _catalogue(client, admin)
    created = client.post(
        "/api/v1/admin/appointments",
        json={
            "service_id": service_id,
            "stylist_id": stylist_id,
            "start": "2030-06-03T11:00:00",
            "customer_email": "rosa@example.com",
            "customer_first_name": "Rosa",
            "customer_last_name": "Gil",
        },
        headers=admin,
    ).json()["appointment"]

    body = {"customer_id": created["customer_id"], "stylist_id": stylist_id}
    first = client.post(f"/api/v1/admin/appointments/{created['id']}/cancel", json=body, headers=admin)
    again = client.post(f"/api/v1/admin/appointments/{created['id']}/cancel", json=body, headers=admin)
    missing = client.post("/api/v1/admin/appointments/nope/cancel", json=body, headers=admin)

    assert first.json()["success"] is True
    assert again.status_code == 200
    assert missing.status_code == 409


def test_marketing_post_and_gallery():
    client = _client()
    admin = _admin(client)

    post = client.post(
        "/api/v1/marketing/posts",
        json={"service_name": "Balayage", "offer": "2x1", "tone": "energetic"},
        headers=admin,
    )
    image = client.post(
        "/api/v1/gallery",
        json={"src": "https://img/1.jpg", "alt": "Balayage", "hint": "balayage"},
        headers=admin,
    )

    assert post.status_code == 200
    assert "Balayage" in post.json()["post_content"]
    assert image.status_code == 201
    assert [i["id"] for i in client.get("/api/v1/gallery").json()] == [image.json()["id"]]
