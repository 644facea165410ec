"""HTTP-level tests for the catalog and checkout routers."""

import pytest
from fastapi.testclient import TestClient

from api import checkout as checkout_api
from main import app
from services import assets_service
from services.checkout_session import SessionRegistry


class _FakeBucket:
    def __init__(self, fail: bool) -> None:
        self.fail = fail

    def get_public_url(self, path: str) -> str:
        if self.fail:
            raise RuntimeError("storage unavailable")
        return f"https://cdn.example/{path}"


class _FakeStorage:
    def __init__(self, fail: bool) -> None:
        self.fail = fail

    def from_(self, bucket: str) -> _FakeBucket:
        return _FakeBucket(self.fail)


class _FakeSupabase:
    def __init__(self, fail: bool = False) -> None:
        self.storage = _FakeStorage(fail)


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(checkout_api, "session_registry", SessionRegistry())
    monkeypatch.setattr(assets_service, "get_supabase", lambda: _FakeSupabase())
    return TestClient(app)


def _post_events(client: TestClient, session_id: str, *events: dict) -> dict:
    body = {}
    for event in events:
        response = client.post(f"/api/checkout/sessions/{session_id}/events", json=event)
        assert response.status_code == 200, response.text
        body = response.json()
    return body


def _filled_session(client: TestClient) -> str:
    session_id = client.post("/api/checkout/sessions").json()["session_id"]
    _post_events(
        client,
        session_id,
        {"type": "increment_product", "product_id": "100ml"},
        {"type": "increment_product", "product_id": "100ml"},
        {"type": "increment_product", "product_id": "250ml"},
        {"type": "select_zone", "municipality": "Cocody"},
        {"type": "update_customer", "full_name": "Awa", "phone": "0700"},
    )
    return session_id


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_lists_products_zones_and_assets(client) -> None:
    body = client.get("/api/catalog").json()

    assert [p["id"] for p in body["products"]] == ["100ml", "250ml"]
    assert body["accessory"]["price"] == 1000
    assert body["free_delivery_threshold_ml"] == 500
    zones = {group["zone"]: group for group in body["zones"]}
    assert zones["abidjan"]["delivery_fee"] == 1500
    assert len(zones["abidjan"]["municipalities"]) == 10
    assert zones["outlying"]["municipalities"] == ["Anyama", "Bingerville", "Songon"]
    assert zones["outside"]["delivery_fee"] == 3000
    assert body["assets"]["product_image_url"] == "https://cdn.example/sniper_bottle.jpg"
    assert body["assets"]["logo_url"] == "https://cdn.example/logo_stopunaise.png"


def test_catalog_falls_back_when_storage_fails(client, monkeypatch) -> None:
    monkeypatch.setattr(assets_service, "get_supabase", lambda: _FakeSupabase(fail=True))

    body = client.get("/api/catalog").json()

    assert body["assets"]["product_image_url"].startswith("https://via.placeholder.com/")
    assert body["assets"]["logo_url"] is None


def test_quote_is_stateless(client) -> None:
    payload = {"quantities": {"100ml": 2, "250ml": 1}, "municipality": "Cocody"}

    body = client.post("/api/checkout/quote", json=payload).json()

    assert body["totals"]["total"] == 12500
    assert body["is_valid"] is False


def test_quote_prices_come_from_the_catalog(client) -> None:
    payload = {
        "quantities": {"100ml": 1},
        "municipality": "Cocody",
        "items": [{"id": "100ml", "name": "x", "volume": "900ml", "price": 1, "quantity": 1}],
        "zone": {"name": "Cocody", "zone": "abidjan", "delivery_fee": 0},
        "delivery_fee": 0,
    }

    totals = client.post("/api/checkout/quote", json=payload).json()["totals"]

    assert totals["subtotal"] == 2500
    assert totals["delivery"] == 1500
    assert totals["is_free_delivery"] is False
    assert totals["total"] == 4000


def test_quote_unknown_product_is_400(client) -> None:
    response = client.post("/api/checkout/quote", json={"quantities": {"1l": 1}})

    assert response.status_code == 400


def test_session_creation_is_bounded(client, monkeypatch) -> None:
    monkeypatch.setattr(
        checkout_api, "session_registry", SessionRegistry(ttl_seconds=3600, max_sessions=50)
    )

    for _ in range(200):
        assert client.post("/api/checkout/sessions").status_code == 201

    assert len(checkout_api.session_registry) == 50


def test_new_session_cannot_submit(client) -> None:
    response = client.post("/api/checkout/sessions")

    assert response.status_code == 201
    body = response.json()
    assert body["can_submit"] is False
    assert body["totals"]["total"] == 0


def test_unknown_session_is_404(client) -> None:
    assert client.get("/api/checkout/sessions/nope").status_code == 404


def test_unknown_product_is_400(client) -> None:
    session_id = client.post("/api/checkout/sessions").json()["session_id"]

    response = client.post(
        f"/api/checkout/sessions/{session_id}/events",
        json={"type": "increment_product", "product_id": "1l"},
    )

    assert response.status_code == 400


def test_submit_success_returns_handoff_and_resets(client, store) -> None:
    session_id = _filled_session(client)

    response = client.post(f"/api/checkout/sessions/{session_id}/submit")

    assert response.status_code == 200
    body = response.json()
    assert body["order_id"] == "1"
    assert body["handoff_url"].startswith("https://wa.me/+2250556520604?text=")
    assert "TOTAL: 12,500 CFA FRANCS" in body["summary"]
    assert body["session"]["show_confirmation"] is True
    assert body["session"]["totals"]["total"] == 0

    dismissed = client.post(f"/api/checkout/sessions/{session_id}/confirmation/dismiss").json()
    assert dismissed["show_confirmation"] is False


def test_submit_invalid_is_422(client, store) -> None:
    session_id = client.post("/api/checkout/sessions").json()["session_id"]

    response = client.post(f"/api/checkout/sessions/{session_id}/submit")

    assert response.status_code == 422
    assert store.calls == []


def test_submit_store_failure_is_502_and_keeps_state(client, store) -> None:
    store.fail_order = True
    session_id = _filled_session(client)

    response = client.post(f"/api/checkout/sessions/{session_id}/submit")

    assert response.status_code == 502
    assert "Veuillez réessayer" in response.json()["detail"]
    view = client.get(f"/api/checkout/sessions/{session_id}").json()
    assert view["totals"]["total"] == 12500
    assert view["can_submit"] is True
