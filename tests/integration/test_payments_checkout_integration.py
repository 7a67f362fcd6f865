from urllib.parse import urlparse, parse_qs

import pytest

from storefront import config
from storefront.utils.errors import UpstreamError

URL = "/api/orders/checkout/create-checkout-session"


@pytest.fixture
def unipaas(monkeypatch):
    sent = []

    def _install(response=None, error=None):
        def _create(payload):
            sent.append(payload)
            if error:
                raise error
            return response
        monkeypatch.setattr("storefront.payments.unipaas_client.create_checkout", _create)
        return sent

    return _install


def test_checkout_success(client, store, unipaas):
    order = store.add_order()
    sent = unipaas({"id": "cs_123", "sessionToken": "tok_abc", "shortLink": "https://pay.test/abc"})
    r = client.post(URL, json={"orderId": order["id"], "customerEmail": "buyer@example.com"})
    assert r.status_code == 200
    assert r.json() == {"sessionToken": "tok_abc", "sessionId": "cs_123", "shortLink": "https://pay.test/abc"}
    assert store.orders[order["id"]]["payment_session_id"] == "cs_123"
    assert store.orders[order["id"]]["status"] == "PENDING"
    assert sent[0]["metadata"] == {"orderId": order["id"]}
    assert sent[0]["email"] == "buyer@example.com"


def test_checkout_fallback_when_provider_fails(client, store, unipaas, monkeypatch):
    monkeypatch.setattr(config, "FRONTEND_URL", "http://localhost:5173")
    order = store.add_order(total=107.0, order_number="ORD-2024-55555")
    unipaas(error=UpstreamError("UniPaas a répondu 500", status_code=500))
    r = client.post(URL, json={"orderId": order["id"]})
    assert r.status_code == 200
    body = r.json()
    assert body["fallbackMode"] is True
    assert body["sessionId"].startswith("direct_")
    parsed = urlparse(body["checkoutUrl"])
    assert parsed.path == "/payment-simulation"
    assert parse_qs(parsed.query) == {"orderId": [order["id"]], "amount": ["107.00"], "reference": ["ORD-2024-55555"]}
    assert store.orders[order["id"]]["payment_session_id"] == body["sessionId"]


def test_checkout_can_be_repeated_on_pending_order(client, store, unipaas):
    order = store.add_order()
    unipaas({"id": "cs_1"})
    assert client.post(URL, json={"orderId": order["id"]}).status_code == 200
    unipaas({"id": "cs_2"})
    assert client.post(URL, json={"orderId": order["id"]}).status_code == 200
    assert store.orders[order["id"]]["payment_session_id"] == "cs_2"


def test_checkout_missing_order_id_400(client, store, unipaas):
    sent = unipaas({"id": "cs_1"})
    assert client.post(URL, json={}).status_code == 400
    assert client.post(URL).status_code == 400
    assert sent == []


def test_checkout_unknown_order_404(client, store, unipaas):
    unipaas({"id": "cs_1"})
    assert client.post(URL, json={"orderId": "nope"}).status_code == 404


def test_checkout_other_users_order_403(client, store, unipaas):
    order = store.add_order(user_id="user-2")
    sent = unipaas({"id": "cs_1"})
    assert client.post(URL, json={"orderId": order["id"]}).status_code == 403
    assert sent == []


def test_checkout_paid_order_400(client, store, unipaas):
    order = store.add_order(status="PAID")
    sent = unipaas({"id": "cs_1"})
    assert client.post(URL, json={"orderId": order["id"]}).status_code == 400
    assert sent == []


def test_test_unipaas_connection(client, monkeypatch):
    monkeypatch.setattr("storefront.payments.unipaas_client.ping", lambda: 200)
    r = client.get("/api/orders/test-unipaas")
    assert r.status_code == 200
    assert r.json()["status"] == 200
    assert r.json()["endpoint"] == config.UNIPAAS_API_URL


def test_test_unipaas_connection_error(client, monkeypatch):
    def _down():
        raise ConnectionError("unreachable")

    monkeypatch.setattr("storefront.payments.unipaas_client.ping", _down)
    r = client.get("/api/orders/test-unipaas")
    assert r.status_code == 500
    assert "unreachable" in r.json()["message"]
