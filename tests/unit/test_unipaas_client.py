import httpx
import pytest

from storefront.payments import unipaas_client
from storefront.utils.errors import UpstreamError


@pytest.fixture
def api(monkeypatch):
    monkeypatch.setattr(unipaas_client, "UNIPAAS_API_KEY", "sk_test_123456")
    monkeypatch.setattr(unipaas_client, "UNIPAAS_API_URL", "https://sandbox.unipaas.test")
    calls = {}

    def _install(response=None, exc=None):
        def _post(url, json=None, headers=None, timeout=None):
            calls.update(url=url, json=json, headers=headers, timeout=timeout)
            if exc:
                raise exc
            return response
        monkeypatch.setattr(unipaas_client.httpx, "post", _post)
        return calls

    return _install


def _response(status, payload=None, text=None):
    request = httpx.Request("POST", "https://sandbox.unipaas.test/platform/pay-ins/checkout")
    if payload is not None:
        return httpx.Response(status, json=payload, request=request)
    return httpx.Response(status, text=text or "", request=request)


def test_create_checkout_success(api):
    calls = api(_response(200, {"id": "cs_1", "sessionToken": "tok", "shortLink": "https://l"}))
    data = unipaas_client.create_checkout({"amount": 107.0, "reference": "ORD-2024-1"})
    assert data["id"] == "cs_1"
    assert calls["url"] == "https://sandbox.unipaas.test/platform/pay-ins/checkout"
    assert calls["headers"]["Authorization"] == "Bearer sk_test_123456"
    assert calls["json"]["amount"] == 107.0


def test_create_checkout_missing_key(monkeypatch):
    monkeypatch.setattr(unipaas_client, "UNIPAAS_API_KEY", "")
    with pytest.raises(UpstreamError):
        unipaas_client.create_checkout({})


def test_create_checkout_http_error_status(api):
    api(_response(422, {"message": "invalid amount"}))
    with pytest.raises(UpstreamError) as exc:
        unipaas_client.create_checkout({})
    assert exc.value.status_code == 422
    assert exc.value.body == {"message": "invalid amount"}


def test_create_checkout_non_json_error_body(api):
    api(_response(502, text="Bad Gateway"))
    with pytest.raises(UpstreamError) as exc:
        unipaas_client.create_checkout({})
    assert exc.value.body == "Bad Gateway"


def test_create_checkout_transport_error(api):
    api(exc=httpx.ConnectError("connection refused"))
    with pytest.raises(UpstreamError):
        unipaas_client.create_checkout({})


def test_create_checkout_response_without_id(api):
    api(_response(200, {"sessionToken": "tok"}))
    with pytest.raises(UpstreamError):
        unipaas_client.create_checkout({})


def test_ping_returns_status(monkeypatch):
    monkeypatch.setattr(unipaas_client, "UNIPAAS_API_URL", "https://sandbox.unipaas.test")
    monkeypatch.setattr(
        unipaas_client.httpx, "get",
        lambda url, headers=None, timeout=None: httpx.Response(404, request=httpx.Request("GET", url)),
    )
    assert unipaas_client.ping() == 404


def test_mask_api_key():
    assert unipaas_client._mask("sk_test_abcdef") == "sk_te..."
    assert unipaas_client._mask("") == "Not set"
