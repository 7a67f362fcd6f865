import pytest

from storefront.payments.metadata import extract_order_id, extract_payment_id, extract_failure_reason


@pytest.mark.parametrize("event", [
    {"data": {"metadata": {"orderId": "o1"}}},
    {"metadata": {"orderId": "o1"}},
    {"data": {"object": {"metadata": {"orderId": "o1"}}}},
    {"data": {"payment": {"metadata": {"orderId": "o1"}}}},
])
def test_extract_order_id_known_locations(event):
    assert extract_order_id(event) == "o1"


def test_extract_order_id_first_location_wins():
    event = {"data": {"metadata": {"orderId": "first"}}, "metadata": {"orderId": "second"}}
    assert extract_order_id(event) == "first"


def test_extract_order_id_missing():
    assert extract_order_id({"data": {"id": "pay_1"}}) is None
    assert extract_order_id({"data": "not-a-dict"}) is None


def test_extract_payment_id_order_of_lookup():
    assert extract_payment_id({"payment_id": "p0", "data": {"id": "p1"}}) == "p0"
    assert extract_payment_id({"data": {"id": "p1", "paymentId": "p2"}}) == "p1"
    assert extract_payment_id({"data": {"paymentId": "p2"}}) == "p2"


def test_extract_payment_id_fallback(monkeypatch):
    monkeypatch.setattr("storefront.payments.metadata.time.time", lambda: 1700000000.5)
    assert extract_payment_id({}) == "webhook_1700000000500"


def test_extract_failure_reason():
    assert extract_failure_reason({"reason": "card declined"}) == "card declined"
    assert extract_failure_reason({"data": {"reason": "insufficient funds"}}) == "insufficient funds"
    assert extract_failure_reason({}) == "Payment processing failed"
