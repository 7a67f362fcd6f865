import re
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from storefront.orders.models import (
    OrderLineIn,
    OrderStatus,
    TERMINAL_STATUSES,
    generate_order_number,
    order_from_row,
)


def test_generate_order_number_format():
    number = generate_order_number(datetime(2024, 5, 1, tzinfo=timezone.utc))
    assert re.fullmatch(r"ORD-2024-\d{5}", number)


def test_generate_order_number_current_year():
    year = datetime.now(timezone.utc).year
    assert generate_order_number().startswith(f"ORD-{year}-")


def test_terminal_statuses():
    assert OrderStatus.PENDING.value not in TERMINAL_STATUSES
    assert TERMINAL_STATUSES == {"PAID", "FAILED"}


def test_order_line_quantity_must_be_positive():
    with pytest.raises(PydanticValidationError):
        OrderLineIn(itemNumber="1", quantity=0)


def test_order_from_row_camel_case():
    row = {
        "id": "o1", "order_number": "ORD-2024-00001", "user_id": "u1", "status": "PAID",
        "items": [{"itemNumber": "1"}], "subtotal": "100", "tax": "7", "total": "107",
        "payment_id": "pay_1", "payment_session_id": "sess_1", "failure_reason": None,
        "created_at": "c", "updated_at": "u",
    }
    order = order_from_row(row)
    assert order["_id"] == "o1"
    assert order["orderNumber"] == "ORD-2024-00001"
    assert order["user"] == "u1"
    assert order["total"] == 107.0
    assert order["paymentId"] == "pay_1"
    assert order["paymentSessionId"] == "sess_1"
    assert order["items"] == [{"itemNumber": "1"}]
