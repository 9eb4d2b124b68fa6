from decimal import Decimal

import pytest

from bistro.errors import InvalidRequest
from bistro.payments.models import (
    CheckoutRequest,
    PaymentRecord,
    SettlementRequest,
    SettlementResult,
    to_minor_units,
)


@pytest.mark.parametrize(
    "price, expected",
    [
        (Decimal("12.345"), 1235),
        (Decimal("10"), 1000),
        (Decimal("0"), 0),
        (Decimal("19.99"), 1999),
        (Decimal("0.005"), 1),
        (Decimal("0.004"), 0),
    ],
)
def test_to_minor_units_rounds_half_up(price, expected):
    assert to_minor_units(price) == expected


def test_to_minor_units_accepts_float_without_binary_drift():
    # 1.005 * 100 en float donne 100.49999...
    assert to_minor_units(1.005) == 101


def test_checkout_request_coerces_numbers():
    req = CheckoutRequest.parse({"price": 12.345})
    assert req.price == Decimal("12.345")
    assert req.amount_minor == 1235


@pytest.mark.parametrize("price", [None, "abc", -1, True])
def test_checkout_request_rejects_invalid_price(price):
    with pytest.raises(InvalidRequest) as exc:
        CheckoutRequest.parse({"price": price})
    assert exc.value.status_code == 400


def _payload(**overrides):
    data = {"userEmail": "a@b.c", "price": 20, "cartIds": ["c1", "c2"], "menuItemIds": ["A", "B"]}
    data.update(overrides)
    return data


def test_settlement_request_parses_camel_case_payload():
    req = SettlementRequest.parse(_payload())
    assert req.user_email == "a@b.c"
    assert req.price == Decimal("20")
    assert req.cart_ids == ["c1", "c2"]
    assert req.menu_item_ids == ["A", "B"]
    assert req.amount_minor == 2000


def test_settlement_request_accepts_legacy_menu_items_key():
    data = _payload()
    data.pop("menuItemIds")
    data["menuItems"] = ["X"]
    assert SettlementRequest.parse(data).menu_item_ids == ["X"]


def test_settlement_request_menu_items_optional():
    data = _payload(menuItemIds=None)
    assert SettlementRequest.parse(data).menu_item_ids == []


@pytest.mark.parametrize("cart_ids", [[], None, "c1", {"id": "c1"}, [""]])
def test_settlement_request_rejects_bad_cart_ids(cart_ids):
    with pytest.raises(InvalidRequest) as exc:
        SettlementRequest.parse(_payload(cartIds=cart_ids))
    assert exc.value.message == "Invalid cartIds: must be a non-empty array"


def test_settlement_request_missing_cart_ids():
    data = _payload()
    data.pop("cartIds")
    with pytest.raises(InvalidRequest, match="cartIds"):
        SettlementRequest.parse(data)


def test_settlement_request_rejects_negative_price():
    with pytest.raises(InvalidRequest) as exc:
        SettlementRequest.parse(_payload(price=-5))
    assert "price" in exc.value.message


def test_settlement_request_rejects_non_object():
    with pytest.raises(InvalidRequest):
        SettlementRequest.parse(["c1"])


def test_payment_record_row_and_api_shapes():
    record = PaymentRecord(
        id="p1",
        email="a@b.c",
        price=Decimal("12.345"),
        amount_minor=1235,
        transaction_id="pi_1",
        menu_item_ids=["A"],
        cart_ids=["c1"],
        created_at="2024-01-01T00:00:00+00:00",
    )
    row = record.to_row()
    assert "id" not in row
    assert row["price"] == "12.345"
    assert row["cart_ids"] == ["c1"]

    api = SettlementResult(payment=record, deleted_count=1).to_api()
    assert api["deleteResult"] == {"deletedCount": 1}
    assert api["paymentResult"]["price"] == 12.345
    assert api["paymentResult"]["transactionId"] == "pi_1"
    assert api["paymentResult"]["cartIds"] == ["c1"]


def test_payment_record_from_row_normalizes_types():
    record = PaymentRecord.from_row({
        "id": 7,
        "email": "a@b.c",
        "price": "9.5",
        "amount_minor": 950,
        "menu_item_ids": [1, 2],
        "cart_ids": ["c1"],
        "created_at": "2024-01-01",
    })
    assert record.id == "7"
    assert record.price == Decimal("9.5")
    assert record.menu_item_ids == ["1", "2"]


@pytest.mark.parametrize("price", [1e30, "1e30", Decimal("1000000")])
def test_requests_reject_prices_above_gateway_limit(price):
    with pytest.raises(InvalidRequest) as exc:
        SettlementRequest.parse(_payload(price=price))
    assert exc.value.message == "Invalid payload: price"
    with pytest.raises(InvalidRequest):
        CheckoutRequest.parse({"price": price})


def test_requests_accept_gateway_limit():
    assert SettlementRequest.parse(_payload(price=999999.99)).amount_minor == 99999999
