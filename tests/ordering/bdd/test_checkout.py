"""BDD tests for checkout and label scanning."""

import json

import pytest
from ordering.order.exceptions import CheckoutRejected
from ordering.order.fulfillment import ScanOrderBarcode
from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.order.placement import PlaceOrder
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/checkout.feature")


@pytest.fixture()
def checkout():
    return {}


def place_order(buyer_id, address_id, lines):
    command = PlaceOrder(buyer_id=buyer_id, address_id=address_id, items=json.dumps(lines))
    return current_domain.process(command, asynchronous=False)


def stored_order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _lines(datatable):
    header, *rows = datatable
    return [dict(zip(header, row, strict=True)) for row in rows]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('buyer "{buyer_id}" has placed an order'))
def _(placed, buyer_id):
    placed["order_id"] = place_order(
        buyer_id,
        "addr-001",
        [{"product_id": "P9", "product_name": "Poster", "quantity": 1, "unit_price": 20, "total_price": 20}],
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('buyer "{buyer_id}" checks out to "{address_id}" with:'))
def _(checkout, placed, buyer_id, address_id, datatable):
    try:
        placed["order_id"] = place_order(buyer_id, address_id, _lines(datatable))
    except CheckoutRejected as exc:
        checkout["error"] = exc


@when("the warehouse scans the order barcode")
def _(placed):
    barcode = stored_order(placed["order_id"]).barcode
    current_domain.process(ScanOrderBarcode(barcode=barcode), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is pending and awaiting payment")
def _(placed):
    order = stored_order(placed["order_id"])
    assert order.status == OrderStatus.PENDING.value
    assert order.payment_status == PaymentStatus.AWAITING_PAYMENT.value


@then(parsers.cfparse("the order total is {amount:f}"))
def _(placed, amount):
    assert stored_order(placed["order_id"]).total_amount == amount


@then(parsers.cfparse('product "{product_id}" is attributed to vendor "{name}"'))
def _(placed, vendors, product_id, name):
    (item,) = [i for i in stored_order(placed["order_id"]).items if i.product_id == product_id]
    assert item.vendor_id == vendors[name]


@then(parsers.cfparse('product "{product_id}" is attributed to the platform'))
def _(placed, product_id):
    (item,) = [i for i in stored_order(placed["order_id"]).items if i.product_id == product_id]
    assert item.vendor_id is None


@then(parsers.cfparse('the checkout is rejected with "{code}"'))
def _(checkout, code):
    assert checkout["error"].code == code


@then("no order is stored")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
