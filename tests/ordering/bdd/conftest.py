"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from ordering.order.order import Order
from ordering.vendor.management import BlockVendor, RegisterVendor
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def vendors():
    """Vendor ids by name, filled by Given steps."""
    return {}


@pytest.fixture()
def placed():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('buyer "{buyer_id}" has saved address "{address_id}"'))
def _(address_book, buyer_id, address_id):
    address_book.save_address(address_id, buyer_id)


@given(parsers.cfparse('vendor "{name}" sells product "{product_id}"'))
def _(catalogue, vendors, name, product_id):
    vendors[name] = current_domain.process(RegisterVendor(name=name, commission_rate=2.0), asynchronous=False)
    catalogue.register_product(product_id, vendors[name])


@given(parsers.cfparse('vendor "{name}" charges {rate:g}% commission on product "{product_id}"'))
def _(catalogue, vendors, name, rate, product_id):
    vendors[name] = current_domain.process(RegisterVendor(name=name, commission_rate=rate), asynchronous=False)
    catalogue.register_product(product_id, vendors[name])


@given(parsers.cfparse('product "{product_id}" is sold by the platform'))
def _(catalogue, product_id):
    catalogue.register_product(product_id, None)


@given(parsers.cfparse('vendor "{name}" is blocked'))
def _(vendors, name):
    current_domain.process(BlockVendor(vendor_id=vendors[name]), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status
