import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import (
    cart_router,
    order_router,
    register_ordering_exception_handlers,
    settlement_router,
    vendor_router,
)
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(vendor_router)
    app.include_router(settlement_router)
    register_exception_handlers(app)
    register_ordering_exception_handlers(app)
    return TestClient(app)


@pytest.fixture(autouse=True)
def buyer_address(address_book):
    address_book.save_address("addr-001", "buyer-001")
