"""Application tests for vendor administration commands."""

import pytest
from ordering.vendor.management import BlockVendor, ChangeCommissionRate, RegisterVendor, UnblockVendor
from ordering.vendor.vendor import Vendor
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _register(**overrides):
    defaults = {"name": "Print House", "commission_rate": 2.0, "owner_id": "seller-001"}
    defaults.update(overrides)
    return current_domain.process(RegisterVendor(**defaults), asynchronous=False)


def _vendor(vendor_id):
    return current_domain.repository_for(Vendor).get(vendor_id)


class TestRegisterVendor:
    def test_register(self):
        vendor = _vendor(_register())

        assert vendor.name == "Print House"
        assert vendor.commission_rate == 2.0
        assert vendor.owner_id == "seller-001"
        assert vendor.is_blocked is False

    def test_default_rate_is_zero(self):
        vendor_id = current_domain.process(RegisterVendor(name="Platform Partner"), asynchronous=False)
        assert _vendor(vendor_id).commission_rate == 0.0


class TestChangeCommissionRate:
    def test_change(self):
        vendor_id = _register()
        current_domain.process(ChangeCommissionRate(vendor_id=vendor_id, commission_rate=12.5), asynchronous=False)
        assert _vendor(vendor_id).commission_rate == 12.5

    def test_out_of_range(self):
        vendor_id = _register()
        with pytest.raises(ValidationError):
            current_domain.process(ChangeCommissionRate(vendor_id=vendor_id, commission_rate=150.0), asynchronous=False)
        assert _vendor(vendor_id).commission_rate == 2.0

    def test_unknown_vendor(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(ChangeCommissionRate(vendor_id="missing", commission_rate=1.0), asynchronous=False)


class TestBlocking:
    def test_block_then_unblock(self):
        vendor_id = _register()

        current_domain.process(BlockVendor(vendor_id=vendor_id), asynchronous=False)
        assert _vendor(vendor_id).is_blocked is True

        current_domain.process(UnblockVendor(vendor_id=vendor_id), asynchronous=False)
        assert _vendor(vendor_id).is_blocked is False
