"""Application tests for vendor settlement statements and seller views."""

from datetime import UTC, datetime, timedelta

import pytest
from ordering.access import AccessDenied, Caller, Role
from ordering.order.barcode import generate_barcode
from ordering.order.order import Order, OrderStatus
from ordering.settlement.seller import (
    authorize_vendor_access,
    vendor_for_owner,
    vendor_order,
    vendor_orders,
    vendor_overview,
)
from ordering.settlement.statement import SettlementWindow, compute_all_statements, compute_statement
from ordering.vendor.vendor import Vendor
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _vendor(name="Print House", rate=2.0, owner_id="seller-001"):
    vendor = Vendor.register(name=name, commission_rate=rate, owner_id=owner_id)
    current_domain.repository_for(Vendor).add(vendor)
    return str(vendor.id)


def _line(product_id, total, vendor_id=None, quantity=1):
    return {
        "product_id": product_id,
        "product_name": f"Product {product_id}",
        "quantity": quantity,
        "unit_price": round(total / quantity, 2),
        "total_price": total,
        "vendor_id": vendor_id,
    }


def _order(lines, status=OrderStatus.COMPLETED, created_at=None, buyer_id="buyer-001"):
    order = Order.place(barcode=generate_barcode(), buyer_id=buyer_id, address_id="addr-001", lines=lines)
    if status != OrderStatus.PENDING:
        order.set_status(status.value)
    if created_at is not None:
        order.created_at = created_at
    current_domain.repository_for(Order).add(order)
    return str(order.id)


class TestComputeStatement:
    def test_commission_on_completed_revenue(self):
        vendor_id = _vendor(rate=2.0)
        _order([_line("P1", 6000.0, vendor_id)])
        _order([_line("P2", 4000.0, vendor_id)])

        statement = compute_statement(vendor_id)

        assert statement.total_revenue == 10000.0
        assert statement.commission_amount == 200.0
        assert statement.net_payable == 9800.0
        assert len(statement.lines) == 2

    def test_only_completed_orders_count(self):
        vendor_id = _vendor()
        _order([_line("P1", 100.0, vendor_id)])
        for status in (OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED):
            _order([_line("P9", 999.0, vendor_id)], status=status)

        statement = compute_statement(vendor_id)

        assert statement.total_revenue == 100.0
        assert [line.product_id for line in statement.lines] == ["P1"]

    def test_other_vendors_and_platform_items_are_excluded(self):
        vendor_id = _vendor()
        other_id = _vendor(name="Sign Works", owner_id="seller-002")
        _order([_line("P1", 100.0, vendor_id), _line("P2", 50.0, other_id), _line("P3", 25.0)])

        statement = compute_statement(vendor_id)

        assert statement.total_revenue == 100.0

    def test_vendor_without_sales(self):
        statement = compute_statement(_vendor())

        assert statement.total_revenue == 0.0
        assert statement.commission_amount == 0.0
        assert statement.net_payable == 0.0
        assert statement.lines == ()

    def test_rate_change_applies_to_unpaid_sales(self):
        vendor_id = _vendor(rate=2.0)
        _order([_line("P1", 1000.0, vendor_id)])

        repo = current_domain.repository_for(Vendor)
        vendor = repo.get(vendor_id)
        vendor.change_commission_rate(10.0)
        repo.add(vendor)

        statement = compute_statement(vendor_id)
        assert statement.commission_rate == 10.0
        assert statement.commission_amount == 100.0
        assert statement.net_payable == 900.0

    def test_amounts_are_rounded_to_cents(self):
        vendor_id = _vendor(rate=3.5)
        _order([_line("P1", 33.33, vendor_id)])

        statement = compute_statement(vendor_id)

        assert statement.commission_amount == 1.17
        assert statement.net_payable == 32.16

    def test_unknown_vendor(self):
        with pytest.raises(ObjectNotFoundError):
            compute_statement("missing-vendor")


class TestSettlementWindow:
    def test_window_is_half_open(self):
        vendor_id = _vendor()
        start = datetime(2025, 1, 1, tzinfo=UTC)
        end = datetime(2025, 2, 1, tzinfo=UTC)
        _order([_line("P1", 100.0, vendor_id)], created_at=start)
        _order([_line("P2", 200.0, vendor_id)], created_at=end - timedelta(seconds=1))
        _order([_line("P3", 400.0, vendor_id)], created_at=end)
        _order([_line("P4", 800.0, vendor_id)], created_at=start - timedelta(seconds=1))

        statement = compute_statement(vendor_id, SettlementWindow(start=start, end=end))

        assert statement.total_revenue == 300.0
        assert sorted(line.product_id for line in statement.lines) == ["P1", "P2"]

    def test_open_ended_window(self):
        vendor_id = _vendor()
        start = datetime(2025, 1, 1, tzinfo=UTC)
        _order([_line("P1", 100.0, vendor_id)], created_at=start - timedelta(days=1))
        _order([_line("P2", 200.0, vendor_id)], created_at=start + timedelta(days=300))

        statement = compute_statement(vendor_id, SettlementWindow(start=start))

        assert statement.total_revenue == 200.0


class TestComputeAllStatements:
    def test_one_statement_per_vendor_sorted_by_name(self):
        zeta = _vendor(name="zeta prints", owner_id="seller-z")
        alpha = _vendor(name="Alpha Signs", owner_id="seller-a")
        _vendor(name="Mid Banners", owner_id="seller-m")
        _order([_line("P1", 100.0, zeta), _line("P2", 300.0, alpha), _line("P3", 50.0)])

        statements = compute_all_statements()

        assert [s.vendor_name for s in statements] == ["Alpha Signs", "Mid Banners", "zeta prints"]
        assert [s.total_revenue for s in statements] == [300.0, 0.0, 100.0]

    def test_matches_single_vendor_statement(self):
        vendor_id = _vendor(rate=5.0)
        _order([_line("P1", 120.0, vendor_id)])
        _order([_line("P2", 80.0, vendor_id)])

        (statement,) = compute_all_statements()

        single = compute_statement(vendor_id)
        assert statement.total_revenue == single.total_revenue
        assert statement.commission_amount == single.commission_amount
        assert statement.net_payable == single.net_payable


class TestVendorOrders:
    def test_only_vendor_items_newest_first(self):
        vendor_id = _vendor()
        older = _order(
            [_line("P1", 100.0, vendor_id), _line("P2", 40.0)],
            status=OrderStatus.PENDING,
            created_at=datetime(2025, 3, 1, tzinfo=UTC),
        )
        newer = _order(
            [_line("P3", 60.0, vendor_id)],
            status=OrderStatus.SHIPPED,
            created_at=datetime(2025, 4, 1, tzinfo=UTC),
        )
        _order([_line("P4", 10.0)], status=OrderStatus.PENDING)

        page = vendor_orders(vendor_id)

        assert page.total == 2
        assert [o.order_id for o in page.orders] == [newer, older]
        assert page.orders[1].vendor_total == 100.0
        assert [item["product_id"] for item in page.orders[1].items] == ["P1"]

    def test_paging(self):
        vendor_id = _vendor()
        for day in range(1, 4):
            _order([_line(f"P{day}", 10.0, vendor_id)], created_at=datetime(2025, 5, day, tzinfo=UTC))

        page = vendor_orders(vendor_id, page=2, page_size=2)

        assert page.total == 3
        assert len(page.orders) == 1
        assert page.orders[0].items[0]["product_id"] == "P1"


class TestVendorOrder:
    def test_only_vendor_items(self):
        vendor_id = _vendor()
        other_id = _vendor(name="Sticker Co", owner_id="seller-002")
        order_id = _order(
            [_line("P1", 100.0, vendor_id), _line("P2", 40.0, other_id), _line("P3", 15.0)],
            status=OrderStatus.PROCESSING,
        )

        view = vendor_order(vendor_id, order_id)

        assert view.order_id == order_id
        assert view.status == OrderStatus.PROCESSING.value
        assert view.address_id == "addr-001"
        assert view.vendor_total == 100.0
        assert [item["product_id"] for item in view.items] == ["P1"]

    def test_order_without_vendor_items_is_not_found(self):
        vendor_id = _vendor()
        order_id = _order([_line("P1", 20.0)])

        with pytest.raises(ObjectNotFoundError):
            vendor_order(vendor_id, order_id)

    def test_unknown_order(self):
        vendor_id = _vendor()

        with pytest.raises(ObjectNotFoundError):
            vendor_order(vendor_id, "no-such-order")


class TestVendorOverview:
    def test_totals_across_statuses(self):
        vendor_id = _vendor(rate=10.0)
        _order([_line("P1", 100.0, vendor_id), _line("P2", 50.0, vendor_id)], status=OrderStatus.PENDING)
        _order([_line("P3", 200.0, vendor_id)], status=OrderStatus.COMPLETED)
        _order([_line("P4", 999.0)], status=OrderStatus.PENDING)

        overview = vendor_overview(vendor_id)

        assert overview.total_sales == 350.0
        assert overview.pending_items == 2
        assert overview.earnings == 315.0
        assert overview.commission_rate == 10.0


class TestVendorAccess:
    def test_admin_reads_any_vendor(self):
        vendor_id = _vendor()
        vendor = authorize_vendor_access(Caller(user_id="admin-1", role=Role.ADMIN), vendor_id)
        assert str(vendor.id) == vendor_id

    def test_owner_reads_own_vendor(self):
        vendor_id = _vendor(owner_id="seller-001")
        vendor = authorize_vendor_access(Caller(user_id="seller-001", role=Role.SELLER), vendor_id)
        assert str(vendor.id) == vendor_id

    def test_other_seller_is_denied(self):
        vendor_id = _vendor(owner_id="seller-001")
        with pytest.raises(AccessDenied):
            authorize_vendor_access(Caller(user_id="seller-002", role=Role.SELLER), vendor_id)

    def test_buyer_is_denied_even_with_matching_id(self):
        vendor_id = _vendor(owner_id="seller-001")
        with pytest.raises(AccessDenied):
            authorize_vendor_access(Caller(user_id="seller-001", role=Role.USER), vendor_id)

    def test_vendor_for_owner(self):
        vendor_id = _vendor(owner_id="seller-007")
        assert str(vendor_for_owner("seller-007").id) == vendor_id

        with pytest.raises(ObjectNotFoundError):
            vendor_for_owner("nobody")
