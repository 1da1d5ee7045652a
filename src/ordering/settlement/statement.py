"""Vendor settlement statements.

A statement is a live recomputation, not a ledger entry: revenue counts the
vendor's items on COMPLETED orders only, and the commission uses the
vendor's commission rate as it is today. A rate change therefore reaches
every sale that is not yet paid out. Statements only read, so they can be
computed for several vendors at once.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus
from ordering.order.queries import iter_orders
from ordering.vendor.vendor import Vendor

logger = structlog.get_logger(__name__)


def _as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so stored and requested times compare."""
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


@dataclass(frozen=True)
class SettlementWindow:
    """Half-open period ``start <= created_at < end`` on the order's creation time.

    Either bound may be left open.
    """

    start: datetime | None = None
    end: datetime | None = None

    def contains(self, moment: datetime | None) -> bool:
        if moment is None:
            return self.start is None and self.end is None
        moment = _as_utc(moment)
        if self.start is not None and moment < _as_utc(self.start):
            return False
        if self.end is not None and moment >= _as_utc(self.end):
            return False
        return True

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class StatementLine:
    order_id: str
    barcode: str
    ordered_at: datetime | None
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


@dataclass(frozen=True)
class SettlementStatement:
    vendor_id: str
    vendor_name: str
    commission_rate: float
    total_revenue: float
    commission_amount: float
    net_payable: float
    lines: tuple[StatementLine, ...] = ()
    window: SettlementWindow = field(default_factory=SettlementWindow)


def _statement_lines(order: Order, vendor_id: str) -> list[StatementLine]:
    return [
        StatementLine(
            order_id=str(order.id),
            barcode=order.barcode,
            ordered_at=order.created_at,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
        )
        for item in order.items_sold_by(vendor_id)
    ]


def build_statement(vendor: Vendor, lines: list[StatementLine], window: SettlementWindow) -> SettlementStatement:
    total_revenue = round(sum(line.total_price for line in lines), 2)
    commission_amount = round(total_revenue * vendor.commission_rate / 100, 2)
    return SettlementStatement(
        vendor_id=str(vendor.id),
        vendor_name=vendor.name,
        commission_rate=vendor.commission_rate,
        total_revenue=total_revenue,
        commission_amount=commission_amount,
        net_payable=round(total_revenue - commission_amount, 2),
        lines=tuple(lines),
        window=window,
    )


def _completed_orders(window: SettlementWindow):
    for order in iter_orders(status=OrderStatus.COMPLETED.value):
        if window.contains(order.created_at):
            yield order


def compute_statement(vendor_id: str, window: SettlementWindow | None = None) -> SettlementStatement:
    """Settle one vendor over the completed orders inside ``window``."""
    window = window or SettlementWindow()
    vendor = current_domain.repository_for(Vendor).get(vendor_id)

    lines = []
    for order in _completed_orders(window):
        lines.extend(_statement_lines(order, str(vendor.id)))

    statement = build_statement(vendor, lines, window)
    logger.info(
        "Settlement computed",
        vendor_id=statement.vendor_id,
        item_count=len(statement.lines),
        total_revenue=statement.total_revenue,
        commission_amount=statement.commission_amount,
        net_payable=statement.net_payable,
    )
    return statement


def compute_all_statements(window: SettlementWindow | None = None) -> list[SettlementStatement]:
    """One statement per registered vendor, sorted by vendor name.

    Platform-sold items (no vendor) are not settled and never appear.
    """
    window = window or SettlementWindow()

    lines_by_vendor = defaultdict(list)
    for order in _completed_orders(window):
        for vendor_id in {item.vendor_id for item in order.items if item.vendor_id}:
            lines_by_vendor[vendor_id].extend(_statement_lines(order, vendor_id))

    vendors = current_domain.repository_for(Vendor)._dao.query.all().items
    statements = []
    for vendor in sorted(vendors, key=lambda v: (v.name.lower(), str(v.id))):
        statements.append(build_statement(vendor, lines_by_vendor.get(str(vendor.id), []), window))

    logger.info("Settlements computed", vendor_count=len(statements))
    return statements
