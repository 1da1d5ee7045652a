"""Seller-side views: a vendor's orders and sales overview, plus who may see them."""

from dataclasses import dataclass
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access import AccessDenied, Caller, Role
from ordering.order.order import Order, OrderStatus
from ordering.order.queries import clamp_paging, iter_orders
from ordering.vendor.vendor import Vendor


def vendor_for_owner(user_id: str) -> Vendor:
    vendors = current_domain.repository_for(Vendor)._dao.query.filter(owner_id=user_id).all().items
    if not vendors:
        raise ObjectNotFoundError(f"No vendor is managed by user `{user_id}`")
    return vendors[0]


def authorize_vendor_access(caller: Caller, vendor_id: str) -> Vendor:
    """Admins may read any vendor; a seller only the vendor they own."""
    vendor = current_domain.repository_for(Vendor).get(vendor_id)
    if caller.is_admin:
        return vendor
    if caller.role == Role.SELLER and vendor.is_owned_by(caller.user_id):
        return vendor
    raise AccessDenied("Vendor data is only visible to its owner and administrators")


@dataclass(frozen=True)
class VendorOrder:
    """An order as its vendor sees it: only that vendor's items."""

    order_id: str
    barcode: str
    status: str
    created_at: datetime | None
    items: list[dict]
    vendor_total: float
    address_id: str | None = None


@dataclass(frozen=True)
class VendorOrderPage:
    orders: list[VendorOrder]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class VendorOverview:
    vendor_id: str
    total_sales: float
    pending_items: int
    earnings: float
    commission_rate: float


def _vendor_view(order: Order, items: list) -> VendorOrder:
    return VendorOrder(
        order_id=str(order.id),
        barcode=order.barcode,
        status=order.status,
        created_at=order.created_at,
        items=[item.to_dict() for item in items],
        vendor_total=round(sum(item.total_price for item in items), 2),
        address_id=str(order.address_id) if order.address_id else None,
    )


def vendor_orders(vendor_id: str, page: int | None = None, page_size: int | None = None) -> VendorOrderPage:
    """Newest orders containing at least one of the vendor's items."""
    page, page_size = clamp_paging(page, page_size)

    matching = []
    for order in iter_orders():
        items = order.items_sold_by(vendor_id)
        if items:
            matching.append(_vendor_view(order, items))
    matching.reverse()

    start = (page - 1) * page_size
    return VendorOrderPage(
        orders=matching[start : start + page_size],
        total=len(matching),
        page=page,
        page_size=page_size,
    )


def vendor_order(vendor_id: str, order_id: str) -> VendorOrder:
    """One order as the vendor sees it. Orders without the vendor's items do not exist for them."""
    order = current_domain.repository_for(Order).get(order_id)
    items = order.items_sold_by(vendor_id)
    if not items:
        raise ObjectNotFoundError(f"Order `{order_id}` has no items sold by vendor `{vendor_id}`")
    return _vendor_view(order, items)


def vendor_overview(vendor_id: str) -> VendorOverview:
    """Sales over all of the vendor's items regardless of status.

    Earnings apply the current commission rate to every item sold, which is
    an estimate; settled money comes from the statement.
    """
    vendor = current_domain.repository_for(Vendor).get(vendor_id)
    keep_ratio = 1 - vendor.commission_rate / 100

    total_sales = 0.0
    earnings = 0.0
    pending_items = 0
    for order in iter_orders():
        for item in order.items_sold_by(str(vendor.id)):
            total_sales += item.total_price
            earnings += item.total_price * keep_ratio
            if order.status == OrderStatus.PENDING.value:
                pending_items += 1

    return VendorOverview(
        vendor_id=str(vendor.id),
        total_sales=round(total_sales, 2),
        pending_items=pending_items,
        earnings=round(earnings, 2),
        commission_rate=vendor.commission_rate,
    )
