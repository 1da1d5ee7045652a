"""Read access to stored orders: single lookups, buyer and admin listings."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access import AccessDenied, Caller
from ordering.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ordering.order.exceptions import InvalidRequest
from ordering.order.order import Order

_SCAN_BATCH_SIZE = 500


@dataclass(frozen=True)
class OrderPage:
    orders: list
    total: int
    page: int
    page_size: int


def clamp_paging(page: int | None, page_size: int | None) -> tuple[int, int]:
    """Clamp requested paging to ``page >= 1`` and ``1 <= page_size <= MAX_PAGE_SIZE``."""
    page = max(1, page or 1)
    page_size = min(MAX_PAGE_SIZE, max(1, page_size or DEFAULT_PAGE_SIZE))
    return page, page_size


def find_by_barcode(barcode: str | None) -> Order:
    """Exact, case-sensitive barcode match after trimming surrounding whitespace."""
    barcode = barcode.strip() if isinstance(barcode, str) else ""
    if not barcode:
        raise InvalidRequest({"barcode": ["A barcode is required"]})

    matches = current_domain.repository_for(Order)._dao.query.filter(barcode=barcode).all().items
    if not matches:
        raise ObjectNotFoundError(f"No order with barcode `{barcode}`")
    return matches[0]


def find_by_code(code: str | None) -> Order:
    """Resolve a tracking code, which may be either the barcode or the order id."""
    code = code.strip() if isinstance(code, str) else ""
    if not code:
        raise InvalidRequest({"code": ["An order number is required"]})

    try:
        return find_by_barcode(code)
    except ObjectNotFoundError:
        return current_domain.repository_for(Order).get(code)


def get_order(caller: Caller, order_id: str) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    if not caller.is_admin and order.buyer_id != caller.user_id:
        raise AccessDenied("Order belongs to another buyer")
    return order


def list_orders(caller: Caller, page: int | None = None, page_size: int | None = None) -> OrderPage:
    """Newest orders first. Admins see every order, buyers only their own."""
    page, page_size = clamp_paging(page, page_size)

    query = current_domain.repository_for(Order)._dao.query
    if not caller.is_admin:
        query = query.filter(buyer_id=caller.user_id)
    result = query.order_by("-created_at").offset((page - 1) * page_size).limit(page_size).all()

    return OrderPage(orders=list(result.items), total=result.total, page=page, page_size=page_size)


def iter_orders(**filters):
    """Yield every stored order matching ``filters``, oldest first, in batches."""
    query = current_domain.repository_for(Order)._dao.query
    if filters:
        query = query.filter(**filters)

    offset = 0
    while True:
        batch = query.order_by("created_at").offset(offset).limit(_SCAN_BATCH_SIZE).all().items
        yield from batch
        if len(batch) < _SCAN_BATCH_SIZE:
            return
        offset += _SCAN_BATCH_SIZE
