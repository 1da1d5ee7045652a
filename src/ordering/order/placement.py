"""Order placement: turn a checked-out cart into a stored order.

Preconditions are checked in a fixed order and the first failure rejects the
whole checkout before anything is written:

1. at least one item and a shipping address (``InvalidRequest``)
2. the address belongs to the buyer (``InvalidAddress``)
3. no item is sold by a blocked vendor (``VendorBlocked``)

The order and its items are written in the handler's unit of work, so a
failure anywhere before commit leaves nothing behind. The store's unique
constraint on the barcode is the final word on uniqueness; when it rejects a
candidate the order is rebuilt with a fresh barcode a bounded number of times.
"""

import json
import math

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.addresses import get_address_book
from ordering.catalogue import get_catalogue
from ordering.config import ORDER_PLACEMENT_MAX_ATTEMPTS
from ordering.domain import ordering
from ordering.order.barcode import ensure_unique_barcode, generate_barcode
from ordering.order.exceptions import BarcodeConflict, InvalidAddress, InvalidRequest, VendorBlocked
from ordering.order.order import Order
from ordering.vendor.vendor import Vendor

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    address_id = Identifier()
    items = Text()  # JSON: list of checkout line dicts


# ---------------------------------------------------------------------------
# Line sanitizing
# ---------------------------------------------------------------------------
def _to_number(value) -> float:
    """Coerce a client-supplied amount, treating anything unusable as zero."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_price(value) -> float:
    return max(0.0, _to_number(value))


def sanitize_line(raw) -> dict:
    """Normalize one checkout line.

    Quantities are floored and clamped to at least 1. Prices that are not
    numbers, or are negative, become 0. Line totals are trusted as sent; the
    engine does not re-price against the catalogue. A missing name is left
    as ``None`` for the handler to fill from the catalogue.
    """
    if not isinstance(raw, dict) or not raw.get("product_id"):
        raise InvalidRequest({"items": ["Every item needs a product_id"]})

    options = raw.get("options")
    return {
        "product_id": str(raw["product_id"]),
        "product_name": str(raw["product_name"]) if raw.get("product_name") else None,
        "quantity": max(1, math.floor(_to_number(raw.get("quantity")))),
        "unit_price": _to_price(raw.get("unit_price")),
        "total_price": _to_price(raw.get("total_price")),
        "options": options if isinstance(options, dict) else None,
        "image_url": str(raw["image_url"]) if raw.get("image_url") else None,
        "uploaded_file_url": str(raw["uploaded_file_url"]) if raw.get("uploaded_file_url") else None,
    }


def _parse_lines(items) -> list:
    if not items:
        return []
    try:
        lines = json.loads(items) if isinstance(items, str) else items
    except json.JSONDecodeError:
        raise InvalidRequest({"items": ["Items must be a JSON list"]}) from None
    if not isinstance(lines, list):
        raise InvalidRequest({"items": ["Items must be a JSON list"]})
    return lines


# ---------------------------------------------------------------------------
# Vendor attribution
# ---------------------------------------------------------------------------
def resolve_vendors(product_ids: list[str]) -> dict[str, str | None]:
    """Look up the current seller of each product and refuse blocked vendors.

    A single blocked vendor anywhere in the cart rejects the whole checkout.
    Vendors the ordering context has no record of are treated as active.
    """
    vendor_by_product = get_catalogue().vendors_for(product_ids)
    vendor_ids = {vendor_id for vendor_id in vendor_by_product.values() if vendor_id}
    if not vendor_ids:
        return vendor_by_product

    blocked_ids = {
        str(vendor.id)
        for vendor in current_domain.repository_for(Vendor)._dao.query.filter(is_blocked=True).all().items
    } & vendor_ids
    if blocked_ids:
        raise VendorBlocked(
            product_ids=[pid for pid, vid in vendor_by_product.items() if vid in blocked_ids],
            vendor_ids=list(blocked_ids),
        )
    return vendor_by_product


def _fill_product_names(lines: list[dict]) -> None:
    """Snapshot the catalogue name for lines sent without one, falling back to the product id."""
    unnamed = list(dict.fromkeys(line["product_id"] for line in lines if not line["product_name"]))
    if not unnamed:
        return
    names = get_catalogue().names_for(unnamed)
    for line in lines:
        if not line["product_name"]:
            line["product_name"] = names.get(line["product_id"]) or line["product_id"]


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
def _barcode_taken(candidate: str) -> bool:
    return bool(current_domain.repository_for(Order)._dao.query.filter(barcode=candidate).all().items)


def _persist(repo, order):
    """Add the order, translating a duplicate-barcode rejection into ``BarcodeConflict``."""
    try:
        repo.add(order)
    except ValidationError as exc:
        if isinstance(exc, BarcodeConflict) or "barcode" not in exc.messages:
            raise
        raise BarcodeConflict({"barcode": [f"Barcode {order.barcode} is already in use"]}) from exc


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        raw_lines = _parse_lines(command.items)
        if not raw_lines or not command.address_id:
            logger.info("Checkout rejected", reason="invalid_request", buyer_id=command.buyer_id)
            raise InvalidRequest({"checkout": ["A shipping address and at least one item are required"]})
        lines = [sanitize_line(raw) for raw in raw_lines]

        if not get_address_book().belongs_to(command.address_id, command.buyer_id):
            logger.info(
                "Checkout rejected",
                reason="invalid_address",
                buyer_id=command.buyer_id,
                address_id=command.address_id,
            )
            raise InvalidAddress({"address_id": ["Address does not belong to the buyer"]})

        product_ids = list(dict.fromkeys(line["product_id"] for line in lines))
        try:
            vendor_by_product = resolve_vendors(product_ids)
        except VendorBlocked as exc:
            logger.info(
                "Checkout rejected",
                reason="vendor_blocked",
                buyer_id=command.buyer_id,
                product_ids=exc.product_ids,
                vendor_ids=exc.vendor_ids,
            )
            raise
        for line in lines:
            line["vendor_id"] = vendor_by_product.get(line["product_id"])
        _fill_product_names(lines)

        repo = current_domain.repository_for(Order)
        for attempt in range(1, ORDER_PLACEMENT_MAX_ATTEMPTS + 1):
            barcode = ensure_unique_barcode(_barcode_taken, generator=generate_barcode)
            order = Order.place(
                barcode=barcode,
                buyer_id=command.buyer_id,
                address_id=command.address_id,
                lines=lines,
            )
            try:
                _persist(repo, order)
            except BarcodeConflict:
                # The rejected order was never stored, so its OrderPlaced must not go out
                order._events.clear()
                logger.warning("Barcode rejected by store, regenerating", barcode=barcode, attempt=attempt)
                continue

            logger.info(
                "Order placed",
                order_id=str(order.id),
                barcode=order.barcode,
                buyer_id=command.buyer_id,
                item_count=len(lines),
                total_amount=order.total_amount,
            )
            return str(order.id)

        logger.error("Order placement gave up on barcode conflicts", attempts=ORDER_PLACEMENT_MAX_ATTEMPTS)
        raise BarcodeConflict({"barcode": ["Could not allocate a unique order barcode, please retry"]})
