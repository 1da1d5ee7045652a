"""Domain events raised by the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A buyer checked out and the order with all its items was stored."""

    __version__ = 1

    order_id = Identifier(required=True)
    barcode = String(required=True)
    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """Order status was set by an admin or forced to processing by a label scan."""

    __version__ = 1

    order_id = Identifier(required=True)
    barcode = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    trigger = String(required=True)  # "admin" or "scan"
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class TrackingAssigned:
    __version__ = 1

    order_id = Identifier(required=True)
    barcode = String(required=True)
    shipping_company = String(required=True)
    tracking_number = String(required=True)
    assigned_at = DateTime(required=True)
