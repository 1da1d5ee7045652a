"""Order aggregate (CQRS): one buyer checkout across any number of vendors.

An order is stored together with all of its items in one unit of work and
receives a barcode exactly once, at placement. Each item keeps the vendor
that sold it at that moment, so later catalogue reassignments never move
revenue between vendors.

Status is a plain enumerated tag. Staff may set any status from any status
(including backward moves to correct mistakes) and a label scan always
forces PROCESSING, even on a completed order. A forward-only transition
table would be the place to tighten this if stricter lifecycles are needed.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged, TrackingAssigned

# Item totals may carry float noise; anything below half a cent is equal
_MONEY_TOLERANCE = 0.005


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"
    REFUNDED = "REFUNDED"


class PaymentStatus(Enum):
    AWAITING_PAYMENT = "AWAITING_PAYMENT"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class StatusTrigger(Enum):
    ADMIN = "admin"
    SCAN = "scan"


@ordering.entity(part_of="Order")
class OrderItem:
    """A catalogue line snapshotted at checkout.

    ``product_name`` and ``vendor_id`` are copied from the catalogue when the
    order is placed. A null ``vendor_id`` means the platform sold the item.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    vendor_id = Identifier()
    options = Text()  # JSON: buyer's option selections
    image_url = String(max_length=1000)
    uploaded_file_url = String(max_length=1000)

    @property
    def selected_options(self) -> dict:
        return json.loads(self.options) if self.options else {}

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
            "vendor_id": self.vendor_id,
            "options": self.selected_options,
            "image_url": self.image_url,
            "uploaded_file_url": self.uploaded_file_url,
        }


@ordering.aggregate
class Order:
    barcode = String(required=True, max_length=20, unique=True)
    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.AWAITING_PAYMENT.value)
    shipping_company = String(max_length=100)
    tracking_number = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def barcode_must_not_be_blank(self):
        if not self.barcode or not self.barcode.strip():
            raise ValidationError({"barcode": ["Order barcode cannot be blank"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, barcode, buyer_id, address_id, lines):
        """Assemble a new PENDING order from sanitized checkout lines.

        Args:
            barcode: Unique business identifier issued for this order.
            buyer_id: The buyer checking out.
            address_id: Shipping address, already verified to belong to the buyer.
            lines: List of dicts with product_id, product_name, quantity,
                   unit_price, total_price, vendor_id and optional options,
                   image_url, uploaded_file_url.
        """
        if not lines:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        items = [
            OrderItem(
                product_id=line["product_id"],
                product_name=line["product_name"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                total_price=line["total_price"],
                vendor_id=line.get("vendor_id"),
                options=json.dumps(line["options"]) if line.get("options") else None,
                image_url=line.get("image_url"),
                uploaded_file_url=line.get("uploaded_file_url"),
            )
            for line in lines
        ]
        total_amount = round(sum(item.total_price for item in items), 2)

        now = datetime.now(UTC)
        order = cls(
            barcode=barcode,
            buyer_id=buyer_id,
            address_id=address_id,
            items=items,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.AWAITING_PAYMENT.value,
            created_at=now,
            updated_at=now,
        )
        order.assert_total_matches_items()

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                barcode=order.barcode,
                buyer_id=str(buyer_id),
                address_id=str(address_id),
                items=json.dumps([item.to_dict() for item in items]),
                item_count=len(items),
                total_amount=total_amount,
                placed_at=now,
            )
        )
        return order

    def assert_total_matches_items(self):
        item_total = sum(item.total_price for item in self.items)
        if abs(item_total - self.total_amount) >= _MONEY_TOLERANCE:
            raise ValidationError(
                {"total_amount": [f"Order total {self.total_amount} does not match item total {item_total}"]}
            )

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    def set_status(self, new_status, trigger=StatusTrigger.ADMIN):
        """Force the order into ``new_status``, whatever it currently is."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                barcode=self.barcode,
                previous_status=previous,
                new_status=target.value,
                trigger=trigger.value,
                changed_at=now,
            )
        )

    def scan_to_processing(self):
        """A scanned label always means preparation has started."""
        self.set_status(OrderStatus.PROCESSING.value, trigger=StatusTrigger.SCAN)

    def assign_tracking(self, shipping_company, tracking_number):
        if not shipping_company or not tracking_number:
            raise ValidationError({"tracking": ["Shipping company and tracking number are required"]})

        now = datetime.now(UTC)
        self.shipping_company = shipping_company
        self.tracking_number = tracking_number
        self.updated_at = now

        self.raise_(
            TrackingAssigned(
                order_id=str(self.id),
                barcode=self.barcode,
                shipping_company=shipping_company,
                tracking_number=tracking_number,
                assigned_at=now,
            )
        )

    def items_sold_by(self, vendor_id):
        return [item for item in self.items if item.vendor_id == vendor_id]
