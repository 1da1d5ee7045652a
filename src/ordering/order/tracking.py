"""Buyer-facing progress and the public tracking view.

Tracking lookups need no login, so the view carries only what is printed on
a parcel label: barcode, status, carrier details and item names. Buyer,
address and prices stay out of it.
"""

from dataclasses import dataclass
from datetime import datetime

from ordering.order.order import Order, OrderStatus

PROGRESS_STEPS = (
    OrderStatus.PENDING.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.SHIPPED.value,
    OrderStatus.COMPLETED.value,
)

# Side-branch statuses are shown as a badge instead of a bar position
STATUS_BADGES = {
    OrderStatus.CANCELLED.value: "Cancelled",
    OrderStatus.RETURNED.value: "Returned",
    OrderStatus.REFUNDED.value: "Refunded",
}


@dataclass(frozen=True)
class OrderProgress:
    status: str
    step_index: int | None
    total_steps: int
    percent: float | None
    badge: str | None


def progress_for(status: str) -> OrderProgress:
    total_steps = len(PROGRESS_STEPS)
    if status in PROGRESS_STEPS:
        step_index = PROGRESS_STEPS.index(status)
        return OrderProgress(
            status=status,
            step_index=step_index,
            total_steps=total_steps,
            percent=round(step_index / (total_steps - 1) * 100, 2),
            badge=None,
        )

    return OrderProgress(
        status=status,
        step_index=None,
        total_steps=total_steps,
        percent=None,
        badge=STATUS_BADGES.get(status, status.title()),
    )


@dataclass(frozen=True)
class TrackedItem:
    product_name: str
    quantity: int
    image_url: str | None


@dataclass(frozen=True)
class TrackingView:
    barcode: str
    status: str
    progress: OrderProgress
    created_at: datetime | None
    updated_at: datetime | None
    shipping_company: str | None
    tracking_number: str | None
    items: list[TrackedItem]


def tracking_view(order: Order) -> TrackingView:
    return TrackingView(
        barcode=order.barcode,
        status=order.status,
        progress=progress_for(order.status),
        created_at=order.created_at,
        updated_at=order.updated_at,
        shipping_company=order.shipping_company,
        tracking_number=order.tracking_number,
        items=[
            TrackedItem(product_name=item.product_name, quantity=item.quantity, image_url=item.image_url)
            for item in order.items
        ],
    )
