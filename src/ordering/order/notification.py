"""Order confirmation dispatch.

Runs after the order is committed. The stored order is the source of truth,
so a failed send is logged and dropped; it never undoes the checkout.
"""

import json

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.notifier import get_notifier
from ordering.notifier.order_confirmation import OrderConfirmationTemplate
from ordering.order.events import OrderPlaced
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Order)
class OrderConfirmationHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        message = OrderConfirmationTemplate.render(
            {
                "barcode": event.barcode,
                "total_amount": event.total_amount,
                "items": json.loads(event.items),
            }
        )

        try:
            result = get_notifier().send(
                recipient_id=str(event.buyer_id),
                subject=message["subject"],
                body=message["body"],
            )
        except Exception as e:
            logger.error(
                "Order confirmation send failed",
                order_id=str(event.order_id),
                barcode=event.barcode,
                error=str(e),
            )
            return

        if result.get("status") != "sent":
            logger.error(
                "Order confirmation send failed",
                order_id=str(event.order_id),
                barcode=event.barcode,
                error=result.get("error", "Unknown dispatch error"),
            )
            return

        logger.info(
            "Order confirmation sent",
            order_id=str(event.order_id),
            message_id=result.get("message_id"),
        )
