"""Fulfillment: admin status changes, warehouse label scans and tracking numbers.

Admin changes and scans race freely on the same order; whichever write lands
last decides the status.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from ordering.order.queries import find_by_barcode

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class SetOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class ScanOrderBarcode:
    barcode = String(required=True, max_length=50)


@ordering.command(part_of="Order")
class AssignTracking:
    order_id = Identifier(required=True)
    shipping_company = String(required=True, max_length=100)
    tracking_number = String(required=True, max_length=255)


@ordering.command_handler(part_of=Order)
class FulfillmentHandler:
    @handle(SetOrderStatus)
    def set_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.set_status(command.status)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=command.order_id,
            previous_status=previous,
            new_status=order.status,
            trigger="admin",
        )
        return order.status

    @handle(ScanOrderBarcode)
    def scan_order_barcode(self, command):
        order = find_by_barcode(command.barcode)
        previous = order.status
        order.scan_to_processing()
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order barcode scanned",
            order_id=str(order.id),
            barcode=order.barcode,
            previous_status=previous,
            new_status=order.status,
            trigger="scan",
        )
        return f'Order {order.barcode} status updated to "{OrderStatus.PROCESSING.value.title()}"'

    @handle(AssignTracking)
    def assign_tracking(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.assign_tracking(command.shipping_company, command.tracking_number)
        repo.add(order)

        logger.info(
            "Tracking assigned",
            order_id=command.order_id,
            shipping_company=command.shipping_company,
            tracking_number=command.tracking_number,
        )
