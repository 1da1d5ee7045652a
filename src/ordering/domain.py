"""Ordering bounded context: marketplace checkout, fulfillment and vendor settlement.

Orders are CQRS aggregates persisted through Protean repositories. Vendors
live in the same context so that settlement can read completed orders and
commission rates without crossing a context boundary.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
