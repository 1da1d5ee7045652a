"""Checkout rejections.

Each rejection names the precondition that failed so the buyer can act on
it, for example by removing a blocked vendor's product from the cart. They
subclass Protean's ``ValidationError`` so that callers which only know the
framework error still treat them as bad input.
"""

from protean.exceptions import ValidationError


class CheckoutRejected(ValidationError):
    code = "checkout_rejected"
    status_code = 400


class InvalidRequest(CheckoutRejected):
    """Checkout payload is empty or malformed."""

    code = "invalid_request"


class InvalidAddress(CheckoutRejected):
    """Shipping address does not belong to the buyer."""

    code = "invalid_address"


class VendorBlocked(CheckoutRejected):
    """At least one line belongs to a blocked vendor, so the whole cart is refused."""

    code = "vendor_blocked"
    status_code = 409

    def __init__(self, product_ids: list[str], vendor_ids: list[str]):
        self.product_ids = sorted(product_ids)
        self.vendor_ids = sorted(vendor_ids)
        super().__init__(
            {
                "items": [
                    "Products from a blocked vendor cannot be ordered: " + ", ".join(self.product_ids),
                ]
            }
        )


class BarcodeConflict(CheckoutRejected):
    """The store refused the order because its barcode is already taken."""

    code = "barcode_conflict"
    status_code = 409
