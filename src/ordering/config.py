"""Checkout and listing policy for the Ordering domain.

Values can be overridden through environment variables of the same name.
"""

import os


def _float_env(name: str, default: float) -> float:
    return float(os.getenv(name, default))


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, default))


# Cart subtotal at which shipping is waived
FREE_SHIPPING_THRESHOLD = _float_env("FREE_SHIPPING_THRESHOLD", 1500.0)

# Flat fee charged below the threshold (lightest volumetric tier)
BASE_SHIPPING_COST = _float_env("BASE_SHIPPING_COST", 25.0)

BARCODE_PREFIX = "MG"
BARCODE_MAX_ATTEMPTS = _int_env("BARCODE_MAX_ATTEMPTS", 20)

# Retries after the store rejects a duplicate barcode
ORDER_PLACEMENT_MAX_ATTEMPTS = _int_env("ORDER_PLACEMENT_MAX_ATTEMPTS", 3)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
