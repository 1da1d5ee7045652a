"""Human-readable order barcodes.

Barcodes look like ``MG-2025-QRRSJP``: a fixed prefix, the current year and
six characters from an alphabet without the easily confused 0/O and 1/I.
``ensure_unique_barcode`` only pre-checks candidates against stored orders.
The unique constraint on ``Order.barcode`` remains the real guarantee, and
order placement regenerates when the store rejects a duplicate.
"""

import secrets
import string
import time
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from ordering.config import BARCODE_MAX_ATTEMPTS, BARCODE_PREFIX

logger = structlog.get_logger(__name__)

BARCODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
BARCODE_SUFFIX_LENGTH = 6

_BASE36_DIGITS = string.digits + string.ascii_uppercase


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def generate_barcode() -> str:
    """Produce a random barcode candidate for the current year."""
    suffix = "".join(secrets.choice(BARCODE_ALPHABET) for _ in range(BARCODE_SUFFIX_LENGTH))
    return f"{BARCODE_PREFIX}-{_current_year()}-{suffix}"


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits)) or "0"


def fallback_barcode(offset: int = 0) -> str:
    """Derive a barcode from the millisecond clock when random candidates keep colliding.

    ``offset`` is added to the clock reading so that repeated calls within
    the same millisecond still give different values.
    """
    suffix = _to_base36(time.time_ns() // 1_000_000 + offset)[-BARCODE_SUFFIX_LENGTH:]
    return f"{BARCODE_PREFIX}-{_current_year()}-{suffix.rjust(BARCODE_SUFFIX_LENGTH, '0')}"


def ensure_unique_barcode(
    exists: Callable[[str], bool],
    generator: Callable[[], str] = generate_barcode,
    max_attempts: int = BARCODE_MAX_ATTEMPTS,
) -> str:
    """Return the first generated candidate for which ``exists`` is false.

    Gives up after ``max_attempts`` collisions and switches to clock-derived
    barcodes, which are pre-checked the same way. Both loops are bounded, so
    the call always terminates; if every fallback is taken as well, the last
    one is returned and the store's unique constraint decides.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generator()
        if not exists(candidate):
            return candidate
        logger.debug("Barcode collision", barcode=candidate, attempt=attempt)

    barcode = fallback_barcode()
    for offset in range(1, max_attempts + 1):
        if not exists(barcode):
            break
        barcode = fallback_barcode(offset)
    logger.warning("Barcode attempts exhausted, using clock fallback", attempts=max_attempts, barcode=barcode)
    return barcode
