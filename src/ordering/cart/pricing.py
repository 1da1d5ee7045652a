"""Cart pricing: subtotal, shipping eligibility and grand total.

The cart lives on the client until checkout, so pricing is a pure
function over the submitted lines. The figures are advisory; the order
total is recomputed from the sanitized lines when the order is placed.
"""

from dataclasses import dataclass, field

from ordering.config import BASE_SHIPPING_COST, FREE_SHIPPING_THRESHOLD


@dataclass(frozen=True)
class CartLine:
    """One product selection held in the buyer's cart."""

    product_id: str
    quantity: int
    unit_price: float
    total_price: float
    options: dict = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class CartPricing:
    total_amount: float
    total_count: int
    has_free_shipping: bool
    shipping_cost: float
    remaining_for_free_shipping: float
    grand_total: float


def compute_cart_pricing(
    lines: list[CartLine],
    free_shipping_threshold: float = FREE_SHIPPING_THRESHOLD,
    base_shipping_cost: float = BASE_SHIPPING_COST,
) -> CartPricing:
    """Price a cart under the free-shipping threshold rule.

    Amounts are rounded to cents so that a subtotal such as 1499.99 built
    from several float line totals compares exactly against the threshold.
    """
    total_amount = round(sum(line.total_price for line in lines), 2)
    total_count = sum(line.quantity for line in lines)

    has_free_shipping = total_amount >= free_shipping_threshold
    shipping_cost = 0.0 if has_free_shipping else base_shipping_cost

    return CartPricing(
        total_amount=total_amount,
        total_count=total_count,
        has_free_shipping=has_free_shipping,
        shipping_cost=shipping_cost,
        remaining_for_free_shipping=round(max(0.0, free_shipping_threshold - total_amount), 2),
        grand_total=round(total_amount + shipping_cost, 2),
    )


# Upper bound in desi (volumetric weight) and the parcel price for that tier
DESI_SHIPPING_TIERS = (
    (1, 25.0),
    (3, 35.0),
    (5, 45.0),
    (10, 65.0),
    (20, 85.0),
    (30, 105.0),
    (50, 145.0),
    (100, 195.0),
)
OVERSIZE_SHIPPING_COST = 250.0


def shipping_cost_for_desi(total_desi: float) -> float:
    """Quote a parcel price for the given volumetric weight."""
    for upper_bound, cost in DESI_SHIPPING_TIERS:
        if total_desi <= upper_bound:
            return cost
    return OVERSIZE_SHIPPING_COST
