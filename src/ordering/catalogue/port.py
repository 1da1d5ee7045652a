"""Catalogue lookup port.

Ordering needs two facts from the catalogue at checkout: which vendor
currently sells each product, and the product's display name when the cart
line does not carry one. Both are copied onto the order items, so later
changes in the catalogue never reach stored orders.
"""

from abc import ABC, abstractmethod


class CatalogueLookup(ABC):
    """Abstract catalogue lookup interface."""

    @abstractmethod
    def vendors_for(self, product_ids: list[str]) -> dict[str, str | None]:
        """Map each product id to its current vendor id.

        Products sold by the platform itself, and products the catalogue
        does not know, map to ``None``.
        """
        ...

    @abstractmethod
    def names_for(self, product_ids: list[str]) -> dict[str, str | None]:
        """Map each product id to its current name, ``None`` when unknown."""
        ...
