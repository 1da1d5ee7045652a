"""Address book port: ownership checks and lookups for shipping addresses."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ShippingAddress:
    address_id: str
    city: str
    line1: str
    title: str | None = None
    district: str | None = None
    line2: str | None = None
    postal_code: str | None = None


class AddressBook(ABC):
    @abstractmethod
    def belongs_to(self, address_id: str, buyer_id: str) -> bool:
        """Return True when ``address_id`` is one of ``buyer_id``'s saved addresses."""
        ...

    @abstractmethod
    def get_address(self, address_id: str) -> ShippingAddress | None:
        """Return the saved address, or ``None`` when the book does not know it."""
        ...
