"""In-memory address book for development and testing."""

from ordering.addresses.port import AddressBook, ShippingAddress


class FakeAddressBook(AddressBook):
    def __init__(self) -> None:
        self.owners: dict[str, str] = {}
        self.addresses: dict[str, ShippingAddress] = {}

    def save_address(
        self,
        address_id: str,
        buyer_id: str,
        city: str = "Istanbul",
        line1: str = "Test Street 1",
        **details,
    ) -> ShippingAddress:
        self.owners[address_id] = buyer_id
        self.addresses[address_id] = ShippingAddress(address_id=address_id, city=city, line1=line1, **details)
        return self.addresses[address_id]

    def belongs_to(self, address_id: str, buyer_id: str) -> bool:
        return self.owners.get(address_id) == buyer_id

    def get_address(self, address_id: str) -> ShippingAddress | None:
        return self.addresses.get(address_id)

    def reset(self) -> None:
        self.owners.clear()
        self.addresses.clear()
