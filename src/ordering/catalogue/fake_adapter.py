"""In-memory catalogue for development and testing."""

from ordering.catalogue.port import CatalogueLookup


class FakeCatalogue(CatalogueLookup):
    """Catalogue lookup backed by dicts keyed by product id."""

    def __init__(self) -> None:
        self.products: dict[str, str | None] = {}
        self.names: dict[str, str] = {}
        self.calls: list[list[str]] = []

    def register_product(self, product_id: str, vendor_id: str | None = None, name: str | None = None) -> None:
        self.products[product_id] = vendor_id
        if name:
            self.names[product_id] = name

    def vendors_for(self, product_ids: list[str]) -> dict[str, str | None]:
        self.calls.append(list(product_ids))
        return {product_id: self.products.get(product_id) for product_id in product_ids}

    def names_for(self, product_ids: list[str]) -> dict[str, str | None]:
        return {product_id: self.names.get(product_id) for product_id in product_ids}

    def reset(self) -> None:
        self.products.clear()
        self.names.clear()
        self.calls.clear()
