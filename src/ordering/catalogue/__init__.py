"""Catalogue lookup factory.

Provides get_catalogue() / set_catalogue() to swap implementations. The
in-memory FakeCatalogue is the default until a real adapter is installed.
"""

from ordering.catalogue.fake_adapter import FakeCatalogue
from ordering.catalogue.port import CatalogueLookup

_current_catalogue: CatalogueLookup | None = None


def get_catalogue() -> CatalogueLookup:
    """Return the current catalogue lookup. Defaults to FakeCatalogue."""
    global _current_catalogue
    if _current_catalogue is None:
        _current_catalogue = FakeCatalogue()
    return _current_catalogue


def set_catalogue(catalogue: CatalogueLookup) -> None:
    """Override the active catalogue lookup (useful for tests)."""
    global _current_catalogue
    _current_catalogue = catalogue


def reset_catalogue() -> None:
    """Reset to default catalogue lookup."""
    global _current_catalogue
    _current_catalogue = None
