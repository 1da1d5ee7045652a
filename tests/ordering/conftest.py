import pytest
from ordering.addresses import reset_address_book, set_address_book
from ordering.addresses.fake_adapter import FakeAddressBook
from ordering.catalogue import reset_catalogue, set_catalogue
from ordering.catalogue.fake_adapter import FakeCatalogue
from ordering.notifier import reset_notifier, set_notifier
from ordering.notifier.fake_adapter import FakeNotifier
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def catalogue():
    fake = FakeCatalogue()
    set_catalogue(fake)
    yield fake
    reset_catalogue()


@pytest.fixture(autouse=True)
def address_book():
    fake = FakeAddressBook()
    set_address_book(fake)
    yield fake
    reset_address_book()


@pytest.fixture(autouse=True)
def notifier():
    fake = FakeNotifier()
    set_notifier(fake)
    yield fake
    reset_notifier()
