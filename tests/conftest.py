import os
from pathlib import Path

import pytest
import structlog

# Test layer directories and the marker each one carries
LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
    "bdd": pytest.mark.bdd,
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config overlay from domain.toml to run the ordering tests against",
    )


def pytest_report_header(config):
    return f"ordering domain config: {config.option.env}"


def pytest_sessionstart(session):
    """Activate the ordering domain before collection so modules can use `current_domain`."""
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from ordering.domain import ordering

    ordering.init()
    ordering.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Mark each test with its layer; HTTP tests are also slow unless marked fast."""
    for item in items:
        layers = [LAYER_MARKERS[part] for part in Path(item.fspath).parts if part in LAYER_MARKERS]
        if not layers:
            continue
        item.add_marker(layers[-1])
        if layers[-1] is LAYER_MARKERS["integration"] and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from ordering.domain import ordering
    from ordering.utils.db import drop_db, setup_db

    setup_db(ordering)

    yield

    drop_db(ordering)


@pytest.fixture(autouse=True)
def reset_stores():
    """Empty orders, vendors and stored events after every test."""
    yield

    from protean import current_domain

    for provider in current_domain.providers.values():
        provider._data_reset()
    current_domain.event_store.store._data_reset()
    structlog.contextvars.clear_contextvars()
