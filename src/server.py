"""Protean Engine runner for the ordering domain.

Starts Engine workers that process events asynchronously, such as the
order confirmation handler, when event processing is configured as async.

Usage:
    python src/server.py
    python src/server.py --test-mode   # Drain pending messages and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine

from ordering.utils.logging import configure_logging


def _get_domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


async def run(test_mode: bool = False):
    engine = Engine(_get_domain(), test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Ordering Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    configure_logging()
    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
