"""Protean Engine runner for the delivery domain.

In production (event_processing = "async") the Engine publishes events from
the outbox to Redis Streams and feeds them to the driver manifest projector.

Usage:
    PROTEAN_ENV=production python src/server.py
    PROTEAN_ENV=production python src/server.py --test-mode   # drain once and exit
"""

import argparse

from protean.server.engine import Engine


def build_engine(test_mode: bool = False, debug: bool = False) -> Engine:
    from delivery.domain import delivery
    from delivery.utils.logging import configure_logging

    configure_logging()
    delivery.init()
    return Engine(delivery, test_mode=test_mode, debug=debug)


def main():
    parser = argparse.ArgumentParser(description="Lastmile Engine runner")
    parser.add_argument("--test-mode", action="store_true", help="Process pending messages once and exit")
    parser.add_argument("--debug", action="store_true", help="Verbose engine logging")
    args = parser.parse_args()

    build_engine(test_mode=args.test_mode, debug=args.debug).run()


if __name__ == "__main__":
    main()
