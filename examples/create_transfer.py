"""
Minimal script that uses the public API to move money between two funding
sources.
"""

from __future__ import annotations

import argparse
import logging
import sys

from dwolla_payments import ConfigError, DwollaError, Transfer, create_dwolla_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Dwolla transfer using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DWOLLA_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--source", required=True, help="Source funding source ID")
    parser.add_argument("--destination", required=True, help="Destination funding source ID")
    parser.add_argument("--amount", required=True, help="Amount in dollars (e.g. 10.00)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_dwolla_client(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    root = client.root_url()
    transfer = Transfer.between(
        f"{root}/funding-sources/{args.source}",
        f"{root}/funding-sources/{args.destination}",
        args.amount,
    )

    try:
        transfer_id = client.create_transfer(transfer)
        created = client.get_transfer(transfer_id)
    except DwollaError as exc:
        logging.error("Transfer failed: %s", exc)
        return 1

    logging.info(
        "Transfer %s created with status %s for %s %s",
        created.id,
        created.status,
        created.amount.value,
        created.amount.currency,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
