"""
Command-line interface for exercising the Dwolla API.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Sequence, TextIO, Tuple

import requests

from .api import ConfigError, DwollaClient, create_dwolla_client, load_dwolla_config
from .core.errors import DwollaError
from .core.transfer import Transfer


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # urllib3 connection chatter only at --log-level DEBUG
    if numeric > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(max(numeric, logging.WARNING))


def _dwolla_setting(value: str) -> Tuple[str, str]:
    key, sep, val = value.partition("=")
    key = key.strip().upper()
    if not sep or not key:
        raise argparse.ArgumentTypeError("Settings must look like DWOLLA_KEY=VALUE")
    if not key.startswith("DWOLLA_"):
        raise argparse.ArgumentTypeError(f"Unknown setting '{key}'; expected a DWOLLA_* key")
    return key, val


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dwolla-payments",
        description="Inspect Dwolla resources and create transfers",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DWOLLA_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_dwolla_setting,
        metavar="DWOLLA_KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("account", help="Show the master account")
    commands.add_parser("customers", help="List customers")

    customer = commands.add_parser("customer", help="Show one customer")
    customer.add_argument("customer_id")

    sources = commands.add_parser("funding-sources", help="List a customer's funding sources")
    sources.add_argument("customer_id")

    source = commands.add_parser("funding-source", help="Show one funding source")
    source.add_argument("source_id")

    transfer = commands.add_parser("transfer", help="Show one transfer")
    transfer.add_argument("transfer_id")

    create = commands.add_parser("create-transfer", help="Move money between funding sources")
    create.add_argument("--source", required=True, help="Source funding source ID or URL")
    create.add_argument(
        "--destination", required=True, help="Destination funding source ID or URL"
    )
    create.add_argument("--amount", required=True, help="Amount, e.g. 12.50")
    create.add_argument("--currency", default="USD")
    return parser


def _funding_source_href(client: DwollaClient, value: str) -> str:
    if value.startswith(("https://", "http://")):
        return value
    return f"{client.root_url()}/funding-sources/{value}"


def _to_jsonable(result: Any) -> Any:
    if dataclasses.is_dataclass(result):
        return dataclasses.asdict(result)
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def _dispatch(client: DwollaClient, args: argparse.Namespace) -> Any:
    if args.command == "account":
        return client.retrieve_account()
    if args.command == "customers":
        return client.list_customers()
    if args.command == "customer":
        return client.get_customer(args.customer_id)
    if args.command == "funding-sources":
        return client.list_funding_sources(args.customer_id)
    if args.command == "funding-source":
        return client.get_funding_source(args.source_id)
    if args.command == "transfer":
        return client.get_transfer(args.transfer_id)
    if args.command == "create-transfer":
        transfer = Transfer.between(
            _funding_source_href(client, args.source),
            _funding_source_href(client, args.destination),
            args.amount,
            currency=args.currency,
        )
        transfer_id = client.create_transfer(transfer)
        logging.info("Created transfer %s", transfer_id)
        return {"id": transfer_id}
    raise ValueError(f"Unknown command {args.command}")  # pragma: no cover


def run_cli(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out or sys.stdout

    _configure_logging(args.log_level)
    overrides = dict(args.set or ())

    try:
        config = load_dwolla_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_dwolla_client(config=config, session=requests.Session())

    try:
        result = _dispatch(client, args)
    except ValueError as exc:
        logging.error("Invalid arguments: %s", exc)
        return 1
    except DwollaError as exc:
        logging.error("Request failed: %s", exc)
        return 1

    json.dump(_to_jsonable(result), out, indent=2, default=str)
    out.write("\n")
    return 0


def main() -> None:
    sys.exit(run_cli())
