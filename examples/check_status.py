"""
Minimal script that uses the public API to query the status of an order.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Tuple

from liqpay_client import (
    ConfigError,
    LiqPayClientError,
    StatusRequest,
    create_client,
    load_client_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query a LiqPay order status using the SDK API")
    parser.add_argument("order_id", help="Merchant order id to look up")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing LIQPAY_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--public-key", help="Shop public key")
    parser.add_argument("--private-key", help="Shop private key")
    parser.add_argument(
        "--sandbox",
        action="store_true",
        default=None,
        help="Send the request in LiqPay sandbox mode",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
            public_key=args.public_key,
            private_key=args.private_key,
            sandbox=args.sandbox,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config)
    logging.info("Querying order %s at %s", args.order_id, config.api_url)

    try:
        response = client.send(StatusRequest(order_id=args.order_id))
    except LiqPayClientError as exc:
        logging.error("Status request failed: %s", exc)
        return 1

    if response.ok:
        logging.info(
            "Order %s: status=%s amount=%s %s",
            args.order_id,
            response.status,
            response.amount,
            response.currency,
        )
        return 0

    logging.error("LiqPay error: %s %s", response.err_code, response.err_description)
    return 1


if __name__ == "__main__":
    sys.exit(main())
