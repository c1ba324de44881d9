"""
Command-line interface for signing, verifying and querying LiqPay requests.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Sequence, Tuple

from .api import create_client
from .core.config import ClientConfig, load_client_config
from .core.encoding import encode
from .core.errors import ConfigError, EncodingError, LiqPayClientError
from .core.operations import StatusRequest
from .core.signing import SignatureAlgorithm, sign


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="liqpay-client",
        description="Sign, verify and send LiqPay API requests",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing LIQPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override a LIQPAY_* setting without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    sign_parser = commands.add_parser(
        "sign", help="Print the data and signature fields for a parameter set"
    )
    sign_parser.add_argument(
        "--param",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Request parameter; repeat for each parameter",
    )

    verify_parser = commands.add_parser(
        "verify", help="Check a data/signature pair, e.g. from a server callback"
    )
    verify_parser.add_argument("--data", required=True, help="Base64 data field")
    verify_parser.add_argument("--signature", required=True, help="Signature field")

    status_parser = commands.add_parser("status", help="Query the status of an order")
    status_parser.add_argument("--order-id", required=True, help="Merchant order id")
    return parser


def _run_sign(config: ClientConfig, args: argparse.Namespace) -> int:
    params = _collect(args.param or ())
    if not params:
        logging.error("At least one --param KEY=VALUE is required")
        return 1
    try:
        envelope = sign(
            encode(params),
            config.credentials,
            algorithm=config.signature_algorithm or SignatureAlgorithm.SHA1,
        )
    except EncodingError as exc:
        logging.error("Cannot encode parameters: %s", exc)
        return 1
    print(f"data={envelope.data}")
    print(f"signature={envelope.signature}")
    return 0


def _run_verify(config: ClientConfig, args: argparse.Namespace) -> int:
    client = create_client(config=config)
    result = client.verify_callback(args.data, args.signature)
    if not result.ok:
        logging.error("Signature verification failed: %s", result.reason.value)
        return 1
    logging.info("Signature is valid")
    return 0


def _run_status(config: ClientConfig, args: argparse.Namespace) -> int:
    client = create_client(config=config)
    try:
        response = client.send(StatusRequest(order_id=args.order_id))
    except LiqPayClientError as exc:
        logging.error("Status request failed: %s", exc)
        return 1

    if not response.ok:
        logging.error(
            "LiqPay reported an error for order %s: %s %s",
            args.order_id,
            response.err_code,
            response.err_description,
        )
        return 1

    logging.info("Order %s has status %s", args.order_id, response.status)
    return 0


_COMMANDS = {
    "sign": _run_sign,
    "verify": _run_verify,
    "status": _run_status,
}


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    return _COMMANDS[args.command](config, args)


def main() -> None:
    sys.exit(run_cli())
