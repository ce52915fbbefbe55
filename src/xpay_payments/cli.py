"""
Command-line interface for exercising the X-Pay client.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple

from .api import create_client, verify_webhook
from .core.client import XPayClient
from .core.config import load_client_config
from .core.currencies import format_amount
from .core.errors import ConfigError, PollingTimeoutError, XPayError
from .core.models import Payment


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected an integer, got '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError("Must be at least 1")
    return number


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a number, got '{value}'") from None
    if not number >= 0:
        raise argparse.ArgumentTypeError("Must not be negative")
    return number


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xpay-payments",
        description="Talk to the X-Pay payments API from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing XPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("ping", help="Check connectivity and credentials")

    methods = commands.add_parser(
        "payment-methods", help="Show the payment methods enabled for the merchant"
    )
    methods.add_argument("--country", help="Two-letter country code filter")

    status = commands.add_parser("status", help="Show the status of a payment")
    status.add_argument("payment_id")
    status.add_argument(
        "--wait",
        action="store_true",
        help="Poll until the payment reaches a terminal status",
    )
    status.add_argument("--max-attempts", type=_positive_int, default=30)
    status.add_argument(
        "--interval",
        type=_non_negative_float,
        default=2.0,
        help="Seconds between polls (default: 2)",
    )

    verify = commands.add_parser(
        "verify-webhook", help="Check a webhook signature offline"
    )
    verify.add_argument("--secret", required=True)
    verify.add_argument("--signature", required=True)
    payload = verify.add_mutually_exclusive_group(required=True)
    payload.add_argument("--payload", help="Raw webhook body")
    payload.add_argument("--payload-file", type=Path, help="File holding the raw body")

    fmt = commands.add_parser("format-amount", help="Format an amount for display")
    fmt.add_argument("amount")
    fmt.add_argument("currency")
    fmt.add_argument(
        "--major",
        action="store_true",
        help="AMOUNT is in major units (dollars) rather than smallest units (cents)",
    )
    return parser


def _run_offline(args: argparse.Namespace) -> int:
    if args.command == "format-amount":
        try:
            print(format_amount(args.amount, args.currency.upper(), not args.major))
        except (XPayError, ValueError) as exc:
            logging.error("Cannot format amount: %s", exc)
            return 1
        return 0

    if args.payload_file is not None:
        try:
            body = args.payload_file.read_text(encoding="utf-8")
        except OSError as exc:
            logging.error("Cannot read payload: %s", exc)
            return 1
    else:
        body = args.payload
    if verify_webhook(body, args.signature, args.secret):
        logging.info("Webhook signature is valid")
        return 0
    logging.error("Webhook signature is NOT valid")
    return 1


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.command in ("verify-webhook", "format-amount"):
        return _run_offline(args)

    overrides = _collect_overrides(args.set or ())
    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        try:
            if args.command == "ping":
                result = client.ping()
                logging.info("API reachable: %s", result["success"])
                return 0 if result["success"] else 1

            if args.command == "payment-methods":
                response = client.payments.get_payment_methods(args.country)
                _print_json(response.data)
                return 0

            return _handle_status(client, args)
        except PollingTimeoutError as exc:
            logging.warning(
                "Payment %s still %s after %d checks; try again later",
                exc.resource_id,
                exc.last_status,
                exc.attempts,
            )
            return 2
        except XPayError as exc:
            logging.error("Request failed [%s]: %s", exc.code, exc.message)
            return 1


def _handle_status(client: XPayClient, args: argparse.Namespace) -> int:
    if args.wait:
        payment = client.payments.poll_payment_status(
            args.payment_id,
            max_attempts=args.max_attempts,
            interval_seconds=args.interval,
        )
    else:
        payment = Payment.from_mapping(client.payments.retrieve(args.payment_id).data)

    logging.info("Payment %s is %s", payment.id, payment.status)
    _print_json(payment.raw)
    return 0


def main() -> None:
    sys.exit(run_cli())
