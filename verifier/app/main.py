"""Receive one message for a destination and print it as JSON.

    python -m verifier.app.main orders --contract contracts/order_created.yml --timeout 10
"""
from __future__ import annotations

import argparse
import asyncio
import base64
import json
import sys
from typing import Any, Sequence

from loguru import logger

from verifier.app.composition import create_verifier_dependencies
from verifier.app.config.settings import Settings
from verifier.app.core import SERVICE_NAME
from verifier.app.domain.contract import Contract
from verifier.app.domain.messages import VerifierMessage
from verifier.app.domain.time_unit import TimeUnit


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _json_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return base64.b64encode(bytes(value)).decode("ascii")
    return str(value)


def render_message(message: VerifierMessage) -> str:
    return json.dumps(
        {"body": message.payload, "headers": message.headers},
        default=_json_value,
        sort_keys=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contract-verifier-receive", description=__doc__.splitlines()[0])
    parser.add_argument("destination", help="topic (kafka) or exchange (rabbitmq) to receive from")
    parser.add_argument("--contract", help="YAML contract whose metadata shapes the destination options")
    parser.add_argument("--timeout", type=float, default=None, help="seconds to wait (default RECEIVE_TIMEOUT_SECONDS)")
    return parser


async def run_receive(
    destination: str,
    *,
    contract: Contract | None = None,
    timeout_seconds: float | None = None,
    settings: Settings | None = None,
) -> VerifierMessage | None:
    dependencies = create_verifier_dependencies(settings)
    timeout = timeout_seconds if timeout_seconds is not None else dependencies.settings.receive_timeout_seconds
    try:
        return await dependencies.messaging.receive(
            destination,
            contract,
            timeout=timeout,
            unit=TimeUnit.SECONDS,
        )
    finally:
        await dependencies.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    contract = Contract.from_file(args.contract) if args.contract else None
    try:
        message = asyncio.run(run_receive(args.destination, contract=contract, timeout_seconds=args.timeout))
    except KeyboardInterrupt:
        _log("receive_interrupted")
        return 130
    except Exception as e:
        logger.exception("receive failed: {}", e)
        raise
    if message is None:
        _log("no_message", destination=args.destination)
        return 1
    print(render_message(message))
    return 0


if __name__ == "__main__":
    sys.exit(main())
