"""Composition root for the ticketlink adapter.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Transport instantiation
- Adapter construction and status subscriptions
- Command selection (healthcheck, get, post)
"""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from ticketlink.adapters.transport.servicenow import (
    DEFAULT_TIMEOUT,
    ServiceNowTransport,
)
from ticketlink.config import load_settings
from ticketlink.core.adapter import ChangeTicketAdapter
from ticketlink.core.models import (
    AdapterConfig,
    AdapterStatus,
    ChangeTicket,
    HealthState,
    Result,
    StatusEvent,
)


def create_adapter(
    adapter_id: str,
    config: AdapterConfig,
    timeout: float = DEFAULT_TIMEOUT,
) -> ChangeTicketAdapter:
    """Build an adapter bound to a ServiceNow transport.

    Raises:
        TransportConfigError: If the config cannot be used to reach ServiceNow.
    """
    return ChangeTicketAdapter(
        adapter_id,
        config,
        transport_factory=lambda cfg: ServiceNowTransport(cfg, timeout=timeout),
    )


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def parse_fields(pairs: Sequence[str]) -> dict[str, str]:
    """Parse ``key=value`` pairs into a record field mapping.

    Raises:
        ValueError: If a pair has no '=' or an empty key.
    """
    fields: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid field '{pair}'. Use key=value.")
        fields[key.strip()] = value
    return fields


def render_result(result: Result[Any]) -> dict[str, Any]:
    """Convert an operation result into a JSON-ready dictionary."""
    if not result.ok:
        return {
            "status": "error",
            "error_type": type(result.error).__name__,
            "message": str(result.error),
        }

    value = result.value
    if isinstance(value, list):
        data: Any = [ticket.to_dict() for ticket in value]
    elif isinstance(value, ChangeTicket):
        data = value.to_dict()
    else:
        data = value
    return {"status": "ok", "data": data}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticketlink",
        description="ServiceNow change-request adapter",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file with adapter settings",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("healthcheck", help="Probe ServiceNow and report ONLINE/OFFLINE")
    subparsers.add_parser("get", help="Read change tickets")

    post = subparsers.add_parser("post", help="Create a change ticket")
    post.add_argument(
        "--field",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Record field to send (repeatable)",
    )
    return parser


async def run_command(
    adapter: ChangeTicketAdapter,
    command: str,
    fields: dict[str, str] | None = None,
) -> int:
    """Execute one CLI command against an adapter.

    Returns:
        Process exit code: 0 on success, 1 on failure.

    Raises:
        ValueError: If command is not recognized.
    """
    logger = logging.getLogger(__name__)

    def on_status(event: StatusEvent) -> None:
        logger.info(f"Status event {event.status.value}: {event.to_dict()}")

    adapter.subscribe(AdapterStatus.ONLINE, on_status)
    adapter.subscribe(AdapterStatus.OFFLINE, on_status)

    if command == "healthcheck":
        result = await adapter.healthcheck()
        output = render_result(result)
        output["adapter_status"] = adapter.status.value
        print(json.dumps(output, indent=2, default=str))
        return 0 if adapter.status is HealthState.ONLINE else 1

    if command == "get":
        result = await adapter.get_record()
    elif command == "post":
        result = await adapter.post_record(fields or None)
    else:
        raise ValueError(f"Unknown command: {command}")

    print(json.dumps(render_result(result), indent=2, default=str))
    return 0 if result.ok else 1


async def bootstrap(argv: Sequence[str] | None = None) -> int:
    """Load configuration, wire the adapter and run the requested command.

    Steps:
    1. Parse arguments and load configuration from environment
    2. Configure logging
    3. Instantiate the adapter with its transport
    4. Run the command
    """
    args = build_parser().parse_args(argv)
    settings = load_settings(args.env_file)

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting ticketlink adapter {settings.adapter_id}...")

    fields = parse_fields(args.field) if args.command == "post" else None

    async with create_adapter(
        settings.adapter_id,
        settings.to_adapter_config(),
        timeout=settings.request_timeout_seconds,
    ) as adapter:
        return await run_command(adapter, args.command, fields)


def main(argv: Sequence[str] | None = None) -> None:
    """Application entry point.

    Exit codes:
        0: Command succeeded / adapter ONLINE
        1: Command failed / adapter OFFLINE / fatal configuration error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        exit_code = asyncio.run(bootstrap(argv))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
