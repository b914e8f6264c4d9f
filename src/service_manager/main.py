#!/usr/bin/env python3
"""Main entry point for the service manager command line tool."""

import argparse
import logging
import sys
from typing import Optional

from .config import ServiceConfig
from .coordinator import ServiceCoordinator
from .errors import ConfigurationError, ServiceManagerError
from .init_system import InitSystem, detect_init_system
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

OPERATIONS = ["enable", "disable", "start", "stop", "restart", "reload", "remove"]


def parse_delayed_action(spec: str) -> tuple[str, str, int]:
    """Parse ``action:service[:priority]`` into its parts."""
    parts = spec.split(":")
    if len(parts) not in (2, 3) or not all(parts):
        raise ConfigurationError(f"Invalid delayed action `{spec}', expected action:service[:priority]")
    action, service = parts[0], parts[1]
    priority = 0
    if len(parts) == 3:
        if not parts[2].isdigit():
            raise ConfigurationError(f"Invalid priority in `{spec}'")
        priority = int(parts[2])
    return action, service, priority


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="service-manager",
        description="Manage system services through the active init system.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="show progress messages")
    parser.add_argument("--debug", action="store_true", help="show debug messages")
    parser.add_argument(
        "--init",
        choices=[i.value for i in InitSystem],
        help="skip detection and use this init system",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("detect", help="print the detected init system")

    status = sub.add_parser("status", help="show whether a service exists, is enabled and running")
    status.add_argument("service")

    for operation in OPERATIONS:
        op = sub.add_parser(operation, help=f"{operation} a service")
        op.add_argument("service")

    delay = sub.add_parser(
        "delay",
        help="register delayed start/reload/restart actions and run them once",
    )
    delay.add_argument("actions", nargs="+", metavar="ACTION:SERVICE[:PRIORITY]")

    return parser


def _print_status(services: ServiceCoordinator, service: str) -> None:
    print(f"service:  {service}")
    print(f"exists:   {'yes' if services.has_service(service) else 'no'}")
    print(f"enabled:  {'yes' if services.is_enabled(service) else 'no'}")
    print(f"running:  {'yes' if services.is_running(service) else 'no'}")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the service manager command line tool."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, debug=args.debug)
    try:
        config = ServiceConfig.from_env()
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    if args.command == "detect":
        init = InitSystem(args.init) if args.init else detect_init_system(config)
        print(init.value)
        return 0

    try:
        services = ServiceCoordinator(config=config, init_system=args.init)
    except ServiceManagerError as e:
        logger.error("%s", e)
        return 1

    ret = 0
    try:
        if args.command == "status":
            _print_status(services, args.service)
        elif args.command == "delay":
            for spec in args.actions:
                action, service, priority = parse_delayed_action(spec)
                services.register_delayed_action(service, action, priority)
        else:
            getattr(services, args.command)(args.service)
            logger.info("%s: %s done", args.service, args.command)
    except ServiceManagerError as e:
        logger.error("%s", e)
        ret = 1
    finally:
        # Delayed actions run last, whatever happened before
        try:
            for pending in services.drain():
                logger.info("%s: delayed %s done", pending.service, pending.action.value)
        except ServiceManagerError as e:
            logger.error("%s", e)
            ret = 1

    return ret


if __name__ == "__main__":
    sys.exit(main())
