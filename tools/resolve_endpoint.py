"""Resolve the base URL of an Azure Storage service.

Examples:
    python tools/resolve_endpoint.py --account mystorage --cloud china --service table
    python tools/resolve_endpoint.py --account mystorage           # auto-detect the cloud
    python tools/resolve_endpoint.py --cloud emulator --emulator-port 10002
    python tools/resolve_endpoint.py --from-url "https://acct.blob.core.windows.net/?sv=..."
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

# Support both running from workspace root and tools directory
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.cloud_location import DEFAULT_EMULATOR_ADDRESS, DEFAULT_EMULATOR_PORT, EMULATOR_PORTS, CloudLocation
from core.connection_string import parse_connection_string
from core.credentials import describe_credentials
from core.exceptions import CloudLocationError
from core.service_type import ServiceType
from tools.lib import setup_logging

_CLOUD_CHOICES = ("public", "china", "usgov", "auto", "emulator")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve the base URL of an Azure Storage service.")
    parser.add_argument(
        "--account",
        default=os.environ.get("AZURE_STORAGE_ACCOUNT"),
        help="Storage account name. Defaults to $AZURE_STORAGE_ACCOUNT.",
    )
    parser.add_argument(
        "--cloud",
        choices=_CLOUD_CHOICES,
        default="auto",
        help="Cloud hosting the account (default: auto-detect from AZURE_CLOUD_NAME or ~/.azure/config).",
    )
    parser.add_argument(
        "--service",
        choices=[service.value for service in ServiceType],
        default=ServiceType.BLOB.value,
        help="Storage service to resolve (default: blob).",
    )
    parser.add_argument("--emulator-host", default=DEFAULT_EMULATOR_ADDRESS, help="Emulator address.")
    parser.add_argument(
        "--emulator-port", type=int, default=None, help="Emulator port (default: the Azurite port of --service)."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--from-url", help="Derive the location from a SAS URL instead of --account/--cloud.")
    source.add_argument("--connection-string", help="Derive the location from a storage connection string.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def build_location(args: argparse.Namespace) -> CloudLocation:
    if args.from_url:
        return CloudLocation.from_url(args.from_url)
    if args.connection_string:
        return parse_connection_string(args.connection_string, args.service)
    if args.cloud == "emulator":
        port = args.emulator_port
        if port is None:
            port = EMULATOR_PORTS.get(ServiceType.parse(args.service), DEFAULT_EMULATOR_PORT)
        return CloudLocation.emulator(args.emulator_host, port)
    if not args.account:
        raise ValueError("Provide --account (or set AZURE_STORAGE_ACCOUNT) unless using the emulator.")

    factories = {
        "public": CloudLocation.public,
        "china": CloudLocation.china,
        "usgov": CloudLocation.us_gov,
        "auto": CloudLocation.auto_detect,
    }
    return factories[args.cloud](args.account)


def main(argv: list[str] | None = None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        location = build_location(args)
        url = location.url(ServiceType.parse(args.service))
    except (CloudLocationError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(url)
    print(f"Credentials: {describe_credentials(location.credentials)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
