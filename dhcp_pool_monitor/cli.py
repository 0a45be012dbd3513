#!/usr/bin/env python3
"""Technitium DHCP pool monitor - command line entry point."""

import argparse
import logging
import sys

from colorama import Fore, init

from . import __version__
from .client import TechnitiumClient
from .config import DEFAULT_CRITICAL, DEFAULT_TIMEOUT, DEFAULT_WARNING, resolve_connection, validate_thresholds
from .exceptions import DhcpMonitorError, HttpStatusError
from .log import configure_logging, mask_token
from .monitor import collect_utilization
from .report import format_json, format_text_report, write_csv

init(autoreset=True)

logger = logging.getLogger(__name__)

EPILOG = """\
Examples:
  dhcp-pool-monitor --server http://192.168.1.1:5380 --token mytoken123
  dhcp-pool-monitor --server http://192.168.1.1:5380 --token mytoken123 --scope "Main Network"
  dhcp-pool-monitor --server https://10.10.10.5 --token mytoken --insecure
  dhcp-pool-monitor --server http://10.10.10.5:5380 --token mytoken --warning 80 --critical 95

Notes:
  - Default port is 5380
  - Use http:// for no SSL, https:// for SSL, or https:// with --insecure for self-signed certs
  - Get your API token from Technitium DNS Server: Administration > Sessions > Create Token
"""


class MonitorArgumentParser(argparse.ArgumentParser):
    """Argument errors exit with status 1 like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{Fore.RED}Error: {message}{Fore.RESET}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = MonitorArgumentParser(
        prog="dhcp-pool-monitor",
        description="Report DHCP scope pool utilization from a Technitium DNS Server",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--server", help="Technitium server URL (e.g. http://192.168.1.1:5380)")
    parser.add_argument("--token", help="API authentication token")
    parser.add_argument("--scope", help="Specific scope name to query (queries all if not specified)")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Output results in JSON format")
    output.add_argument("--csv", action="store_true", help="Output results as CSV")
    parser.add_argument("--verbose", action="store_true", help="Show detailed debugging information")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Allow insecure SSL connections (self-signed certificates)",
    )
    # Checked by validate_thresholds, not argparse
    parser.add_argument(
        "--warning",
        default=str(DEFAULT_WARNING),
        help=f"Warning threshold percentage (default: {DEFAULT_WARNING})",
    )
    parser.add_argument(
        "--critical",
        default=str(DEFAULT_CRITICAL),
        help=f"Critical threshold percentage (default: {DEFAULT_CRITICAL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument("--config", help="KEY=VALUE file providing SERVER and TOKEN")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_error(error: DhcpMonitorError) -> None:
    print(f"{Fore.RED}Error: {error.message}", file=sys.stderr)
    if error.hints:
        print("\nPossible causes:", file=sys.stderr)
        for hint in error.hints:
            print(f"  - {hint}", file=sys.stderr)
    if isinstance(error, HttpStatusError) and error.body:
        print("\nResponse body:", file=sys.stderr)
        print(error.body, file=sys.stderr)


def print_no_scopes(scope_name) -> None:
    if scope_name:
        print(f"No scope named '{scope_name}' found on server")
        return
    print("No scopes found on server")
    print("")
    print("This might mean:")
    print("  - No DHCP scopes have been configured yet")
    print("  - You need to create a scope in Technitium DNS Server")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    quiet = args.json or args.csv

    try:
        thresholds = validate_thresholds(args.warning, args.critical)
        server, token = resolve_connection(args.server, args.token, args.config)
    except DhcpMonitorError as e:
        print_error(e)
        return 1

    logger.debug(f"Server URL: {server}")
    logger.debug(f"API Token: {mask_token(token)}")
    logger.debug(f"Warning threshold: {thresholds.warning}%")
    logger.debug(f"Critical threshold: {thresholds.critical}%")

    if not quiet:
        print(f"Querying Technitium DHCP server at {server}...")

    client = TechnitiumClient(server, token, verify=not args.insecure, timeout=args.timeout)
    try:
        results = collect_utilization(client, args.scope)
    except DhcpMonitorError as e:
        print_error(e)
        return 1

    if args.json:
        print(format_json(results))
    elif args.csv:
        write_csv(results, sys.stdout)
    elif not results:
        print_no_scopes(args.scope)
    else:
        print(format_text_report(results, thresholds))
        print("")

    logger.debug("Completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
