#!/usr/bin/env python3
"""
Single-value wrapper for monitoring systems such as Zabbix.

Usage: dhcp-pool-metric <server> <token> <scope> <metric> [insecure]

Prints one numeric value for the requested metric of the scope, or 0 on
any error or when no data is available.

Zabbix item key:
    dhcp-pool-metric[https://10.10.10.5,{$TOKEN},LAN,usage_percent,insecure]
"""

import argparse
import logging
import sys
from enum import Enum
from typing import Any, Dict, Optional

from .client import TechnitiumClient
from .exceptions import DhcpMonitorError
from .log import configure_logging
from .monitor import collect_utilization
from .report import to_json_document

logger = logging.getLogger(__name__)

METRICS = {
    "usage_percent": "Pool utilization percentage (0-100)",
    "active_leases": "Number of active dynamic leases",
    "available_addresses": "Available addresses in pool",
    "active_pool_size": "Total usable pool size",
    "total_range": "Total addresses in range",
    "excluded_addresses": "Number of excluded addresses",
    "reserved_addresses": "Number of reserved addresses",
}

INSECURE = "insecure"


class MetricMode(Enum):
    # Only an absent or null field counts as "no data"; a real 0 is a value
    NULL_AS_MISSING = "null"
    # Numeric 0 and the string "0" are also treated as "no data"
    ZERO_AS_MISSING = "zero"


def extract_metric(
    document: Dict[str, Any],
    metric: str,
    mode: MetricMode = MetricMode.NULL_AS_MISSING,
) -> Optional[Any]:
    """
    Read `metric` from the first scope of a JSON report document.

    Returns:
        The field value, or None when the value counts as missing under `mode`.
    """
    first = document.get("scope_0")
    if not isinstance(first, dict):
        return None
    value = first.get(metric)
    if value is None:
        return None
    if mode is MetricMode.ZERO_AS_MISSING and (value == "0" or (not isinstance(value, bool) and value == 0)):
        return None
    return value


def format_value(value: Optional[Any]) -> str:
    if value is None:
        return "0"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def fetch_metric(
    server: str,
    token: str,
    scope: str,
    metric: str,
    insecure: bool = False,
    mode: MetricMode = MetricMode.NULL_AS_MISSING,
) -> Optional[Any]:
    client = TechnitiumClient(server, token, verify=not insecure)
    results = collect_utilization(client, scope)
    return extract_metric(to_json_document(results), metric, mode)


def build_parser() -> argparse.ArgumentParser:
    metric_help = "\n".join(f"  {name:<22}{text}" for name, text in METRICS.items())
    parser = argparse.ArgumentParser(
        prog="dhcp-pool-metric",
        description="Print a single DHCP pool metric for a monitoring system",
        epilog=f"Available metrics:\n{metric_help}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("server", help="Technitium server URL (e.g. https://10.10.10.5)")
    parser.add_argument("token", help="API authentication token")
    parser.add_argument("scope", help="DHCP scope name (e.g. LAN, Guest)")
    parser.add_argument("metric", help="Metric to retrieve")
    parser.add_argument("insecure", nargs="?", default="", help='Use "insecure" for self-signed SSL certificates')
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in MetricMode],
        default=MetricMode.NULL_AS_MISSING.value,
        help="null: only absent values are missing; zero: 0 is reported as missing too",
    )
    parser.add_argument("--verbose", action="store_true", help="Log diagnostics to stderr")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        value = fetch_metric(
            args.server,
            args.token,
            args.scope,
            args.metric,
            insecure=args.insecure == INSECURE,
            mode=MetricMode(args.mode),
        )
    except DhcpMonitorError as e:
        logger.debug(f"Metric unavailable: {e.message}")
        value = None

    if value is None:
        logger.debug(f"No value for '{args.metric}' in scope '{args.scope}'")
    print(format_value(value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
