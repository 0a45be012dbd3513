"""Collect utilization results for every scope on a server."""

import logging
from typing import List, Optional

from .client import TechnitiumClient
from .exceptions import DhcpMonitorError
from .models import UtilizationResult
from .pool import calculate_utilization

logger = logging.getLogger(__name__)


def collect_utilization(client: TechnitiumClient, scope_name: Optional[str] = None) -> List[UtilizationResult]:
    """
    Fetch every scope and compute its utilization, in discovery order.

    Failing to list scopes is fatal and propagates. A scope whose details
    cannot be fetched is skipped, and a scope whose leases cannot be
    fetched is reported with zero active leases; both log a warning.
    """
    results = []
    matched = False
    for name in client.list_scopes():
        if scope_name and name != scope_name:
            logger.debug(f"Skipping scope '{name}' (filtered)")
            continue

        matched = True
        logger.debug(f"Processing scope: {name}")
        try:
            scope = client.get_scope(name)
        except DhcpMonitorError as e:
            logger.warning(f"Failed to get details for scope '{name}': {e.message}")
            continue

        try:
            leases = client.list_leases(name)
        except DhcpMonitorError as e:
            logger.warning(f"Failed to get leases for scope '{name}': {e.message}, assuming 0 leases")
            leases = []

        result = calculate_utilization(scope, leases)
        for problem in result.data_errors:
            logger.warning(f"Scope '{name}': {problem}")
        results.append(result)

    if scope_name and not matched:
        logger.warning(f"Scope '{scope_name}' not found on server")
    return results
