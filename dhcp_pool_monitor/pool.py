"""Pool utilization calculator.

Reconciles a scope's address range, exclusion ranges, reservations and
dynamic leases into one set of utilization figures:

    active_pool_size = total_range - excluded - reservations outside exclusions
    available        = active_pool_size - active dynamic leases
    usage_percent    = active leases / active_pool_size * 100   (0 for an empty pool)

Reservations that already sit inside an exclusion range are not subtracted
a second time. Overlapping exclusion ranges are not merged, so their sizes
are summed as-is; such scopes are flagged in `data_errors`.
"""

import logging
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .config import Thresholds
from .iprange import AddressRange, in_excluded_range
from .models import Lease, Scope, UtilizationResult

logger = logging.getLogger(__name__)


class Severity(Enum):
    NORMAL = "normal"
    ELEVATED = "elevated"
    CRITICAL = "critical"


def classify_severity(usage_percent: float, thresholds: Thresholds) -> Severity:
    if usage_percent >= thresholds.critical:
        return Severity.CRITICAL
    if usage_percent >= thresholds.warning:
        return Severity.ELEVATED
    return Severity.NORMAL


def overlapping_exclusions(exclusions: Sequence[AddressRange]) -> List[Tuple[AddressRange, AddressRange]]:
    """Return every pair of exclusion ranges that share at least one address."""
    pairs = []
    for i, first in enumerate(exclusions):
        for second in exclusions[i + 1:]:
            if first.overlaps(second):
                pairs.append((first, second))
    return pairs


def count_active_leases(scope: Scope, leases: Iterable[Lease]) -> int:
    """Count dynamic leases of this scope that sit inside the usable pool."""
    count = 0
    for lease in leases:
        if not lease.is_dynamic or lease.scope_name != scope.name:
            continue
        if in_excluded_range(lease.address, scope.exclusions):
            logger.debug(f"  Skipping lease in excluded range: {lease.address}")
            continue
        count += 1
    return count


def calculate_utilization(scope: Scope, leases: Iterable[Lease]) -> UtilizationResult:
    """
    Compute pool utilization for one scope.

    Args:
        scope: Scope detail as returned by the management API.
        leases: Lease records; non-dynamic leases and leases of other scopes are ignored.

    Returns:
        An immutable UtilizationResult. Inconsistent server data (empty or
        inverted ranges, overlapping exclusions) is reported in
        `data_errors` rather than corrected.
    """
    data_errors = []

    total_range = scope.range.size
    if total_range <= 0:
        data_errors.append(f"Scope range {scope.range} has non-positive size {total_range}")
    logger.debug(f"  Range: {scope.range} ({total_range} addresses)")

    excluded_count = 0
    exclusion_detail = []
    for excl in scope.exclusions:
        excluded_count += excl.size
        exclusion_detail.append((str(excl), excl.size))
        if excl.inverted:
            data_errors.append(f"Exclusion range {excl} is inverted (size {excl.size})")
        logger.debug(f"  Exclusion: {excl} ({excl.size} addresses)")

    for first, second in overlapping_exclusions(scope.exclusions):
        data_errors.append(f"Exclusion ranges {first} and {second} overlap")

    in_excluded = 0
    outside_excluded = 0
    for address in scope.reservations:
        if in_excluded_range(address, scope.exclusions):
            in_excluded += 1
            logger.debug(f"  Reservation in excluded range: {address}")
        else:
            outside_excluded += 1
            logger.debug(f"  Reservation outside excluded ranges: {address}")

    active_pool = total_range - excluded_count - outside_excluded
    active_leases = count_active_leases(scope, leases)
    available = active_pool - active_leases

    if active_pool > 0:
        usage_percent = round(active_leases / active_pool * 100, 2)
    else:
        usage_percent = 0.0

    logger.debug(
        f"  Active pool: {active_pool}, active leases: {active_leases}, usage: {usage_percent:.2f}%"
    )

    return UtilizationResult(
        scope_name=scope.name,
        network=scope.network,
        subnet_mask=scope.subnet_mask,
        enabled=scope.enabled,
        start_address=scope.range.start,
        end_address=scope.range.end,
        total_range=total_range,
        excluded_count=excluded_count,
        reserved_count=in_excluded + outside_excluded,
        reservations_in_excluded=in_excluded,
        reservations_outside_excluded=outside_excluded,
        active_pool_size=active_pool,
        active_lease_count=active_leases,
        available_count=available,
        usage_percent=usage_percent,
        exclusions=tuple(exclusion_detail),
        data_errors=tuple(data_errors),
    )
