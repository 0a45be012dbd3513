"""Render utilization results as a text report, JSON or CSV."""

import json
from typing import Any, Dict, List, Sequence

import pandas as pd
from colorama import Fore, Style

from .config import Thresholds
from .models import UtilizationResult
from .pool import Severity, classify_severity

RULE = "=" * 70

CSV_COLUMNS = (
    "scope_name",
    "subnet",
    "subnet_mask",
    "enabled",
    "total_range",
    "excluded_addresses",
    "reserved_addresses",
    "reservations_in_excluded",
    "reservations_outside_excluded",
    "active_pool_size",
    "active_leases",
    "available_addresses",
    "usage_percent",
    "start_address",
    "end_address",
    "data_errors",
)

SEVERITY_COLORS = {
    Severity.CRITICAL: Fore.RED,
    Severity.ELEVATED: Fore.YELLOW,
    Severity.NORMAL: Fore.GREEN,
}


def format_scope(result: UtilizationResult, thresholds: Thresholds) -> str:
    """Human-readable block for a single scope."""
    lines = [
        "",
        RULE,
        f"SCOPE: {Fore.BLUE}{result.scope_name}{Style.RESET_ALL}",
        RULE,
        f"Subnet: {result.network or 'n/a'}/{result.subnet_mask or 'n/a'}",
        f"Range: {result.start_address} - {result.end_address}",
        "",
        "--- Pool Calculation ---",
        f"Total addresses in range: {result.total_range}",
        f"Excluded addresses: {result.excluded_count}",
    ]
    for excl_range, size in result.exclusions:
        lines.append(f"  • {excl_range} ({size} addresses)")

    lines.append(f"Reserved addresses: {result.reserved_count}")
    if result.reserved_count > 0:
        lines.append(f"  • In excluded ranges: {result.reservations_in_excluded}")
        lines.append(f"  • Outside excluded ranges: {result.reservations_outside_excluded}")
    lines.append(f"Active pool size: {Fore.GREEN}{result.active_pool_size}{Style.RESET_ALL}")

    lines += [
        "",
        "--- Usage Statistics ---",
        f"Active dynamic leases: {result.active_lease_count}",
        f"Available addresses: {result.available_count}",
    ]

    severity = classify_severity(result.usage_percent, thresholds)
    color = SEVERITY_COLORS[severity]
    lines.append(f"Pool utilization: {color}{result.usage_percent:.2f}%{Style.RESET_ALL}")
    if severity is Severity.CRITICAL:
        lines.append("")
        lines.append(f"{color}⚠️  WARNING: Pool usage is critically high! (≥{thresholds.critical}%){Style.RESET_ALL}")
    elif severity is Severity.ELEVATED:
        lines.append("")
        lines.append(f"{color}⚠️  NOTICE: Pool usage is elevated (≥{thresholds.warning}%){Style.RESET_ALL}")

    if result.data_errors:
        lines.append("")
        lines.append(f"{Fore.RED}Data consistency problems:{Style.RESET_ALL}")
        for problem in result.data_errors:
            lines.append(f"  • {problem}")
    return "\n".join(lines)


def format_text_report(results: Sequence[UtilizationResult], thresholds: Thresholds) -> str:
    return "\n".join(format_scope(result, thresholds) for result in results)


def to_json_document(results: Sequence[UtilizationResult]) -> Dict[str, Dict[str, Any]]:
    """Key each result by its position: scope_0, scope_1, ..."""
    return {f"scope_{i}": result.to_dict() for i, result in enumerate(results)}


def format_json(results: Sequence[UtilizationResult]) -> str:
    return json.dumps(to_json_document(results), indent=2)


def results_frame(results: Sequence[UtilizationResult]) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = []
    for result in results:
        row = result.to_dict()
        row["data_errors"] = "; ".join(result.data_errors)
        rows.append(row)
    return pd.DataFrame(rows, columns=list(CSV_COLUMNS))


def write_csv(results: Sequence[UtilizationResult], stream) -> None:
    results_frame(results).to_csv(stream, index=False)

