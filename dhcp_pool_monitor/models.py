"""Records fetched from the DHCP management API and the derived pool statistics."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import DataError
from .iprange import AddressRange, derive_network, ip_to_int

DYNAMIC = "Dynamic"
UNKNOWN = "unknown"

Enabled = Union[bool, str]


def _require(payload: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(payload, dict):
        raise DataError(f"Expected an object in {context}, got {payload!r}")
    value = payload.get(key)
    if value is None:
        raise DataError(f"Missing '{key}' in {context}")
    return value


def require_list(payload: Dict[str, Any], key: str, context: str) -> List[Any]:
    """Return payload[key] as a list; absent or null means empty."""
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DataError(f"Expected a list for '{key}' in {context}, got {value!r}")
    return value


def _check_address(address: Any, context: str) -> str:
    if not isinstance(address, str):
        raise DataError(f"Invalid address {address!r} in {context}")
    try:
        ip_to_int(address)
    except ValueError:
        raise DataError(f"Invalid address {address!r} in {context}") from None
    return address.strip()


@dataclass(frozen=True)
class Scope:
    name: str
    network: Optional[str]
    subnet_mask: Optional[str]
    enabled: Enabled
    range: AddressRange
    exclusions: Tuple[AddressRange, ...] = ()
    reservations: Tuple[str, ...] = ()

    @classmethod
    def from_api(cls, name: str, payload: Dict[str, Any]) -> "Scope":
        """
        Build a scope from the `response` object of the scope detail call.

        Raises:
            DataError: If the range is missing or any address is invalid.
        """
        if not isinstance(payload, dict):
            raise DataError(f"Scope '{name}' details are not an object")
        context = f"scope '{name}'"

        start = _check_address(_require(payload, "startingAddress", context), context)
        end = _check_address(_require(payload, "endingAddress", context), context)
        subnet_mask = payload.get("subnetMask")
        network = derive_network(payload.get("networkAddress"), subnet_mask, start)

        enabled = payload.get("enabled")
        if not isinstance(enabled, bool):
            enabled = UNKNOWN

        exclusions = []
        for excl in require_list(payload, "exclusions", context):
            excl_start = _check_address(_require(excl, "startingAddress", f"{context} exclusion"), context)
            excl_end = _check_address(_require(excl, "endingAddress", f"{context} exclusion"), context)
            exclusions.append(AddressRange(excl_start, excl_end))

        # Reservations are a set; first-seen order is kept
        reservations = []
        for reserved in require_list(payload, "reservedLeases", context):
            address = _check_address(_require(reserved, "address", f"{context} reservation"), context)
            if address not in reservations:
                reservations.append(address)

        return cls(
            name=name,
            network=network,
            subnet_mask=subnet_mask,
            enabled=enabled,
            range=AddressRange(start, end),
            exclusions=tuple(exclusions),
            reservations=tuple(reservations),
        )


@dataclass(frozen=True)
class Lease:
    address: str
    type: str
    scope_name: str

    @property
    def is_dynamic(self) -> bool:
        return self.type == DYNAMIC

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> "Lease":
        if not isinstance(record, dict):
            raise DataError(f"Lease record is not an object: {record!r}")
        address = _check_address(_require(record, "address", "lease"), "lease")
        return cls(address=address, type=str(record.get("type", "")), scope_name=str(record.get("scope", "")))


@dataclass(frozen=True)
class UtilizationResult:
    scope_name: str
    network: Optional[str]
    subnet_mask: Optional[str]
    enabled: Enabled
    start_address: str
    end_address: str
    total_range: int
    excluded_count: int
    reserved_count: int
    reservations_in_excluded: int
    reservations_outside_excluded: int
    active_pool_size: int
    active_lease_count: int
    available_count: int
    usage_percent: float
    exclusions: Tuple[Tuple[str, int], ...] = ()
    data_errors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """JSON representation using the monitor's published field names."""
        data = {
            "scope_name": self.scope_name,
            "subnet": self.network,
            "subnet_mask": self.subnet_mask,
            "enabled": self.enabled,
            "total_range": self.total_range,
            "excluded_addresses": self.excluded_count,
            "reserved_addresses": self.reserved_count,
            "reservations_in_excluded": self.reservations_in_excluded,
            "reservations_outside_excluded": self.reservations_outside_excluded,
            "active_pool_size": self.active_pool_size,
            "active_leases": self.active_lease_count,
            "available_addresses": self.available_count,
            "usage_percent": self.usage_percent,
            "start_address": self.start_address,
            "end_address": self.end_address,
        }
        if self.data_errors:
            data["data_errors"] = list(self.data_errors)
        return data
