"""IPv4 address range arithmetic used by the pool calculator."""

import ipaddress
from dataclasses import dataclass
from typing import Optional, Sequence, Union

SLASH_24_MASK = "255.255.255.0"


def ip_to_int(address: str) -> int:
    """
    Convert a dotted-quad IPv4 address to an unsigned 32-bit integer.

    Raises:
        ValueError: If the address is not a valid IPv4 address.
    """
    return int(ipaddress.IPv4Address(address.strip()))


def range_size(start: str, end: str) -> int:
    """Inclusive size of start-end. Inverted ranges give zero or a negative number."""
    return ip_to_int(end) - ip_to_int(start) + 1


@dataclass(frozen=True)
class AddressRange:
    start: str
    end: str

    def __post_init__(self):
        # Reject invalid addresses at construction
        ip_to_int(self.start)
        ip_to_int(self.end)

    @classmethod
    def parse(cls, text: str) -> "AddressRange":
        """Build a range from the "start-end" form."""
        start, sep, end = text.strip().partition("-")
        if not sep:
            raise ValueError(f"Not an address range: {text!r}")
        return cls(start.strip(), end.strip())

    @property
    def start_int(self) -> int:
        return ip_to_int(self.start)

    @property
    def end_int(self) -> int:
        return ip_to_int(self.end)

    @property
    def size(self) -> int:
        return self.end_int - self.start_int + 1

    @property
    def inverted(self) -> bool:
        return self.end_int < self.start_int

    def contains(self, address: str) -> bool:
        return self.start_int <= ip_to_int(address) <= self.end_int

    def overlaps(self, other: "AddressRange") -> bool:
        return self.start_int <= other.end_int and other.start_int <= self.end_int

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def in_excluded_range(address: str, exclusions: Union[str, Sequence[AddressRange], None]) -> bool:
    """
    Check whether an address falls inside any exclusion range.

    Args:
        address: IPv4 address to test.
        exclusions: Parsed ranges, or a comma-separated "s1-e1,s2-e2" string.

    Returns:
        True on the first range containing the address, False otherwise.
    """
    if not exclusions:
        return False
    if isinstance(exclusions, str):
        exclusions = [AddressRange.parse(part) for part in exclusions.split(",") if part.strip()]
    ip_int = ip_to_int(address)
    for excl in exclusions:
        if excl.start_int <= ip_int <= excl.end_int:
            return True
    return False


def derive_network(network: Optional[str], subnet_mask: Optional[str], start: str) -> Optional[str]:
    """
    Fill in a missing network address for /24 scopes.

    Only a 255.255.255.0 mask is handled: the first three octets of the
    starting address are kept and the last is set to 0. Any other mask
    leaves the network as reported.
    """
    if network:
        return network
    if subnet_mask == SLASH_24_MASK:
        return ".".join(start.split(".")[:3]) + ".0"
    return network
