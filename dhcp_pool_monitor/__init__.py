"""Technitium DHCP pool utilization monitor."""

__version__ = "1.0.0"
