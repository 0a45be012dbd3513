"""Errors raised while collecting DHCP pool statistics."""

from typing import List, Optional


class DhcpMonitorError(Exception):
    """Base class for every error the monitor reports to the user."""

    def __init__(self, message: str, hints: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])


class ConfigError(DhcpMonitorError):
    """Invalid command line or configuration values."""


class ConnectivityError(DhcpMonitorError):
    """The management API could not be reached at all."""


class ApiError(DhcpMonitorError):
    """The API answered but reported a failure."""


class HttpStatusError(ApiError):
    def __init__(self, status_code: int, body: str = "", hints: Optional[List[str]] = None):
        super().__init__(f"HTTP {status_code} response from server", hints)
        self.status_code = status_code
        self.body = body


class DataError(DhcpMonitorError):
    """Malformed JSON, missing fields or invalid addresses in a response."""
