"""Client for the Technitium DNS Server DHCP management API."""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
import urllib3

from .config import DEFAULT_TIMEOUT
from .exceptions import ApiError, ConnectivityError, DataError, HttpStatusError
from .log import mask_token
from .models import Lease, Scope, require_list

logger = logging.getLogger(__name__)

SCOPES_LIST = "/api/dhcp/scopes/list"
SCOPES_GET = "/api/dhcp/scopes/get"
LEASES_LIST = "/api/dhcp/leases/list"

DEFAULT_PORT = 5380


def connection_hints(server_url: str) -> List[str]:
    return [
        f"Server is not reachable at {server_url}",
        "SSL/TLS certificate issues (try http:// instead of https://, or --insecure)",
        "Firewall blocking the connection",
        f"Wrong port number (default is {DEFAULT_PORT})",
    ]


def status_hints(status_code: int, server_url: str, token: str) -> List[str]:
    if status_code == 401:
        return [
            "Unauthorized - check your API token",
            f"Token used: {mask_token(token, 20)}",
            "Create a token in Technitium DNS Server: Administration > Sessions > Create Token",
        ]
    if status_code == 403:
        return ["Forbidden - API token may not have sufficient permissions"]
    if status_code == 404:
        return [
            "Not found - check server URL and API endpoint",
            "Is the Technitium DNS Server running?",
            f"Try accessing {server_url} in your browser",
        ]
    if status_code >= 500:
        return ["Server error - check Technitium server logs"]
    return []


class TechnitiumClient:
    """
    Read-only access to DHCP scopes and leases.

    Every call returns parsed records; errors are raised as
    ConnectivityError, HttpStatusError, ApiError or DataError.
    """

    def __init__(self, server_url: str, token: str, verify: bool = True, timeout: float = DEFAULT_TIMEOUT):
        self.server_url = server_url.rstrip("/")
        self.token = token
        self.verify = verify
        self.timeout = timeout
        if not verify:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            logger.debug("Using insecure mode for self-signed certificates")

    def _redact(self, text: str) -> str:
        """Replace the token, raw or URL-encoded, with its masked form."""
        masked = mask_token(self.token)
        for form in {self.token, quote(self.token, safe="")}:
            text = text.replace(form, masked)
        return text

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Perform a GET and return the `response` object of the API envelope."""
        url = f"{self.server_url}{path}"
        query = {"token": self.token}
        query.update(params or {})
        logger.debug(f"Making API call to {path} {params or ''}")

        try:
            response = requests.get(url, params=query, verify=self.verify, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ConnectivityError(
                f"Failed to connect to server: {self._redact(str(e))}",
                connection_hints(self.server_url),
            ) from None

        logger.debug(f"HTTP response code: {response.status_code}, {len(response.content)} bytes")
        if response.status_code != 200:
            raise HttpStatusError(
                response.status_code,
                response.text,
                status_hints(response.status_code, self.server_url, self.token),
            )

        if not response.text.strip():
            raise DataError("Empty response from server")
        try:
            envelope = response.json()
        except ValueError:
            raise DataError(
                "Invalid JSON response from server",
                [
                    "The URL is not pointing to a Technitium DNS Server",
                    "You're hitting a web server or firewall instead",
                ],
            ) from None
        if not isinstance(envelope, dict):
            raise DataError(f"Unexpected response from server: {json.dumps(envelope)[:200]}")

        if envelope.get("status") == "error":
            raise ApiError(f"API Error: {envelope.get('errorMessage') or 'Unknown error'}")

        payload = envelope.get("response")
        if not isinstance(payload, dict):
            raise DataError(f"Response from {path} has no 'response' object")
        return payload

    def list_scopes(self) -> List[str]:
        """Names of all configured scopes, in server order."""
        payload = self._get(SCOPES_LIST)
        names = []
        for scope in require_list(payload, "scopes", "scope list"):
            if not isinstance(scope, dict) or not scope.get("name"):
                raise DataError(f"Scope entry without a name: {scope!r}")
            names.append(scope["name"])
        logger.debug(f"Found {len(names)} scope(s)")
        return names

    def get_scope(self, name: str) -> Scope:
        payload = self._get(SCOPES_GET, {"name": name})
        return Scope.from_api(name, payload)

    def list_leases(self, scope_name: str) -> List[Lease]:
        payload = self._get(LEASES_LIST, {"scopeName": scope_name})
        records = require_list(payload, "leases", f"leases of scope '{scope_name}'")
        return [Lease.from_api(record) for record in records]
