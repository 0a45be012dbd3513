"""Shared builders for API payloads and HTTP responses."""

import json
from unittest.mock import MagicMock

import pytest


def make_response(payload=None, status_code=200, text=None):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    response.text = text
    response.content = text.encode("utf-8")
    if payload is not None:
        response.json.return_value = payload
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    return response


def envelope(response):
    return {"status": "ok", "response": response}


@pytest.fixture
def scope_payload():
    """Scope detail: 10.10.10.1-254, two exclusions, 23 reservations inside them."""
    return {
        "startingAddress": "10.10.10.1",
        "endingAddress": "10.10.10.254",
        "networkAddress": None,
        "subnetMask": "255.255.255.0",
        "enabled": True,
        "exclusions": [
            {"startingAddress": "10.10.10.1", "endingAddress": "10.10.10.25"},
            {"startingAddress": "10.10.10.151", "endingAddress": "10.10.10.254"},
        ],
        "reservedLeases": [{"address": f"10.10.10.{n}"} for n in range(2, 25)],
    }


@pytest.fixture
def leases_payload():
    """90 dynamic leases in 10.10.10.26-115 for scope LAN."""
    return {
        "leases": [
            {"address": f"10.10.10.{n}", "type": "Dynamic", "scope": "LAN"}
            for n in range(26, 116)
        ]
    }
