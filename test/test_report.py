"""Tests for report rendering."""

import io
import json

import pytest

from dhcp_pool_monitor.config import Thresholds
from dhcp_pool_monitor.models import Lease, Scope
from dhcp_pool_monitor.pool import calculate_utilization
from dhcp_pool_monitor.report import CSV_COLUMNS, format_json, format_text_report, to_json_document, write_csv


@pytest.fixture
def result(scope_payload):
    leases = [Lease(f"10.10.10.{n}", "Dynamic", "LAN") for n in range(26, 116)]
    return calculate_utilization(Scope.from_api("LAN", scope_payload), leases)


class TestTextReport:
    """Tests for format_text_report function."""

    def test_contains_pool_calculation(self, result):
        text = format_text_report([result], Thresholds())

        assert "LAN" in text
        assert "Subnet: 10.10.10.0/255.255.255.0" in text
        assert "Range: 10.10.10.1 - 10.10.10.254" in text
        assert "Total addresses in range: 254" in text
        assert "Excluded addresses: 129" in text
        assert "10.10.10.151-10.10.10.254 (104 addresses)" in text
        assert "In excluded ranges: 23" in text
        assert "Active dynamic leases: 90" in text
        assert "Available addresses: 35" in text
        assert "72.00%" in text

    def test_normal_usage_has_no_banner(self, result):
        text = format_text_report([result], Thresholds())
        assert "NOTICE" not in text
        assert "critically high" not in text

    def test_elevated_banner(self, result):
        text = format_text_report([result], Thresholds(warning=70, critical=90))
        assert "NOTICE: Pool usage is elevated (≥70%)" in text

    def test_critical_banner(self, result):
        text = format_text_report([result], Thresholds(warning=50, critical=72))
        assert "critically high! (≥72%)" in text

    def test_one_block_per_scope(self, result):
        text = format_text_report([result, result], Thresholds())
        assert text.count("SCOPE:") == 2


class TestJson:
    """Tests for JSON output."""

    def test_keys_follow_discovery_order(self, result):
        document = to_json_document([result, result])
        assert list(document) == ["scope_0", "scope_1"]

    def test_values(self, result):
        document = json.loads(format_json([result]))

        scope = document["scope_0"]
        assert scope["scope_name"] == "LAN"
        assert scope["enabled"] is True
        assert scope["active_pool_size"] == 125
        assert scope["active_leases"] == 90
        assert scope["available_addresses"] == 35
        assert scope["usage_percent"] == 72.0

    def test_empty_document(self):
        assert json.loads(format_json([])) == {}


class TestCsv:
    """Tests for CSV export."""

    def test_header_and_row(self, result):
        stream = io.StringIO()

        write_csv([result], stream)

        lines = stream.getvalue().splitlines()
        assert lines[0] == ",".join(CSV_COLUMNS)
        assert lines[1].startswith("LAN,10.10.10.0,255.255.255.0,True,254,129,23,23,0,125,90,35,72.0,")

    def test_header_only_without_results(self):
        stream = io.StringIO()
        write_csv([], stream)
        assert stream.getvalue().splitlines() == [",".join(CSV_COLUMNS)]


class TestMissingNetwork:
    """Tests for scopes reported without a network address."""

    def test_missing_network_shown_as_na(self, scope_payload):
        scope_payload["subnetMask"] = "255.255.0.0"
        result = calculate_utilization(Scope.from_api("LAN", scope_payload), [])

        text = format_text_report([result], Thresholds())

        assert "Subnet: n/a/255.255.0.0" in text
        assert "None" not in text
