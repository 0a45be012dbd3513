"""Tests for config module."""

import pytest

from dhcp_pool_monitor.config import (
    ENV_SERVER,
    ENV_TOKEN,
    Thresholds,
    load_config,
    resolve_connection,
    validate_thresholds,
)
from dhcp_pool_monitor.exceptions import ConfigError


class TestValidateThresholds:
    """Tests for validate_thresholds function."""

    def test_defaults(self):
        assert validate_thresholds() == Thresholds(75, 90)

    def test_accepts_numeric_strings(self):
        assert validate_thresholds("80", "95") == Thresholds(80, 95)

    def test_accepts_bounds(self):
        assert validate_thresholds(0, 100) == Thresholds(0, 100)

    @pytest.mark.parametrize("warning", ["abc", "-5", "101", "7.5", "", "²", "٣٠"])
    def test_rejects_bad_warning(self, warning):
        with pytest.raises(ConfigError, match="Warning threshold must be between 0 and 100"):
            validate_thresholds(warning, 100)

    @pytest.mark.parametrize("critical", ["high", "150"])
    def test_rejects_bad_critical(self, critical):
        with pytest.raises(ConfigError, match="Critical threshold must be between 0 and 100"):
            validate_thresholds(10, critical)

    @pytest.mark.parametrize("warning,critical", [(90, 90), (90, 75)])
    def test_critical_must_exceed_warning(self, warning, critical):
        with pytest.raises(ConfigError, match="greater than warning"):
            validate_thresholds(warning, critical)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_reads_key_value_lines(self, tmp_path):
        config_file = tmp_path / "config.txt"
        config_file.write_text("# Technitium\nSERVER = http://10.0.0.1:5380\n\ntoken=abc=def\n")

        config = load_config(str(config_file))

        assert config == {"SERVER": "http://10.0.0.1:5380", "TOKEN": "abc=def"}

    def test_rejects_malformed_line(self, tmp_path):
        config_file = tmp_path / "config.txt"
        config_file.write_text("SERVER\n")

        with pytest.raises(ConfigError, match="expected KEY=VALUE"):
            load_config(str(config_file))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(str(tmp_path / "missing.txt"))


class TestResolveConnection:
    """Tests for resolve_connection function."""

    @pytest.fixture(autouse=True)
    def clear_env(self, monkeypatch):
        monkeypatch.delenv(ENV_SERVER, raising=False)
        monkeypatch.delenv(ENV_TOKEN, raising=False)

    def test_flags_win(self, monkeypatch):
        monkeypatch.setenv(ENV_SERVER, "http://env:5380")
        assert resolve_connection("http://flag:5380/", "t") == ("http://flag:5380", "t")

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_SERVER, "http://env:5380")
        monkeypatch.setenv(ENV_TOKEN, "envtoken")
        assert resolve_connection() == ("http://env:5380", "envtoken")

    def test_config_file(self, tmp_path):
        config_file = tmp_path / "config.txt"
        config_file.write_text("SERVER=https://10.10.10.5\nTOKEN=filetoken\n")
        assert resolve_connection(config_file=str(config_file)) == ("https://10.10.10.5", "filetoken")

    def test_missing_token(self):
        with pytest.raises(ConfigError, match="--server and --token are required"):
            resolve_connection("http://10.0.0.1:5380")
