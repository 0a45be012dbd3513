"""Thresholds and connection settings."""

import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .exceptions import ConfigError

DEFAULT_WARNING = 75
DEFAULT_CRITICAL = 90
DEFAULT_TIMEOUT = 30
DEFAULT_CONFIG_FILE = "config.txt"

ENV_SERVER = "TECHNITIUM_SERVER"
ENV_TOKEN = "TECHNITIUM_TOKEN"


@dataclass(frozen=True)
class Thresholds:
    warning: int = DEFAULT_WARNING
    critical: int = DEFAULT_CRITICAL


def _parse_percent(value, label: str) -> int:
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        raise ConfigError(f"{label} threshold must be between 0 and 100")
    number = int(text)
    if number > 100:
        raise ConfigError(f"{label} threshold must be between 0 and 100")
    return number


def validate_thresholds(warning=DEFAULT_WARNING, critical=DEFAULT_CRITICAL) -> Thresholds:
    """
    Validate the warning/critical percentages given on the command line.

    Raises:
        ConfigError: If a value is not a whole number in 0-100, or if
            critical is not greater than warning.
    """
    warning = _parse_percent(warning, "Warning")
    critical = _parse_percent(critical, "Critical")
    if critical <= warning:
        raise ConfigError("Critical threshold must be greater than warning threshold")
    return Thresholds(warning=warning, critical=critical)


def load_config(file_path: str = DEFAULT_CONFIG_FILE) -> Dict[str, str]:
    """
    Load KEY=VALUE settings from a config file.

    Blank lines and lines starting with '#' are skipped.
    """
    config = {}
    try:
        with open(file_path, "r", encoding="utf-8") as file:
            for number, line in enumerate(file, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    raise ConfigError(f"{file_path}:{number}: expected KEY=VALUE")
                key, value = line.split("=", 1)
                config[key.strip().upper()] = value.strip()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {file_path}: {e}")
    return config


def resolve_connection(
    server: Optional[str] = None,
    token: Optional[str] = None,
    config_file: Optional[str] = None,
) -> Tuple[str, str]:
    """Pick server URL and token from flags, then environment, then the config file."""
    file_values = load_config(config_file) if config_file else {}
    server = server or os.getenv(ENV_SERVER) or file_values.get("SERVER")
    token = token or os.getenv(ENV_TOKEN) or file_values.get("TOKEN")
    if not server or not token:
        raise ConfigError("--server and --token are required")
    return server.rstrip("/"), token
