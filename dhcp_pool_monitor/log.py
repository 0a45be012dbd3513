import logging
import sys

from colorama import Fore, Style

logger = logging.getLogger("dhcp_pool_monitor")

LEVEL_COLORS = {
    logging.DEBUG: Fore.BLUE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED,
}


class ColorFormatter(logging.Formatter):
    """Prefix each record with its level name in brackets, coloured by severity."""

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelno, "")
        prefix = f"{color}[{record.levelname}]{Style.RESET_ALL}"
        return f"{prefix} {super().format(record)}"


def configure_logging(verbose: bool = False, stream=None) -> None:
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ColorFormatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def mask_token(token: str, visible: int = 10) -> str:
    return f"{token[:visible]}..."
