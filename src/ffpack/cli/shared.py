"""
Shared utilities and constants for CLI commands.
"""

import logging

from rich.console import Console

# Shared error console; stdout is reserved for the manifest itself
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.WARNING) -> None:
    """Send log records to stderr so they never mix with emitted manifests"""
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
