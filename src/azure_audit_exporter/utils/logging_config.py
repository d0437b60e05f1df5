"""Logging setup for the exporter process."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# SDK loggers are chatty at INFO (one line per HTTP request)
NOISY_LOGGERS = ("azure", "urllib3", "aiohttp.access")


def configure_logging(verbosity: int = 0) -> None:
    """Configure the root logger.

    Args:
        verbosity: 0 for INFO, 1 for DEBUG, 2 or more also enables SDK logs
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbosity >= 2 else logging.WARNING)
