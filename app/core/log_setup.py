"""Logging configuration shared by the server and CLI entrypoints."""

import logging
import sys

# Third-party HTTP loggers echo request headers (and bearer tokens) at DEBUG.
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once.

    - Console output to stdout.
    - Level from settings; unknown names fall back to INFO.
    - Format: timestamp, level, logger name, message.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
