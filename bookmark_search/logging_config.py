"""Logging setup.

stdout carries the MCP protocol, so all log output goes to stderr.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("httpx", "httpcore")

HANDLER_NAME = "bookmark_search.stderr"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Handlers installed by other tools (test runners, embedding apps) are left
    alone; only a second stderr handler of our own is avoided.

    Args:
        level: Level name such as "DEBUG" or "INFO"; unknown names mean INFO
    """
    root_logger = logging.getLogger()

    if any(h.get_name() == HANDLER_NAME for h in root_logger.handlers):
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
