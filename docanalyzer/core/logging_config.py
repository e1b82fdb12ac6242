"""
Centralized logging configuration for DocAnalyzer.

Every record carries the id of the HTTP request that produced it (or "-"
outside a request), so log lines of one upload or batch can be grepped
together. The id is published by RequestIDMiddleware through request_id_var.
"""
import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Optional

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"
LOG_FILE_NAME = "docanalyzer.log"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - [%(request_id)s] %(name)s - %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] "
    "%(filename)s:%(lineno)d - %(message)s"
)

# SDK and parser loggers are chatty at INFO (one line per HTTP call or PDF object)
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "pypdf", "multipart")


class RequestIdFilter(logging.Filter):
    """Stamp records with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    enable_file_logging: bool = LOG_TO_FILE
) -> None:
    """
    Configure root logging for the service.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path (defaults to LOG_DIR/docanalyzer.log)
        enable_file_logging: Also write DEBUG and above to the log file
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    request_filter = RequestIdFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if enable_file_logging else numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    console_handler.addFilter(request_filter)
    root_logger.addHandler(console_handler)

    if enable_file_logging:
        path = Path(log_file) if log_file else LOG_DIR / LOG_FILE_NAME
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.addFilter(request_filter)
        root_logger.addHandler(file_handler)

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(logging.INFO)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. get_logger(__name__)."""
    return logging.getLogger(name)
