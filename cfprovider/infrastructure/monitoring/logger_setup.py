"""Logging configuration for the cfprovider CLI.

Library modules only create module-level loggers; the entry point calls
`setup_logging` with the dict returned by `get_logging_settings()`.

Two loggers get their own levels:

- `cfprovider.api` carries the request/response trace that is switched on by
  `api_client_logging`. It always passes at INFO so enabling the trace does not
  also require lowering `CFPROVIDER_LOG_LEVEL`.
- `httpx` logs every request at INFO; it is held at WARNING unless the CLI
  runs at DEBUG, so it does not duplicate the API trace.
"""

import logging
import sys
from typing import List, Optional

API_LOGGER_NAME = "cfprovider.api"
HTTPX_LOGGER_NAME = "httpx"

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
API_LOG_FORMAT = "%(asctime)s - cloudflare-api - %(message)s"


class ProviderLogFormatter(logging.Formatter):
    """Uses a compact layout for API trace records and the default one elsewhere."""

    def __init__(self, fmt: str = DEFAULT_LOG_FORMAT, api_fmt: str = API_LOG_FORMAT):
        super().__init__(fmt)
        self._api_formatter = logging.Formatter(api_fmt)

    def format(self, record: logging.LogRecord) -> str:
        if record.name == API_LOGGER_NAME:
            return self._api_formatter.format(record)
        return super().format(record)


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    # stderr keeps command output on stdout clean
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as e:
            sys.stderr.write(f"Failed to open log file {log_file}: {e}\n")
    return handlers


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
) -> None:
    """Configures the root logger for one CLI invocation.

    Args:
        log_level: Minimum level for cfprovider's own loggers.
        log_file: Optional path that receives the same records as stderr.
        log_format: Format for non-API records.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = ProviderLogFormatter(log_format)
    for handler in _build_handlers(log_file):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger(API_LOGGER_NAME).setLevel(min(log_level, logging.INFO))
    logging.getLogger(HTTPX_LOGGER_NAME).setLevel(logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level={logging.getLevelName(log_level)}, file={log_file or 'none'}"
    )
