import logging

import pytest

from cfprovider.infrastructure.monitoring.logger_setup import (
    API_LOGGER_NAME, HTTPX_LOGGER_NAME, ProviderLogFormatter, setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    named_levels = {name: logging.getLogger(name).level for name in (API_LOGGER_NAME, HTTPX_LOGGER_NAME)}
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name, named_level in named_levels.items():
        logging.getLogger(name).setLevel(named_level)


def read_log(root, log_file) -> str:
    for handler in root.handlers:
        handler.flush()
    return log_file.read_text(encoding="utf-8")


def test_setup_logging_replaces_handlers(restore_root_logger):
    setup_logging(log_level=logging.WARNING)

    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, ProviderLogFormatter)


def test_setup_logging_accepts_logging_settings_dict(restore_root_logger, tmp_path):
    log_file = tmp_path / "cfprovider.log"

    setup_logging(**{"log_level": logging.INFO, "log_file": str(log_file)})
    logging.getLogger("cfprovider.test").info("client ready")

    assert len(restore_root_logger.handlers) == 2
    assert "cfprovider.test - INFO - client ready" in read_log(restore_root_logger, log_file)


def test_api_trace_passes_at_warning_level(restore_root_logger, tmp_path):
    log_file = tmp_path / "cfprovider.log"

    setup_logging(log_level=logging.WARNING, log_file=str(log_file))
    logging.getLogger(API_LOGGER_NAME).info("--> GET https://api.cloudflare.com/client/v4/zones")
    logging.getLogger("cfprovider.core").info("hidden")

    content = read_log(restore_root_logger, log_file)
    assert "cloudflare-api - --> GET https://api.cloudflare.com/client/v4/zones" in content
    assert "hidden" not in content


def test_httpx_logger_is_quiet_unless_debug(restore_root_logger):
    setup_logging(log_level=logging.INFO)
    assert logging.getLogger(HTTPX_LOGGER_NAME).level == logging.WARNING

    setup_logging(log_level=logging.DEBUG)
    assert logging.getLogger(HTTPX_LOGGER_NAME).level == logging.DEBUG


def test_unwritable_log_file_keeps_console_handler(restore_root_logger, tmp_path):
    setup_logging(log_file=str(tmp_path / "missing" / "cfprovider.log"))

    assert len(restore_root_logger.handlers) == 1
