"""Provides functions for loading configuration inputs from outside the process.

Supports reading the process environment (optionally seeded from a .env
file) and an explicit provider block from a YAML configuration file.
Implements the EnvironmentLookup interface.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from cfprovider.domain.interfaces.environment import EnvironmentLookup
from cfprovider.domain.models.settings import RawInput

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
ENV_FILE_NAME = ".env"
PROVIDER_BLOCK_KEY = "provider"
LOG_LEVEL_ENV_VAR = "CFPROVIDER_LOG_LEVEL"
LOG_FILE_ENV_VAR = "CFPROVIDER_LOG_FILE"


class OsEnvironmentLookup(EnvironmentLookup):
    """Reads variables from `os.environ`, or from an injected mapping.

    Every call reads the source again; nothing is cached.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    def get(self, name: str, default: str) -> str:
        source = os.environ if self._environ is None else self._environ
        value = source.get(name)
        if value:
            return value
        return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def load_env_file(env_file: Optional[Path] = None) -> bool:
    """Loads variables from a .env file into the process environment.

    Variables already set in the environment take precedence over the file.

    Args:
        env_file: Path to the .env file (searches upwards from cwd if None).

    Returns:
        True if a file was found and loaded.
    """
    dotenv_path = env_file or find_dotenv_path()
    if not dotenv_path:
        logger.debug(".env file not found at or above current directory.")
        return False
    loaded = load_dotenv(dotenv_path=dotenv_path, override=False)
    if loaded:
        logger.info(f"Loaded environment variables from: {dotenv_path}")
    return loaded


def load_provider_block(config_file: Path) -> RawInput:
    """Reads the explicit provider configuration from a YAML file.

    The file is expected to hold a mapping with a `provider` key whose value
    is a mapping of provider attributes, e.g.::

        provider:
          api_token: ...
          rps: 10

    Args:
        config_file: Path to the YAML configuration file.

    Returns:
        The explicit input; attributes missing from the block are absent.

    Raises:
        ValueError: If the file does not contain a valid provider block.
    """
    with open(config_file, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if document is None:
        logger.warning(f"YAML config file {config_file} is empty.")
        return RawInput()
    if not isinstance(document, dict):
        raise ValueError(f"YAML config file {config_file} did not contain a mapping.")

    block: Any = document.get(PROVIDER_BLOCK_KEY) or {}
    if not isinstance(block, dict):
        raise ValueError(f"'{PROVIDER_BLOCK_KEY}' in {config_file} must be a mapping.")

    logger.info(f"Loaded provider configuration from YAML: {config_file}")
    return RawInput.from_mapping(block)


def get_logging_settings(environment: Optional[EnvironmentLookup] = None) -> Dict[str, Any]:
    """Returns the log level and optional log file for the CLI."""
    env = environment or OsEnvironmentLookup()
    level_name = env.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level '{level_name}', falling back to INFO.")
        level = logging.INFO
    return {"log_level": level, "log_file": env.get(LOG_FILE_ENV_VAR, "") or None}
