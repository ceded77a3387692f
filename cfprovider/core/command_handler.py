"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), gathers the explicit
input and delegates configuration to the Provider. Results are reported
through the UserInterface.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from cfprovider.core.provider import Provider
from cfprovider.domain.interfaces.user_interface import UserInterface
from cfprovider.domain.models.resolved_config import ResolvedConfig
from cfprovider.domain.models.schema import PROVIDER_SCHEMA, describe_field
from cfprovider.domain.models.settings import RawInput
from cfprovider.infrastructure.config.settings import load_env_file, load_provider_block

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1


def _redact(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return None
    return f"{secret[:4]}...({len(secret)} chars)"


def summarize(config: ResolvedConfig) -> Dict[str, Any]:
    """Returns the display rows for a resolved configuration, secrets redacted."""
    return {
        "Credential mode": config.credential_mode,
        "Email": config.email,
        "API key": _redact(config.api_key),
        "API token": _redact(config.api_token),
        "API user service key": _redact(config.api_user_service_key),
        "Base URL": config.base_url,
        "RPS": config.rps,
        "Retries": config.retries,
        "Min backoff (s)": config.min_backoff,
        "Max backoff (s)": config.max_backoff,
        "Account ID": config.account_id,
        "API client logging": config.api_client_logging,
        "User agent": config.user_agent,
    }


class CommandHandler:
    """Handles incoming commands and delegates to the provider."""

    def __init__(self, provider: Provider, ui: UserInterface):
        self.provider = provider
        self.ui = ui

    def handle_validate(
        self,
        tool_version: str,
        config_file: Optional[Path] = None,
        env_file: Optional[Path] = None,
    ) -> int:
        """Handles the 'validate' command.

        Returns:
            The process exit code.
        """
        logger.info(f"Handling 'validate' command (config file: {config_file or 'none'})")
        if env_file is not None and load_env_file(env_file):
            self.ui.display_info(f"Loaded environment variables from {env_file}")

        raw = RawInput()
        if config_file is not None:
            try:
                raw = load_provider_block(config_file)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to read {config_file}: {e}")
                self.ui.display_error(f"Could not read provider configuration: {e}")
                return EXIT_CONFIG_ERROR

        response = self.provider.configure(raw, tool_version)
        if response.has_error:
            self.ui.display_diagnostics(response.diagnostics)
            return EXIT_CONFIG_ERROR

        try:
            self.ui.display_summary("Resolved provider configuration", summarize(response.config))
        finally:
            response.client.close()
        return EXIT_OK

    def handle_describe(self) -> int:
        """Handles the 'describe' command: prints the provider schema documentation."""
        rows = []
        for descriptor in PROVIDER_SCHEMA:
            description = describe_field(descriptor)
            if descriptor.deprecated:
                description += f" **Deprecated:** {descriptor.deprecated}"
            rows.append((descriptor.name, descriptor.type, descriptor.env_var or "-", description))
        self.ui.display_table("Provider schema", ("Attribute", "Type", "Environment variable", "Description"), rows)
        return EXIT_OK
