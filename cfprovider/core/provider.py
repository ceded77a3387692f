"""Provider entry point used by the host orchestration layer.

`Provider.configure` runs the resolver and then the builder exactly once
and reports the outcome as a client handle or a list of diagnostics, the
way the host tool expects to receive them.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from cfprovider import __version__
from cfprovider.core.client_builder import ClientBuilder
from cfprovider.core.config_resolver import ConfigResolver
from cfprovider.core.exceptions import ConfigurationError
from cfprovider.domain.interfaces.environment import EnvironmentLookup
from cfprovider.domain.models.diagnostics import Diagnostic, Severity
from cfprovider.domain.models.resolved_config import ResolvedConfig
from cfprovider.domain.models.settings import RawInput
from cfprovider.infrastructure.config.settings import OsEnvironmentLookup
from cfprovider.infrastructure.http.api_client import ApiClient

logger = logging.getLogger(__name__)


@dataclass
class ConfigureResponse:
    """Outcome of one configure call: a client, or diagnostics explaining why not."""
    client: Optional[ApiClient] = None
    config: Optional[ResolvedConfig] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


class Provider:
    """Configures independent API clients from host tool input.

    Each call to `configure` builds a fresh ResolvedConfig and ApiClient;
    nothing is carried over from previous calls.
    """

    def __init__(
        self,
        version: str = __version__,
        environment: Optional[EnvironmentLookup] = None,
        client_builder: Optional[ClientBuilder] = None,
    ):
        """Initializes the provider.

        Args:
            version: Provider version, 'dev' for local builds and 'test' in tests.
            environment: Environment lookup, defaults to the process environment.
            client_builder: Builder for the client handle.
        """
        self.version = version
        self.environment = environment or OsEnvironmentLookup()
        self.client_builder = client_builder or ClientBuilder()

    def configure(self, raw: RawInput, tool_version: str) -> ConfigureResponse:
        """Resolves configuration and builds the client.

        Args:
            raw: Explicit provider configuration.
            tool_version: Version of the orchestrating tool.

        Returns:
            A response holding the client, or error diagnostics and no client.
        """
        resolver = ConfigResolver(self.environment, provider_version=self.version)
        try:
            config = resolver.resolve(raw, tool_version)
            client = self.client_builder.build(config)
        except ConfigurationError as e:
            logger.error(f"Provider configuration failed: {e}")
            return ConfigureResponse(diagnostics=list(e.diagnostics))

        return ConfigureResponse(client=client, config=config)
