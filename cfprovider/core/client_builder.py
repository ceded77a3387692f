"""Assembles the governed API client from a validated configuration.

Construction is pure assembly: the base URL is parsed, the rate limiter and
retry policy are created, the user agent and authentication headers are set
and the optional account scoping and debug logging are wired in. No network
call happens here.
"""

import logging
import time
from typing import Callable, Dict, Optional

import httpx

from cfprovider.core.exceptions import ConstructionError
from cfprovider.domain.events.api_events import DomainEvent
from cfprovider.domain.models.common import (
    API_BASE_PATH_SCHEMA_KEY, API_HOSTNAME_SCHEMA_KEY,
    API_KEY_MODE, API_TOKEN_MODE, API_USER_SERVICE_KEY_MODE,
)
from cfprovider.domain.models.resolved_config import ResolvedConfig
from cfprovider.infrastructure.http.api_client import ApiClient, log_event
from cfprovider.infrastructure.resilience.api_retry import RetryPolicy
from cfprovider.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def auth_headers(config: ResolvedConfig) -> Dict[str, str]:
    """Returns the authentication headers for the active credential mode."""
    if config.credential_mode == API_TOKEN_MODE:
        return {"Authorization": f"Bearer {config.api_token}"}
    if config.credential_mode == API_KEY_MODE:
        return {"X-Auth-Key": config.api_key or "", "X-Auth-Email": config.email or ""}
    if config.credential_mode == API_USER_SERVICE_KEY_MODE:
        return {"X-Auth-User-Service-Key": config.api_user_service_key or ""}
    raise ConstructionError(f"unsupported credential mode {config.credential_mode!r}")


class ClientBuilder:
    """Builds an ApiClient from a ResolvedConfig."""

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        on_event: Callable[[DomainEvent], None] = log_event,
    ):
        """Initializes the builder.

        Args:
            transport: Optional httpx transport handed to every client built.
            sleep: Sleep function used by rate limiting and backoff.
            clock: Monotonic clock used by rate limiting.
            on_event: Event sink shared by the rate limiter and the client.
        """
        self.transport = transport
        self.sleep = sleep
        self.clock = clock
        self.on_event = on_event

    def build(self, config: ResolvedConfig) -> ApiClient:
        """Assembles the client.

        Raises:
            ConstructionError: If the composed base URL is malformed.
        """
        base_url = self._parse_base_url(config)

        rate_limiter = RateLimiter(
            max_requests=config.rps, clock=self.clock, sleep=self.sleep, on_event=self.on_event,
        )
        retry_policy = RetryPolicy(
            max_retries=config.retries,
            min_backoff=config.min_backoff,
            max_backoff=config.max_backoff,
            sleep=self.sleep,
        )

        headers = {"User-Agent": config.user_agent}
        headers.update(auth_headers(config))

        if config.account_id:
            logger.info(f"using specified account id {config.account_id} in Cloudflare provider")

        try:
            client = ApiClient(
                base_url=str(base_url),
                headers=headers,
                rate_limiter=rate_limiter,
                retry_policy=retry_policy,
                account_id=config.account_id,
                debug=config.api_client_logging,
                transport=self.transport,
                on_event=self.on_event,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise ConstructionError("failed to initialize a new client", str(e)) from e

        logger.info(f"API client ready for {base_url} (credential mode: {config.credential_mode})")
        return client

    @staticmethod
    def _parse_base_url(config: ResolvedConfig) -> httpx.URL:
        fields = (API_HOSTNAME_SCHEMA_KEY, API_BASE_PATH_SCHEMA_KEY)
        try:
            url = httpx.URL(config.base_url)
        except httpx.InvalidURL as e:
            raise ConstructionError(f"invalid API base URL {config.base_url!r}", str(e), fields) from e
        if not url.host:
            raise ConstructionError(f"invalid API base URL {config.base_url!r}", "the URL has no host", fields)
        return url
