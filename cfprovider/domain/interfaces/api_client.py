"""Interface for the governed API client handed to resources and data sources.

Resource-level collaborators only ever see this contract: perform an HTTP
call against the API. Rate limiting, retries, authentication and base URL
are the implementation's concern.
"""

import abc
from typing import Any, Optional

import httpx


class ApiClientHandle(abc.ABC):
    """Abstract Base Class for the configured API client."""

    @abc.abstractmethod
    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Performs one API call, subject to rate limiting and retries.

        Args:
            method: HTTP method (e.g., 'GET').
            path: Path relative to the client's base URL.
            **kwargs: Passed through to the HTTP layer (params, json, headers).

        Returns:
            The final HTTP response.
        """
        pass

    @abc.abstractmethod
    def accounts_path(self, suffix: str = "", account_id: Optional[str] = None) -> str:
        """Builds an account-scoped path.

        A per-call `account_id` takes precedence over the client's default.
        """
        pass

    @abc.abstractmethod
    def close(self) -> None:
        """Releases the underlying connection pool."""
        pass
