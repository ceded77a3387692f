"""Governed HTTP client for the Cloudflare API.

Wraps an `httpx.Client` with a shared rate limiter, a retry policy, the
authentication headers of the active credential mode and an optional default
account. Instances are built by ClientBuilder and shared read-only by every
resource and data source operation.
"""

import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from cfprovider.domain.events.api_events import (
    ApiCallFailed, ApiCallInitiated, ApiCallSucceeded, DomainEvent,
)
from cfprovider.domain.interfaces.api_client import ApiClientHandle
from cfprovider.infrastructure.resilience.api_retry import MaxRetryError, RetryPolicy
from cfprovider.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)
api_logger = logging.getLogger("cfprovider.api")


def _log_request(request: httpx.Request) -> None:
    api_logger.info(f"--> {request.method} {request.url}")


def _log_response(response: httpx.Response) -> None:
    request = response.request
    api_logger.info(f"<-- {request.method} {request.url} {response.status_code}")


def log_event(event: DomainEvent) -> None:
    logger.debug(f"EVENT: {event}")


class ApiClient(ApiClientHandle):
    """Concrete ApiClientHandle using httpx."""

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str],
        rate_limiter: RateLimiter,
        retry_policy: RetryPolicy,
        account_id: Optional[str] = None,
        debug: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
        on_event: Callable[[DomainEvent], None] = log_event,
    ):
        """Initializes the client. Performs no network I/O.

        Args:
            base_url: Absolute API base URL, e.g. 'https://api.cloudflare.com/client/v4'.
            headers: Default headers (user agent and authentication).
            rate_limiter: Limiter shared by every call made through this handle.
            retry_policy: Backoff policy applied to each call.
            account_id: Default account for account-scoped paths.
            debug: Log every request and response through the 'cfprovider.api' logger.
            transport: Optional httpx transport (tests use httpx.MockTransport).
            on_event: Receives domain events for calls, deferrals and retries.
        """
        self.base_url = base_url
        self.account_id = account_id
        self.debug = debug
        self.rate_limiter = rate_limiter
        self.retry_policy = retry_policy
        self._on_event = on_event

        event_hooks: Dict[str, list] = {"request": [], "response": []}
        if debug:
            event_hooks = {"request": [_log_request], "response": [_log_response]}

        self._client = httpx.Client(
            base_url=base_url,
            headers=dict(headers),
            transport=transport,
            event_hooks=event_hooks,
        )

    @property
    def headers(self) -> httpx.Headers:
        return self._client.headers

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Performs one API call, subject to rate limiting and retries.

        Args:
            method: HTTP method (e.g., 'GET').
            path: Path relative to the base URL (e.g., '/zones').
            **kwargs: Passed to `httpx.Client.request` (params, json, headers...).

        Returns:
            The final HTTP response. Non-2xx responses are returned, not raised.

        Raises:
            MaxRetryError: If every attempt failed at the network level.
        """
        method = method.upper()
        description = f"{method} {path}"
        state = {"attempt": 0, "latency_ms": 0.0}

        def send() -> httpx.Response:
            self.rate_limiter.wait_for_permission()
            state["attempt"] += 1
            self._on_event(ApiCallInitiated(method=method, path=path, attempt_number=state["attempt"]))
            start_time = time.perf_counter()
            response = self._client.request(method, path, **kwargs)
            state["latency_ms"] = (time.perf_counter() - start_time) * 1000
            logger.debug(f"{description} -> {response.status_code} in {state['latency_ms']:.1f}ms")
            return response

        try:
            response = self.retry_policy.execute(send, description=description, on_event=self._on_event)
        except MaxRetryError as e:
            self._on_event(ApiCallFailed(
                method=method, path=path,
                error_type=type(e.original_exception).__name__,
                error_message=str(e.original_exception),
            ))
            raise

        self._on_event(ApiCallSucceeded(
            method=method, path=path, status_code=response.status_code, latency_ms=state["latency_ms"],
        ))
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    def accounts_path(self, suffix: str = "", account_id: Optional[str] = None) -> str:
        """Builds '/accounts/<id><suffix>'.

        A per-call `account_id` takes precedence over the client's default.

        Raises:
            ValueError: If neither a per-call nor a default account id is available.
        """
        effective = account_id or self.account_id
        if not effective:
            raise ValueError("No account id given and the client has no default account configured.")
        return f"/accounts/{effective}{suffix}"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
