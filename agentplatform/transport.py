"""
HTTP Transport for the Agent Platform client.

Handles bearer authentication, status validation, and JSON decoding of
Agent Platform responses. Requests are not retried.
"""

import time
from typing import Any

import httpx

from agentplatform.auth import TokenCache
from agentplatform.exceptions import UpstreamError
from agentplatform.logging import (
    get_logger,
    log_http_request,
    log_http_response,
    preview_body,
)

logger = get_logger("http")


class HTTPTransport:
    """
    HTTP transport layer with bearer authentication.

    Handles:
    - Attaching a bearer token from the TokenCache to every request
    - Connect/read timeouts
    - Mapping transport failures, non-2xx status codes and non-JSON bodies to UpstreamError

    The underlying httpx client is shared and safe to use from many threads.
    """

    def __init__(
        self,
        base_url: str,
        token_cache: TokenCache,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Agent Platform base URL (e.g., "https://api.example.com")
            token_cache: Source of bearer tokens
            timeout: Connect and read timeout in seconds
            http_client: Optional pre-built httpx client (closed by the caller)
        """
        self.base_url = base_url.rstrip("/")
        self.token_cache = token_cache
        self.timeout = timeout

        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def authorized_request(
        self,
        method: str,
        path: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Make a bearer-authenticated request.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., "/agent-platform/v1/agents/")
            endpoint: URL class reported in errors (e.g., "list_agents")
            params: Query parameters
            body: JSON request body

        Returns:
            Parsed JSON object

        Raises:
            AuthError: If no access token can be obtained
            UpstreamError: On transport failure, non-2xx status, or a non-JSON body
        """
        token = self.token_cache.get_access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        url = self.url_for(path)
        log_http_request(method, url, headers=headers, body=body)

        started = time.perf_counter()
        try:
            response = self._client.request(
                method, url, params=params, json=body, headers=headers
            )
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise UpstreamError(
                "CONNECTION_ERROR",
                f"Request to {endpoint} failed: {e}",
                endpoint=endpoint,
            ) from e
        elapsed_ms = (time.perf_counter() - started) * 1000

        if not response.is_success:
            log_http_response(response.status_code, url, elapsed_ms=elapsed_ms)
            logger.error("%s %s returned HTTP %d", method, url, response.status_code)
            raise UpstreamError(
                "HTTP_ERROR",
                f"{endpoint} failed: HTTP {response.status_code}: {preview_body(response.text)}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                "INVALID_RESPONSE",
                f"{endpoint} returned a body that is not valid JSON",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                "INVALID_RESPONSE",
                f"{endpoint} returned JSON that is not an object",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        log_http_response(response.status_code, url, body=data, elapsed_ms=elapsed_ms)
        return data
