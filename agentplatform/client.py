"""
Agent Platform client.

Provides the primary interface for listing and invoking Agent Platform agents.
"""

import os
from typing import Any

import httpx

from agentplatform.auth import TokenCache, TokenFetcher
from agentplatform.clients import AgentsClient
from agentplatform.exceptions import ConfigurationError
from agentplatform.transport import HTTPTransport
from agentplatform.types.agents import AgentListResult
from agentplatform.types.chat import ChatResponse


class AgentPlatformClient:
    """
    Main client for interacting with the Agent Platform.

    Wires the token fetcher, the token cache and the transport together and
    exposes the agents client. Configuration is fixed at construction.

    Example:
        ```python
        from agentplatform import AgentPlatformClient

        client = AgentPlatformClient(
            client_id="my-client",
            client_secret="s3cret",
            oauth_base_url="https://auth.example.com",
            api_url="https://api.example.com",
            hx_env_id="env-123",
        )

        # Or create from environment variables
        client = AgentPlatformClient.from_env()

        page = client.list_agents_by_type("rag", offset=0, limit=50)
        reply = client.invoke_agent(page.agents[0].agent_id, "What is our refund policy?")
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        oauth_base_url: str,
        api_url: str,
        hx_env_id: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the Agent Platform client.

        Args:
            client_id: OAuth2 client identifier
            client_secret: OAuth2 client secret
            oauth_base_url: Identity provider base URL (token endpoint is /connect/token)
            api_url: Agent Platform base URL
            hx_env_id: Environment identifier forwarded on agent invocations
            timeout: Connect and read timeout in seconds (default: 30.0)
            http_client: Optional shared httpx client, mainly for tests

        Raises:
            ConfigurationError: If a required setting is blank or timeout is not positive
        """
        settings = {
            "client_id": client_id,
            "client_secret": client_secret,
            "oauth_base_url": oauth_base_url,
            "api_url": api_url,
            "hx_env_id": hx_env_id,
        }
        for name, value in settings.items():
            if not value or not value.strip():
                raise ConfigurationError(f"{name} must be configured")
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")

        self.client_id = client_id
        self.oauth_base_url = oauth_base_url.rstrip("/")
        self.api_url = api_url.rstrip("/")
        self.hx_env_id = hx_env_id
        self.timeout = timeout

        self._fetcher = TokenFetcher(
            client_id=client_id,
            client_secret=client_secret,
            oauth_base_url=self.oauth_base_url,
            timeout=timeout,
            http_client=http_client,
        )
        self._token_cache = TokenCache(self._fetcher)
        self._transport = HTTPTransport(
            base_url=self.api_url,
            token_cache=self._token_cache,
            timeout=timeout,
            http_client=http_client,
        )

        self.agents = AgentsClient(self._transport, hx_env_id=hx_env_id)

    @classmethod
    def from_env(cls) -> "AgentPlatformClient":
        """
        Create a client from environment variables.

        Environment variables:
            AGENT_PLATFORM_CLIENT_ID: OAuth2 client identifier (required)
            AGENT_PLATFORM_CLIENT_SECRET: OAuth2 client secret (required)
            AGENT_PLATFORM_OAUTH_URL: Identity provider base URL (required)
            AGENT_PLATFORM_API_URL: Agent Platform base URL (required)
            AGENT_PLATFORM_HX_ENV_ID: Environment identifier (required)
            AGENT_PLATFORM_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        required = {
            "client_id": "AGENT_PLATFORM_CLIENT_ID",
            "client_secret": "AGENT_PLATFORM_CLIENT_SECRET",
            "oauth_base_url": "AGENT_PLATFORM_OAUTH_URL",
            "api_url": "AGENT_PLATFORM_API_URL",
            "hx_env_id": "AGENT_PLATFORM_HX_ENV_ID",
        }
        values: dict[str, str] = {}
        for name, env_var in required.items():
            value = os.environ.get(env_var)
            if not value:
                raise ConfigurationError(f"{env_var} environment variable not set")
            values[name] = value

        raw_timeout = os.environ.get("AGENT_PLATFORM_TIMEOUT")
        timeout = cls.DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid AGENT_PLATFORM_TIMEOUT: {raw_timeout}. Must be a number of seconds"
                ) from e

        return cls(timeout=timeout, **values)

    def list_agents_by_type(
        self, type_filter: str, offset: int = 0, limit: int = 500
    ) -> AgentListResult:
        """List one page of agents filtered by type. See AgentsClient.list_agents_by_type."""
        return self.agents.list_agents_by_type(type_filter, offset=offset, limit=limit)

    def invoke_agent(self, agent_id: str, prompt: str) -> ChatResponse:
        """Invoke the latest version of an agent. See AgentsClient.invoke_agent."""
        return self.agents.invoke_agent(agent_id, prompt)

    @property
    def token_cache(self) -> TokenCache:
        """Get the token cache (for advanced use cases)."""
        return self._token_cache

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()
        self._fetcher.close()

    def __enter__(self) -> "AgentPlatformClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
