"""Agent Platform client - list and invoke Agent Platform agents with OAuth2 client credentials."""

from agentplatform.auth import CachedToken, TokenCache, TokenFetcher, TokenGrant
from agentplatform.client import AgentPlatformClient
from agentplatform.clients import AgentsClient
from agentplatform.exceptions import (
    AgentPlatformError,
    AuthError,
    ConfigurationError,
    UpstreamError,
    ValidationError,
)
from agentplatform.logging import configure_logging, get_logger
from agentplatform.transport import HTTPTransport
from agentplatform.types import (
    Agent,
    AgentListResult,
    ChatResponse,
    Pagination,
    Reference,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "AgentPlatformClient",
    "AgentsClient",
    # Authentication
    "TokenCache",
    "TokenFetcher",
    "TokenGrant",
    "CachedToken",
    # Exceptions
    "AgentPlatformError",
    "ConfigurationError",
    "ValidationError",
    "AuthError",
    "UpstreamError",
    # Types
    "Agent",
    "Pagination",
    "AgentListResult",
    "ChatResponse",
    "Reference",
    # Transport
    "HTTPTransport",
    # Logging
    "configure_logging",
    "get_logger",
]
