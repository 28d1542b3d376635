"""Agent Platform client testing utilities.

Provides mock clients and fixtures for testing applications that use the client.
"""

from agentplatform.testing.fixtures import (
    agent_payload,
    create_mock_agent,
    create_mock_chat_response,
    invoke_payload,
    listing_payload,
)
from agentplatform.testing.mock import MockAgentPlatformClient, MockCall, MockResponse

__all__ = [
    # Mock client
    "MockAgentPlatformClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_agent",
    "create_mock_chat_response",
    "agent_payload",
    "listing_payload",
    "invoke_payload",
]
