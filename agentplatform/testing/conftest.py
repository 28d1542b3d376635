"""
Pytest plugin for Agent Platform client testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["agentplatform.testing.conftest"]

Or import the fixtures directly:

    from agentplatform.testing.fixtures import mock_client, sample_agent
"""

# Re-export all fixtures for pytest auto-discovery
from agentplatform.testing.fixtures import (
    mock_agent_id,
    mock_client,
    mock_client_with_agents,
    sample_agent,
    sample_agent_list,
    sample_chat_response,
)

__all__ = [
    "mock_client",
    "mock_agent_id",
    "sample_agent",
    "sample_agent_list",
    "sample_chat_response",
    "mock_client_with_agents",
]
