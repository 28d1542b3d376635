"""
Pytest fixtures and sample-data factories for Agent Platform client testing.

Provides common fixtures for testing applications that use the client, plus
raw platform payload builders for tests that exercise the HTTP layer.
"""

from typing import Any, Generator

import pytest

from agentplatform.testing.mock import MockAgentPlatformClient
from agentplatform.types.agents import Agent, AgentListResult, Pagination
from agentplatform.types.chat import ChatResponse, Reference


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockAgentPlatformClient, None, None]:
    """
    Provide a MockAgentPlatformClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.agents.configure_list_agents_by_type(response=my_page)
            result = my_function(mock_client)
            assert mock_client.was_called("agents.list_agents_by_type")
        ```
    """
    client = MockAgentPlatformClient(hx_env_id="test-env-id")
    yield client
    client.reset()


@pytest.fixture
def mock_agent_id() -> str:
    """Provide a test agent ID."""
    return "test-agent-id"


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_agent() -> Agent:
    """Provide a sample RAG Agent object."""
    return create_mock_agent()


@pytest.fixture
def sample_agent_list() -> AgentListResult:
    """Provide a page holding two RAG agents out of 50 platform agents."""
    return AgentListResult(
        agents=[
            create_mock_agent(agent_id="rag-1", name="Policies"),
            create_mock_agent(agent_id="rag-2", name="Handbook"),
        ],
        pagination=Pagination(total_items=50, offset=0, limit=3, has_more=True),
    )


@pytest.fixture
def sample_chat_response() -> ChatResponse:
    """Provide a sample ChatResponse with one reference."""
    return create_mock_chat_response()


@pytest.fixture
def mock_client_with_agents(
    mock_client: MockAgentPlatformClient,
    sample_agent_list: AgentListResult,
) -> MockAgentPlatformClient:
    """Provide a mock client whose listing returns sample_agent_list."""
    mock_client.agents.configure_list_agents_by_type(response=sample_agent_list)
    return mock_client


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_agent(
    agent_id: str = "mock-agent-id",
    type: str | None = "rag",
    name: str | None = "mock-agent",
    description: str | None = "A mock agent",
    status: str | None = "CREATED",
    is_global: bool = False,
    created_at: str | None = "2025-07-28T17:22:39.496818+00:00",
    **kwargs: Any,
) -> Agent:
    """
    Create a mock Agent with sensible defaults.

    Args:
        agent_id: Agent ID
        type: Agent type
        name: Agent name
        description: Agent description
        status: Lifecycle status
        is_global: Whether the agent is global
        created_at: ISO-8601 creation timestamp
        **kwargs: Remaining Agent fields

    Returns:
        Agent object
    """
    return Agent(
        agent_id=agent_id,
        type=type,
        name=name,
        description=description,
        status=status,
        is_global=is_global,
        current_version_id=kwargs.get("current_version_id", f"{agent_id}-v1"),
        created_at=created_at,
        created_by=kwargs.get("created_by", "mock-user"),
        modified_at=kwargs.get("modified_at", created_at),
        modified_by=kwargs.get("modified_by", "mock-user"),
    )


def create_mock_chat_response(
    answer: str = "Mock answer",
    references: list[Reference] | None = None,
) -> ChatResponse:
    """Create a mock ChatResponse; one reference by default."""
    if references is None:
        references = [Reference(reference_id="node-1", object_id="object-1", rank_score=0.9)]
    return ChatResponse(answer=answer, references=references)


def agent_payload(agent_id: str, type: str = "rag", **fields: Any) -> dict[str, Any]:
    """Build one raw agent entry as the listing endpoint returns it."""
    payload: dict[str, Any] = {
        "id": agent_id,
        "type": type,
        "name": f"{agent_id}-name",
        "description": f"{agent_id} description",
        "status": "CREATED",
        "isGlobalAgent": False,
        "currentVersionId": f"{agent_id}-v1",
        "createdAt": "2025-07-28T17:22:39.496818+00:00",
        "createdBy": "admin",
        "modifiedAt": "2025-07-29T08:00:00+00:00",
        "modifiedBy": "admin",
    }
    payload.update(fields)
    return payload


def listing_payload(
    agents: list[dict[str, Any]],
    total_items: int | None = None,
    offset: int = 0,
    limit: int | None = None,
    has_more: bool = False,
) -> dict[str, Any]:
    """Build a raw listing response."""
    return {
        "agents": agents,
        "pagination": {
            "totalItems": len(agents) if total_items is None else total_items,
            "offset": offset,
            "limit": len(agents) if limit is None else limit,
            "hasMore": has_more,
        },
    }


def invoke_payload(
    answer: str,
    source_nodes: list[tuple[str, str | None, float]] | None = None,
) -> dict[str, Any]:
    """Build a raw invoke response from ``(id_, object_id, score)`` tuples."""
    nodes = [
        {"node": {"id_": node_id, "extra_info": {"object_id": object_id}}, "score": score}
        for node_id, object_id, score in (source_nodes or [])
    ]
    return {
        "response": {
            "choices": [{"message": {"role": "assistant", "content": answer}}],
            "custom_outputs": {"source_nodes": nodes},
        }
    }


__all__ = [
    # Fixtures
    "mock_client",
    "mock_agent_id",
    "sample_agent",
    "sample_agent_list",
    "sample_chat_response",
    "mock_client_with_agents",
    # Helper functions
    "create_mock_agent",
    "create_mock_chat_response",
    "agent_payload",
    "listing_payload",
    "invoke_payload",
]
