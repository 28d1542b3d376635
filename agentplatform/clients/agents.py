"""Agents resource client (the Agent Gateway).

Lists agents of a given type and invokes the latest version of an agent.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from agentplatform.exceptions import UpstreamError, ValidationError
from agentplatform.logging import get_logger
from agentplatform.types.agents import Agent, AgentListResult, Pagination
from agentplatform.types.chat import ChatResponse, InvokePayload

if TYPE_CHECKING:
    from agentplatform.transport import HTTPTransport

logger = get_logger()

AGENTS_PATH = "/agent-platform/v1/agents/"
INVOKE_PATH = "/agent-platform/v1/agents/{agent_id}/versions/latest/invoke"

RAG_AGENT_TYPE = "rag"
DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 500


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-blank string")
    return value


class AgentsClient:
    """Client for agent listing and invocation."""

    def __init__(self, transport: "HTTPTransport", hx_env_id: str) -> None:
        """
        Initialize the agents client.

        Args:
            transport: HTTP transport for making requests
            hx_env_id: Environment identifier forwarded on every invocation
        """
        self.transport = transport
        self.hx_env_id = hx_env_id

    def list_agents_by_type(
        self,
        type_filter: str,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
    ) -> AgentListResult:
        """
        List one page of agents and keep those of the requested type.

        The platform cannot filter by type, so ``offset`` and ``limit`` apply
        to the full agent collection and filtering happens on the returned
        page. A page may therefore hold fewer matches than ``limit``, or none,
        while later pages still contain matches. The returned pagination is
        the platform's, untouched.

        Args:
            type_filter: Agent type to keep, compared case-insensitively
            offset: Zero-based index of the first agent on the page
            limit: Maximum number of agents on the page

        Returns:
            AgentListResult with matching agents in platform order

        Raises:
            ValidationError: If type_filter is blank, offset < 0 or limit < 1
            AuthError: If no access token can be obtained
            UpstreamError: On HTTP failure or a malformed response
        """
        _require_text(type_filter, "type_filter")
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            raise ValidationError(f"offset must be an integer >= 0, got {offset!r}")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(f"limit must be an integer >= 1, got {limit!r}")

        logger.info("Fetching agents (offset=%d, limit=%d)", offset, limit)
        response = self.transport.authorized_request(
            method="GET",
            path=AGENTS_PATH,
            endpoint="list_agents",
            params={"offset": offset, "limit": limit},
        )

        raw_agents = response.get("agents")
        if not isinstance(raw_agents, list):
            raise UpstreamError(
                "INVALID_RESPONSE",
                "Agent listing has no 'agents' list",
                endpoint="list_agents",
            )
        agents = [Agent.from_dict(raw) for raw in raw_agents]
        pagination = Pagination.from_dict(response.get("pagination"))

        matching = [agent for agent in agents if agent.is_type(type_filter)]
        logger.info(
            "Retrieved %d %s agents out of %d on the page",
            len(matching),
            type_filter,
            len(agents),
        )
        return AgentListResult(agents=matching, pagination=pagination)

    def list_rag_agents(
        self, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> AgentListResult:
        """List RAG agents; see list_agents_by_type for the paging caveat."""
        return self.list_agents_by_type(RAG_AGENT_TYPE, offset=offset, limit=limit)

    def invoke_agent(self, agent_id: str, prompt: str) -> ChatResponse:
        """
        Send a prompt to the latest version of an agent.

        Args:
            agent_id: Identifier of the agent to invoke
            prompt: User question or instruction

        Returns:
            ChatResponse with the answer and its references in payload order

        Raises:
            ValidationError: If agent_id or prompt is blank (no request is made)
            AuthError: If no access token can be obtained
            UpstreamError: On HTTP failure or when the reply lacks choices[0]
        """
        _require_text(agent_id, "agent_id")
        _require_text(prompt, "prompt")

        body = {
            "messages": [{"role": "user", "content": prompt}],
            "filterValue": {},
            "hx_env_id": self.hx_env_id,
        }

        try:
            response = self.transport.authorized_request(
                method="POST",
                path=INVOKE_PATH.format(agent_id=quote(agent_id.strip(), safe="")),
                endpoint="invoke_agent",
                body=body,
            )
            chat = InvokePayload.from_dict(response).to_chat_response()
        except UpstreamError:
            logger.error("Error while invoking agent %s", agent_id)
            raise

        logger.info(
            "Agent %s replied (%d chars, %d references)",
            agent_id,
            len(chat.answer),
            len(chat.references),
        )
        return chat
