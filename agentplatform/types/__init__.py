"""Agent Platform client type definitions.

This module exports all data model types used by the client.
"""

from agentplatform.types.agents import Agent, AgentListResult, Pagination
from agentplatform.types.chat import (
    ChatResponse,
    Choice,
    InvokePayload,
    Reference,
    SourceNode,
)

__all__ = [
    # Listing types
    "Agent",
    "Pagination",
    "AgentListResult",
    # Invocation types
    "ChatResponse",
    "Reference",
    # Raw invoke payload
    "InvokePayload",
    "Choice",
    "SourceNode",
]
