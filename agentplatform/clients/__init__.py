"""Agent Platform resource clients."""

from agentplatform.clients.agents import AgentsClient

__all__ = [
    "AgentsClient",
]
