"""Agent listing data models."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from agentplatform.exceptions import UpstreamError


def _require(data: dict[str, Any], key: str, what: str, endpoint: str) -> Any:
    if key not in data or data[key] is None:
        raise UpstreamError(
            "INVALID_RESPONSE",
            f"{what} is missing required field '{key}'",
            endpoint=endpoint,
        )
    return data[key]


def _invalid_field(what: str, key: str, value: Any) -> UpstreamError:
    return UpstreamError(
        "INVALID_RESPONSE",
        f"{what} field '{key}' has unexpected value {value!r}",
        endpoint="list_agents",
    )


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise _invalid_field("Agent entry", key, value)
    return value


def _strict_bool(value: Any, what: str, key: str) -> bool:
    if not isinstance(value, bool):
        raise _invalid_field(what, key, value)
    return value


def _optional_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    return False if value is None else _strict_bool(value, "Agent entry", key)


def _strict_int(value: Any, what: str, key: str) -> int:
    # bool is an int subclass but never a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid_field(what, key, value)
    return value


@dataclass(frozen=True)
class Agent:
    """An AI agent registered on the Agent Platform."""

    agent_id: str
    type: str | None = None
    name: str | None = None
    description: str | None = None
    status: str | None = None
    is_global: bool = False
    current_version_id: str | None = None
    created_at: str | None = None  # ISO-8601 as delivered by the platform
    created_by: str | None = None
    modified_at: str | None = None
    modified_by: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Agent":
        if not isinstance(data, dict):
            raise UpstreamError(
                "INVALID_RESPONSE", "Agent entry is not a JSON object", endpoint="list_agents"
            )
        return cls(
            agent_id=str(_require(data, "id", "Agent entry", "list_agents")),
            type=_optional_str(data, "type"),
            name=_optional_str(data, "name"),
            description=_optional_str(data, "description"),
            status=_optional_str(data, "status"),
            is_global=_optional_bool(data, "isGlobalAgent"),
            current_version_id=_optional_str(data, "currentVersionId"),
            created_at=_optional_str(data, "createdAt"),
            created_by=_optional_str(data, "createdBy"),
            modified_at=_optional_str(data, "modifiedAt"),
            modified_by=_optional_str(data, "modifiedBy"),
        )

    def is_type(self, agent_type: str) -> bool:
        """Case-insensitive type comparison."""
        return self.type is not None and self.type.lower() == agent_type.lower()


@dataclass(frozen=True)
class Pagination:
    """Page window over the platform's full, unfiltered agent collection."""

    total_items: int
    offset: int
    limit: int
    has_more: bool

    @classmethod
    def from_dict(cls, data: Any) -> "Pagination":
        if not isinstance(data, dict):
            raise UpstreamError(
                "INVALID_RESPONSE", "Pagination block is not a JSON object", endpoint="list_agents"
            )
        fields = {
            key: _require(data, key, "Pagination", "list_agents")
            for key in ("totalItems", "offset", "limit", "hasMore")
        }
        return cls(
            total_items=_strict_int(fields["totalItems"], "Pagination", "totalItems"),
            offset=_strict_int(fields["offset"], "Pagination", "offset"),
            limit=_strict_int(fields["limit"], "Pagination", "limit"),
            has_more=_strict_bool(fields["hasMore"], "Pagination", "hasMore"),
        )


@dataclass(frozen=True)
class AgentListResult:
    """
    Agents of one type from a single platform page.

    The platform paginates the unfiltered collection and type filtering
    happens afterwards, so ``agents`` may hold fewer entries than
    ``pagination.limit`` (or none) even when later pages contain matches.
    Use ``pagination.has_more`` to decide whether to keep paging.
    """

    agents: list[Agent] = field(default_factory=list)
    pagination: Pagination = field(
        default_factory=lambda: Pagination(total_items=0, offset=0, limit=0, has_more=False)
    )

    def counts_by_type(self) -> dict[str | None, int]:
        return dict(Counter(agent.type for agent in self.agents))

    def counts_by_status(self) -> dict[str | None, int]:
        return dict(Counter(agent.status for agent in self.agents))
