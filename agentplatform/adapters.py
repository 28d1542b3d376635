"""
Framework-neutral helpers for HTTP endpoints built on the Agent Platform client.

A host web layer uses these to parse its inbound requests and to turn client
results and errors into plain view models. Nothing here performs I/O.
"""

import json
import re
from datetime import datetime
from typing import Any

from agentplatform.clients.agents import DEFAULT_LIMIT, DEFAULT_OFFSET
from agentplatform.exceptions import (
    AgentPlatformError,
    AuthError,
    UpstreamError,
    ValidationError,
)
from agentplatform.logging import get_logger
from agentplatform.types.agents import Agent, AgentListResult
from agentplatform.types.chat import ChatResponse

logger = get_logger("adapters")

_HUMAN_DATE_FORMAT = "%b %d, %Y at %H:%M"
_SHORT_DESCRIPTION_LENGTH = 100

# Fractional seconds of any precision, normalized to microseconds before parsing
_FRACTION = re.compile(r"\.(\d+)")


def read_int_param(raw: Any, fallback: int) -> int:
    """
    Parse a non-negative integer request parameter leniently.

    Missing, blank, malformed or negative values return ``fallback``.
    """
    if raw is None:
        return fallback
    text = str(raw).strip()
    if not text:
        return fallback
    try:
        value = int(text)
    except ValueError:
        logger.warning("Ignoring malformed integer parameter %r", raw)
        return fallback
    if value < 0:
        logger.warning("Ignoring negative integer parameter %r", raw)
        return fallback
    return value


def parse_list_params(query: dict[str, Any]) -> tuple[int, int]:
    """Return ``(offset, limit)`` from query parameters, defaulting to 0 and 500."""
    offset = read_int_param(query.get("offset"), DEFAULT_OFFSET)
    limit = read_int_param(query.get("limit"), DEFAULT_LIMIT)
    # limit=0 would be rejected by the client; treat it as "not given"
    if limit == 0:
        limit = DEFAULT_LIMIT
    return offset, limit


def parse_invoke_body(body: str | bytes | dict[str, Any] | None) -> tuple[str, str]:
    """
    Extract ``(agent_id, prompt)`` from an invoke request body.

    Args:
        body: Decoded JSON object, or the raw JSON text

    Raises:
        ValidationError: If the body is not a JSON object or a field is missing or blank
    """
    if body is None or body == "" or body == b"":
        raise ValidationError("Request body is required")

    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except ValueError as e:
            raise ValidationError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    fields = []
    for name in ("agentId", "prompt"):
        value = body.get(name)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Missing required field '{name}'")
        fields.append(value.strip())
    return fields[0], fields[1]


def _normalize_iso(text: str) -> str:
    """Rewrite a trailing "Z" as "+00:00" and pad or cut fractional seconds to six digits."""
    text = text.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    return _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)


def human_date(iso8601: str | None) -> str:
    """Format an ISO-8601 timestamp as "Jul 28, 2025 at 17:22"; "N/A" when absent."""
    if not iso8601 or not iso8601.strip():
        return "N/A"
    try:
        return datetime.fromisoformat(_normalize_iso(iso8601)).strftime(_HUMAN_DATE_FORMAT)
    except ValueError:
        logger.debug("Unable to parse date: %s", iso8601)
        return iso8601


def truncate(text: str | None, max_len: int) -> str | None:
    """Cut ``text`` to ``max_len`` characters, ending with "..." when shortened."""
    if text is None or len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def agent_to_view(agent: Agent) -> dict[str, Any]:
    return {
        "id": agent.agent_id,
        "name": agent.name,
        "description": agent.description,
        "type": agent.type,
        "status": agent.status,
        "isGlobalAgent": agent.is_global,
        "currentVersionId": agent.current_version_id,
        "createdBy": agent.created_by,
        "modifiedBy": agent.modified_by,
        "createdAt": agent.created_at,
        "modifiedAt": agent.modified_at,
        "createdAtFormatted": human_date(agent.created_at),
        "modifiedAtFormatted": human_date(agent.modified_at),
        "isActive": agent.status == "CREATED",
        "isTaskAgent": agent.type == "task",
        "isToolAgent": agent.type == "tool",
        "displayName": agent.name if agent.name is not None else "Unnamed Agent",
        "shortDescription": truncate(agent.description, _SHORT_DESCRIPTION_LENGTH),
    }


def listing_model(result: AgentListResult) -> dict[str, Any]:
    """View model for one page of listed agents, with per-type and per-status counts."""
    pagination = result.pagination
    return {
        "agents": [agent_to_view(agent) for agent in result.agents],
        "pagination": {
            "totalItems": pagination.total_items,
            "offset": pagination.offset,
            "limit": pagination.limit,
            "hasMore": pagination.has_more,
        },
        "totalAgents": pagination.total_items,
        "currentOffset": pagination.offset,
        "currentLimit": pagination.limit,
        "hasMore": pagination.has_more,
        "agentsByType": result.counts_by_type(),
        "agentsByStatus": result.counts_by_status(),
    }


def chat_model(response: ChatResponse) -> dict[str, Any]:
    return {
        "answer": response.answer,
        "references": [
            {
                "referenceId": ref.reference_id,
                "objectId": ref.object_id,
                "rankScore": ref.rank_score,
            }
            for ref in response.references
        ],
    }


def error_status(exc: Exception) -> int:
    """Suggested HTTP status for an error raised by the client."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, (AuthError, UpstreamError)):
        return 503
    return 500


def error_model(exc: Exception) -> dict[str, Any]:
    """Error payload for a failed request; agents is empty so list views still render."""
    code = exc.code if isinstance(exc, AgentPlatformError) else "INTERNAL_ERROR"
    message = exc.message if isinstance(exc, AgentPlatformError) else str(exc)
    return {
        "error": True,
        "errorCode": code,
        "errorMessage": message,
        "status": error_status(exc),
        "agents": [],
    }
