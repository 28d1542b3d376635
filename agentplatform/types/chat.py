"""Agent invocation data models.

``ChatResponse`` and ``Reference`` are what callers receive. ``InvokePayload``
and its parts mirror the raw reply of the invoke endpoint; their ``from_dict``
constructors validate the shape and raise ``UpstreamError`` on missing fields.
"""

from dataclasses import dataclass, field
from typing import Any

from agentplatform.exceptions import UpstreamError

_ENDPOINT = "invoke_agent"


def _invalid(message: str) -> UpstreamError:
    return UpstreamError("INVALID_RESPONSE", message, endpoint=_ENDPOINT)


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _invalid(f"{what} is missing or not a JSON object")
    return value


@dataclass(frozen=True)
class Reference:
    """A source item that supports an agent's answer."""

    reference_id: str
    object_id: str | None
    rank_score: float


@dataclass(frozen=True)
class ChatResponse:
    """An agent's answer and its references, in payload order."""

    answer: str
    references: list[Reference] = field(default_factory=list)


@dataclass(frozen=True)
class SourceNode:
    """One entry of ``response.custom_outputs.source_nodes``."""

    node_id: str
    object_id: str | None
    score: float

    @classmethod
    def from_dict(cls, data: Any) -> "SourceNode":
        entry = _object(data, "Source node")
        node = _object(entry.get("node"), "Source node 'node'")

        node_id = node.get("id_")
        if not isinstance(node_id, str) or not node_id:
            raise _invalid("Source node is missing 'node.id_'")

        extra_info = node.get("extra_info") or {}
        object_id = extra_info.get("object_id") if isinstance(extra_info, dict) else None

        score = entry.get("score", 0.0)
        if score is None:
            score = 0.0
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise _invalid(f"Source node score is not numeric: {score!r}")

        return cls(
            node_id=node_id,
            object_id=str(object_id) if object_id is not None else None,
            score=float(score),
        )

    def to_reference(self) -> Reference:
        return Reference(
            reference_id=self.node_id,
            object_id=self.object_id,
            rank_score=self.score,
        )


@dataclass(frozen=True)
class Choice:
    """First entry of ``response.choices``; only the message content is kept."""

    content: str

    @classmethod
    def from_dict(cls, data: Any) -> "Choice":
        choice = _object(data, "Choice")
        message = _object(choice.get("message"), "Choice 'message'")
        content = message.get("content")
        if not isinstance(content, str):
            raise _invalid("Choice message has no text 'content'")
        return cls(content=content)


@dataclass(frozen=True)
class InvokePayload:
    """Raw invoke reply: ``{"response": {"choices": [...], "custom_outputs": {...}}}``."""

    choice: Choice
    source_nodes: list[SourceNode]

    @classmethod
    def from_dict(cls, data: Any) -> "InvokePayload":
        response = _object(_object(data, "Invoke payload").get("response"), "'response'")

        raw_choices = response.get("choices")
        if not isinstance(raw_choices, list) or not raw_choices:
            raise _invalid("Invoke payload has no 'response.choices[0]'")

        custom_outputs = response.get("custom_outputs") or {}
        if not isinstance(custom_outputs, dict):
            raise _invalid("'response.custom_outputs' is not a JSON object")
        raw_nodes = custom_outputs.get("source_nodes") or []
        if not isinstance(raw_nodes, list):
            raise _invalid("'response.custom_outputs.source_nodes' is not a list")

        return cls(
            choice=Choice.from_dict(raw_choices[0]),
            source_nodes=[SourceNode.from_dict(raw) for raw in raw_nodes],
        )

    def to_chat_response(self) -> ChatResponse:
        return ChatResponse(
            answer=self.choice.content,
            references=[node.to_reference() for node in self.source_nodes],
        )
