"""
Stream event contract.

Each event is serialized as one server-sent-event frame:

    data: <JSON>\\n\\n

where the JSON object carries a ``type`` discriminator and camelCase
fields. For one agent, ``agent-start`` precedes its ``analysis-chunk``
events, which precede exactly one ``agent-complete`` or ``agent-error``.
``analysis-complete`` and ``error`` are terminal.
"""

from datetime import datetime, timezone
from typing import Literal, Union

from pydantic import Field

from analyzer.shared.contracts.analysis_result import CamelModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisStartEvent(CamelModel):
    type: Literal["analysis-start"] = "analysis-start"
    message: str = "Starting multi-agent analysis..."
    total_agents: int


class AgentStartEvent(CamelModel):
    type: Literal["agent-start"] = "agent-start"
    agent_id: str
    agent_name: str
    progress: int = Field(ge=0, le=100)


class AnalysisChunkEvent(CamelModel):
    type: Literal["analysis-chunk"] = "analysis-chunk"
    agent_id: str
    chunk: str
    timestamp: datetime = Field(default_factory=_utcnow)


class AgentCompleteEvent(CamelModel):
    type: Literal["agent-complete"] = "agent-complete"
    agent_id: str
    agent_name: str


class AgentErrorEvent(CamelModel):
    type: Literal["agent-error"] = "agent-error"
    agent_id: str
    error: str


class AnalysisCompleteEvent(CamelModel):
    type: Literal["analysis-complete"] = "analysis-complete"
    message: str = "Multi-agent analysis completed"


class ErrorEvent(CamelModel):
    type: Literal["error"] = "error"
    error: str


StreamEvent = Union[
    AnalysisStartEvent,
    AgentStartEvent,
    AnalysisChunkEvent,
    AgentCompleteEvent,
    AgentErrorEvent,
    AnalysisCompleteEvent,
    ErrorEvent,
]

TERMINAL_EVENT_TYPES = frozenset({"analysis-complete", "error"})


def format_sse(event: StreamEvent) -> str:
    """Render an event as a single ``data:`` frame."""
    return f"data: {event.model_dump_json(by_alias=True)}\n\n"
