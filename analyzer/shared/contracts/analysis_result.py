"""
Analysis result contract.

Defines the record each agent produces for a paper, plus the transient
request that starts an analysis. A failed agent run is still an
AnalysisResult: it carries score 0, an explanatory analysis text and the
error that caused it, so callers aggregate one uniform shape.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisResult(CamelModel):
    """One agent's analysis of one paper."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    agent_id: str = Field(description="Registry id of the agent")
    agent_name: str = Field(description="Display name of the agent")
    analysis: str = Field(description="Model transcript or failure message")
    score: float = Field(ge=0.0, le=1.0, description="Heuristic quality score")
    timestamp: datetime = Field(default_factory=_utcnow)
    error: Optional[str] = Field(
        default=None, description="Failure description when the run degraded"
    )

    @property
    def degraded(self) -> bool:
        """True when this result stands in for a failed agent run."""
        return self.error is not None

    @classmethod
    def failure(
        cls, agent_id: str, agent_name: str, analysis: str, error: str
    ) -> "AnalysisResult":
        """Build a degraded result with score 0."""
        return cls(
            agent_id=agent_id,
            agent_name=agent_name,
            analysis=analysis,
            score=0.0,
            error=error,
        )


class PaperInput(CamelModel):
    """Paper fields the analysis core consumes."""

    title: str
    content: str
    authors: Optional[List[str]] = None
    abstract: Optional[str] = None


class AnalysisRequest(CamelModel):
    """Request scoped to a single orchestration call. Never persisted."""

    paper_id: str
    paper: PaperInput
    analysis_types: List[str] = Field(default_factory=lambda: ["comprehensive"])
