"""
FastAPI endpoints for paper analysis.

Provides the batch run, background analyses over stored papers and the
live server-sent-event stream.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from pydantic import Field

from analyzer.graph.orchestrator import AgentOrchestrator
from analyzer.papers.papers_api import get_paper_store
from analyzer.papers.store import PaperStore
from analyzer.shared.config import load_config
from analyzer.shared.contracts.analysis_result import (
    AnalysisRequest,
    AnalysisResult,
    CamelModel,
)
from analyzer.shared.errors import ValidationError
from analyzer.streaming.channel import StreamChannel
from analyzer.streaming.emitter import AnalysisStreamEmitter


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analysis", tags=["analysis"])

SSE_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Connection": "keep-alive",
}

# Shared orchestrator instance (one rate limiter cursor per process)
_orchestrator: Optional[AgentOrchestrator] = None

# In-memory analysis records (replace with Redis/DB in production)
_analyses: Dict[str, Dict[str, Any]] = {}

# Strong references to running stream producers
_stream_tasks: Set[asyncio.Task] = set()


def get_orchestrator() -> AgentOrchestrator:
    """Get or create the shared orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = AgentOrchestrator(config=load_config())
    return _orchestrator


# ============================================================================
# Request/Response Models
# ============================================================================


class RunAnalysisRequest(CamelModel):
    """Analyze paper content directly."""

    paper_content: str = Field(min_length=1, description="Extracted paper text")
    paper_title: str = Field(min_length=1, description="Paper title")


class RunAnalysisResponse(CamelModel):
    session_id: str
    results: List[AnalysisResult]


class StartAnalysisRequest(CamelModel):
    """Start a background analysis of a stored paper."""

    paper_id: Optional[str] = Field(default=None, description="Paper store id")
    analysis_types: Optional[List[str]] = Field(
        default=None, description="Requested analysis types"
    )


class StartAnalysisResponse(CamelModel):
    success: bool
    analysis_id: str
    message: str


class AnalysisStatusResponse(CamelModel):
    analysis_id: str
    paper_id: str
    status: str = Field(description="'running', 'complete' or 'failed'")
    analysis_types: List[str]
    created_at: str
    results: List[AnalysisResult] = Field(default_factory=list)
    error: Optional[str] = None


# ============================================================================
# Background work
# ============================================================================


async def _run_stored_analysis(
    analysis_id: str, request: AnalysisRequest, orchestrator: AgentOrchestrator
) -> None:
    """Run all agents for a stored paper and record the outcome."""
    record = _analyses[analysis_id]
    _log = f"[session={analysis_id}] [graph=analysis] [api=start] "
    try:
        results = await orchestrator.run_all(
            request.paper.content, request.paper.title, session_id=analysis_id
        )
        record["results"] = results
        record["status"] = "complete"
        logger.info(f"{_log}Background analysis complete | results={len(results)}")
    except Exception as e:
        logger.exception(f"{_log}Background analysis failed: {e}")
        record["status"] = "failed"
        record["error"] = str(e)


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/agents")
async def list_agents(
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """List the registered analysis agents."""
    agents = orchestrator.get_agents()
    return {"agents": [a.to_dict() for a in agents], "count": len(agents)}


@router.post("/run", response_model=RunAnalysisResponse)
async def run_analysis(
    request: RunAnalysisRequest,
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
) -> RunAnalysisResponse:
    """
    Run every agent over the given paper and return all results.

    Always returns one result per registered agent; failed agents carry
    score 0 and an error description.
    """
    session_id = str(uuid.uuid4())
    results = await orchestrator.run_all(
        request.paper_content, request.paper_title, session_id=session_id
    )
    return RunAnalysisResponse(session_id=session_id, results=results)


@router.post("/start", response_model=StartAnalysisResponse)
async def start_analysis(
    request: StartAnalysisRequest,
    background_tasks: BackgroundTasks,
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
    paper_store: PaperStore = Depends(get_paper_store),
) -> StartAnalysisResponse:
    """
    Start analyzing a stored paper in the background.

    Returns an analysis id to poll with GET /api/analysis/{analysis_id}.
    """
    if not request.paper_id:
        raise ValidationError("Paper ID is required")

    paper = await paper_store.get(request.paper_id)
    if paper is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Paper not found"
        )

    analysis_request = AnalysisRequest(
        paper_id=paper.paper_id,
        paper=paper.to_paper_input(),
        analysis_types=request.analysis_types or ["comprehensive"],
    )
    analysis_id = str(uuid.uuid4())
    _analyses[analysis_id] = {
        "paper_id": paper.paper_id,
        "status": "running",
        "analysis_types": analysis_request.analysis_types,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "results": [],
        "error": None,
    }
    background_tasks.add_task(
        _run_stored_analysis, analysis_id, analysis_request, orchestrator
    )

    logger.info(
        f"[session={analysis_id}] [graph=analysis] [api=start] Analysis scheduled "
        f"| paper_id={paper.paper_id}, types={analysis_request.analysis_types}"
    )
    return StartAnalysisResponse(
        success=True,
        analysis_id=analysis_id,
        message="Analysis started successfully",
    )


@router.get("/stream")
async def stream_analysis(
    paper_content: Optional[str] = Query(default=None, alias="paperContent"),
    paper_title: Optional[str] = Query(default=None, alias="paperTitle"),
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
) -> StreamingResponse:
    """
    Stream a live analysis as server-sent events.

    Events: analysis-start, agent-start, analysis-chunk, agent-complete,
    agent-error, then exactly one of analysis-complete or error.
    """
    if not paper_content or not paper_title:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required parameters",
        )

    channel = StreamChannel()
    emitter = AnalysisStreamEmitter(orchestrator, channel, config=orchestrator.config)

    task = asyncio.create_task(emitter.run(paper_content, paper_title))
    _stream_tasks.add(task)
    task.add_done_callback(_stream_tasks.discard)
    channel.attach_producer(task)

    async def event_source():
        try:
            async for frame in channel:
                yield frame
        finally:
            # Client disconnected or stream finished; stops an unfinished producer
            channel.cancel()

    return StreamingResponse(
        event_source(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.get("/{analysis_id}", response_model=AnalysisStatusResponse)
async def get_analysis(analysis_id: str) -> AnalysisStatusResponse:
    """Get the status and results of a background analysis."""
    record = _analyses.get(analysis_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Analysis {analysis_id} not found",
        )
    return AnalysisStatusResponse(analysis_id=analysis_id, **record)
