"""
FastAPI endpoints for the theory lab.

  POST /api/chat/theory-lab     -- Chat with the physics assistant
  POST /api/chat/export         -- Download a chat transcript
  POST /api/knowledge/explain   -- Explain a physics concept
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from analyzer.graph.analysis_api import get_orchestrator
from analyzer.graph.orchestrator import AgentOrchestrator
from analyzer.knowledge.base import KnowledgeBase
from analyzer.knowledge.knowledge_api import get_knowledge_base
from analyzer.shared.errors import ValidationError
from analyzer.theory_lab.assistant import TheoryLabAssistant
from analyzer.theory_lab.export import (
    build_json_export,
    build_text_export,
    export_filename,
)


logger = logging.getLogger(__name__)

router = APIRouter(tags=["theory-lab"])


def get_assistant(
    orchestrator: AgentOrchestrator = Depends(get_orchestrator),
    knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
) -> TheoryLabAssistant:
    """Assistant sharing the orchestrator's model client and rate limiter."""
    return TheoryLabAssistant(
        model_client=orchestrator.model_client,
        knowledge_base=knowledge_base,
        rate_limiter=orchestrator.rate_limiter,
    )


# ============================================================================
# Request Models
# ============================================================================


class ChatMessage(BaseModel):
    role: str = Field(description="'user' or 'assistant'")
    content: str
    timestamp: Optional[str] = None


class TheoryLabChatRequest(BaseModel):
    message: Optional[str] = None
    history: List[ChatMessage] = Field(default_factory=list)


class ExplainRequest(BaseModel):
    concept: Optional[str] = None


class ExportRequest(BaseModel):
    messages: Optional[List[Dict[str, Any]]] = None
    format: str = Field(default="txt", description="'txt' or 'json'")


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/api/chat/theory-lab")
async def theory_lab_chat(
    request: TheoryLabChatRequest,
    assistant: TheoryLabAssistant = Depends(get_assistant),
) -> dict:
    """Reply to a research question, using knowledge base context when found."""
    if not request.message:
        raise ValidationError("Message is required")

    try:
        reply = await assistant.respond(
            request.message, [m.model_dump() for m in request.history]
        )
    except Exception as e:
        logger.exception(f"[TheoryLab] Chat failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate response",
        )

    return {"response": reply.response, "knowledgeUsed": reply.knowledge_used}


@router.post("/api/knowledge/explain")
async def explain_concept(
    request: ExplainRequest,
    assistant: TheoryLabAssistant = Depends(get_assistant),
) -> dict:
    """Explain a physics concept."""
    if not request.concept:
        raise ValidationError("Concept is required")

    try:
        explanation = await assistant.explain_concept(request.concept)
    except Exception as e:
        logger.exception(f"[TheoryLab] Explanation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate explanation",
        )

    return {
        "concept": request.concept,
        "explanation": explanation,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/api/chat/export")
async def export_chat(request: ExportRequest):
    """Export a chat transcript as a JSON document or plain text."""
    if request.messages is None:
        raise ValidationError("Messages array is required")

    exported_at = datetime.now(timezone.utc)

    if request.format == "json":
        return JSONResponse(
            build_json_export(request.messages, exported_at),
            headers={
                "Content-Disposition": (
                    f'attachment; filename="{export_filename(exported_at, "json")}"'
                )
            },
        )

    return PlainTextResponse(
        build_text_export(request.messages, exported_at),
        headers={
            "Content-Disposition": (
                f'attachment; filename="{export_filename(exported_at, "txt")}"'
            )
        },
    )
