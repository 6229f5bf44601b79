"""
FastAPI endpoints for knowledge base search.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from analyzer.knowledge.base import KnowledgeBase
from analyzer.knowledge.mock_data import create_seeded_knowledge_base


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/knowledge", tags=["knowledge"])

_knowledge_base: Optional[KnowledgeBase] = None


def get_knowledge_base() -> KnowledgeBase:
    """Get or create the shared knowledge base."""
    global _knowledge_base
    if _knowledge_base is None:
        _knowledge_base = create_seeded_knowledge_base()
    return _knowledge_base


@router.get("/search")
async def search_knowledge(
    q: Optional[str] = Query(default=None, description="Free-text query"),
    limit: int = Query(default=10, ge=1, le=100),
    knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
) -> dict:
    """Search concept snippets ranked by relevance."""
    if not q:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter is required",
        )

    try:
        results = await knowledge_base.search(q, limit)
    except Exception as e:
        logger.exception(f"[Knowledge] Search failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search knowledge base",
        )

    return {
        "query": q,
        "results": [r.model_dump() for r in results],
        "count": len(results),
    }
