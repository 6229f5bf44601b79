"""
FastAPI endpoints for the paper store.

Papers are registered with their content already extracted.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from analyzer.papers.store import InMemoryPaperStore, PaperStore
from analyzer.shared.contracts.analysis_result import CamelModel
from analyzer.shared.contracts.paper import PaperRecord


router = APIRouter(prefix="/api/papers", tags=["papers"])

_store: Optional[InMemoryPaperStore] = None


def get_paper_store() -> PaperStore:
    """Get or create the shared paper store."""
    global _store
    if _store is None:
        _store = InMemoryPaperStore()
    return _store


class AddPaperRequest(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    authors: Optional[List[str]] = None
    abstract: Optional[str] = None
    field: Optional[str] = None
    keywords: Optional[List[str]] = None


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_paper(
    request: AddPaperRequest,
    store: PaperStore = Depends(get_paper_store),
) -> dict:
    """Register a paper and return its id."""
    paper = await store.add(**request.model_dump())
    return {"paperId": paper.paper_id, "title": paper.title}


@router.get("/{paper_id}", response_model=PaperRecord)
async def get_paper(
    paper_id: str,
    store: PaperStore = Depends(get_paper_store),
) -> PaperRecord:
    """Look up a paper by id."""
    paper = await store.get(paper_id)
    if paper is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Paper not found"
        )
    return paper
