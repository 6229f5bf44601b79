"""
Paper store collaborator.

The analysis core only reads papers by id. The in-memory store stands in
for a document database; content is expected to be already extracted.
"""

import logging
import uuid
from typing import Dict, List, Optional, Protocol, runtime_checkable

from analyzer.shared.contracts.paper import PaperRecord


logger = logging.getLogger(__name__)


@runtime_checkable
class PaperStore(Protocol):
    """Read-only lookup by paper id, plus registration of new papers."""

    async def get(self, paper_id: str) -> Optional[PaperRecord]: ...

    async def add(
        self,
        title: str,
        content: str,
        authors: Optional[List[str]] = None,
        abstract: Optional[str] = None,
        field: Optional[str] = None,
        keywords: Optional[List[str]] = None,
    ) -> PaperRecord: ...


class InMemoryPaperStore:
    """Process-local paper store (replace with a database in production)."""

    def __init__(self) -> None:
        self._papers: Dict[str, PaperRecord] = {}

    def __len__(self) -> int:
        return len(self._papers)

    async def get(self, paper_id: str) -> Optional[PaperRecord]:
        return self._papers.get(paper_id)

    async def add(
        self,
        title: str,
        content: str,
        authors: Optional[List[str]] = None,
        abstract: Optional[str] = None,
        field: Optional[str] = None,
        keywords: Optional[List[str]] = None,
    ) -> PaperRecord:
        paper = PaperRecord(
            paper_id=str(uuid.uuid4()),
            title=title,
            content=content,
            authors=authors,
            abstract=abstract,
            field=field,
            keywords=keywords,
        )
        self._papers[paper.paper_id] = paper
        logger.info(f"[PaperStore] Stored paper {paper.paper_id} | title={title!r}")
        return paper
