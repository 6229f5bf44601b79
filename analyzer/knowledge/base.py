"""
Knowledge base collaborator.

Returns ranked physics concept snippets for a free-text query. Only the
explanation and theory lab endpoints use it; the analysis core does not.
The in-memory implementation ranks by term overlap and stands in for a
vector store.
"""

import logging
import re
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9]+")


class KnowledgeChunk(BaseModel):
    """A single concept snippet."""

    content: str = Field(description="Snippet text")
    title: str = Field(default="", description="Concept name")
    domain: Optional[str] = Field(default=None, description="Physics domain")
    subdomain: Optional[str] = Field(default=None)
    difficulty: Optional[str] = Field(
        default=None, description="beginner, intermediate or advanced"
    )
    source_document: Optional[str] = Field(default=None)
    concepts: List[str] = Field(default_factory=list)


@runtime_checkable
class KnowledgeBase(Protocol):
    """Ranked concept search."""

    async def search(self, query: str, limit: int = 10) -> List[KnowledgeChunk]: ...


def _tokens(text: str) -> set:
    return set(_TOKEN_RE.findall(text.lower()))


class InMemoryKnowledgeBase:
    """Term-overlap search over a fixed list of chunks."""

    def __init__(self, chunks: Iterable[KnowledgeChunk] = ()):
        self._chunks = list(chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def add(self, chunk: KnowledgeChunk) -> None:
        self._chunks.append(chunk)

    async def search(self, query: str, limit: int = 10) -> List[KnowledgeChunk]:
        """
        Rank chunks by how many query terms they contain.

        Chunks with no overlap are not returned. Ties keep insertion order.
        """
        query_terms = _tokens(query)
        if not query_terms or limit <= 0:
            return []

        scored = []
        for position, chunk in enumerate(self._chunks):
            haystack = _tokens(
                " ".join([chunk.title, chunk.content, *chunk.concepts])
            )
            overlap = len(query_terms & haystack)
            if overlap:
                scored.append((-overlap, position, chunk))

        scored.sort(key=lambda item: (item[0], item[1]))
        results = [chunk for _, _, chunk in scored[:limit]]
        logger.debug(f"[Knowledge] query={query!r} matches={len(scored)} returned={len(results)}")
        return results
