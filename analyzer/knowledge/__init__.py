"""Knowledge base collaborator for concept search."""

from analyzer.knowledge.base import InMemoryKnowledgeBase, KnowledgeBase, KnowledgeChunk
from analyzer.knowledge.mock_data import create_seeded_knowledge_base

__all__ = [
    "InMemoryKnowledgeBase",
    "KnowledgeBase",
    "KnowledgeChunk",
    "create_seeded_knowledge_base",
]
