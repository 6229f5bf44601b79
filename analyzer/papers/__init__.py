"""Paper storage collaborator."""

from analyzer.papers.store import InMemoryPaperStore, PaperStore

__all__ = ["InMemoryPaperStore", "PaperStore"]
