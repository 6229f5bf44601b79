"""
Paper record contract.

The shape returned by the paper store collaborator. Content is assumed to
be already extracted from the uploaded document.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field

from analyzer.shared.contracts.analysis_result import CamelModel, PaperInput


class PaperRecord(CamelModel):
    """A stored research paper."""

    paper_id: str = Field(description="Store identifier")
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    authors: Optional[List[str]] = None
    abstract: Optional[str] = None
    field: Optional[str] = Field(default=None, description="Research field")
    keywords: Optional[List[str]] = None
    upload_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_paper_input(self) -> PaperInput:
        return PaperInput(
            title=self.title,
            content=self.content,
            authors=self.authors,
            abstract=self.abstract,
        )
