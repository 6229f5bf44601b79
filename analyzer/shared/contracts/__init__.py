"""Data contracts shared by the orchestrator, stream and API layers."""

from analyzer.shared.contracts.analysis_result import (
    AnalysisRequest,
    AnalysisResult,
    PaperInput,
)
from analyzer.shared.contracts.paper import PaperRecord
from analyzer.shared.contracts.stream_events import StreamEvent, format_sse

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "PaperInput",
    "PaperRecord",
    "StreamEvent",
    "format_sse",
]
