"""
Analysis graph state schema.

Defines the state that flows through the analysis graph: the paper under
review, a cursor into the agent list and the accumulated results.
"""

import operator
from typing import Annotated, List, Optional, TypedDict

from analyzer.shared.contracts.analysis_result import AnalysisResult


class AnalysisState(TypedDict):
    """
    State schema for the analysis graph.

    Results and messages are append-only (operator.add); each node visit
    contributes one result and advances agent_index by one.
    """

    # Paper under review
    paper_title: str
    paper_content: str

    # Agent sequencing
    agent_ids: List[str]
    agent_index: int

    # Accumulated output
    results: Annotated[List[AnalysisResult], operator.add]
    messages: Annotated[List[dict], operator.add]

    # Session tracking
    session_id: Optional[str]
