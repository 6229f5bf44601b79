"""
Routing logic for the analysis graph.

Determines whether another agent still has to run.
"""

import logging
from typing import Literal

from analyzer.graph.state import AnalysisState


logger = logging.getLogger(__name__)


def route_next_agent(
    state: AnalysisState,
) -> Literal["analyze_agent", "complete"]:
    """
    Determine the next node based on the agent cursor.

    Routing logic:
    1. If agents remain after agent_index -> analyze the next one
    2. Otherwise -> complete

    Args:
        state: Current analysis state

    Returns:
        Name of the next node to execute
    """
    session_id = state.get("session_id", "unknown")
    index = state.get("agent_index", 0)
    total = len(state.get("agent_ids", []))
    _log = f"[session={session_id}] [graph=analysis] [router=route_next_agent] "

    if index < total:
        logger.info(
            f"{_log}Routing to 'analyze_agent' | "
            f"agent={state['agent_ids'][index]}, position={index + 1}/{total}"
        )
        return "analyze_agent"

    logger.info(f"{_log}Routing to 'complete' | analyzed={index}/{total}")
    return "complete"
