"""
Analysis graph construction.

Builds the graph that runs every registered agent over one paper, one
agent per step. Agents never run concurrently: they share a single rate
limiter cursor and their backoff waits must not interleave.
"""

import logging
from typing import Any, Dict

from langgraph.graph import END, StateGraph

from analyzer.agents.invoker import AgentInvoker
from analyzer.graph.router import route_next_agent
from analyzer.graph.state import AnalysisState
from analyzer.shared.contracts.analysis_result import AnalysisResult
from analyzer.shared.logging.config import log_analysis_event


logger = logging.getLogger(__name__)

_ROUTES = {
    "analyze_agent": "analyze_agent",
    "complete": "complete",
}


def create_analysis_graph(invoker: AgentInvoker):
    """
    Create and compile the analysis graph.

    The graph structure is:
        Entry -> route_next_agent
          -> "analyze_agent" -> analyze_agent -> route_next_agent
          -> "complete"      -> complete_node -> END

    Args:
        invoker: Runs a single agent's analysis

    Returns:
        Compiled LangGraph application ready for execution.
    """
    agent_names = {agent.id: agent.name for agent in invoker.agents}

    async def _analyze_agent(state: AnalysisState) -> Dict[str, Any]:
        """
        Run the agent under the cursor and advance the cursor.

        The invoker already turns model failures into degraded results;
        anything else that escapes is converted here so the batch goes on.
        """
        session_id = state.get("session_id") or "unknown"
        index = state["agent_index"]
        agent_id = state["agent_ids"][index]
        _log = f"[session={session_id}] [graph=analysis] [node=analyze_agent] "

        logger.info(f"{_log}Entering node | agent={agent_id}, index={index}")

        try:
            result = await invoker.invoke(
                agent_id,
                state["paper_content"],
                state["paper_title"],
                session_id=session_id,
            )
        except Exception as e:
            logger.exception(f"{_log}Agent {agent_id} failed: {e}")
            result = AnalysisResult.failure(
                agent_id=agent_id,
                agent_name=agent_names.get(agent_id, agent_id),
                analysis=f"Analysis failed: {str(e) or 'Unknown error'}",
                error=str(e) or type(e).__name__,
            )

        status = "degraded" if result.degraded else "complete"
        log_analysis_event(
            "agent_complete",
            state,
            extra={"agent_id": agent_id, "status": status, "score": result.score},
            logger=logger,
        )

        return {
            "agent_index": index + 1,
            "results": [result],
            "messages": [
                {
                    "role": "system",
                    "agent": agent_id,
                    "content": f"{result.agent_name} analysis {status} (score={result.score:.2f})",
                }
            ],
        }

    def _complete_node(state: AnalysisState) -> Dict[str, Any]:
        """Final node that records the outcome of the batch."""
        session_id = state.get("session_id") or "unknown"
        _log = f"[session={session_id}] [graph=analysis] [node=complete] "

        results = state.get("results", [])
        degraded = sum(1 for r in results if r.degraded)
        logger.info(
            f"{_log}Analysis complete | results={len(results)}, "
            f"degraded={degraded} -> END"
        )

        return {
            "messages": [
                {
                    "role": "system",
                    "agent": "orchestrator",
                    "content": (
                        f"Analysis complete. {len(results) - degraded} of "
                        f"{len(results)} agents succeeded."
                    ),
                }
            ],
        }

    graph = StateGraph(AnalysisState)

    graph.add_node("analyze_agent", _analyze_agent)
    graph.add_node("complete", _complete_node)

    graph.set_conditional_entry_point(route_next_agent, _ROUTES)
    graph.add_conditional_edges("analyze_agent", route_next_agent, _ROUTES)
    graph.add_edge("complete", END)

    return graph.compile()
