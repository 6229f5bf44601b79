"""
Agent orchestrator.

Owns the agent registry, the rate limiter and the invoker, and runs the
analysis graph for a paper.
"""

import asyncio
import logging
import uuid
from typing import List, Optional, Sequence

from analyzer.agents.invoker import AgentInvoker
from analyzer.agents.registry import AGENT_REGISTRY, Agent
from analyzer.graph.build import create_analysis_graph
from analyzer.shared.config import DEFAULT_CONFIG, AnalysisConfig
from analyzer.shared.contracts.analysis_result import AnalysisResult
from analyzer.shared.llm.client import ModelClient, OpenAIModelClient
from analyzer.shared.llm.rate_limiter import RateLimiter, Sleeper


logger = logging.getLogger(__name__)


class AgentOrchestrator:
    """
    Sequences the agent registry through the invoker.

    Usage:
        orchestrator = AgentOrchestrator(model_client=OpenAIModelClient())
        results = await orchestrator.run_all(content, title)

    Args:
        model_client: Model collaborator. Defaults to OpenAI with config.model.
        config: Pipeline configuration
        agents: Agent registry to run, in order
        rate_limiter: Shared limiter. Defaults to one built from config.
        sleep: Backoff sleep function (injectable for tests)
    """

    def __init__(
        self,
        model_client: Optional[ModelClient] = None,
        config: AnalysisConfig = DEFAULT_CONFIG,
        agents: Sequence[Agent] = AGENT_REGISTRY,
        rate_limiter: Optional[RateLimiter] = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.config = config
        self.model_client = model_client or OpenAIModelClient(model=config.model)
        self.rate_limiter = rate_limiter or RateLimiter(config.min_request_interval)
        self.invoker = AgentInvoker(
            model_client=self.model_client,
            rate_limiter=self.rate_limiter,
            agents=agents,
            config=config,
            sleep=sleep,
        )
        self._graph = None

    @property
    def graph(self):
        """Compiled analysis graph, built on first use."""
        if self._graph is None:
            self._graph = create_analysis_graph(self.invoker)
        return self._graph

    def get_agents(self) -> List[Agent]:
        """Return a copy of the registry; mutating it has no effect here."""
        return list(self.invoker.agents)

    async def analyze_with_agent(
        self,
        agent_id: str,
        paper_content: str,
        paper_title: str,
        session_id: str = "unknown",
    ) -> AnalysisResult:
        """Run a single agent. See AgentInvoker.invoke."""
        return await self.invoker.invoke(
            agent_id, paper_content, paper_title, session_id=session_id
        )

    async def run_all(
        self,
        paper_content: str,
        paper_title: str,
        session_id: Optional[str] = None,
    ) -> List[AnalysisResult]:
        """
        Analyze a paper with every agent, one after another.

        Returns:
            One AnalysisResult per registered agent, in registry order.
            Failed agents are represented by degraded results.
        """
        session_id = session_id or str(uuid.uuid4())
        agent_ids = [agent.id for agent in self.invoker.agents]
        _log = f"[session={session_id}] [graph=analysis] [api=run_all] "

        logger.info(
            f"{_log}Analysis starting | title={paper_title!r}, "
            f"agents={len(agent_ids)}, content_chars={len(paper_content)}"
        )

        initial_state = {
            "paper_title": paper_title,
            "paper_content": paper_content,
            "agent_ids": agent_ids,
            "agent_index": 0,
            "results": [],
            "messages": [
                {
                    "role": "system",
                    "agent": "orchestrator",
                    "content": f"Analysis started for {paper_title}",
                }
            ],
            "session_id": session_id,
        }

        final_state = await self.graph.ainvoke(
            initial_state,
            config={"recursion_limit": 2 * len(agent_ids) + 5},
        )
        results = final_state.get("results", [])
        messages = final_state.get("messages", [])

        for message in messages[:-1]:
            logger.debug(f"{_log}[{message['agent']}] {message['content']}")
        summary = messages[-1]["content"] if messages else "no summary"
        logger.info(
            f"{_log}Analysis finished | results={len(results)}, "
            f"degraded={sum(1 for r in results if r.degraded)} | {summary}"
        )
        return results
