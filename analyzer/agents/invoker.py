"""
Agent invoker.

Wraps one model call for one agent: prompt construction with content
truncation, a rate-limited call per attempt, exponential backoff between
attempts and scoring. Exhausted retries produce a degraded AnalysisResult
instead of an exception.
"""

import asyncio
import logging
import time
from typing import Optional, Sequence

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from analyzer.agents.prompts.builders import build_analysis_prompt
from analyzer.agents.registry import AGENT_REGISTRY, Agent, get_agent
from analyzer.agents.scoring import calculate_score
from analyzer.shared.config import DEFAULT_CONFIG, AnalysisConfig
from analyzer.shared.contracts.analysis_result import AnalysisResult
from analyzer.shared.llm.client import ModelClient
from analyzer.shared.llm.rate_limiter import RateLimiter, Sleeper


logger = logging.getLogger(__name__)


class AgentInvoker:
    """
    Runs single-agent analyses against a model client.

    Args:
        model_client: Collaborator that produces text from prompts
        rate_limiter: Limiter acquired before every attempt
        agents: Registry to resolve agent ids against
        config: Model, retry and truncation settings
        sleep: Backoff sleep function (injectable for tests)
    """

    def __init__(
        self,
        model_client: ModelClient,
        rate_limiter: Optional[RateLimiter] = None,
        agents: Sequence[Agent] = AGENT_REGISTRY,
        config: AnalysisConfig = DEFAULT_CONFIG,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.model_client = model_client
        self.rate_limiter = rate_limiter or RateLimiter(config.min_request_interval)
        self.agents = tuple(agents)
        self.config = config
        self._sleep = sleep

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=self.config.retry_multiplier,
                max=self.config.retry_max_wait,
            ),
            retry=retry_if_exception_type((Exception,)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )

    async def _call_model(self, agent: Agent, user_prompt: str) -> str:
        await self.rate_limiter.acquire()
        return await self.model_client.generate(
            system_prompt=agent.system_prompt,
            user_prompt=user_prompt,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )

    async def invoke(
        self,
        agent_id: str,
        paper_content: str,
        paper_title: str,
        session_id: str = "unknown",
    ) -> AnalysisResult:
        """
        Analyze a paper with one agent.

        Args:
            agent_id: Registry id of the agent
            paper_content: Extracted paper text (truncated before prompting)
            paper_title: Paper title
            session_id: Identifier used in log lines

        Returns:
            A scored AnalysisResult, or a degraded one (score 0) when all
            attempts failed.

        Raises:
            UnknownAgentError: If agent_id is not in the registry.
        """
        agent = get_agent(agent_id, self.agents)
        _log = f"[session={session_id}] [graph=analysis] [agent={agent.id}] "

        user_prompt = build_analysis_prompt(
            paper_title, paper_content, self.config.max_content_chars
        )
        logger.info(
            f"{_log}Invoking agent | model={self.config.model}, "
            f"content_chars={len(paper_content)}, prompt_chars={len(user_prompt)}"
        )

        start_time = time.perf_counter()
        try:
            async for attempt in self._retrying():
                with attempt:
                    text = await self._call_model(agent, user_prompt)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{_log}Analysis failed after {self.config.max_attempts} attempts "
                f"| duration={duration_ms:.0f}ms, error={e}"
            )
            return AnalysisResult.failure(
                agent_id=agent.id,
                agent_name=agent.name,
                analysis=(
                    f"Analysis failed after {self.config.max_attempts} attempts. "
                    f"Error: {str(e) or 'Unknown error'}"
                ),
                error=str(e) or type(e).__name__,
            )

        score = calculate_score(text)
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{_log}Agent responded | duration={duration_ms:.0f}ms, "
            f"chars={len(text)}, score={score:.2f}"
        )

        return AnalysisResult(
            agent_id=agent.id,
            agent_name=agent.name,
            analysis=text,
            score=score,
        )
