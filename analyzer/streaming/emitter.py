"""
Stream emitter for live multi-agent analysis.

Drives the agents one by one and reports progress as stream events.
Two independent time budgets apply: one per agent, racing that agent's
invocation, and one for the whole stream. A timed-out agent becomes an
agent-error and the loop moves on; a timed-out stream ends with a single
error event.

The races use asyncio.wait_for, so the losing invocation is cancelled at
its next suspension point and whatever it would have produced is
discarded.
"""

import asyncio
import logging
import math
import uuid
from typing import Awaitable, List, Optional, TypeVar

from analyzer.graph.orchestrator import AgentOrchestrator
from analyzer.shared.config import DEFAULT_CONFIG, AnalysisConfig
from analyzer.shared.contracts.stream_events import (
    AgentCompleteEvent,
    AgentErrorEvent,
    AgentStartEvent,
    AnalysisChunkEvent,
    AnalysisCompleteEvent,
    AnalysisStartEvent,
    ErrorEvent,
    StreamEvent,
)
from analyzer.shared.errors import AnalysisTimeoutError
from analyzer.streaming.channel import StreamChannel


logger = logging.getLogger(__name__)

AGENT_TIMEOUT_MESSAGE = "Agent timeout"
STREAM_TIMEOUT_MESSAGE = "Analysis timeout"

T = TypeVar("T")


def split_chunks(text: str, size: int = 500) -> List[str]:
    """Split text into consecutive pieces of at most size characters."""
    return [text[i:i + size] for i in range(0, len(text), size)] or [text]


def progress_percent(index: int, total: int) -> int:
    """Percentage of agents started before index, rounded half up."""
    if total <= 0:
        return 0
    return math.floor(100 * index / total + 0.5)


async def _race(awaitable: Awaitable[T], timeout: float, message: str) -> T:
    """Await with a deadline; the loser is cancelled."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise AnalysisTimeoutError(message) from e


class AnalysisStreamEmitter:
    """
    Turns one paper analysis into an ordered event feed.

    Args:
        orchestrator: Provides the agent list and single-agent analysis
        channel: Destination for events
        config: Supplies agent_timeout, stream_timeout and chunk_size
        session_id: Identifier used in log lines
    """

    def __init__(
        self,
        orchestrator: AgentOrchestrator,
        channel: StreamChannel,
        config: AnalysisConfig = DEFAULT_CONFIG,
        session_id: Optional[str] = None,
    ):
        self.orchestrator = orchestrator
        self.channel = channel
        self.config = config
        self.session_id = session_id or str(uuid.uuid4())
        self._log = f"[session={self.session_id}] [graph=analysis] [stream] "

    def _emit(self, event: StreamEvent) -> bool:
        return self.channel.emit(event)

    async def run(self, paper_content: str, paper_title: str) -> None:
        """
        Stream a full analysis into the channel, then close it.

        Never raises for agent or timeout failures; the channel always
        receives at most one terminal event and is always closed.
        """
        logger.info(
            f"{self._log}Stream starting | title={paper_title!r}, "
            f"agent_timeout={self.config.agent_timeout}s, "
            f"stream_timeout={self.config.stream_timeout}s"
        )
        try:
            await _race(
                self._drive(paper_content, paper_title),
                self.config.stream_timeout,
                STREAM_TIMEOUT_MESSAGE,
            )
        except AnalysisTimeoutError as e:
            logger.warning(
                f"{self._log}Stream exceeded {self.config.stream_timeout}s"
            )
            self._emit(ErrorEvent(error=str(e)))
        except asyncio.CancelledError:
            logger.info(f"{self._log}Stream producer cancelled")
            raise
        except Exception as e:
            logger.exception(f"{self._log}Stream error: {e}")
            self._emit(ErrorEvent(error=str(e) or "Analysis failed"))
        finally:
            self.channel.close()
            logger.info(f"{self._log}Stream closed | events={len(self.channel.sent)}")

    async def _drive(self, paper_content: str, paper_title: str) -> None:
        agents = self.orchestrator.get_agents()
        total = len(agents)

        self._emit(AnalysisStartEvent(total_agents=total))

        for index, agent in enumerate(agents):
            if self.channel.completed:
                logger.info(f"{self._log}Stream completed early, stopping at {agent.id}")
                return

            self._emit(
                AgentStartEvent(
                    agent_id=agent.id,
                    agent_name=agent.name,
                    progress=progress_percent(index, total),
                )
            )

            try:
                result = await _race(
                    self.orchestrator.analyze_with_agent(
                        agent.id,
                        paper_content,
                        paper_title,
                        session_id=self.session_id,
                    ),
                    self.config.agent_timeout,
                    AGENT_TIMEOUT_MESSAGE,
                )
            except AnalysisTimeoutError as e:
                logger.warning(
                    f"{self._log}Agent {agent.id} exceeded {self.config.agent_timeout}s"
                )
                self._emit(AgentErrorEvent(agent_id=agent.id, error=str(e)))
                continue
            except Exception as e:
                logger.exception(f"{self._log}Agent {agent.id} failed: {e}")
                self._emit(
                    AgentErrorEvent(agent_id=agent.id, error=str(e) or "Analysis failed")
                )
                continue

            if result.degraded:
                self._emit(AgentErrorEvent(agent_id=agent.id, error=result.analysis))
                continue

            for chunk in split_chunks(result.analysis, self.config.chunk_size):
                if not self._emit(AnalysisChunkEvent(agent_id=agent.id, chunk=chunk)):
                    return

            self._emit(AgentCompleteEvent(agent_id=agent.id, agent_name=agent.name))

        self._emit(AnalysisCompleteEvent())
