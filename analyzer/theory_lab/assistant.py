"""
Theory lab assistant.

Conversational physics help backed by the knowledge base. Model calls go
through the same rate limiter as the analysis agents.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from analyzer.knowledge.base import KnowledgeBase
from analyzer.shared.llm.client import ModelClient
from analyzer.shared.llm.rate_limiter import RateLimiter
from analyzer.theory_lab.prompts import (
    EXPLAIN_SYSTEM_PROMPT,
    build_explain_prompt,
    build_theory_lab_system_prompt,
    format_history,
    format_knowledge,
)


logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    """Assistant reply plus whether knowledge base context was used."""

    response: str
    knowledge_used: bool


class TheoryLabAssistant:
    """
    Answers research questions and explains concepts.

    Args:
        model_client: Model collaborator
        knowledge_base: Concept search collaborator
        rate_limiter: Limiter shared with the analysis agents
    """

    CHAT_TEMPERATURE = 0.7
    CHAT_MAX_TOKENS = 1000
    CHAT_KNOWLEDGE_LIMIT = 5

    EXPLAIN_TEMPERATURE = 0.3
    EXPLAIN_MAX_TOKENS = 1500
    EXPLAIN_KNOWLEDGE_LIMIT = 3

    def __init__(
        self,
        model_client: ModelClient,
        knowledge_base: KnowledgeBase,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.model_client = model_client
        self.knowledge_base = knowledge_base
        self.rate_limiter = rate_limiter or RateLimiter()

    async def respond(
        self, message: str, history: Optional[List[dict]] = None
    ) -> ChatReply:
        """
        Reply to a chat message.

        A failing knowledge search is logged and the reply is produced
        from general knowledge alone.
        """
        knowledge = ""
        try:
            chunks = await self.knowledge_base.search(message, self.CHAT_KNOWLEDGE_LIMIT)
            knowledge = format_knowledge(chunks)
        except Exception as e:
            logger.warning(
                f"[TheoryLab] Knowledge search failed, continuing without context: {e}"
            )

        system_prompt = build_theory_lab_system_prompt(
            knowledge=knowledge, history=format_history(history)
        )

        await self.rate_limiter.acquire()
        text = await self.model_client.generate(
            system_prompt=system_prompt,
            user_prompt=message,
            max_tokens=self.CHAT_MAX_TOKENS,
            temperature=self.CHAT_TEMPERATURE,
        )
        logger.info(
            f"[TheoryLab] Replied | knowledge_used={bool(knowledge)}, chars={len(text)}"
        )
        return ChatReply(response=text, knowledge_used=bool(knowledge))

    async def explain_concept(self, concept: str) -> str:
        """Explain a concept using up to three knowledge snippets as context."""
        chunks = await self.knowledge_base.search(concept, self.EXPLAIN_KNOWLEDGE_LIMIT)

        await self.rate_limiter.acquire()
        return await self.model_client.generate(
            system_prompt=EXPLAIN_SYSTEM_PROMPT,
            user_prompt=build_explain_prompt(concept, chunks),
            max_tokens=self.EXPLAIN_MAX_TOKENS,
            temperature=self.EXPLAIN_TEMPERATURE,
        )
