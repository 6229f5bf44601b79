"""
OpenAI model client.

Provides a cached async OpenAI client and the ModelClient collaborator
the agents and the theory lab call. Retries are applied by the callers
(see agents/invoker.py) so each attempt can pass through the rate limiter.
"""

import os
from typing import Optional, Protocol, runtime_checkable

from dotenv import load_dotenv
from openai import AsyncOpenAI, OpenAIError

from analyzer.shared.errors import TransientModelError

load_dotenv()

DEFAULT_MODEL = "gpt-4o-mini"

# Module-level cache for the OpenAI client
_client: Optional[AsyncOpenAI] = None


def get_cached_client() -> AsyncOpenAI:
    """
    Returns a cached instance of the async OpenAI client.

    Uses the OPENAI_API_KEY environment variable for authentication.
    The client is created once and reused for all subsequent calls.
    """
    global _client
    if _client is None:
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ValueError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please set it to your OpenAI API key."
            )
        _client = AsyncOpenAI(api_key=api_key)
    return _client


@runtime_checkable
class ModelClient(Protocol):
    """Anything that turns a system prompt and a user prompt into text."""

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str: ...


class OpenAIModelClient:
    """
    ModelClient backed by the OpenAI Chat Completions API.

    SDK failures are re-raised as TransientModelError.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = get_cached_client()
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 1500,
        temperature: float = 0.3,
    ) -> str:
        """
        Call the Chat Completions API once.

        Args:
            system_prompt: The system message content
            user_prompt: The user message content
            max_tokens: Generation cap
            temperature: Sampling temperature

        Returns:
            The assistant's response content as a string.

        Raises:
            TransientModelError: If the API call fails or returns no content.
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as e:
            raise TransientModelError(str(e)) from e

        content = response.choices[0].message.content
        if content is None:
            raise TransientModelError("Model returned an empty response")
        return content.strip()
