"""LLM client utilities."""

from analyzer.shared.llm.client import (
    ModelClient,
    OpenAIModelClient,
    get_cached_client,
)
from analyzer.shared.llm.rate_limiter import RateLimiter

__all__ = ["ModelClient", "OpenAIModelClient", "RateLimiter", "get_cached_client"]
