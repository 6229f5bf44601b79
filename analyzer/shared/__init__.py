"""
Shared infrastructure for the analysis service.

Modules:
- llm: OpenAI model client and rate limiter
- logging: Structured JSON logging
- contracts: Result, paper and stream event contracts
- errors: Error taxonomy
"""

from analyzer.shared.llm.client import OpenAIModelClient, get_cached_client
from analyzer.shared.llm.rate_limiter import RateLimiter
from analyzer.shared.logging.config import log_analysis_event, setup_logging

__all__ = [
    "OpenAIModelClient",
    "RateLimiter",
    "get_cached_client",
    "log_analysis_event",
    "setup_logging",
]
