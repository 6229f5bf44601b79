"""
Configuration for the analysis pipeline.

Centralizes model parameters, retry policy, rate limiting and stream
timeouts so they can be tuned without modifying the graph wiring.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Configuration for the analysis graph and stream.

    Attributes:
        model: Model identifier used for agent analyses
        max_tokens: Generation cap per agent call
        temperature: Sampling temperature for agent calls
        max_attempts: Total attempts per agent before degrading
        retry_multiplier: Backoff base; waits are multiplier * 2^(n-1) seconds
        retry_max_wait: Upper bound on a single backoff wait in seconds
        min_request_interval: Minimum spacing between model calls in seconds
        max_content_chars: Paper prefix length sent to the model
        agent_timeout: Per-agent budget in the stream, in seconds
        stream_timeout: Whole-stream budget, in seconds
        chunk_size: Characters per analysis-chunk event
    """

    # LLM configuration
    model: str = "gpt-4o-mini"
    max_tokens: int = 1500
    temperature: float = 0.3

    # Retry configuration (used by tenacity in agents/invoker.py)
    max_attempts: int = 3
    retry_multiplier: float = 2.0
    retry_max_wait: float = 8.0

    # Rate limiting
    min_request_interval: float = 1.0

    # Prompt limits
    max_content_chars: int = 8000

    # Streaming
    agent_timeout: float = 60.0
    stream_timeout: float = 300.0
    chunk_size: int = 500


# Default configuration instance
DEFAULT_CONFIG = AnalysisConfig()

# Environment variables that override config fields
ENV_PREFIX = "ANALYZER_"


def get_config(**overrides: Any) -> AnalysisConfig:
    """
    Create a configuration with optional overrides.

    Overrides set to None are ignored.

    Returns:
        AnalysisConfig with specified overrides applied
    """
    return replace(
        DEFAULT_CONFIG, **{k: v for k, v in overrides.items() if v is not None}
    )


def load_config(env_file: Optional[str] = None) -> AnalysisConfig:
    """
    Build a configuration from ANALYZER_* environment variables.

    Reads a .env file first when present. For example ANALYZER_MODEL or
    ANALYZER_AGENT_TIMEOUT override the matching fields.
    """
    load_dotenv(env_file)

    overrides = {}
    for f in fields(AnalysisConfig):
        raw = os.environ.get(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is None or not raw.strip():
            continue
        caster = type(getattr(DEFAULT_CONFIG, f.name))
        try:
            overrides[f.name] = caster(raw)
        except ValueError as e:
            raise ValueError(
                f"Invalid value for {ENV_PREFIX}{f.name.upper()}: {raw!r}"
            ) from e
    return get_config(**overrides)
