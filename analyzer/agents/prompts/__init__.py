"""Prompt templates and builders for the analysis agents."""

from analyzer.agents.prompts.builders import build_analysis_prompt, truncate_content
from analyzer.agents.prompts.templates import (
    ANALYSIS_USER_PROMPT_TEMPLATE,
    EPISTEMIC_ANALYST_PROMPT,
    EXPERIMENTAL_PHYSICIST_PROMPT,
    PEER_REVIEWER_PROMPT,
    THEORETICAL_PHYSICIST_PROMPT,
    TRUNCATION_MARKER,
)

__all__ = [
    "ANALYSIS_USER_PROMPT_TEMPLATE",
    "EPISTEMIC_ANALYST_PROMPT",
    "EXPERIMENTAL_PHYSICIST_PROMPT",
    "PEER_REVIEWER_PROMPT",
    "THEORETICAL_PHYSICIST_PROMPT",
    "TRUNCATION_MARKER",
    "build_analysis_prompt",
    "truncate_content",
]
