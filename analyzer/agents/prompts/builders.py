"""
Prompt builders for the analysis agents.

These functions construct the user prompt sent to the model for one
paper.
"""

from analyzer.agents.prompts.templates import (
    ANALYSIS_USER_PROMPT_TEMPLATE,
    TRUNCATION_MARKER,
)


def truncate_content(paper_content: str, max_chars: int = 8000) -> str:
    """
    Cut paper content to a bounded prefix.

    Args:
        paper_content: Full extracted paper text
        max_chars: Maximum number of characters kept

    Returns:
        The content unchanged if it fits, otherwise the first max_chars
        characters followed by the truncation marker.
    """
    if len(paper_content) <= max_chars:
        return paper_content
    return paper_content[:max_chars] + TRUNCATION_MARKER


def build_analysis_prompt(
    paper_title: str, paper_content: str, max_chars: int = 8000
) -> str:
    """Build the user prompt for a single agent analysis."""
    return ANALYSIS_USER_PROMPT_TEMPLATE.format(
        paper_title=paper_title,
        paper_content=truncate_content(paper_content, max_chars),
    )
