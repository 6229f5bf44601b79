"""
Analysis agents.

- registry: the fixed set of agent personas
- invoker: one rate-limited, retried model call per agent
- scoring: heuristic quality score for agent output
- prompts/: system and user prompt templates
"""

from analyzer.agents.invoker import AgentInvoker
from analyzer.agents.registry import AGENT_REGISTRY, Agent, get_agent
from analyzer.agents.scoring import calculate_score

__all__ = ["AGENT_REGISTRY", "Agent", "AgentInvoker", "calculate_score", "get_agent"]
