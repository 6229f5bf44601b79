"""
Multi-agent research paper analyzer.

This package contains:
- shared/: Common infrastructure (model client, rate limiter, logging, contracts, config)
- agents/: Agent registry, invoker and scoring
- graph/: Analysis orchestrator graph and HTTP endpoints
- streaming/: Server-sent event channel and emitter
- papers/: Paper store collaborator
- knowledge/: Knowledge base collaborator
- theory_lab/: Conversational physics assistant
"""

from analyzer.graph.orchestrator import AgentOrchestrator
from analyzer.streaming.emitter import AnalysisStreamEmitter

__all__ = ["AgentOrchestrator", "AnalysisStreamEmitter"]
