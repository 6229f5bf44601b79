"""
Error taxonomy for the analysis service.

Request validation errors surface as client errors; everything raised
inside the agent loop is converted to data before it reaches a caller.
"""


class AnalyzerError(Exception):
    """Base class for all analyzer errors."""


class ValidationError(AnalyzerError):
    """Raised when a request is missing fields or is malformed."""


class UnknownAgentError(AnalyzerError):
    """Raised when an agent id is not present in the registry."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"Agent {agent_id} not found")


class TransientModelError(AnalyzerError):
    """Raised when a model call fails in a way that may succeed on retry."""


class AnalysisTimeoutError(AnalyzerError):
    """Raised when an agent or a whole stream exceeds its time budget."""
