"""
Static agent registry.

Agents are configuration records, not types: an id, a display name, a
role and the system prompt that sets the persona.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from analyzer.agents.prompts.templates import (
    EPISTEMIC_ANALYST_PROMPT,
    EXPERIMENTAL_PHYSICIST_PROMPT,
    PEER_REVIEWER_PROMPT,
    THEORETICAL_PHYSICIST_PROMPT,
)
from analyzer.shared.errors import UnknownAgentError


@dataclass(frozen=True)
class Agent:
    """An analysis persona."""

    id: str
    name: str
    role: str
    system_prompt: str

    def to_dict(self) -> Dict[str, str]:
        """Serialize for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "systemPrompt": self.system_prompt,
        }


AGENT_REGISTRY: Tuple[Agent, ...] = (
    Agent(
        id="theoretical-physicist",
        name="Theoretical Physicist",
        role="Theory Analysis",
        system_prompt=THEORETICAL_PHYSICIST_PROMPT,
    ),
    Agent(
        id="experimental-physicist",
        name="Experimental Physicist",
        role="Experimental Design",
        system_prompt=EXPERIMENTAL_PHYSICIST_PROMPT,
    ),
    Agent(
        id="peer-reviewer",
        name="Peer Reviewer",
        role="Academic Review",
        system_prompt=PEER_REVIEWER_PROMPT,
    ),
    Agent(
        id="epistemic-analyst",
        name="Epistemic Analyst",
        role="Paradigm Analysis",
        system_prompt=EPISTEMIC_ANALYST_PROMPT,
    ),
)


def get_agent(agent_id: str, agents: Sequence[Agent] = AGENT_REGISTRY) -> Agent:
    """
    Look up an agent by id.

    Raises:
        UnknownAgentError: If no agent has this id.
    """
    for agent in agents:
        if agent.id == agent_id:
            return agent
    raise UnknownAgentError(agent_id)
