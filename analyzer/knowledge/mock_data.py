"""
Seed concepts for the in-memory knowledge base.

A small hand-written set so the explanation and theory lab endpoints
have context without an external vector store.
"""

from typing import List

from analyzer.knowledge.base import InMemoryKnowledgeBase, KnowledgeChunk


SEED_CHUNKS: List[KnowledgeChunk] = [
    KnowledgeChunk(
        title="Heisenberg uncertainty principle",
        content=(
            "The product of the uncertainties in position and momentum of a "
            "particle is bounded below by hbar/2. It follows from the "
            "non-commutation of the position and momentum operators."
        ),
        domain="Quantum Mechanics",
        subdomain="Foundations",
        difficulty="intermediate",
        concepts=["uncertainty", "commutator", "momentum", "position"],
    ),
    KnowledgeChunk(
        title="Noether's theorem",
        content=(
            "Every continuous symmetry of the action corresponds to a conserved "
            "quantity: time translation to energy, space translation to "
            "momentum, rotation to angular momentum."
        ),
        domain="Classical Mechanics",
        subdomain="Lagrangian Mechanics",
        difficulty="advanced",
        concepts=["symmetry", "conservation", "lagrangian", "energy"],
    ),
    KnowledgeChunk(
        title="Second law of thermodynamics",
        content=(
            "The entropy of an isolated system never decreases. Statistically, "
            "macrostates with more microstates are overwhelmingly more likely."
        ),
        domain="Thermodynamics",
        subdomain="Statistical Mechanics",
        difficulty="beginner",
        concepts=["entropy", "microstate", "irreversibility"],
    ),
    KnowledgeChunk(
        title="Lorentz transformation",
        content=(
            "Coordinates of events in inertial frames moving at relative "
            "velocity v are related by the Lorentz transformation, which keeps "
            "the speed of light invariant and mixes space and time."
        ),
        domain="Relativity",
        subdomain="Special Relativity",
        difficulty="intermediate",
        concepts=["time dilation", "length contraction", "spacetime"],
    ),
    KnowledgeChunk(
        title="Maxwell's equations",
        content=(
            "Four coupled equations relate electric and magnetic fields to "
            "charges and currents. In vacuum they admit wave solutions that "
            "travel at the speed of light."
        ),
        domain="Electromagnetism",
        subdomain="Classical Field Theory",
        difficulty="intermediate",
        concepts=["electric field", "magnetic field", "electromagnetic wave"],
    ),
    KnowledgeChunk(
        title="Spontaneous symmetry breaking",
        content=(
            "A system whose laws are symmetric can settle into a ground state "
            "that is not. In gauge theories this gives mass to gauge bosons "
            "through the Higgs mechanism."
        ),
        domain="Particle Physics",
        subdomain="Quantum Field Theory",
        difficulty="advanced",
        concepts=["higgs", "gauge", "symmetry", "ground state"],
    ),
]


def create_seeded_knowledge_base() -> InMemoryKnowledgeBase:
    """Knowledge base pre-loaded with SEED_CHUNKS."""
    return InMemoryKnowledgeBase(SEED_CHUNKS)
