"""
Prompt templates for the theory lab assistant and concept explanations.
"""

from typing import List, Optional, Sequence

from analyzer.knowledge.base import KnowledgeChunk


THEORY_LAB_SYSTEM_PROMPT = """You are an expert physics research assistant specializing in helping researchers develop and refine their physics papers. You have extensive knowledge across all physics domains including:

- Classical Mechanics & Dynamics
- Quantum Mechanics & Quantum Field Theory
- Electromagnetism & Optics
- Thermodynamics & Statistical Mechanics
- Relativity (Special & General)
- Particle Physics & High Energy Physics
- Condensed Matter Physics
- Astrophysics & Cosmology
- Mathematical Physics & Computational Methods

Your role is to:
- Provide expert guidance on theoretical physics concepts
- Help with mathematical derivations and proofs
- Suggest improvements to research methodology
- Identify potential issues or gaps in reasoning
- Offer insights from related physics domains
- Assist with paper structure and clarity
- Help develop theoretical frameworks
- Suggest experimental approaches when relevant

Guidelines:
- Be precise and scientifically accurate
- Reference established physics principles and recent developments
- Suggest specific improvements rather than general praise
- Ask clarifying questions when needed to better assist
- Maintain academic rigor while being helpful and encouraging
- Provide mathematical formulations when appropriate
- Consider interdisciplinary connections"""

EXPLAIN_SYSTEM_PROMPT = """You are a physics expert. Explain physics concepts clearly and accurately.
Use the provided knowledge base context when available, but also draw from your general physics knowledge.
Provide explanations appropriate for the concept's difficulty level.
Include relevant equations, examples, and applications when helpful."""

EXPLAIN_USER_PROMPT_TEMPLATE = """Explain the physics concept: "{concept}"

{context}Please provide a comprehensive explanation that includes:
1. Clear definition
2. Key principles
3. Mathematical formulation (if applicable)
4. Real-world applications
5. Common misconceptions (if any)"""

# Number of most recent chat messages included as context
HISTORY_WINDOW = 6


def format_knowledge(chunks: Sequence[KnowledgeChunk]) -> str:
    """Render search hits as 'title: content' paragraphs."""
    return "\n\n".join(f"{c.title}: {c.content}" for c in chunks)


def format_history(history: Optional[List[dict]]) -> str:
    """Render the last HISTORY_WINDOW messages as 'role: content' lines."""
    if not history:
        return ""
    return "\n".join(
        f"{m.get('role', 'user')}: {m.get('content', '')}"
        for m in history[-HISTORY_WINDOW:]
    )


def build_theory_lab_system_prompt(knowledge: str = "", history: str = "") -> str:
    """System prompt with optional knowledge and conversation sections."""
    parts = [THEORY_LAB_SYSTEM_PROMPT]
    if knowledge:
        parts.append(f"Relevant physics knowledge from database:\n{knowledge}")
    if history:
        parts.append(f"Recent conversation:\n{history}")
    parts.append("Respond to the user's message with expert physics guidance:")
    return "\n\n".join(parts)


def build_explain_prompt(concept: str, chunks: Sequence[KnowledgeChunk]) -> str:
    """User prompt for a concept explanation, with knowledge context if any."""
    context = ""
    if chunks:
        entries = "\n\n".join(
            f"Content: {c.content}\nDomain: {c.domain}\n"
            f"Subdomain: {c.subdomain}\nSource: {c.source_document}"
            for c in chunks
        )
        context = f"Knowledge base context:\n{entries}\n\n"
    return EXPLAIN_USER_PROMPT_TEMPLATE.format(concept=concept, context=context)
