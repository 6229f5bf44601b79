"""Theory lab: conversational physics assistant and concept explanations."""

from analyzer.theory_lab.assistant import ChatReply, TheoryLabAssistant

__all__ = ["ChatReply", "TheoryLabAssistant"]
