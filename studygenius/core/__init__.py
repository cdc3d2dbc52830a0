"""Chat model construction, response helpers and the study group assistant."""

from .chat_interface import StudyGroupAssistant
from .llm import create_llm

__all__ = ["StudyGroupAssistant", "create_llm"]
