"""
Tests for core/chat_interface.py - Study group assistant
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from langchain_core.messages import AIMessage, SystemMessage

from studygenius.core.chat_interface import StudyGroupAssistant
from studygenius.planner.errors import InvalidRequestError


def make_chat_llm(response):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=[response])
    return llm


class TestStudyGroupAssistant:
    """Test StudyGroupAssistant"""

    @pytest.mark.asyncio
    async def test_answer(self):
        llm = make_chat_llm(AIMessage(content="  Newton's second law is F = ma.  "))

        answer = await StudyGroupAssistant(llm).ask("What is Newton's second law?")

        assert answer == "Newton's second law is F = ma."
        messages = llm.ainvoke.call_args[0][0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == "You are an AI assistant for the AI Study Group."
        assert messages[1].content == "What is Newton's second law?"

    @pytest.mark.asyncio
    async def test_empty_reply(self):
        llm = make_chat_llm(AIMessage(content=""))
        assert await StudyGroupAssistant(llm).ask("Hello?") == "No response"

    @pytest.mark.asyncio
    async def test_model_error(self):
        llm = make_chat_llm(RuntimeError("service unavailable"))
        answer = await StudyGroupAssistant(llm).ask("Hello?")
        assert answer.startswith("❌ Error:")
        assert "service unavailable" in answer

    @pytest.mark.asyncio
    async def test_blank_prompt(self):
        llm = make_chat_llm(AIMessage(content="unused"))
        with pytest.raises(InvalidRequestError):
            await StudyGroupAssistant(llm).ask("   ")
        llm.ainvoke.assert_not_called()
