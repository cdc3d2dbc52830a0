import logging

from langchain_core.messages import HumanMessage, SystemMessage

from studygenius.core.llm_utils import extract_content_as_string
from studygenius.planner.errors import InvalidRequestError

logger = logging.getLogger(__name__)

STUDY_GROUP_SYSTEM_MESSAGE = "You are an AI assistant for the AI Study Group."
NO_RESPONSE = "No response"


class StudyGroupAssistant:
    """Single-turn assistant answering study group questions."""

    def __init__(self, llm):
        self.llm = llm

    async def ask(self, prompt: str) -> str:
        """
        Answer one prompt.

        Returns the model's reply, "No response" when the reply is empty, or
        an error string when the model call fails.
        """
        if not prompt or not prompt.strip():
            raise InvalidRequestError("Prompt is required")

        try:
            response = await self.llm.ainvoke([
                SystemMessage(content=STUDY_GROUP_SYSTEM_MESSAGE),
                HumanMessage(content=prompt.strip())
            ])
            answer = extract_content_as_string(response).strip()
            return answer or NO_RESPONSE
        except Exception as e:
            logger.error(f"Study group assistant failed: {e}")
            return f"❌ Error: {str(e)}"
