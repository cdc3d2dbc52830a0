"""
Pytest configuration and fixtures
"""
import pytest
import sys
from pathlib import Path
from typing import Dict
from unittest.mock import AsyncMock, MagicMock, Mock

from langchain_core.messages import AIMessage

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from studygenius.storage.blob_store import BaseBlobStore, BlobFetchError  # noqa: E402


@pytest.fixture
def mock_config():
    """Create a mock config object"""
    config = Mock()

    # Set default config values
    config.LLM_PROVIDER = "google"
    config.LLM_MODEL = "gemini-2.5-flash"
    config.LLM_TEMPERATURE = 0.7
    config.LLM_MAX_TOKENS = 4000
    config.LLM_TIMEOUT_SECONDS = 5
    config.MAX_EXTRACTED_CHARS = 10000
    config.FETCH_TIMEOUT_SECONDS = 5
    config.SYLLABUS_KEYWORD_THRESHOLD = 3
    config.MAX_WEB_RESULTS = 5
    config.SEARCH_TIMEOUT_SECONDS = 5
    config.RESOURCE_GOOD_ENOUGH_COUNT = 5
    config.MAX_RESOURCES = 10
    config.DEFAULT_ROADMAP_WEEKS = 4
    config.BLOB_STORE_BACKEND = "local"
    config.GCS_BUCKET_NAME = None
    config.LOCAL_BLOB_DIR = "."
    config.GOOGLE_API_KEY = None
    config.AZURE_OPENAI_API_KEY = None
    config.TAVILY_API_KEY = None

    return config


def make_tool_call_message(name: str, args: Dict, content: str = "") -> AIMessage:
    """AIMessage carrying one well-formed structured call."""
    return AIMessage(
        content=content,
        tool_calls=[{"name": name, "args": args, "id": "call_1", "type": "tool_call"}]
    )


def make_invalid_tool_call_message(name: str, raw_args: str, content: str = "") -> AIMessage:
    """AIMessage whose structured call arguments were not valid JSON."""
    return AIMessage(
        content=content,
        invalid_tool_calls=[{
            "name": name,
            "args": raw_args,
            "id": "call_1",
            "error": "Function arguments are not valid JSON",
            "type": "invalid_tool_call"
        }]
    )


def make_llm(*responses):
    """
    Fake tool-bound chat model.

    ``bind_tools(...)`` returns a runnable whose ``ainvoke`` yields the given
    responses in order (an Exception instance is raised instead).
    """
    bound = MagicMock()
    bound.ainvoke = AsyncMock(side_effect=list(responses))
    llm = MagicMock()
    llm.bind_tools.return_value = bound
    return llm


class FakeBlobStore(BaseBlobStore):
    """In-memory blob store keyed by source_ref."""

    def __init__(self, blobs: Dict[str, bytes] = None):
        self.blobs = dict(blobs or {})
        self.fetched = []

    def fetch(self, source_ref: str) -> bytes:
        self.fetched.append(source_ref)
        if source_ref not in self.blobs:
            raise BlobFetchError(f"{source_ref} not found")
        return self.blobs[source_ref]


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def sample_plan_args():
    """Structured-call arguments for a well-formed study plan."""
    return {
        "overview": "A 2-week plan covering kinematics and Newton's laws.",
        "topics": [
            {"title": "Kinematics", "description": "Motion in one dimension", "priority": "High"},
            {"title": "Newton's Laws", "description": "Forces and motion", "priority": "Medium"}
        ],
        "schedule": {
            "weeks": [
                {"days": [
                    {"day": "Monday", "duration": "2 hours", "activities": ["Read chapter 1", "Problem set 1"]}
                ]},
                {"days": [
                    {"day": "Wednesday", "duration": "1.5 hours", "activities": ["Review for quiz"]}
                ]}
            ]
        },
        "techniques": [
            {"name": "Spaced repetition", "description": "Review formulas every other day"}
        ],
        "resources": [
            {"title": "Khan Academy Physics", "description": "Free videos",
             "url": "https://www.khanacademy.org/science/physics", "type": "course"}
        ]
    }


@pytest.fixture
def tool_call_message():
    return make_tool_call_message


@pytest.fixture
def invalid_tool_call_message():
    return make_invalid_tool_call_message


@pytest.fixture
def llm_factory():
    return make_llm
