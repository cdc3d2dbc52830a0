"""
Prompt templates and function descriptors for plan generation.

Builders here are pure string assembly: no I/O, no model calls. Every course
field is always rendered (``Not specified`` when missing) so the model never
has to guess whether a field was omitted.
"""

import copy
from typing import Any, Dict, Optional, Sequence

from studygenius.planner.extractor import DEFAULT_MAX_CHARS, truncate_text
from studygenius.planner.schemas import CourseInfo, DifficultyLevel, ExtractedDocument, PlanPrompt

NOT_SPECIFIED = "Not specified"

DIFFICULTY_LABELS = {
    DifficultyLevel.BEGINNER: "Beginner",
    DifficultyLevel.INTERMEDIATE: "Intermediate",
    DifficultyLevel.ADVANCED: "Advanced",
}

RESOURCE_TYPES = ["documentation", "course", "video", "article", "book", "other"]


# --- Output descriptors ---

_TOPIC_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Topic name"},
        "description": {"type": "string", "description": "What the topic covers"},
        "priority": {"type": "string", "enum": ["High", "Medium", "Low"]},
    },
    "required": ["title", "description", "priority"],
}

_SCHEDULE_SCHEMA = {
    "type": "object",
    "properties": {
        "weeks": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "days": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "day": {"type": "string", "description": "Day of the week, e.g. Monday"},
                                "duration": {"type": "string", "description": "Study time, e.g. 2 hours"},
                                "activities": {"type": "array", "items": {"type": "string"}},
                            },
                            "required": ["day", "duration", "activities"],
                        },
                    }
                },
                "required": ["days"],
            },
        }
    },
    "required": ["weeks"],
}

_TECHNIQUE_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
    },
    "required": ["name", "description"],
}

_RESOURCE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "url": {"type": "string", "description": "Link to the resource, empty if unknown"},
    },
    "required": ["title", "description", "url"],
}

STUDY_PLAN_FUNCTION: Dict[str, Any] = {
    "name": "create_study_plan",
    "description": "Return the complete study plan for the course.",
    "parameters": {
        "type": "object",
        "properties": {
            "overview": {"type": "string", "description": "A paragraph summarizing the study plan"},
            "topics": {"type": "array", "items": _TOPIC_SCHEMA},
            "schedule": _SCHEDULE_SCHEMA,
            "techniques": {"type": "array", "items": _TECHNIQUE_SCHEMA},
            "resources": {"type": "array", "items": _RESOURCE_SCHEMA},
        },
        "required": ["overview", "topics", "schedule", "techniques", "resources"],
    },
}


def _roadmap_function() -> Dict[str, Any]:
    function = copy.deepcopy(STUDY_PLAN_FUNCTION)
    function["name"] = "create_learning_roadmap"
    function["description"] = "Return the complete learning roadmap for the topic."
    function["parameters"]["properties"]["mainTopics"] = {
        "type": "array",
        "items": {"type": "string"},
        "description": "3-6 short subtopic names that structure the roadmap",
    }
    function["parameters"]["required"].append("mainTopics")
    return function


ROADMAP_FUNCTION: Dict[str, Any] = _roadmap_function()

RESOURCE_FUNCTION: Dict[str, Any] = {
    "name": "suggest_learning_resources",
    "description": "Return well-known learning resources for the query.",
    "parameters": {
        "type": "object",
        "properties": {
            "resources": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string"},
                        "description": {"type": "string"},
                        "url": {"type": "string"},
                        "type": {"type": "string", "enum": RESOURCE_TYPES},
                    },
                    "required": ["title", "description", "url", "type"],
                },
            }
        },
        "required": ["resources"],
    },
}


# --- System messages ---

STUDY_PLAN_SYSTEM_MESSAGE = """You are an expert educational planner and tutor specialized in creating optimized study plans.
Your task is to analyze the provided course materials and create a comprehensive study plan.
The study plan should include:
1. A weekly schedule for studying the material
2. Key topics to focus on and their priority
3. Recommended study techniques for each topic
4. Practice exercises or questions
5. Milestones and learning goals

Return the plan by calling the create_study_plan function exactly once.
Materials marked "(no usable content)" could not be read; plan from the course details instead."""

SYLLABUS_SYSTEM_MESSAGE = STUDY_PLAN_SYSTEM_MESSAGE + """

The materials include the official course syllabus. Treat it as authoritative:
- Follow the syllabus's own week-by-week schedule and topic order.
- Extract every assessment (assignments, quizzes, midterms, final exam) with its weight and due date,
  and schedule review sessions in the days before each one.
- Respect deadlines and the course start and end dates when laying out the weeks.
- Use the syllabus's stated learning outcomes to set topic priorities."""

ROADMAP_SYSTEM_MESSAGE = """You are an expert curriculum designer who builds self-study learning roadmaps.
Given a topic and a number of weeks, create a structured roadmap that takes a learner from the fundamentals
to practical competence. Break the topic into 3-6 main topics, schedule them week by week,
recommend study techniques and list well-known resources with real URLs.

Return the roadmap by calling the create_learning_roadmap function exactly once."""

RESOURCE_SYSTEM_MESSAGE = """You are a librarian for self-taught learners.
Suggest up to 5 well-established, freely accessible learning resources (official documentation,
online courses, reputable tutorials, videos or books) for the query. Only include URLs you are
confident exist. Return them by calling the suggest_learning_resources function exactly once."""


def _or_not_specified(value: Optional[Any]) -> str:
    if value is None:
        return NOT_SPECIFIED
    text = str(value).strip()
    return text if text else NOT_SPECIFIED


def _format_hours(hours: Optional[float]) -> str:
    if hours is None:
        return NOT_SPECIFIED
    return f"{hours:g} hours"


def format_course_details(course_info: CourseInfo) -> str:
    """Render every course field, substituting 'Not specified' for missing values."""
    difficulty = DIFFICULTY_LABELS.get(course_info.difficulty_level, NOT_SPECIFIED)
    return "\n".join([
        f"Course Description: {_or_not_specified(course_info.description)}",
        f"Duration: {_format_hours(course_info.estimated_hours)}",
        f"Difficulty Level: {difficulty}",
        f"Start Date: {_or_not_specified(course_info.start_date)}",
        f"End Date: {_or_not_specified(course_info.end_date)}",
        f"Subject: {_or_not_specified(course_info.subject_area)}",
    ])


def build_context(documents: Sequence[ExtractedDocument], max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Concatenate document texts, each capped to max_chars, into one context blob."""
    parts = []
    for doc in documents:
        header = f"File: {doc.source_name}"
        if doc.is_degraded:
            header += " (no usable content)"
        parts.append(f"{header}\n{truncate_text(doc.text, max_chars)}\n\n")
    return "".join(parts)


def build_study_plan_prompt(
    course_info: CourseInfo,
    documents: Sequence[ExtractedDocument],
    is_syllabus: bool,
    max_chars: int = DEFAULT_MAX_CHARS
) -> PlanPrompt:
    """
    Assemble the study plan prompt.

    Args:
        course_info: Course metadata
        documents: Extracted course materials
        is_syllabus: Use the syllabus-aware system message
        max_chars: Per-document text cap

    Returns:
        PlanPrompt with the create_study_plan descriptor
    """
    context = build_context(documents, max_chars)
    if not context:
        context = "(no materials provided)\n"

    user_message = f"""I need a detailed study plan for my course "{course_info.name}".
{format_course_details(course_info)}

Here are the course materials:
{context}
Based on these materials, please create a comprehensive study plan that will help me master this subject efficiently."""

    return PlanPrompt(
        system_message=SYLLABUS_SYSTEM_MESSAGE if is_syllabus else STUDY_PLAN_SYSTEM_MESSAGE,
        user_message=user_message,
        output_schema=copy.deepcopy(STUDY_PLAN_FUNCTION)
    )


def build_roadmap_prompt(topic: str, duration_weeks: int) -> PlanPrompt:
    """Assemble the prompt for a topic-driven learning roadmap."""
    user_message = f"""Create a learning roadmap for "{topic}".
Duration: {duration_weeks} weeks
The schedule must contain exactly {duration_weeks} weeks, each with the days I should study, how long,
and the concrete activities for each day."""

    return PlanPrompt(
        system_message=ROADMAP_SYSTEM_MESSAGE,
        user_message=user_message,
        output_schema=copy.deepcopy(ROADMAP_FUNCTION)
    )


def build_resource_prompt(topic: str, query: str) -> PlanPrompt:
    """Assemble the prompt asking the model for resources matching one search query."""
    user_message = f"""Topic: {topic}
Search query: {query}

Suggest learning resources for this query."""

    return PlanPrompt(
        system_message=RESOURCE_SYSTEM_MESSAGE,
        user_message=user_message,
        output_schema=copy.deepcopy(RESOURCE_FUNCTION)
    )
