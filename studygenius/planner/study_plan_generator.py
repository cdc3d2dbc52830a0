"""
Plan generation with a hosted language model.

One forced structured call per plan. Whatever the model returns is parsed
through the repair chain in ``parsers`` and coerced field by field into the
plan model, so callers always receive a structurally complete plan.
"""

import asyncio
import logging
from typing import Any, Dict, List, Type, TypeVar

from langchain_core.messages import HumanMessage, SystemMessage

from studygenius.planner.errors import PlanParseError
from studygenius.planner.parsers import parse_model_response, raw_response_text
from studygenius.planner.schemas import (
    LearningRoadmap,
    PlanPrompt,
    Resource,
    Schedule,
    ScheduleDay,
    ScheduleWeek,
    StudyPlan,
    Technique,
    Topic,
)

logger = logging.getLogger(__name__)

FORMATTING_ERROR_OVERVIEW = "We encountered an issue formatting your study plan. Here's the raw plan:"

PlanT = TypeVar("PlanT", bound=StudyPlan)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value)


def _normalize_priority(value: Any) -> str:
    priority = _as_text(value).capitalize()
    return priority if priority in ("High", "Medium", "Low") else "Medium"


def clean_topics(raw: Any) -> List[Topic]:
    topics = []
    for item in _as_list(raw):
        if isinstance(item, str) and item.strip():
            topics.append(Topic(title=item.strip()))
        elif isinstance(item, dict):
            title = _as_text(item.get("title") or item.get("name"))
            if not title:
                continue
            topics.append(Topic(
                title=title,
                description=_as_text(item.get("description")),
                priority=_normalize_priority(item.get("priority"))
            ))
    return topics


def clean_schedule(raw: Any) -> Schedule:
    # Models sometimes return the weeks list directly instead of {"weeks": [...]}
    weeks_raw = raw.get("weeks") if isinstance(raw, dict) else raw

    weeks = []
    for week in _as_list(weeks_raw):
        if isinstance(week, dict):
            days_raw = week.get("days")
        elif isinstance(week, list):
            days_raw = week
        else:
            continue
        days = []
        for day in _as_list(days_raw):
            if not isinstance(day, dict):
                continue
            activities = [_as_text(a) for a in _as_list(day.get("activities")) if _as_text(a)]
            days.append(ScheduleDay(
                day=_as_text(day.get("day")) or f"Day {len(days) + 1}",
                duration=_as_text(day.get("duration")),
                activities=activities
            ))
        weeks.append(ScheduleWeek(days=days))
    return Schedule(weeks=weeks)


def clean_techniques(raw: Any) -> List[Technique]:
    techniques = []
    for item in _as_list(raw):
        if isinstance(item, str) and item.strip():
            techniques.append(Technique(name=item.strip()))
        elif isinstance(item, dict):
            name = _as_text(item.get("name") or item.get("title"))
            if name:
                techniques.append(Technique(name=name, description=_as_text(item.get("description"))))
    return techniques


def clean_resources(raw: Any) -> List[Resource]:
    resources = []
    for item in _as_list(raw):
        if not isinstance(item, dict):
            continue
        title = _as_text(item.get("title") or item.get("name"))
        url = _as_text(item.get("url") or item.get("link"))
        if not title and not url:
            continue
        resources.append(Resource(
            title=title or url,
            description=_as_text(item.get("description")),
            url=url,
            type=_as_text(item.get("type")).lower() or None
        ))
    return resources


def coerce_plan(data: Dict[str, Any], plan_model: Type[PlanT] = StudyPlan) -> PlanT:
    """
    Build a plan model from parsed model output.

    Missing or malformed fields become empty defaults; nothing here raises
    for bad shapes.
    """
    fields = dict(
        overview=_as_text(data.get("overview")),
        topics=clean_topics(data.get("topics")),
        schedule=clean_schedule(data.get("schedule")),
        techniques=clean_techniques(data.get("techniques")),
        resources=clean_resources(data.get("resources")),
    )
    if issubclass(plan_model, LearningRoadmap):
        main_topics = data.get("mainTopics", data.get("main_topics"))
        fields["main_topics"] = [_as_text(t) for t in _as_list(main_topics) if _as_text(t)]
    return plan_model(**fields)


def fallback_plan(raw_text: str, plan_model: Type[PlanT] = StudyPlan) -> PlanT:
    """Empty but well-formed plan carrying the raw model text for diagnostics."""
    return plan_model(overview=FORMATTING_ERROR_OVERVIEW, raw_plan=raw_text)


class PlanGenerator:
    """
    Generates study plans and roadmaps from a PlanPrompt.

    Never raises for model or parsing failures: the worst case is
    ``fallback_plan``.
    """

    def __init__(self, llm, config=None):
        """
        Initialize Plan Generator.

        Args:
            llm: LangChain chat model supporting bind_tools
            config: Configuration object (LLM_TIMEOUT_SECONDS)
        """
        self.llm = llm
        self.timeout = getattr(config, 'LLM_TIMEOUT_SECONDS', 90)

    async def invoke_structured(self, prompt: PlanPrompt):
        """Single forced structured call. Raises on model errors and timeouts."""
        llm_with_tools = self.llm.bind_tools(
            [prompt.output_schema],
            tool_choice=prompt.function_name
        )
        messages = [
            SystemMessage(content=prompt.system_message),
            HumanMessage(content=prompt.user_message)
        ]
        return await asyncio.wait_for(llm_with_tools.ainvoke(messages), timeout=self.timeout)

    async def generate(self, prompt: PlanPrompt, plan_model: Type[PlanT] = StudyPlan) -> PlanT:
        """
        Generate a plan.

        Args:
            prompt: Messages plus output descriptor
            plan_model: StudyPlan or LearningRoadmap

        Returns:
            Plan model instance; every list field present
        """
        try:
            response = await self.invoke_structured(prompt)
        except asyncio.TimeoutError:
            logger.error(f"Plan generation timed out after {self.timeout}s")
            return fallback_plan("", plan_model)
        except Exception as e:
            logger.error(f"Plan generation failed: {e}")
            return fallback_plan("", plan_model)

        try:
            data = parse_model_response(response, prompt.function_name)
        except PlanParseError as e:
            logger.error(f"Error parsing study plan JSON: {e}")
            return fallback_plan(raw_response_text(response), plan_model)

        plan = coerce_plan(data, plan_model)
        logger.info(
            f"Generated {plan_model.__name__} with {len(plan.topics)} topics, "
            f"{len(plan.schedule.weeks)} weeks, {len(plan.resources)} resources"
        )
        return plan
