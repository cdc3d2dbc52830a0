"""
Entry points of the plan generation pipeline.

``StudyPlanService`` receives every collaborator explicitly (chat model, blob
store, optional search provider, config); ``create_study_plan_service``
builds the default ones from configuration. The service keeps no state
between calls, so one instance can serve concurrent requests.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from studygenius.config import settings
from studygenius.planner.errors import InvalidRequestError
from studygenius.planner.extractor import TextExtractor
from studygenius.planner.graph import create_roadmap_graph, create_study_plan_graph
from studygenius.planner.nodes import PlannerNodes
from studygenius.planner.resource_finder import ResourceFinder
from studygenius.planner.schemas import (
    CourseInfo,
    CourseMaterial,
    LearningRoadmap,
    Resource,
    StudyPlanRecord,
)
from studygenius.planner.study_plan_generator import PlanGenerator
from studygenius.storage.blob_store import BaseBlobStore
from studygenius.tools.base import BaseSearchProvider

logger = logging.getLogger(__name__)


def _validate_course_info(course_info: Union[CourseInfo, Dict[str, Any], None]) -> CourseInfo:
    if course_info is None:
        raise InvalidRequestError("Course information is required")
    if isinstance(course_info, CourseInfo):
        return course_info
    try:
        return CourseInfo.model_validate(course_info)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid course information: {e}") from e


def _validate_materials(
    materials: Optional[Iterable[Union[CourseMaterial, Dict[str, Any]]]]
) -> List[CourseMaterial]:
    validated = []
    try:
        for material in materials or []:
            if isinstance(material, CourseMaterial):
                validated.append(material)
            else:
                validated.append(CourseMaterial.model_validate(material))
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid course material: {e}") from e

    if not validated:
        raise InvalidRequestError("At least one file is required")
    return validated


class StudyPlanService:
    """Generates study plans, learning roadmaps and resource lists."""

    def __init__(
        self,
        llm,
        blob_store: BaseBlobStore,
        search_provider: Optional[BaseSearchProvider] = None,
        config=settings
    ):
        """
        Initialize the service.

        Args:
            llm: LangChain chat model supporting bind_tools
            blob_store: Store the course materials are fetched from
            search_provider: Web search for resources (model suggestions only if None)
            config: Configuration object
        """
        self.config = config
        self.default_roadmap_weeks = getattr(config, 'DEFAULT_ROADMAP_WEEKS', 4)

        self.resource_finder = ResourceFinder(llm, search_provider, config)
        self.nodes = PlannerNodes(
            extractor=TextExtractor(blob_store, config),
            generator=PlanGenerator(llm, config),
            resource_finder=self.resource_finder,
            config=config
        )
        self.study_plan_graph = create_study_plan_graph(self.nodes)
        self.roadmap_graph = create_roadmap_graph(self.nodes)

    async def generate_study_plan(
        self,
        course_info: Union[CourseInfo, Dict[str, Any]],
        materials: Sequence[Union[CourseMaterial, Dict[str, Any]]],
        course_id: Optional[str] = None,
        include_resources: bool = False
    ) -> StudyPlanRecord:
        """
        Generate a study plan from uploaded course materials.

        Args:
            course_info: Course metadata (``name`` required)
            materials: Uploaded materials, at least one
            course_id: Key the caller will store the plan under
            include_resources: Also search for supplementary resources

        Returns:
            StudyPlanRecord wrapping a structurally complete StudyPlan

        Raises:
            InvalidRequestError: missing course name or no materials
        """
        course = _validate_course_info(course_info)
        validated_materials = _validate_materials(materials)

        logger.info(f"Generating study plan for '{course.name}' from {len(validated_materials)} file(s)")
        result = await self.study_plan_graph.ainvoke({
            "course_info": course,
            "materials": validated_materials,
            "include_resources": include_resources,
        })

        return StudyPlanRecord(
            course_id=course_id,
            plan=result["plan"],
            used_syllabus=result.get("is_syllabus", False),
            degraded_sources=[d.source_name for d in result.get("documents", []) if d.is_degraded]
        )

    async def generate_learning_roadmap(
        self,
        topic: str,
        duration_weeks: Optional[int] = None,
        include_resources: bool = True
    ) -> LearningRoadmap:
        """
        Generate a learning roadmap for a free-text topic.

        Args:
            topic: What to learn
            duration_weeks: Roadmap length (DEFAULT_ROADMAP_WEEKS if None)
            include_resources: Search for resources for the roadmap's main topics

        Raises:
            InvalidRequestError: blank topic or non-positive duration
        """
        topic = (topic or "").strip()
        if not topic:
            raise InvalidRequestError("Topic is required")

        weeks = self.default_roadmap_weeks if duration_weeks is None else duration_weeks
        if isinstance(weeks, bool) or not isinstance(weeks, int) or weeks < 1:
            raise InvalidRequestError(f"Duration must be a positive number of weeks, got {duration_weeks!r}")

        logger.info(f"Generating {weeks}-week roadmap for '{topic}'")
        result = await self.roadmap_graph.ainvoke({
            "topic": topic,
            "duration_weeks": weeks,
            "include_resources": include_resources,
        })
        return result["plan"]

    async def find_resources(self, topic: str, subtopics: Sequence[str] = ()) -> List[Resource]:
        """Find supplementary resources for a topic. Blank topics yield an empty list."""
        return await self.resource_finder.find_resources(topic, subtopics)


def create_study_plan_service(config=settings, blob_store: Optional[BaseBlobStore] = None) -> StudyPlanService:
    """Build a service with the chat model, blob store and search provider from configuration."""
    from studygenius.core.llm import create_llm
    from studygenius.storage.blob_store import create_blob_store
    from studygenius.tools.web_tools import TavilySearchProvider

    search_provider = TavilySearchProvider(config)
    if not search_provider.is_available():
        logger.warning("TAVILY_API_KEY not set, resources will come from model suggestions only")
        search_provider = None

    return StudyPlanService(
        llm=create_llm(config),
        blob_store=blob_store or create_blob_store(config),
        search_provider=search_provider,
        config=config
    )
