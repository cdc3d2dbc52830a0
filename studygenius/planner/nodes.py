from typing import Any, Dict
import logging

from studygenius.planner.extractor import DEFAULT_MAX_CHARS, TextExtractor
from studygenius.planner.prompts import build_roadmap_prompt, build_study_plan_prompt
from studygenius.planner.resource_finder import ResourceFinder, merge_resources
from studygenius.planner.schemas import LearningRoadmap, StudyPlan
from studygenius.planner.state import PlanState
from studygenius.planner.study_plan_generator import PlanGenerator
from studygenius.planner.syllabus import SYLLABUS_KEYWORD_THRESHOLD, is_syllabus

logger = logging.getLogger(__name__)


class PlannerNodes:
    """Graph nodes for plan generation, bound to their collaborators."""

    def __init__(
        self,
        extractor: TextExtractor,
        generator: PlanGenerator,
        resource_finder: ResourceFinder,
        config=None
    ):
        self.extractor = extractor
        self.generator = generator
        self.resource_finder = resource_finder
        self.syllabus_threshold = getattr(config, 'SYLLABUS_KEYWORD_THRESHOLD', SYLLABUS_KEYWORD_THRESHOLD)
        self.max_chars = getattr(config, 'MAX_EXTRACTED_CHARS', DEFAULT_MAX_CHARS)

    async def extract_materials(self, state: PlanState) -> Dict[str, Any]:
        documents = []
        for material in state.get("materials", []):
            documents.append(await self.extractor.extract_material(material))
        return {"documents": documents}

    def classify_materials(self, state: PlanState) -> Dict[str, Any]:
        """Flag the run as syllabus-driven if any readable document (or its filename) is a syllabus."""
        found = False
        for doc in state.get("documents", []):
            # A diagnostic placeholder says nothing about the content
            text = "" if doc.is_degraded else doc.text
            if is_syllabus(doc.source_name, text, threshold=self.syllabus_threshold):
                logger.info(f"Treating {doc.source_name} as the course syllabus")
                found = True
        return {"is_syllabus": found}

    def build_study_plan_prompt(self, state: PlanState) -> Dict[str, Any]:
        prompt = build_study_plan_prompt(
            state["course_info"],
            state.get("documents", []),
            state.get("is_syllabus", False),
            max_chars=self.max_chars
        )
        return {"prompt": prompt}

    def build_roadmap_prompt(self, state: PlanState) -> Dict[str, Any]:
        return {"prompt": build_roadmap_prompt(state["topic"], state["duration_weeks"])}

    async def generate_study_plan(self, state: PlanState) -> Dict[str, Any]:
        return {"plan": await self.generator.generate(state["prompt"], StudyPlan)}

    async def generate_roadmap(self, state: PlanState) -> Dict[str, Any]:
        return {"plan": await self.generator.generate(state["prompt"], LearningRoadmap)}

    async def augment_resources(self, state: PlanState) -> Dict[str, Any]:
        """Append searched resources to the plan, deduplicated by URL."""
        plan = state["plan"]
        if isinstance(plan, LearningRoadmap):
            topic = state["topic"]
            subtopics = plan.main_topics
        else:
            topic = state["course_info"].name
            subtopics = [t.title for t in plan.topics]

        found = await self.resource_finder.find_resources(topic, subtopics)
        if not found:
            return {"plan": plan}
        return {"plan": plan.model_copy(update={"resources": merge_resources(plan.resources, found)})}
