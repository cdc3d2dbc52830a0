from typing import List, TypedDict
from studygenius.planner.schemas import (
    CourseInfo,
    CourseMaterial,
    ExtractedDocument,
    PlanPrompt,
    StudyPlan
)


class PlanState(TypedDict, total=False):
    """State for the plan generation graphs. Request-scoped; never shared between runs."""
    # Study plan input
    course_info: CourseInfo
    materials: List[CourseMaterial]

    # Roadmap input
    topic: str
    duration_weeks: int

    include_resources: bool  # Run the resource augmentation step

    # Intermediate results
    documents: List[ExtractedDocument]
    is_syllabus: bool
    prompt: PlanPrompt

    # Output (a LearningRoadmap for the roadmap graph)
    plan: StudyPlan
