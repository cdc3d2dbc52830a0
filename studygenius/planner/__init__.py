"""
Study plan generation.

Course materials are extracted, checked for a syllabus, turned into a
structured-output prompt, answered by the chat model and repaired into a
structurally complete StudyPlan, optionally enriched with web resources.
"""

from .dashboard import course_progress, recommend_resources, upcoming_tasks
from .errors import InvalidRequestError, PlannerError, PlanParseError
from .schemas import (
    CourseInfo,
    CourseMaterial,
    CourseProgress,
    DifficultyLevel,
    ExtractedDocument,
    LearningRoadmap,
    RecommendedResource,
    Resource,
    StudyPlan,
    StudyPlanRecord,
    UpcomingTask,
)
from .service import StudyPlanService, create_study_plan_service

__all__ = [
    "CourseInfo",
    "CourseMaterial",
    "CourseProgress",
    "DifficultyLevel",
    "ExtractedDocument",
    "InvalidRequestError",
    "LearningRoadmap",
    "PlanParseError",
    "PlannerError",
    "RecommendedResource",
    "Resource",
    "StudyPlan",
    "StudyPlanRecord",
    "StudyPlanService",
    "UpcomingTask",
    "course_progress",
    "create_study_plan_service",
    "recommend_resources",
    "upcoming_tasks",
]
