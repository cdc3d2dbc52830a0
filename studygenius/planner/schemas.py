"""
Pydantic models for course inputs, extracted documents and generated plans.

JSON field names follow the wire shape the web and mobile clients read
(``rawPlan``, ``mainTopics``, ...). Attributes are snake_case with aliases;
use ``to_dict()`` to get the client-facing JSON.
"""

import json
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class CamelModel(BaseModel):
    """Base model accepting both attribute names and JSON aliases."""
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Dump to client-facing JSON (aliases, no unset optionals)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CourseMaterial(CamelModel):
    """Reference to an uploaded document. Immutable once uploaded."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    source_ref: str = Field(alias="sourceRef")
    content_type: str = Field(default="", alias="contentType")
    size_bytes: Optional[int] = Field(default=None, alias="sizeBytes")
    uploaded_at: Optional[datetime] = Field(default=None, alias="uploadedAt")


class ExtractionStatus(str, Enum):
    """Whether extracted text is real content or a diagnostic placeholder."""
    OK = "ok"
    DEGRADED = "degraded"


class ExtractedDocument(CamelModel):
    """Text pulled out of one course material for a single pipeline run."""
    source_name: str = Field(alias="sourceName")
    text: str
    content_type: str = Field(default="", alias="contentType")
    status: ExtractionStatus = ExtractionStatus.OK
    reason: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.status == ExtractionStatus.DEGRADED


class DifficultyLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CourseInfo(CamelModel):
    """Course metadata supplied by the caller. Only ``name`` is required."""
    name: str
    description: Optional[str] = None
    # Stored course records use "subject"
    subject_area: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("subjectArea", "subject", "subject_area"),
        serialization_alias="subjectArea"
    )
    difficulty_level: Optional[DifficultyLevel] = Field(default=None, alias="difficultyLevel")
    estimated_hours: Optional[float] = Field(default=None, alias="estimatedHours")
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Course name is required")
        return value

    @field_validator("description", "subject_area", "start_date", "end_date", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # Web forms send "" for fields left empty
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def _parse_hours(cls, value):
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        try:
            return float(str(value).strip())
        except ValueError:
            return None

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value):
        if value is None or isinstance(value, DifficultyLevel):
            return value
        normalized = str(value).strip().lower()
        # Older clients send "medium"
        if normalized == "medium":
            return DifficultyLevel.INTERMEDIATE
        try:
            return DifficultyLevel(normalized)
        except ValueError:
            return None


Priority = Literal["High", "Medium", "Low"]


class Topic(CamelModel):
    title: str
    description: str = ""
    priority: Priority = "Medium"


class ScheduleDay(CamelModel):
    day: str
    duration: str = ""
    activities: List[str] = Field(default_factory=list)


class ScheduleWeek(CamelModel):
    days: List[ScheduleDay] = Field(default_factory=list)


class Schedule(CamelModel):
    weeks: List[ScheduleWeek] = Field(default_factory=list)


class Technique(CamelModel):
    name: str
    description: str = ""


class Resource(CamelModel):
    """Learning resource. Deduplicated by exact ``url`` within one invocation."""
    title: str
    description: str = ""
    url: str = ""
    type: Optional[str] = None
    subtopic: Optional[str] = None


class StudyPlan(CamelModel):
    """
    Generated study plan.

    Every list field is always present (possibly empty), including on
    degraded output, so clients can iterate without checks.
    """
    overview: str = ""
    topics: List[Topic] = Field(default_factory=list)
    schedule: Schedule = Field(default_factory=Schedule)
    techniques: List[Technique] = Field(default_factory=list)
    resources: List[Resource] = Field(default_factory=list)
    raw_plan: Optional[str] = Field(default=None, alias="rawPlan")


class LearningRoadmap(StudyPlan):
    """Topic-driven plan; ``main_topics`` drive the resource search."""
    main_topics: List[str] = Field(default_factory=list, alias="mainTopics")


class PlanPrompt(CamelModel):
    """System/user message pair plus the function descriptor the model must call."""
    system_message: str = Field(alias="systemMessage")
    user_message: str = Field(alias="userMessage")
    output_schema: Dict[str, Any] = Field(alias="outputSchema")

    @property
    def function_name(self) -> str:
        return self.output_schema["name"]


class StudyPlanRecord(CamelModel):
    """Envelope handed back to the caller for persistence."""
    course_id: Optional[str] = Field(default=None, alias="courseId")
    plan: StudyPlan
    generated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    used_syllabus: bool = Field(default=False, alias="usedSyllabus")
    degraded_sources: List[str] = Field(default_factory=list, alias="degradedSources")
    # JSON string of the plan, as stored alongside it
    text: str = ""

    @model_validator(mode="after")
    def _fill_text(self):
        if not self.text:
            self.text = json.dumps(self.plan.to_dict())
        return self


class RecommendedResource(CamelModel):
    """Resource picked from a saved study plan for the dashboard."""
    id: str
    title: str
    type: str
    duration: str
    course: str
    course_id: str = Field(alias="courseId")
    url: str = "#"
    description: str = ""


class UpcomingTask(CamelModel):
    """One scheduled activity from a saved study plan, dated from the course start."""
    id: str
    title: str
    course: str
    course_id: str = Field(alias="courseId")
    due_date: str = Field(alias="dueDate")
    raw_date: date = Field(alias="rawDate")
    priority: Literal["high", "medium", "low"]


class CourseProgress(CamelModel):
    """Share of a course's calendar time that has elapsed, in percent."""
    id: str
    name: str
    progress: int
