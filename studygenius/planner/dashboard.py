"""
Dashboard views over saved study plans.

Everything here reads stored course records (``{id, name, startDate, endDate,
createdAt, studyPlan: {plan, generated}}``) and never calls a model:

- ``upcoming_tasks``: schedule activities mapped onto calendar dates
- ``course_progress``: elapsed share of each course's date range
- ``recommend_resources``: random picks from the plans' resources

The current date and the random source are injectable for reproducible output.
"""

import json
import logging
import random
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from studygenius.planner.schemas import CourseProgress, RecommendedResource, StudyPlan, UpcomingTask

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION_LIMIT = 6
DEFAULT_TASK_LIMIT = 10

WEEKDAYS = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6,
}

DURATION_BY_TYPE = {
    "Video": "10-15 min",
    "Quiz": "15 questions",
    "Slides": "20 slides",
    "Article": "5-10 min read",
}


def classify_resource(url: str, description: str = "") -> str:
    """Video, Quiz, Slides or Article; the URL decides when present."""
    if url:
        if "youtube" in url or "vimeo" in url:
            return "Video"
        if "quiz" in url or "test" in url:
            return "Quiz"
        if "slides" in url or "presentation" in url:
            return "Slides"
        return "Article"

    description = (description or "").lower()
    if "video" in description:
        return "Video"
    if "quiz" in description or "test" in description:
        return "Quiz"
    if "slides" in description or "presentation" in description:
        return "Slides"
    return "Article"


def _load_plan(course: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    study_plan = course.get("studyPlan") or {}
    plan = study_plan.get("plan") if isinstance(study_plan, dict) else None
    if plan is None:
        return None
    if isinstance(plan, StudyPlan):
        return plan.to_dict()
    if isinstance(plan, str):
        try:
            plan = json.loads(plan)
        except json.JSONDecodeError as e:
            logger.warning(f"Error parsing study plan for course {course.get('id')}: {e}")
            return None
    return plan if isinstance(plan, dict) else None


def recommend_resources(
    courses: Iterable[Dict[str, Any]],
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    rng: Optional[random.Random] = None
) -> List[RecommendedResource]:
    """
    Pick resources from the user's saved study plans.

    At least one random resource per course is chosen (course order), then
    random picks from the remainder fill up to ``limit``.

    Args:
        courses: Stored course records ``{id, name, studyPlan: {plan}}``; the
            plan may be a dict, a StudyPlan or a JSON string
        limit: Target number of recommendations
        rng: Random source (seed it for reproducible picks)

    Returns:
        Recommended resources
    """
    rng = rng or random.Random()
    recommendations: List[RecommendedResource] = []

    for course in courses:
        plan = _load_plan(course)
        if not plan:
            continue

        for resource in plan.get("resources") or []:
            if not isinstance(resource, dict) or not resource.get("title"):
                continue
            resource_type = classify_resource(resource.get("url", ""), resource.get("description", ""))
            recommendations.append(RecommendedResource(
                id=f"{course.get('id')}_{len(recommendations)}",
                title=resource["title"],
                type=resource_type,
                duration=DURATION_BY_TYPE[resource_type],
                course=course.get("name", ""),
                course_id=str(course.get("id")),
                url=resource.get("url") or "#",
                description=resource.get("description") or ""
            ))

    selected: List[RecommendedResource] = []
    course_ids = list(dict.fromkeys(r.course_id for r in recommendations))
    for course_id in course_ids:
        course_resources = [r for r in recommendations if r.course_id == course_id]
        selected.append(rng.choice(course_resources))

    remaining = [r for r in recommendations if r not in selected]
    while len(selected) < limit and remaining:
        selected.append(remaining.pop(rng.randrange(len(remaining))))

    return selected


def parse_date(value: Any) -> Optional[date]:
    """Calendar date of an ISO date/datetime string or a date object; None if unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")).date()
    except ValueError:
        logger.warning(f"Ignoring unparseable date: {value!r}")
        return None


def _course_start(course: Dict[str, Any]) -> Optional[date]:
    study_plan = course.get("studyPlan") or {}
    generated = study_plan.get("generated") if isinstance(study_plan, dict) else None
    for value in (course.get("startDate"), generated, course.get("createdAt")):
        start = parse_date(value)
        if start is not None:
            return start
    return None


def _due_label(task_date: date, days_away: int) -> str:
    if days_away == 0:
        return "Today"
    if days_away == 1:
        return "Tomorrow"
    if days_away < 7:
        return task_date.strftime("%A")
    return f"{task_date.strftime('%b')} {task_date.day}"


def _task_priority(days_away: int) -> str:
    if days_away <= 3:
        return "high"
    if days_away <= 7:
        return "medium"
    return "low"


def upcoming_tasks(
    courses: Iterable[Dict[str, Any]],
    today: Optional[date] = None,
    limit: int = DEFAULT_TASK_LIMIT
) -> List[UpcomingTask]:
    """
    List the next scheduled activities across the user's study plans.

    Week ``i`` of a schedule starts ``7 * i`` days after the course start
    (``startDate``, else the plan's ``generated`` date, else ``createdAt``).
    Each named weekday maps to its first occurrence on or after the week
    start. Days that are not weekday names and dates before ``today`` are
    skipped; every activity of a remaining day becomes one task.

    Args:
        courses: Stored course records
        today: Reference date (defaults to the current date)
        limit: Maximum number of tasks

    Returns:
        Tasks sorted by date, closest first
    """
    today = today or date.today()
    tasks: List[UpcomingTask] = []

    for course in courses:
        plan = _load_plan(course)
        if not plan:
            continue
        schedule = plan.get("schedule")
        weeks = (schedule.get("weeks") if isinstance(schedule, dict) else None) or []
        start = _course_start(course)
        if not weeks or start is None:
            continue

        for week_index, week in enumerate(weeks):
            week_start = start + timedelta(days=7 * week_index)
            days = week.get("days") if isinstance(week, dict) else None
            for day in days or []:
                if not isinstance(day, dict):
                    continue
                day_name = str(day.get("day", "")).strip().lower()
                activities = day.get("activities") or []
                if day_name not in WEEKDAYS or not activities:
                    continue

                offset = (WEEKDAYS[day_name] - week_start.weekday()) % 7
                task_date = week_start + timedelta(days=offset)
                days_away = (task_date - today).days
                if days_away < 0:
                    continue

                for index, activity in enumerate(activities):
                    tasks.append(UpcomingTask(
                        id=f"{course.get('id')}_{week_index}_{day_name}_{index}",
                        title=str(activity),
                        course=course.get("name", ""),
                        course_id=str(course.get("id")),
                        due_date=_due_label(task_date, days_away),
                        raw_date=task_date,
                        priority=_task_priority(days_away)
                    ))

    tasks.sort(key=lambda task: task.raw_date)
    return tasks[:limit]


def course_progress(
    courses: Iterable[Dict[str, Any]],
    today: Optional[date] = None
) -> List[CourseProgress]:
    """
    Elapsed share of each started course's date range, highest first.

    Courses without both dates or starting after ``today`` are skipped.
    Started courses report at least 5% and at most 100%.
    """
    today = today or date.today()
    progress: List[CourseProgress] = []

    for course in courses:
        start = parse_date(course.get("startDate"))
        end = parse_date(course.get("endDate"))
        if start is None or end is None or start > today:
            continue

        total_days = (end - start).days
        if total_days <= 0:
            percentage = 100
        else:
            percentage = min(round((today - start).days / total_days * 100), 100)

        progress.append(CourseProgress(
            id=str(course.get("id")),
            name=course.get("name", ""),
            progress=max(percentage, 5)
        ))

    progress.sort(key=lambda item: item.progress, reverse=True)
    return progress
