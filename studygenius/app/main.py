"""
StudyGenius - Command-line Entry Point

Generates study plans, learning roadmaps and resource lists, builds dashboard
views from saved plans and answers study group questions. Results are printed
as JSON. Course files are read from a local directory.
"""
import argparse
import asyncio
import json
import logging
import mimetypes
import os
import random
import sys

from studygenius.config import settings
from studygenius.planner.dashboard import course_progress, parse_date, recommend_resources, upcoming_tasks
from studygenius.planner.errors import InvalidRequestError
from studygenius.planner.schemas import CourseMaterial
from studygenius.storage.blob_store import LocalBlobStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="studygenius",
        description="Generate study plans and learning roadmaps"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Generate a study plan from course files")
    plan.add_argument("--course-name", required=True)
    plan.add_argument("--description")
    plan.add_argument("--subject-area")
    plan.add_argument("--difficulty", help="beginner, intermediate, medium or advanced")
    plan.add_argument("--hours", type=float, help="Estimated study hours")
    plan.add_argument("--start-date")
    plan.add_argument("--end-date")
    plan.add_argument("--course-id")
    plan.add_argument("--file", dest="files", action="append", default=[],
                      help="Course file, repeatable")
    plan.add_argument("--with-resources", action="store_true",
                      help="Search the web for extra resources")

    roadmap = subparsers.add_parser("roadmap", help="Generate a learning roadmap for a topic")
    roadmap.add_argument("--topic", required=True)
    roadmap.add_argument("--weeks", type=int, default=None)
    roadmap.add_argument("--no-resources", action="store_true")

    resources = subparsers.add_parser("resources", help="Find learning resources for a topic")
    resources.add_argument("--topic", required=True)
    resources.add_argument("--subtopic", dest="subtopics", action="append", default=[])

    dashboard = subparsers.add_parser("dashboard", help="Upcoming tasks, progress and resources from saved plans")
    dashboard.add_argument("--courses", required=True, help="JSON file with a list of stored course records")
    dashboard.add_argument("--today", help="Reference date (YYYY-MM-DD), defaults to today")
    dashboard.add_argument("--seed", type=int, help="Seed for the resource picks")

    ask = subparsers.add_parser("ask", help="Ask the study group assistant")
    ask.add_argument("--prompt", required=True)

    return parser


def materials_from_paths(paths, root):
    """Describe local files as course materials relative to ``root``."""
    materials = []
    for path in paths:
        content_type, _ = mimetypes.guess_type(path)
        materials.append(CourseMaterial(
            name=os.path.basename(path),
            source_ref=os.path.relpath(os.path.abspath(path), root),
            content_type=content_type or "",
            size_bytes=os.path.getsize(path) if os.path.exists(path) else None
        ))
    return materials


def dashboard_view(args) -> dict:
    """Dashboard sections computed from a JSON file of stored course records."""
    with open(args.courses, encoding="utf-8") as f:
        courses = json.load(f)
    if not isinstance(courses, list):
        raise InvalidRequestError(f"{args.courses} must contain a JSON list of courses")

    today = parse_date(args.today) if args.today else None
    if args.today and today is None:
        raise InvalidRequestError(f"Invalid --today date: {args.today}")

    return {
        "upcomingTasks": [t.to_dict() for t in upcoming_tasks(courses, today=today)],
        "courseProgress": [p.to_dict() for p in course_progress(courses, today=today)],
        "recommendedResources": [
            r.to_dict() for r in recommend_resources(courses, rng=random.Random(args.seed))
        ],
    }


async def run(args, config=settings) -> dict:
    from studygenius.planner.service import create_study_plan_service

    if args.command == "dashboard":
        return dashboard_view(args)

    if args.command == "ask":
        from studygenius.core.chat_interface import StudyGroupAssistant
        from studygenius.core.llm import create_llm

        answer = await StudyGroupAssistant(create_llm(config)).ask(args.prompt)
        return {"response": answer}

    if args.command == "plan":
        paths = [os.path.abspath(p) for p in args.files]
        root = os.path.commonpath([os.path.dirname(p) for p in paths]) if paths else os.getcwd()
        service = create_study_plan_service(config, blob_store=LocalBlobStore(root))

        course_info = {
            "name": args.course_name,
            "description": args.description,
            "subject_area": args.subject_area,
            "difficulty_level": args.difficulty,
            "estimated_hours": args.hours,
            "start_date": args.start_date,
            "end_date": args.end_date,
        }
        record = await service.generate_study_plan(
            course_info,
            materials_from_paths(paths, root),
            course_id=args.course_id,
            include_resources=args.with_resources
        )
        return record.to_dict()

    service = create_study_plan_service(config)

    if args.command == "roadmap":
        roadmap = await service.generate_learning_roadmap(
            args.topic,
            duration_weeks=args.weeks,
            include_resources=not args.no_resources
        )
        return roadmap.to_dict()

    found = await service.find_resources(args.topic, args.subtopics)
    return {"resources": [r.to_dict() for r in found]}


def main(argv=None) -> int:
    """
    Main entry point for the StudyGenius CLI.

    Returns the process exit code.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        result = asyncio.run(run(args))
    except InvalidRequestError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
