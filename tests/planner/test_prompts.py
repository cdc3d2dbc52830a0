"""
Tests for planner/prompts.py - Prompt assembly
"""
from studygenius.planner.prompts import (
    NOT_SPECIFIED,
    ROADMAP_SYSTEM_MESSAGE,
    STUDY_PLAN_FUNCTION,
    STUDY_PLAN_SYSTEM_MESSAGE,
    SYLLABUS_SYSTEM_MESSAGE,
    build_context,
    build_resource_prompt,
    build_roadmap_prompt,
    build_study_plan_prompt,
    format_course_details,
)
from studygenius.planner.schemas import CourseInfo, DifficultyLevel, ExtractedDocument, ExtractionStatus


def make_doc(name, text, status=ExtractionStatus.OK):
    return ExtractedDocument(source_name=name, text=text, status=status)


class TestFormatCourseDetails:
    """Test course field rendering"""

    def test_missing_fields_render_not_specified(self):
        details = format_course_details(CourseInfo(name="Intro Physics"))

        assert details.count(NOT_SPECIFIED) == 6
        assert "Difficulty Level: Not specified" in details

    def test_all_fields(self):
        course = CourseInfo(
            name="Intro Physics",
            description="Mechanics",
            subject_area="Physics",
            difficulty_level="beginner",
            estimated_hours=40,
            start_date="2026-01-12",
            end_date="2026-05-01"
        )
        details = format_course_details(course)

        assert "Course Description: Mechanics" in details
        assert "Duration: 40 hours" in details
        assert "Difficulty Level: Beginner" in details
        assert "Subject: Physics" in details
        assert NOT_SPECIFIED not in details

    def test_medium_maps_to_intermediate(self):
        course = CourseInfo(name="Algebra", difficultyLevel="medium")
        assert course.difficulty_level == DifficultyLevel.INTERMEDIATE
        assert "Difficulty Level: Intermediate" in format_course_details(course)

    def test_stored_subject_key(self):
        course = CourseInfo.model_validate({"name": "Intro Physics", "subject": "Physics"})

        assert course.subject_area == "Physics"
        assert "Subject: Physics" in format_course_details(course)
        assert course.to_dict()["subjectArea"] == "Physics"

    def test_hours_from_form_strings(self):
        assert CourseInfo(name="Algebra", estimatedHours="12").estimated_hours == 12
        assert CourseInfo(name="Algebra", estimatedHours=" 7.5 ").estimated_hours == 7.5
        assert CourseInfo(name="Algebra", estimatedHours="about ten").estimated_hours is None
        assert CourseInfo(name="Algebra", estimatedHours="").estimated_hours is None
        assert "Duration: 12 hours" in format_course_details(CourseInfo(name="Algebra", estimatedHours="12"))

    def test_blank_strings_are_missing(self):
        course = CourseInfo(name="Algebra", description="", startDate=" ", endDate="", subjectArea="")
        assert format_course_details(course).count(NOT_SPECIFIED) == 6


class TestBuildContext:
    """Test material context assembly"""

    def test_documents_are_labelled(self):
        context = build_context([make_doc("a.txt", "alpha"), make_doc("b.txt", "beta")])
        assert context == "File: a.txt\nalpha\n\nFile: b.txt\nbeta\n\n"

    def test_degraded_document_is_marked(self):
        doc = make_doc("scan.pdf", "[Unable to extract text from scan.pdf: no extractable text]",
                       ExtractionStatus.DEGRADED)
        assert "File: scan.pdf (no usable content)" in build_context([doc])

    def test_each_document_truncated(self):
        context = build_context([make_doc("a.txt", "x" * 50), make_doc("b.txt", "y" * 50)], max_chars=10)
        assert "x" * 10 + "\n" in context
        assert "x" * 11 not in context
        assert "y" * 11 not in context


class TestBuildStudyPlanPrompt:
    """Test the study plan prompt"""

    def test_default_template(self):
        prompt = build_study_plan_prompt(CourseInfo(name="Intro Physics"), [make_doc("n.txt", "notes")], False)

        assert prompt.system_message == STUDY_PLAN_SYSTEM_MESSAGE
        assert 'my course "Intro Physics"' in prompt.user_message
        assert "File: n.txt\nnotes" in prompt.user_message
        assert prompt.function_name == "create_study_plan"

    def test_syllabus_template(self):
        prompt = build_study_plan_prompt(CourseInfo(name="Intro Physics"), [make_doc("s.pdf", "x")], True)

        assert prompt.system_message == SYLLABUS_SYSTEM_MESSAGE
        assert "assessment" in prompt.system_message
        assert "week-by-week" in prompt.system_message

    def test_long_material_truncated_in_prompt(self):
        prompt = build_study_plan_prompt(
            CourseInfo(name="Intro Physics"),
            [make_doc("big.txt", "z" * 50000)],
            False
        )
        assert "z" * 10000 in prompt.user_message
        assert "z" * 10001 not in prompt.user_message

    def test_descriptor_is_a_copy(self):
        prompt = build_study_plan_prompt(CourseInfo(name="Intro Physics"), [], False)
        prompt.output_schema["parameters"]["required"].append("extra")

        assert "extra" not in STUDY_PLAN_FUNCTION["parameters"]["required"]

    def test_descriptor_requires_every_plan_field(self):
        required = STUDY_PLAN_FUNCTION["parameters"]["required"]
        assert set(required) == {"overview", "topics", "schedule", "techniques", "resources"}


class TestOtherPrompts:
    """Test roadmap and resource prompts"""

    def test_roadmap_prompt(self):
        prompt = build_roadmap_prompt("Rust", 6)

        assert prompt.system_message == ROADMAP_SYSTEM_MESSAGE
        assert '"Rust"' in prompt.user_message
        assert "exactly 6 weeks" in prompt.user_message
        assert prompt.function_name == "create_learning_roadmap"
        assert "mainTopics" in prompt.output_schema["parameters"]["required"]

    def test_resource_prompt(self):
        prompt = build_resource_prompt("Rust", "Rust ownership")

        assert prompt.function_name == "suggest_learning_resources"
        assert "Search query: Rust ownership" in prompt.user_message
