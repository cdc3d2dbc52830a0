"""
StudyGenius - course material to study plan generation

This package turns uploaded course materials (or a free-text topic) into
structured study plans and learning roadmaps using a hosted language model:
- planner: text extraction, syllabus detection, prompt building, plan
  generation with JSON repair, resource search and the LangGraph pipeline
- core: LLM construction and response helpers, study group assistant
- storage: blob store adapters (GCS, HTTP, local directory)
- tools: web search providers (Tavily)
- app: command line entry point

Usage:
    from studygenius.planner.service import create_study_plan_service
    service = create_study_plan_service()
    record = await service.generate_study_plan(course_info, materials)
"""

__version__ = "0.1.0"
__author__ = "StudyGenius Team"

__all__ = ["__version__", "__author__"]
