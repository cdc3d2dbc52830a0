"""
Exceptions raised by the planner.

Only precondition failures (``InvalidRequestError``) reach callers of the
pipeline. ``PlanParseError`` is raised by the JSON repair chain and absorbed
by the plan generator, which degrades to an empty but well-formed plan.
"""
from typing import List, Tuple


class PlannerError(Exception):
    """Base class for planner errors."""


class InvalidRequestError(PlannerError, ValueError):
    """Required input is missing or malformed; raised before the pipeline runs."""


class PlanParseError(PlannerError):
    """Model output could not be parsed into a JSON object by any repair strategy."""

    def __init__(self, text: str, attempts: List[Tuple[str, str]]):
        self.text = text
        self.attempts = attempts
        summary = "; ".join(f"{name}: {error}" for name, error in attempts)
        super().__init__(f"Could not parse model output as JSON ({summary})")
