from typing import Literal
from langgraph.graph import END
from .state import PlanState


def route_after_generation(state: PlanState) -> Literal["augment_resources", "__end__"]:
    """Run resource augmentation only when the caller asked for it."""
    if state.get("include_resources", False):
        return "augment_resources"
    return END
