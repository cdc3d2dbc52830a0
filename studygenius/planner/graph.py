from typing import Any
from langgraph.graph import START, END, StateGraph

from .state import PlanState
from .nodes import PlannerNodes
from .edges import route_after_generation

# CompiledGraph is the return type of StateGraph.compile()
CompiledGraph = Any


def create_study_plan_graph(nodes: PlannerNodes) -> CompiledGraph:
    """
    Study plan pipeline:

    extract_materials -> classify_materials -> build_prompt -> generate_plan
        -> [augment_resources] -> END
    """
    builder = StateGraph(PlanState)
    builder.add_node("extract_materials", nodes.extract_materials)
    builder.add_node("classify_materials", nodes.classify_materials)
    builder.add_node("build_prompt", nodes.build_study_plan_prompt)
    builder.add_node("generate_plan", nodes.generate_study_plan)
    builder.add_node("augment_resources", nodes.augment_resources)

    builder.add_edge(START, "extract_materials")
    builder.add_edge("extract_materials", "classify_materials")
    builder.add_edge("classify_materials", "build_prompt")
    builder.add_edge("build_prompt", "generate_plan")
    builder.add_conditional_edges(
        "generate_plan",
        route_after_generation,
        {"augment_resources": "augment_resources", END: END}
    )
    builder.add_edge("augment_resources", END)

    return builder.compile()


def create_roadmap_graph(nodes: PlannerNodes) -> CompiledGraph:
    """
    Learning roadmap pipeline:

    build_prompt -> generate_plan -> [augment_resources] -> END
    """
    builder = StateGraph(PlanState)
    builder.add_node("build_prompt", nodes.build_roadmap_prompt)
    builder.add_node("generate_plan", nodes.generate_roadmap)
    builder.add_node("augment_resources", nodes.augment_resources)

    builder.add_edge(START, "build_prompt")
    builder.add_edge("build_prompt", "generate_plan")
    builder.add_conditional_edges(
        "generate_plan",
        route_after_generation,
        {"augment_resources": "augment_resources", END: END}
    )
    builder.add_edge("augment_resources", END)

    return builder.compile()
