"""LangGraph workflow definition for one collage layout pass."""

from __future__ import annotations

from langgraph.graph import END, StateGraph

from collage.nodes import (
    build_compositor_node,
    build_layout_node,
    build_measure_node,
    build_validator_node,
)
from collage.state import CollageState
from placement_engine import RandomSource


def build_workflow(rng: RandomSource) -> StateGraph:
    graph = StateGraph(CollageState)

    graph.add_node("measure", build_measure_node())
    graph.add_node("layout", build_layout_node(rng))
    graph.add_node("validator", build_validator_node())
    graph.add_node("compositor", build_compositor_node())

    graph.set_entry_point("measure")
    graph.add_edge("measure", "layout")
    graph.add_edge("layout", "validator")
    graph.add_edge("validator", "compositor")
    graph.add_edge("compositor", END)

    return graph
