"""Measure node: read the rendered size of every item for this pass."""

from __future__ import annotations

from typing import Callable

from collage.state import CollageState
from collage.utils.timing import StepTimer
from placement_engine import Item


def build_measure_node() -> Callable[[CollageState], CollageState]:
    def node(state: CollageState) -> CollageState:
        timer = StepTimer(state.timings)
        with timer.time_step("measure", echo=False):
            state.reset_pass()
            scale = state.config.scale
            if scale <= 0:
                raise ValueError("scale must be positive")
            state.measured = [
                Item(*meta.rendered_size(scale), key=meta.filename)
                for meta in state.items
            ]
        print(
            f"[measure] pass {state.generation:02d} ({state.trigger}): "
            f"{len(state.measured)} items, container "
            f"{state.container.width:g}x{state.container.height:g}"
        )
        return state

    return node
