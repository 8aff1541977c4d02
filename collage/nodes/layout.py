"""Layout node: run the placement engine over the measured items."""

from __future__ import annotations

from typing import Callable

from collage.state import CollageState
from collage.utils.timing import StepTimer
from placement_engine import RandomSource, layout


def build_layout_node(rng: RandomSource) -> Callable[[CollageState], CollageState]:
    def node(state: CollageState) -> CollageState:
        cfg = state.config
        timer = StepTimer(state.timings)
        with timer.time_step("layout", echo=False):
            state.placement_set = layout(
                state.container,
                state.measured,
                margin=cfg.margin,
                rng=rng,
                max_attempts=cfg.max_attempts,
                oversize=cfg.oversize,
            )
        print(
            f"[layout] placed {len(state.placement_set)} items "
            f"in {state.placement_set.total_draws} draws"
        )
        return state

    return node
