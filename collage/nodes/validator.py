"""Validation node for checking placement coverage and residual overlap."""

from __future__ import annotations

from typing import Callable

from collage.state import CollageState


def build_validator_node() -> Callable[[CollageState], CollageState]:
    def node(state: CollageState) -> CollageState:
        placement_set = state.placement_set
        if placement_set is None or len(placement_set) != len(state.measured):
            got = 0 if placement_set is None else len(placement_set)
            raise ValueError(
                f"Coverage validation failed: {got} placements for {len(state.measured)} items"
            )
        for idx, placement in enumerate(placement_set):
            if placement.exhausted:
                state.warnings.append(
                    f"{placement.key or idx} still overlaps after {placement.attempts} attempts"
                )
        for message in state.warnings:
            print(f"[validate] {message}")
        return state

    return node
