"""Workflow orchestration helpers for the collage pipeline."""

from __future__ import annotations

import random
from dataclasses import fields
from pathlib import Path
from typing import Optional, Tuple

from collage.graph import build_workflow
from collage.state import CollageState, LayoutConfig, RunContext
from collage.utils import ensure_items_dir, load_items, load_manifest
from placement_engine import Container, RandomSource


def initialize_state(
    items_dir: Path,
    base_run_dir: Path,
    container_size: Tuple[float, float],
    config: Optional[LayoutConfig] = None,
    name: Optional[str] = None,
) -> CollageState:
    """Create an initial CollageState from an items folder."""

    items_dir = Path(items_dir)
    manifest_path = ensure_items_dir(items_dir)
    if manifest_path is not None:
        items = load_manifest(manifest_path, items_dir)
    else:
        items = load_items(items_dir)
    name = name or items_dir.name
    run_root = Path(base_run_dir) / name
    run_root.mkdir(parents=True, exist_ok=True)

    run_context = RunContext(
        name=name,
        items_dir=items_dir,
        manifest_path=manifest_path,
        run_root=run_root,
    )

    width, height = container_size
    return CollageState(
        run=run_context,
        config=config or LayoutConfig(),
        items=items,
        container=Container(float(width), float(height)),
    )


def compile_workflow(rng: RandomSource):
    """Build and compile the single-pass graph around ``rng``."""

    return build_workflow(rng).compile()


def _as_state(result) -> CollageState:
    if isinstance(result, CollageState):
        return result
    names = {f.name for f in fields(CollageState)}
    return CollageState(**{k: v for k, v in result.items() if k in names})


def run_layout_pass(app, state: CollageState) -> CollageState:
    payload = {f.name: getattr(state, f.name) for f in fields(CollageState)}
    return _as_state(app.invoke(payload))


class CollageSession:
    """Re-runs the full layout pass for every ready or resize trigger.

    Each pass discards the previous placements; nothing carries over between
    passes except the random source.
    """

    def __init__(self, state: CollageState, rng: Optional[RandomSource] = None) -> None:
        if rng is None:
            rng = random.Random(state.config.seed)
        self.rng = rng
        self.state = state
        self.app = compile_workflow(rng)
        self.ready = False

    def _run(self, trigger: str) -> CollageState:
        self.state.generation += 1
        self.state.trigger = trigger
        self.state = run_layout_pass(self.app, self.state)
        return self.state

    def on_ready(self) -> CollageState:
        self.ready = True
        return self._run("ready")

    def on_resize(self, width: float, height: float) -> CollageState:
        if width < 0 or height < 0:
            raise ValueError(f"Container size cannot be negative: {width}x{height}")
        self.state.container = Container(float(width), float(height))
        if not self.ready:
            return self.on_ready()
        return self._run("resize")

    @property
    def placement_set(self):
        return self.state.placement_set
