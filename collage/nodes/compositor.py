"""Compositor node that renders placements and writes pass artifacts."""

from __future__ import annotations

from typing import Callable

from PIL import Image

from background_fill import fill_gradient, fill_solid
from collage.state import CollageState, LayoutConfig
from collage.utils.artifacts import render_css, serialize_placements, write_json, write_text
from collage.utils.timing import StepTimer
from compositor import composite, load_item_images


def _hex_color(value: str) -> tuple:
    raw = value.lstrip("#")
    if len(raw) != 6:
        raise ValueError(f"Invalid background colour '{value}', expected #rrggbb")
    return tuple(int(raw[i : i + 2], 16) for i in (0, 2, 4))


def _background(config: LayoutConfig, canvas_size: tuple) -> Image.Image:
    reference = str(config.background_path) if config.background_path else None
    if config.background == "gradient":
        if reference is None:
            raise ValueError("gradient background needs a background image")
        return fill_gradient(canvas_size, reference)
    if config.background == "solid":
        return fill_solid(canvas_size, reference_path=reference)
    return fill_solid(canvas_size, color=_hex_color(config.background))


def build_compositor_node() -> Callable[[CollageState], CollageState]:
    def node(state: CollageState) -> CollageState:
        pass_dir = state.get_pass_dir()
        pass_dir.mkdir(parents=True, exist_ok=True)
        timer = StepTimer(state.timings)

        with timer.time_step("compose", echo=False):
            layout_path = pass_dir / "placements.json"
            write_json(
                layout_path,
                {
                    "container": {"width": state.container.width, "height": state.container.height},
                    "margin": state.config.margin,
                    "trigger": state.trigger,
                    "generation": state.generation,
                    "placements": serialize_placements(state.placement_set),
                },
            )
            write_text(pass_dir / "collage.css", render_css(state.placement_set))
            state.current_layout_path = layout_path

            if state.config.render:
                background = _background(state.config, state.canvas_size)
                images = load_item_images(state.items_dir, [meta.filename for meta in state.items])
                canvas = composite(background, images, state.placement_set)
                out_path = pass_dir / "collage.png"
                canvas.save(out_path)
                state.current_composite_path = out_path

        print(f"[compose] pass {state.generation:02d} written to {pass_dir}")
        return state

    return node
