"""Utility helpers for the collage workflow."""

from .artifacts import placement_styles, render_css, serialize_placements, write_json, write_text
from .loaders import ensure_items_dir, load_items, load_manifest
from .timing import StepTimer

__all__ = [
    "placement_styles",
    "render_css",
    "serialize_placements",
    "write_json",
    "write_text",
    "ensure_items_dir",
    "load_items",
    "load_manifest",
    "StepTimer",
]
