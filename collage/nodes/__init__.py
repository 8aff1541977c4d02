"""Graph node factories for the collage workflow."""

from .measure import build_measure_node
from .layout import build_layout_node
from .validator import build_validator_node
from .compositor import build_compositor_node

__all__ = [
    "build_measure_node",
    "build_layout_node",
    "build_validator_node",
    "build_compositor_node",
]
