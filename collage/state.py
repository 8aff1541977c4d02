"""Workflow state definitions for the collage layout pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from placement_engine import (
    DEFAULT_MARGIN,
    DEFAULT_MAX_ATTEMPTS,
    Container,
    Item,
    PlacementSet,
)


@dataclass
class ItemMeta:
    """Metadata for one collage image."""

    filename: str
    intrinsic_width: int
    intrinsic_height: int
    # explicit rendered size from a manifest, overrides intrinsic * scale
    width: Optional[float] = None
    height: Optional[float] = None

    def rendered_size(self, scale: float) -> Tuple[float, float]:
        w = self.width if self.width is not None else self.intrinsic_width * scale
        h = self.height if self.height is not None else self.intrinsic_height * scale
        return float(w), float(h)


@dataclass
class LayoutConfig:
    margin: float = DEFAULT_MARGIN
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    oversize: str = "clamp"
    scale: float = 1.0
    seed: Optional[int] = None
    render: bool = True
    # "solid", "gradient" or "#rrggbb"
    background: str = "#ffffff"
    background_path: Optional[Path] = None


@dataclass
class RunContext:
    name: str
    items_dir: Path
    manifest_path: Optional[Path]
    run_root: Path


@dataclass
class CollageState:
    """Workflow state propagated through the LangGraph pipeline."""

    # Immutable input context -------------------------------------------------
    run: RunContext
    config: LayoutConfig
    items: List[ItemMeta]

    # Current container size, replaced on every resize ----------------------
    container: Container

    # Pass tracking -----------------------------------------------------------
    generation: int = 0
    trigger: str = "ready"  # ready | resize

    # Measured items and engine output (rebuilt every pass) -----------------
    measured: List[Item] = field(default_factory=list)
    placement_set: Optional[PlacementSet] = None

    # Diagnostics -------------------------------------------------------------
    warnings: List[str] = field(default_factory=list)
    current_composite_path: Optional[Path] = None
    current_layout_path: Optional[Path] = None
    timings: Dict[str, float] = field(default_factory=dict)

    def get_pass_dir(self) -> Path:
        return self.run.run_root / f"pass_{self.generation:02d}"

    @property
    def pass_dir(self) -> Path:
        return self.get_pass_dir()

    @property
    def items_dir(self) -> Path:
        return self.run.items_dir

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return int(round(self.container.width)), int(round(self.container.height))

    def reset_pass(self) -> None:
        """Drop everything computed by the previous pass."""

        self.measured = []
        self.placement_set = None
        self.warnings = []
        self.current_composite_path = None
        self.current_layout_path = None
