"""Helpers for writing pass artifacts and styling placed items."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from placement_engine import PlacementSet


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content or "", encoding="utf-8")


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2)


def serialize_placements(placement_set: PlacementSet) -> List[Dict[str, Any]]:
    return [
        {
            "key": placement.key,
            "left": placement.left,
            "top": placement.top,
            "width": placement.width,
            "height": placement.height,
            "reveal_delay": placement.reveal_delay,
            "attempts": placement.attempts,
            "exhausted": placement.exhausted,
        }
        for placement in placement_set
    ]


def _num(value: float) -> str:
    if abs(value) < 0.0005:
        return "0"
    return f"{value:.3f}".rstrip("0").rstrip(".") or "0"


def placement_styles(placement_set: PlacementSet) -> List[Dict[str, str]]:
    """Inline style declarations for each placed item, in item order."""

    return [
        {
            "left": f"{_num(placement.left)}px",
            "top": f"{_num(placement.top)}px",
            "animation-delay": f"{_num(placement.reveal_delay)}s",
        }
        for placement in placement_set
    ]


def render_css(placement_set: PlacementSet, selector: str = ".image-collage .img-wrapper") -> str:
    """Stylesheet with one ``:nth-child`` rule per placed item."""

    rules: List[str] = []
    for idx, style in enumerate(placement_styles(placement_set), start=1):
        body = " ".join(f"{prop}: {value};" for prop, value in style.items())
        rules.append(f"{selector}:nth-child({idx}) {{ {body} }}")
    return "\n".join(rules) + ("\n" if rules else "")


__all__ = [
    "write_text",
    "write_json",
    "serialize_placements",
    "placement_styles",
    "render_css",
]
