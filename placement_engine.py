"""Random, non-overlapping placement of rectangles inside a container.

Items are placed one after another. Each item draws a uniformly random
top-left offset and is redrawn while it collides with an earlier placement,
up to ``max_attempts`` draws. Earlier placements are never moved.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple


DEFAULT_MARGIN = 20.0
DEFAULT_MAX_ATTEMPTS = 50

OVERSIZE_POLICIES: Tuple[str, ...] = ("clamp", "allow", "reject")


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class Container:
    width: float
    height: float


@dataclass(frozen=True)
class Item:
    width: float
    height: float
    key: Optional[str] = None


@dataclass
class Placement:
    """Accepted position for a single item."""

    left: float
    top: float
    width: float
    height: float
    reveal_delay: float = 0.0
    attempts: int = 1
    exhausted: bool = False
    key: Optional[str] = None

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class PlacementSet:
    """Ordered placements of one layout pass, matching input item order."""

    placements: List[Placement] = field(default_factory=list)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self.placements)

    def __len__(self) -> int:
        return len(self.placements)

    def __getitem__(self, index: int) -> Placement:
        return self.placements[index]

    @property
    def total_draws(self) -> int:
        return sum(p.attempts for p in self.placements)

    def residual_overlaps(self, margin: float) -> List[Tuple[int, int]]:
        """Index pairs whose boxes fail the separation test."""

        pairs: List[Tuple[int, int]] = []
        for j, later in enumerate(self.placements):
            for i in range(j):
                if not boxes_separated(later, self.placements[i], margin):
                    pairs.append((i, j))
        return pairs


def boxes_separated(candidate: Placement, other: Placement, margin: float) -> bool:
    """True when the two boxes are further apart than ``margin`` on some axis.

    A gap of exactly ``margin`` counts as a collision.
    """
    return (
        candidate.left + candidate.width + margin < other.left
        or candidate.left > other.left + other.width + margin
        or candidate.top + candidate.height + margin < other.top
        or candidate.top > other.top + other.height + margin
    )


def _check_non_negative(value: float, label: str) -> float:
    if value < 0:
        raise ValueError(f"{label} cannot be negative (got {value})")
    return value


def _sampling_span(container_extent: float, item_extent: float, oversize: str, label: str) -> float:
    span = container_extent - item_extent
    if span >= 0:
        return span
    if oversize == "reject":
        raise ValueError(
            f"Item {label} {item_extent} exceeds container {label} {container_extent}"
        )
    if oversize == "clamp":
        return 0.0
    return span


def layout(
    container: Container,
    items: Sequence[Item],
    margin: float = DEFAULT_MARGIN,
    rng: Optional[RandomSource] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    oversize: str = "clamp",
) -> PlacementSet:
    """Place ``items`` inside ``container`` without overlap where possible.

    Args:
        container: Region to place items in.
        items: Rendered item sizes, in placement order.
        margin: Minimum gap kept between any two placed items.
        rng: Uniform ``[0, 1)`` source exposing ``random()``. A fresh
            ``random.Random`` is used when omitted.
        max_attempts: Draw budget per item. When it runs out the last
            candidate is accepted and flagged ``exhausted``.
        oversize: What to do with an item larger than the container:
            ``"clamp"`` pins it to offset 0 on that axis, ``"allow"`` keeps
            the negative sampling range, ``"reject"`` raises ``ValueError``.

    Returns:
        A :class:`PlacementSet` with one placement per item, in input order.
    """
    if oversize not in OVERSIZE_POLICIES:
        raise ValueError(f"Unknown oversize policy '{oversize}', expected one of {OVERSIZE_POLICIES}")
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    _check_non_negative(container.width, "container width")
    _check_non_negative(container.height, "container height")
    _check_non_negative(margin, "margin")
    for idx, item in enumerate(items):
        _check_non_negative(item.width, f"item {idx} width")
        _check_non_negative(item.height, f"item {idx} height")

    if rng is None:
        rng = random.Random()

    spans = [
        (
            _sampling_span(container.width, item.width, oversize, "width"),
            _sampling_span(container.height, item.height, oversize, "height"),
        )
        for item in items
    ]

    accepted: List[Placement] = []
    for item, (span_x, span_y) in zip(items, spans):
        attempts = 0
        while True:
            candidate = Placement(
                left=rng.random() * span_x,
                top=rng.random() * span_y,
                width=item.width,
                height=item.height,
                key=item.key,
            )
            attempts += 1
            clear = all(boxes_separated(candidate, other, margin) for other in accepted)
            if clear or attempts >= max_attempts:
                break
        candidate.attempts = attempts
        candidate.exhausted = not clear
        candidate.reveal_delay = rng.random()
        accepted.append(candidate)

    return PlacementSet(placements=accepted)


__all__ = [
    "Container",
    "Item",
    "Placement",
    "PlacementSet",
    "RandomSource",
    "boxes_separated",
    "layout",
    "DEFAULT_MARGIN",
    "DEFAULT_MAX_ATTEMPTS",
    "OVERSIZE_POLICIES",
]
