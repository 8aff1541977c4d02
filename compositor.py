from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Tuple
from PIL import Image

from placement_engine import Placement, PlacementSet


def pixel_box(placement: Placement) -> Tuple[int, int, int, int]:
    """Integer x1, y1, x2, y2 for a placement (offsets rounded, size at least 1px)."""
    x1 = int(round(placement.left))
    y1 = int(round(placement.top))
    w = max(1, int(round(placement.width)))
    h = max(1, int(round(placement.height)))
    return x1, y1, x1 + w, y1 + h


def composite(background_img: Image.Image, item_images: Dict[str, Image.Image], placement_set: PlacementSet) -> Image.Image:
    """Paste every placed item onto a copy of the background.

    Items are drawn in placement order, so later items end up on top where an
    exhausted placement still overlaps. Images are resized to the placement
    size when their intrinsic size differs. Parts falling outside the canvas
    are clipped.
    """
    canvas = background_img.convert("RGBA")
    for p in placement_set:
        if p.key not in item_images:
            continue
        x1, y1, x2, y2 = pixel_box(p)
        obj = item_images[p.key].convert("RGBA")
        if obj.size != (x2 - x1, y2 - y1):
            obj = obj.resize((x2 - x1, y2 - y1), Image.LANCZOS)
        # alpha_composite rejects negative destinations
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(obj, (x1, y1))
        canvas.alpha_composite(layer)
    return canvas


def load_item_images(items_dir: Path, filenames: Iterable[str]) -> Dict[str, Image.Image]:
    images: Dict[str, Image.Image] = {}
    for name in filenames:
        path = Path(items_dir) / name
        with Image.open(path) as im:
            images[name] = im.convert("RGBA")
    return images
