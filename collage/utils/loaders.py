"""Item loading helpers: read image sizes from an items folder."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from PIL import Image

from collage.state import ItemMeta


IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp"}
MANIFEST_NAME = "collage.json"


def _read_size(image_path: Path) -> tuple:
    if not image_path.exists():
        raise FileNotFoundError(f"Collage image missing: {image_path}")
    with Image.open(image_path) as im:
        return im.size


def load_items(items_dir: Path) -> List[ItemMeta]:
    """Every image in ``items_dir``, in file name order."""

    items_dir = Path(items_dir)
    if not items_dir.is_dir():
        raise FileNotFoundError(f"Items folder not found: {items_dir}")
    paths = sorted(p for p in items_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
    if not paths:
        raise ValueError(f"No images found in {items_dir}")
    items: List[ItemMeta] = []
    for path in paths:
        width, height = _read_size(path)
        items.append(ItemMeta(filename=path.name, intrinsic_width=width, intrinsic_height=height))
    return items


def load_manifest(manifest_path: Path, items_dir: Path) -> List[ItemMeta]:
    """Items listed in a ``collage.json`` manifest, in manifest order.

    Each entry is ``{"filename": ..., "width"?: ..., "height"?: ...}``; explicit
    sizes replace the image's own size.
    """

    entries = json.loads(Path(manifest_path).read_text(encoding="utf-8"))
    if isinstance(entries, dict):
        entries = entries.get("items", [])
    if not entries:
        raise ValueError(f"Manifest {manifest_path} lists no items")
    items: List[ItemMeta] = []
    for entry in entries:
        if "filename" not in entry:
            raise ValueError("Manifest entry missing 'filename'")
        filename = Path(entry["filename"]).name
        width, height = _read_size(Path(items_dir) / filename)
        items.append(
            ItemMeta(
                filename=filename,
                intrinsic_width=width,
                intrinsic_height=height,
                width=float(entry["width"]) if "width" in entry else None,
                height=float(entry["height"]) if "height" in entry else None,
            )
        )
    return items


def ensure_items_dir(items_dir: Path) -> Optional[Path]:
    """Validate ``items_dir`` and return its manifest path if one exists."""

    items_dir = Path(items_dir)
    if not items_dir.is_dir():
        raise FileNotFoundError(f"Items folder not found: {items_dir}")
    manifest = items_dir / MANIFEST_NAME
    return manifest if manifest.exists() else None
