from PIL import Image
import numpy as np
from typing import Optional, Tuple


Color = Tuple[int, int, int]

DEFAULT_COLOR: Color = (255, 255, 255)


def _median_rgb(region: np.ndarray) -> Color:
    alpha = region[:, :, 3]
    mask = alpha > 0
    if np.any(mask):
        rgb = region[:, :, :3][mask]
    else:
        # fully transparent region: use every pixel
        rgb = region[:, :, :3].reshape(-1, 3)
    med = np.median(rgb, axis=0)
    return tuple(int(x) for x in med.tolist())


def reference_color(reference_path: str) -> Color:
    """Median colour of the non-transparent pixels of ``reference_path``."""
    with Image.open(reference_path) as im:
        arr = np.array(im.convert("RGBA"))
    return _median_rgb(arr)


def fill_solid(canvas_size: Tuple[int, int], reference_path: Optional[str] = None, color: Optional[Color] = None) -> Image.Image:
    """Create a solid RGBA canvas.

    An explicit ``color`` wins; otherwise the median colour of
    ``reference_path`` is used, falling back to white.
    """
    if color is None:
        color = reference_color(reference_path) if reference_path else DEFAULT_COLOR
    return Image.new("RGBA", _canvas_dims(canvas_size), tuple(color) + (255,))


def _canvas_dims(canvas_size: Tuple[int, int]) -> Tuple[int, int]:
    width, height = canvas_size
    return max(1, int(round(width))), max(1, int(round(height)))


def _edge_strip_colors(arr: np.ndarray, strip_px: int = 8) -> Tuple[Color, Color, Color, Color]:
    h, w = arr.shape[0], arr.shape[1]
    left = _median_rgb(arr[:, :min(strip_px, w), :])
    right = _median_rgb(arr[:, max(0, w - strip_px):, :])
    top = _median_rgb(arr[:min(strip_px, h), :, :])
    bottom = _median_rgb(arr[max(0, h - strip_px):, :, :])
    return left, right, top, bottom


def _color_distance(c1: Color, c2: Color) -> float:
    return float((c1[0] - c2[0]) ** 2 + (c1[1] - c2[1]) ** 2 + (c1[2] - c2[2]) ** 2)


def linear_gradient(canvas_size: Tuple[int, int], start: Color, end: Color, horizontal: bool = True) -> Image.Image:
    width, height = _canvas_dims(canvas_size)
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    c1 = np.array(start, dtype=np.float32)
    c2 = np.array(end, dtype=np.float32)
    if horizontal:
        t = np.linspace(0.0, 1.0, width, dtype=np.float32)[:, None]
        arr[:, :, :3] = ((1 - t) * c1 + t * c2).astype(np.uint8)[None, :, :]
    else:
        t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]
        arr[:, :, :3] = ((1 - t) * c1 + t * c2).astype(np.uint8)[:, None, :]
    arr[:, :, 3] = 255
    return Image.fromarray(arr)


def fill_gradient(canvas_size: Tuple[int, int], reference_path: str) -> Image.Image:
    """Linear gradient between the edge colours of ``reference_path``.

    Runs along whichever axis has the smaller colour change.
    """
    with Image.open(reference_path) as im:
        arr = np.array(im.convert("RGBA"))
    left, right, top, bottom = _edge_strip_colors(arr)
    if _color_distance(left, right) <= _color_distance(top, bottom):
        return linear_gradient(canvas_size, left, right, horizontal=True)
    return linear_gradient(canvas_size, top, bottom, horizontal=False)
