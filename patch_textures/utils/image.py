import numpy as np
import numpy.typing as npt
from PIL import Image
from typing import Optional, Tuple

# Type aliases for clarity
UInt8Array = npt.NDArray[np.uint8]
Size = Tuple[int, int]
Point = Tuple[int, int]
Box = Tuple[int, int, int, int]

TRANSPARENT = (0, 0, 0, 0)


def ensure_rgba(image: Image.Image) -> Image.Image:
    """
    Return ``image`` in RGBA mode, converting (a copy) only when needed.
    """
    if image.mode != "RGBA":
        return image.convert("RGBA")
    return image


def blank_canvas(width: int, height: int) -> Image.Image:
    """
    Fully transparent RGBA canvas. Zero-sized canvases are valid.
    """
    if width < 0 or height < 0:
        raise ValueError(f"Canvas size must be non-negative, got {width}x{height}")
    return Image.new("RGBA", (width, height), TRANSPARENT)


def clip_box(canvas_size: Size, patch_size: Size, origin: Point) -> Optional[Tuple[Point, Box]]:
    """
    Intersect a patch placed at ``origin`` with the canvas.

    Returns the destination corner on the canvas and the matching source box
    (left, top, right, bottom) inside the patch, or None when nothing of the
    patch lands on the canvas.
    """
    canvas_w, canvas_h = canvas_size
    patch_w, patch_h = patch_size
    x, y = origin

    left, top = max(x, 0), max(y, 0)
    right, bottom = min(x + patch_w, canvas_w), min(y + patch_h, canvas_h)
    if right <= left or bottom <= top:
        return None

    return (left, top), (left - x, top - y, right - x, bottom - y)


def to_array(image: Image.Image) -> UInt8Array:
    """
    (H, W, 4) uint8 view of an image, coerced to RGBA.

    Public export for consumers that post-process rasters as arrays.
    """
    return np.array(ensure_rgba(image), dtype=np.uint8)
