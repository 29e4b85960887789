"""
Image-backed grids.

:class:`TextureGrid` decodes an image into an ``H x W x 4`` RGBA array and
exposes it through the grid contract. Pixels with alpha below the opacity
threshold are holes. Visible pixels map through ``process_value``; by default
that is the ``#rrggbbaa`` colour string, and ``None`` collapses every visible
pixel to ``1`` so groups follow transparency boundaries only.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, Union

import numpy as np
from PIL import Image

from .grid import Array, BaseGrid, in_bounds

ImageSource = Union[str, Path, Image.Image, np.ndarray]
ValueProcessor = Callable[[int, int, int, int], Any]

DEFAULT_OPACITY_THRESHOLD = 15
VISIBLE_VALUE = 1


def rgba_to_hex(r: int, g: int, b: int, a: int) -> str:
    """Return the colour as ``#rrggbbaa``."""
    return "#" + "".join(f"{c:02x}" for c in (r, g, b, a))


def load_image(path: Union[str, Path]) -> Image.Image:
    """Open an image file and convert it to RGBA."""
    with Image.open(path) as img:
        return img.convert("RGBA")


def to_rgba_array(image: ImageSource) -> Array:
    """Convert an image path, PIL image or numpy array into ``uint8`` RGBA pixels.

    Arrays may be grayscale (``H x W``), RGB (``H x W x 3``) or RGBA
    (``H x W x 4``); missing alpha is filled with 255.
    """
    if isinstance(image, (str, Path)):
        image = load_image(image)
    if isinstance(image, Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return np.asarray(image, dtype=np.uint8)
    if not isinstance(image, np.ndarray):
        raise TypeError(f"unsupported image type: {type(image).__name__}")

    a = np.asarray(image)
    if a.ndim == 2:
        a = np.stack([a, a, a], axis=-1)
    if a.ndim != 3 or a.shape[-1] not in (3, 4):
        raise ValueError(f"image array must be HxW, HxWx3 or HxWx4, got shape={a.shape}")
    if a.dtype != np.uint8 and a.size:
        if a.min() < 0 or a.max() > 255:
            raise ValueError(f"image values must lie in 0..255, got {a.min()}..{a.max()}")
        if np.issubdtype(a.dtype, np.floating) and np.any(a != np.floor(a)):
            raise ValueError("image values must be whole numbers in 0..255")
    a = a.astype(np.uint8)
    if a.shape[-1] == 3:
        alpha = np.full(a.shape[:2] + (1,), 255, dtype=np.uint8)
        a = np.concatenate([a, alpha], axis=-1)
    return a


class TextureGrid(BaseGrid):
    """Grid provider over the pixels of an image.

    Parameters
    ----------
    image : path, PIL image or numpy array
        Source pixels.
    opacity_threshold : int, optional
        Pixels with alpha lower than this are holes, by default 15.
    process_value : callable or None, optional
        Maps ``(r, g, b, a)`` to a cell value. ``None`` makes every visible
        pixel the same value.
    """

    def __init__(
        self,
        image: ImageSource,
        opacity_threshold: Optional[int] = DEFAULT_OPACITY_THRESHOLD,
        process_value: Optional[ValueProcessor] = rgba_to_hex,
    ) -> None:
        self.pixels = to_rgba_array(image)
        self.opacity_threshold = opacity_threshold or 0
        self.process_value = process_value

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def value_at(self, x: int, y: int) -> Optional[Any]:
        if not in_bounds(self, x, y):
            return None

        r, g, b, a = (int(c) for c in self.pixels[y, x])
        if a < self.opacity_threshold:
            return None

        if self.process_value is None:
            return VISIBLE_VALUE
        return self.process_value(r, g, b, a)
