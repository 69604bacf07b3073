"""
Bitmap helpers.

A bitmap is a numpy array of shape (height, width, 4), dtype uint8, holding
RGBA pixels; it is indexed as bitmap[y, x]. Pillow is only involved at the
edges (decoding the source sheet, encoding the finished atlas).
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

Pixel = Tuple[int, int, int, int]
Shade = Tuple[float, float, float]


@dataclass(frozen=True)
class ImageRect:
    """Axis-aligned pixel rectangle."""
    x: int
    y: int
    w: int
    h: int


def new_bitmap(width: int, height: int) -> np.ndarray:
    """Allocate a fully transparent bitmap."""
    return np.zeros((height, width, 4), dtype=np.uint8)


def from_image(image: Image.Image) -> np.ndarray:
    """Copy a PIL image into a new RGBA bitmap."""
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    return np.array(image, dtype=np.uint8)


def to_image(bitmap: np.ndarray) -> Image.Image:
    """Wrap a bitmap as a PIL RGBA image (copies)."""
    return Image.fromarray(np.ascontiguousarray(bitmap, dtype=np.uint8))


def darken(pixels: np.ndarray, shade: Shade) -> np.ndarray:
    """
    Multiply the RGB channels of pixels by shade, truncating to integers.

    Alpha is left untouched. Works on any array whose last axis is RGBA.
    """
    out = np.array(pixels, dtype=np.uint8, copy=True)
    factors = np.asarray(shade, dtype=np.float64)
    out[..., :3] = (out[..., :3].astype(np.float64) * factors).astype(np.uint8)
    return out


def darken_region(bitmap: np.ndarray, rect: ImageRect, shade: Shade) -> None:
    """Darken a rectangle of bitmap in place."""
    region = bitmap[rect.y:rect.y + rect.h, rect.x:rect.x + rect.w]
    region[...] = darken(region, shade)


def blit(source: np.ndarray, rect: ImageRect, dest: np.ndarray, x: int, y: int) -> None:
    """Copy rect out of source into dest with its top-left corner at (x, y)."""
    dest[y:y + rect.h, x:x + rect.w] = source[rect.y:rect.y + rect.h, rect.x:rect.x + rect.w]
