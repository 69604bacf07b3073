"""
Opacity classifier.

Looks at the three visible faces (north, west, top) of every slot and
reports whether each slot is fully opaque (every sampled alpha is 255) or
fully transparent (every sampled alpha is 0). The map renderer uses the
flags to skip drawing hidden blocks.
"""

import logging
from typing import List, Tuple

import numpy as np

from blockatlas.layout import slot_rect
from blockatlas.raster.faces import east_west, north_south, top

logger = logging.getLogger(__name__)


def classify_slot(image: np.ndarray, slot: int, scale: int) -> Tuple[bool, bool]:
    """Return (opaque, transparent) for one slot."""
    rect = slot_rect(slot, scale)
    size = 2 * scale
    faces = (
        north_south(rect.x, rect.y + scale, size),
        east_west(rect.x + 2 * scale, rect.y + 2 * scale, size),
        top(rect.x + 2 * scale - 1, rect.y, size),
    )
    opaque = transparent = True
    for walk in faces:
        xs, ys = walk.coords()
        alpha = image[ys, xs, 3]
        opaque = opaque and bool((alpha == 255).all())
        transparent = transparent and bool((alpha == 0).all())
        if not opaque and not transparent:
            break
    return opaque, transparent


def classify(image: np.ndarray, scale: int, num_images: int) -> Tuple[List[bool], List[bool]]:
    """
    Classify every slot of an atlas.

    Args:
        image: Atlas bitmap
        scale: B
        num_images: Number of slots to classify

    Returns:
        Tuple of (opacity, transparency) lists, one entry per slot
    """
    opacity = []
    transparency = []
    for slot in range(num_images):
        opaque, transparent = classify_slot(image, slot, scale)
        opacity.append(opaque)
        transparency.append(transparent)
    logger.debug(f"Classified {num_images} slots: {sum(opacity)} opaque, {sum(transparency)} transparent")
    return opacity, transparency
