"""
Finished block atlas plus the per-slot flags the map renderer needs.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from PIL import Image

from blockatlas.layout import AtlasLayout, slot_rect
from blockatlas.opacity import classify
from blockatlas.raster.bitmap import ImageRect, to_image


@dataclass
class BlockImages:
    """
    A block atlas at one scale.

    Attributes:
        image: Atlas bitmap, (height, width, 4) uint8
        scale: B; every slot is a 4B x 4B cell
        layout: Slot layout the atlas was built with
        opacity: Per slot, True if its visible faces are fully opaque
        transparency: Per slot, True if its visible faces are fully transparent
    """
    image: np.ndarray
    scale: int
    layout: AtlasLayout
    opacity: List[bool]
    transparency: List[bool]

    @classmethod
    def from_bitmap(cls, image: np.ndarray, scale: int, layout: AtlasLayout) -> "BlockImages":
        """Wrap a finished atlas and classify its slots."""
        opacity, transparency = classify(image, scale, layout.num_images)
        return cls(image=image, scale=scale, layout=layout, opacity=opacity, transparency=transparency)

    @property
    def rectsize(self) -> int:
        return 4 * self.scale

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels"""
        return self.image.shape[1], self.image.shape[0]

    def get_rect(self, slot: int) -> ImageRect:
        return slot_rect(slot, self.scale)

    def offset(self, block_id: int, data: int = 0) -> int:
        """Slot holding the image for a block."""
        return self.layout.offsets.lookup(block_id, data)

    def is_opaque(self, block_id: int, data: int = 0) -> bool:
        return self.opacity[self.offset(block_id, data)]

    def is_transparent(self, block_id: int, data: int = 0) -> bool:
        return self.transparency[self.offset(block_id, data)]

    def slot_image(self, slot: int) -> Image.Image:
        """Crop one slot's cell out of the atlas."""
        r = self.get_rect(slot)
        return to_image(self.image[r.y:r.y + r.h, r.x:r.x + r.w])

    def to_image(self) -> Image.Image:
        return to_image(self.image)
