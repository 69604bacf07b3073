"""
Atlas assembler.

Builds a complete atlas from the source tile sheet: resample the tiles,
allocate the atlas, run every draw call of the layout.
"""

import logging
from typing import Optional

import numpy as np
from PIL import Image

from blockatlas.exceptions import InvalidScaleError, SourceAtlasMissingError, SourceAtlasSizeError
from blockatlas.layout import AtlasLayout, default_layout
from blockatlas.raster.bitmap import new_bitmap
from blockatlas.resample import SOURCE_SIZE, resample_tiles

logger = logging.getLogger(__name__)

MIN_SCALE = 2


def construct(scale: int, source: Optional[Image.Image], layout: Optional[AtlasLayout] = None) -> np.ndarray:
    """
    Draw every slot of the atlas at scale B.

    Args:
        scale: B; each slot's cell is 4B x 4B
        source: Decoded 256x256 source tile sheet
        layout: Slot layout (default layout if None)

    Returns:
        Atlas bitmap of (4B * 16) x ((num_images // 16 + 1) * 4B)

    Raises:
        SourceAtlasMissingError: source is None
        SourceAtlasSizeError: source is not 256x256
        InvalidScaleError: scale is below 2
    """
    if source is None:
        raise SourceAtlasMissingError("No source tile sheet to build from")
    if source.size != (SOURCE_SIZE, SOURCE_SIZE):
        w, h = source.size
        raise SourceAtlasSizeError(
            f"Source tile sheet must be {SOURCE_SIZE}x{SOURCE_SIZE}, got {w}x{h}"
        )
    if scale < MIN_SCALE:
        raise InvalidScaleError(f"Scale must be at least {MIN_SCALE}, got {scale}")
    layout = layout or default_layout()

    tiles = resample_tiles(source, scale)

    width, height = layout.atlas_size(scale)
    image = new_bitmap(width, height)
    for call in layout.calls:
        call.apply(image, tiles, scale)

    logger.debug(f"Drew {len(layout.calls)} calls into {width}x{height} atlas")
    return image
