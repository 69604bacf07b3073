"""
Tile resampler.

Turns the 256x256 source sheet (16x16 tiles of 16x16 pixels) into a sheet of
the same 16x16 layout whose tiles are 2B x 2B, then applies the fixed tints
and border crops the drawing routines expect.
"""

import logging
from typing import Dict, Tuple

import numpy as np
from PIL import Image

from blockatlas.raster.bitmap import ImageRect, Shade, darken_region, from_image

logger = logging.getLogger(__name__)

SOURCE_SIZE = 256
SOURCE_TILE = 16
GRID = 16

# tile -> RGB multiplier (grass top, leaves)
TINTS: Dict[int, Shade] = {
    0: (0.6, 0.95, 0.3),
    52: (0.3, 1.0, 0.1),
}

# tile -> (x, y, w, h) region of the source sheet to resample instead of the
# full 16x16 cell; drops the transparent border of the cactus tiles
CROPS: Dict[int, Tuple[int, int, int, int]] = {
    69: (5 * 16 + 1, 4 * 16 + 1, 14, 14),
    70: (6 * 16 + 1, 4 * 16, 14, 16),
}


def resize_region(source: Image.Image, region: Tuple[int, int, int, int], size: int) -> Image.Image:
    """
    Resize a region of source to size x size.

    Shrinking in both directions averages each channel on its own (box
    filter per band), so alpha is never premultiplied into the colour and a
    uniform region keeps its exact pixel value. Anything else uses nearest
    neighbour so integer upscales stay pixel-exact.
    """
    x, y, w, h = region
    box = (x, y, x + w, y + h)
    if w > size and h > size:
        bands = [band.resize((size, size), resample=Image.BOX, box=box) for band in source.split()]
        return Image.merge(source.mode, bands)
    return source.resize((size, size), resample=Image.NEAREST, box=box)


def resample_tiles(source: Image.Image, scale: int) -> np.ndarray:
    """
    Build the resampled tile sheet for scale B.

    Args:
        source: 256x256 RGBA source sheet
        scale: B (tiles come out 2B x 2B)

    Returns:
        Bitmap of 32B x 32B pixels
    """
    if source.mode != 'RGBA':
        source = source.convert('RGBA')
    size = 2 * scale

    sheet = Image.new('RGBA', (GRID * size, GRID * size), (0, 0, 0, 0))
    for ty in range(GRID):
        for tx in range(GRID):
            cell = (tx * SOURCE_TILE, ty * SOURCE_TILE, SOURCE_TILE, SOURCE_TILE)
            sheet.paste(resize_region(source, cell, size), (tx * size, ty * size))
    tiles = from_image(sheet)

    for tile, shade in TINTS.items():
        darken_region(tiles, _tile_rect(tile, size), shade)

    for tile, region in CROPS.items():
        rect = _tile_rect(tile, size)
        tiles[rect.y:rect.y + size, rect.x:rect.x + size] = from_image(resize_region(source, region, size))

    logger.debug(f"Resampled {GRID * GRID} tiles to {size}x{size}")
    return tiles


def _tile_rect(tile: int, size: int) -> ImageRect:
    return ImageRect((tile % GRID) * size, (tile // GRID) * size, size, size)
