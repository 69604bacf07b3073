"""
Block drawing routines.

Every routine paints one 4B x 4B cell of the atlas from the resampled tile
sheet (16x16 tiles of 2B x 2B pixels). Writes are opaque copies; shaded
faces have their RGB multiplied and truncated, alpha is never blended.

Cell geometry for scale B (tilesize = 2B):

    north face   parallelogram at (0, B), leaning down, shade 0.9
    west face    parallelogram at (2B, 2B), leaning up, shade 0.8
    top face     diamond with its apex at (2B-1, 0), unshaded

Every routine shares the signature (dest, rect, tiles, scale, ...) so the
layout can describe a draw as (routine, args). Routines do not check that
rect lies inside dest; out-of-range indices trip an assertion.
"""

from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from blockatlas.raster.bitmap import ImageRect, Pixel, Shade, darken
from blockatlas.raster.faces import (
    FaceWalk,
    east_west,
    north_south,
    square,
    tile_walk,
    top,
)

NORTH_SHADE: Shade = (0.9, 0.9, 0.9)
WEST_SHADE: Shade = (0.8, 0.8, 0.8)


class Face(IntEnum):
    """Upright face of a cell, named by the direction it faces."""
    SOUTH = 0
    NORTH = 1
    WEST = 2
    EAST = 3


def _in_bounds(dest: np.ndarray, xs: np.ndarray, ys: np.ndarray) -> bool:
    if xs.size == 0:
        return True
    h, w = dest.shape[:2]
    return xs.min() >= 0 and ys.min() >= 0 and xs.max() < w and ys.max() < h


def _sample(tiles: np.ndarray, tile: int, size: int, rotation: int = 0) -> np.ndarray:
    xs, ys = tile_walk(tile, size, rotation).coords()
    return tiles[ys, xs]


def _paint(
    dest: np.ndarray,
    walk: FaceWalk,
    pixels: np.ndarray,
    mask: Optional[np.ndarray] = None,
    shade: Optional[Shade] = None,
    y_shift: Optional[np.ndarray] = None,
) -> None:
    """Write pixels (one per walk step) along walk, keeping only masked steps."""
    xs, ys = walk.coords()
    if y_shift is not None:
        ys = ys + y_shift
    if shade is not None:
        pixels = darken(pixels, shade)
    if mask is not None:
        xs, ys, pixels = xs[mask], ys[mask], pixels[mask]
    assert _in_bounds(dest, xs, ys), f"{walk.shape.value} walk at ({walk.x}, {walk.y}) leaves the bitmap"
    dest[ys, xs] = pixels


def _cutoff(fraction: float, tilesize: int) -> int:
    return max(0, min(tilesize - 1, int(fraction * tilesize)))


def _north(rect: ImageRect, scale: int) -> FaceWalk:
    return north_south(rect.x, rect.y + scale, 2 * scale)


def _west(rect: ImageRect, scale: int) -> FaceWalk:
    return east_west(rect.x + 2 * scale, rect.y + 2 * scale, 2 * scale)


def _top(rect: ImageRect, scale: int, drop: int = 0) -> FaceWalk:
    return top(rect.x + 2 * scale - 1, rect.y + drop, 2 * scale)


def _upright(rect: ImageRect, face: Face, scale: int) -> FaceWalk:
    size = 2 * scale
    face = Face(face)
    if face is Face.SOUTH:
        return north_south(rect.x + 2 * scale, rect.y, size)
    if face is Face.NORTH:
        return north_south(rect.x, rect.y + scale, size)
    if face is Face.WEST:
        return east_west(rect.x + 2 * scale, rect.y + 2 * scale, size)
    return east_west(rect.x, rect.y + scale, size)


def draw_block(dest, rect, tiles, scale, north: Optional[int], west: Optional[int], up: Optional[int]) -> None:
    """
    Draw a full cube from up to three tiles.

    Args:
        dest: Atlas bitmap
        rect: Cell to draw into
        tiles: Resampled tile sheet
        scale: B
        north: Tile for the north face (shaded 0.9), or None to skip it
        west: Tile for the west face (shaded 0.8), or None to skip it
        up: Tile for the top face, or None to skip it
    """
    size = 2 * scale
    if north is not None:
        _paint(dest, _north(rect, scale), _sample(tiles, north, size), shade=NORTH_SHADE)
    if west is not None:
        _paint(dest, _west(rect, scale), _sample(tiles, west, size), shade=WEST_SHADE)
    if up is not None:
        _paint(dest, _top(rect, scale), _sample(tiles, up, size))


def draw_partial_block(dest, rect, tiles, scale, north: Optional[int], west: Optional[int],
                       up: Optional[int], fraction: float) -> None:
    """
    Draw a cube with the top `fraction` of its height chopped off.

    Side faces keep the rows at or below the cutoff; the top face drops by
    the same number of rows. Used for liquids, slabs, snow, pressure plates.
    """
    size = 2 * scale
    cutoff = _cutoff(fraction, size)
    if north is not None:
        walk = _north(rect, scale)
        _paint(dest, walk, _sample(tiles, north, size), mask=walk.rows >= cutoff, shade=NORTH_SHADE)
    if west is not None:
        walk = _west(rect, scale)
        _paint(dest, walk, _sample(tiles, west, size), mask=walk.rows >= cutoff, shade=WEST_SHADE)
    if up is not None:
        _paint(dest, _top(rect, scale, cutoff), _sample(tiles, up, size))


def draw_item(dest, rect, tiles, scale, tile: int) -> None:
    """Draw two flat copies of a tile crossing at the cell centre (plants, floor torches)."""
    size = 2 * scale
    pixels = _sample(tiles, tile, size)
    _paint(dest, east_west(rect.x + scale, rect.y + scale * 3 // 2, size), pixels)
    _paint(dest, north_south(rect.x + scale, rect.y + scale // 2, size), pixels)


def draw_single_face(dest, rect, tiles, scale, tile: int, face: Face) -> None:
    """Draw a tile on one upright face (wall torches, doors, ladders)."""
    _paint(dest, _upright(rect, face, scale), _sample(tiles, tile, 2 * scale))


def draw_partial_single_face(dest, rect, tiles, scale, tile: int, face: Face,
                             start: float, end: float) -> None:
    """Draw the horizontal band [start, end) of a tile on one upright face (wall signs)."""
    size = 2 * scale
    first, last = _cutoff(start, size), _cutoff(end, size)
    walk = _upright(rect, face, scale)
    rows = walk.rows
    _paint(dest, walk, _sample(tiles, tile, size), mask=(rows >= first) & (rows < last))


def draw_floor(dest, rect, tiles, scale, tile: int, rotation: int) -> None:
    """
    Draw a tile flat on the floor of the cell.

    rotation says which side the top of the tile ends up on:
    0 = S, 1 = W, 2 = N, 3 = E.
    """
    size = 2 * scale
    _paint(dest, _top(rect, scale, 2 * scale), _sample(tiles, tile, size, rotation))


def draw_ceiling(dest, rect, tiles, scale, tile: int, rotation: int) -> None:
    """Like draw_floor, but on the top face position."""
    size = 2 * scale
    _paint(dest, _top(rect, scale), _sample(tiles, tile, size, rotation))


def draw_solid_block(dest, rect, tiles, scale, color: Pixel) -> None:
    """Draw a full cube in a single colour, shaded like draw_block. tiles is ignored."""
    size = 2 * scale
    pixels = np.tile(np.array(color, dtype=np.uint8), (size * size, 1))
    _paint(dest, _north(rect, scale), pixels, shade=NORTH_SHADE)
    _paint(dest, _west(rect, scale), pixels, shade=WEST_SHADE)
    _paint(dest, _top(rect, scale), pixels)


# Stairs
#
# A staircase is a lower half-cube plus an upper quarter. Its top is drawn as
# two halves of a top-face diamond at different heights, so the halves must
# split the top walk's positions exactly. For S/N stairs each column is cut
# at row B; for even B the diamond's columns are staggered and the cut
# alternates B-1/B+1. For E/W stairs the walk is cut after column B; for odd
# B the last pixel of the left half swaps with the first of the right half.

def top_split_rows(scale: int) -> Tuple[np.ndarray, np.ndarray]:
    """Masks over a top walk: (back half, front half), as used by S/N stairs."""
    size = 2 * scale
    pos = np.arange(size * size)
    cutoff = np.full(pos.shape, scale)
    if scale % 2 == 0:
        cutoff += np.where((pos // size) % 2 == 0, -1, 1)
    back = (pos % size) < cutoff
    return back, ~back


def top_split_columns(scale: int) -> Tuple[np.ndarray, np.ndarray]:
    """Masks over a top walk: (left half, right half), as used by E/W stairs."""
    size = 2 * scale
    pos = np.arange(size * size)
    cutoff = size * scale
    if scale % 2 == 1:
        left = (pos < cutoff - 1) | (pos == cutoff)
        right = (pos >= cutoff + 1) | (pos == cutoff - 1)
    else:
        left = pos < cutoff
        right = pos >= cutoff
    return left, right


def _odd_scale_adjust(walk: FaceWalk, scale: int, column_parity: int) -> Optional[np.ndarray]:
    # odd B: push the given parity of columns down one row to close the seam
    if scale % 2 == 0:
        return None
    return ((walk.columns % 2) == column_parity).astype(np.intp)


def draw_stairs_south(dest, rect, tiles, scale, tile: int) -> None:
    """Stairs ascending towards the south."""
    size = 2 * scale
    pixels = _sample(tiles, tile, size)
    back, front = top_split_rows(scale)

    walk = _north(rect, scale)
    _paint(dest, walk, pixels, mask=walk.rows >= scale, shade=NORTH_SHADE)
    # all but the upper-left quarter
    walk = _west(rect, scale)
    _paint(dest, walk, pixels, mask=(walk.rows >= scale) | (walk.columns >= scale), shade=WEST_SHADE)
    _paint(dest, _top(rect, scale), pixels, mask=back)
    # riser: top half of a second north face
    walk = north_south(rect.x + scale, rect.y + scale // 2, size)
    _paint(dest, walk, pixels, mask=walk.rows < scale, shade=NORTH_SHADE,
           y_shift=_odd_scale_adjust(walk, scale, 0))
    _paint(dest, _top(rect, scale, scale), pixels, mask=front)


def draw_stairs_north(dest, rect, tiles, scale, tile: int) -> None:
    """Stairs ascending towards the north."""
    size = 2 * scale
    pixels = _sample(tiles, tile, size)
    back, front = top_split_rows(scale)

    _paint(dest, _top(rect, scale, scale), pixels, mask=back)
    _paint(dest, _top(rect, scale), pixels, mask=front)
    _paint(dest, _north(rect, scale), pixels, shade=NORTH_SHADE)
    # all but the upper-right quarter
    walk = _west(rect, scale)
    _paint(dest, walk, pixels, mask=(walk.rows >= scale) | (walk.columns < scale), shade=WEST_SHADE)


def draw_stairs_east(dest, rect, tiles, scale, tile: int) -> None:
    """Stairs ascending towards the east."""
    size = 2 * scale
    pixels = _sample(tiles, tile, size)
    left, right = top_split_columns(scale)

    # all but the upper-right quarter
    walk = _north(rect, scale)
    _paint(dest, walk, pixels, mask=(walk.rows >= scale) | (walk.columns < scale), shade=NORTH_SHADE)
    walk = _west(rect, scale)
    _paint(dest, walk, pixels, mask=walk.rows >= scale, shade=WEST_SHADE)
    _paint(dest, _top(rect, scale), pixels, mask=left)
    # riser: top half of a second west face
    walk = east_west(rect.x + scale, rect.y + 3 * scale // 2, size)
    _paint(dest, walk, pixels, mask=walk.rows < scale, shade=WEST_SHADE,
           y_shift=_odd_scale_adjust(walk, scale, 1))
    _paint(dest, _top(rect, scale, scale), pixels, mask=right)


def draw_stairs_west(dest, rect, tiles, scale, tile: int) -> None:
    """Stairs ascending towards the west."""
    size = 2 * scale
    pixels = _sample(tiles, tile, size)
    left, right = top_split_columns(scale)

    _paint(dest, _top(rect, scale, scale), pixels, mask=left)
    _paint(dest, _top(rect, scale), pixels, mask=right)
    # all but the upper-left quarter
    walk = _north(rect, scale)
    _paint(dest, walk, pixels, mask=(walk.rows >= scale) | (walk.columns >= scale), shade=NORTH_SHADE)
    _paint(dest, _west(rect, scale), pixels, shade=WEST_SHADE)


# Fences and signs

def draw_fence_post(dest, rect, tiles, scale, tile: int) -> None:
    """Draw a two-pixel-wide post: a 2x2 cap and two 1 x 2B sides."""
    size = 2 * scale
    tx, ty = (tile % 16) * size, (tile // 16) * size
    x = rect.x + 2 * scale - 1
    y = rect.y + scale - 1
    assert _in_bounds(dest, np.array([x, x + 1]), np.array([y, y + size + 1])), "fence post leaves the bitmap"
    dest[y:y + 2, x:x + 2] = tiles[ty:ty + 2, tx:tx + 2]
    dest[y + 2:y + 2 + size, x] = tiles[ty:ty + size, tx]
    dest[y + 2:y + 2 + size, x + 1] = tiles[ty:ty + size, tx]


def _rail_rows(walk: FaceWalk, scale: int) -> np.ndarray:
    return ((walk.rows * 2) // scale) % 4 == 1


def draw_fence(dest, rect, tiles, scale, tile: int,
               north: bool, south: bool, east: bool, west: bool) -> None:
    """Draw a fence post with a rail towards each connected neighbour."""
    size = 2 * scale
    pixels = _sample(tiles, tile, size)
    ns_walk = north_south(rect.x + scale, rect.y + scale // 2, size)
    ew_walk = east_west(rect.x + scale, rect.y + scale * 3 // 2, size)
    ns_rail = _rail_rows(ns_walk, scale)
    ew_rail = _rail_rows(ew_walk, scale)

    # E and S rails sit behind the post
    if east:
        _paint(dest, ns_walk, pixels, mask=(ns_walk.columns < scale) & ns_rail)
    if south:
        _paint(dest, ew_walk, pixels, mask=(ew_walk.columns >= scale) & ew_rail)

    draw_fence_post(dest, rect, tiles, scale, tile)

    if west:
        _paint(dest, ns_walk, pixels, mask=(ns_walk.columns >= scale) & ns_rail)
    if north:
        _paint(dest, ew_walk, pixels, mask=(ew_walk.columns < scale) & ew_rail)


def draw_sign(dest, rect, tiles, scale, tile: int) -> None:
    """Draw a standing sign facing the viewer: a fence post under the top half of a tile."""
    size = 2 * scale
    draw_fence_post(dest, rect, tiles, scale, tile)
    walk = square(rect.x + scale, rect.y + scale, size)
    _paint(dest, walk, _sample(tiles, tile, size), mask=walk.rows < scale)
