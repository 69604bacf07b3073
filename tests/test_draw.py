"""
Tests for block drawing routines
"""
import pytest
import numpy as np

from blockatlas.raster.bitmap import ImageRect, darken, new_bitmap
from blockatlas.raster.draw import (
    Face,
    NORTH_SHADE,
    WEST_SHADE,
    draw_block,
    draw_ceiling,
    draw_fence,
    draw_fence_post,
    draw_floor,
    draw_item,
    draw_partial_block,
    draw_partial_single_face,
    draw_sign,
    draw_single_face,
    draw_solid_block,
    draw_stairs_east,
    draw_stairs_north,
    draw_stairs_south,
    draw_stairs_west,
    top_split_columns,
    top_split_rows,
)
from blockatlas.raster.faces import east_west, north_south, top

RED = (255, 0, 0, 255)
GREEN = (0, 200, 0, 255)
BLUE = (0, 0, 255, 255)


def make_tiles(scale, fills):
    """Resampled tile sheet with the given tiles filled with solid colours."""
    size = 2 * scale
    tiles = new_bitmap(16 * size, 16 * size)
    for tile, color in fills.items():
        x, y = (tile % 16) * size, (tile // 16) * size
        tiles[y:y + size, x:x + size] = color
    return tiles


def gradient_tiles(scale, tile):
    """Tile sheet where every pixel of `tile` is unique: (x, y, 7, 255)."""
    size = 2 * scale
    tiles = new_bitmap(16 * size, 16 * size)
    x0, y0 = (tile % 16) * size, (tile // 16) * size
    for y in range(size):
        for x in range(size):
            tiles[y0 + y, x0 + x] = (x, y, 7, 255)
    return tiles


def cell(scale):
    return new_bitmap(4 * scale, 4 * scale), ImageRect(0, 0, 4 * scale, 4 * scale)


def pixels_at(dest, walk, mask=None):
    xs, ys = walk.coords()
    if mask is not None:
        xs, ys = xs[mask], ys[mask]
    return dest[ys, xs]


def painted(dest):
    return int((dest[..., 3] > 0).sum())


class TestFullBlock:
    """Full cubes"""

    @pytest.mark.parametrize("scale", [2, 3, 6])
    def test_faces_are_shaded(self, scale):
        """Test that north is x0.9, west x0.8 and top unshaded"""
        tiles = make_tiles(scale, {1: RED})
        dest, rect = cell(scale)
        draw_block(dest, rect, tiles, scale, 1, 1, 1)
        size = 2 * scale
        assert (pixels_at(dest, north_south(0, scale, size)) == (229, 0, 0, 255)).all()
        assert (pixels_at(dest, east_west(2 * scale, 2 * scale, size)) == (204, 0, 0, 255)).all()
        assert (pixels_at(dest, top(2 * scale - 1, 0, size)) == RED).all()

    def test_skipped_faces_stay_empty(self):
        """Test that None leaves a face unpainted"""
        tiles = make_tiles(2, {205: BLUE})
        dest, rect = cell(2)
        draw_block(dest, rect, tiles, 2, None, None, 205)
        assert (pixels_at(dest, north_south(0, 2, 4))[:, 3] == 0).all()
        assert (pixels_at(dest, east_west(4, 4, 4))[:, 3] == 0).all()
        assert painted(dest) == 16

    def test_different_tiles_per_face(self):
        """Test that each face reads its own tile"""
        tiles = make_tiles(2, {26: RED, 27: GREEN, 25: BLUE})
        dest, rect = cell(2)
        draw_block(dest, rect, tiles, 2, 26, 27, 25)
        assert tuple(dest[2, 0]) == (229, 0, 0, 255)
        assert tuple(dest[2, 7]) == (0, 160, 0, 255)
        assert tuple(dest[0, 3]) == BLUE

    def test_draws_relative_to_rect(self):
        """Test that the rect origin offsets every face"""
        tiles = make_tiles(2, {1: RED})
        dest = new_bitmap(32, 16)
        draw_block(dest, ImageRect(8, 8, 8, 8), tiles, 2, 1, 1, 1)
        assert painted(dest[:8]) == 0
        assert painted(dest[:, :8]) == 0
        assert painted(dest) == 48


class TestPartialBlock:
    """Partial-height cubes"""

    @pytest.mark.parametrize("scale", [2, 3, 4])
    def test_zero_fraction_is_a_full_block(self, scale):
        """Test that fraction 0 reproduces draw_block"""
        tiles = make_tiles(scale, {205: BLUE, 6: GREEN})
        full, rect = cell(scale)
        partial, _ = cell(scale)
        draw_block(full, rect, tiles, scale, 205, 205, 6)
        draw_partial_block(partial, rect, tiles, scale, 205, 205, 6, 0.0)
        assert np.array_equal(full, partial)

    @pytest.mark.parametrize("scale", [2, 5])
    def test_nearly_full_fraction(self, scale):
        """Test that fraction near 1 keeps one row per column and drops the top by tilesize - 1"""
        size = 2 * scale
        tiles = make_tiles(scale, {1: RED, 2: GREEN})
        dest, rect = cell(scale)
        draw_partial_block(dest, rect, tiles, scale, 1, 1, 2, 0.99)
        north = pixels_at(dest, north_south(0, scale, size))
        assert int((north[:, 0] == 229).sum()) == size
        dropped = top(2 * scale - 1, size - 1, size)
        assert (pixels_at(dest, dropped) == GREEN).all()

    def test_fraction_is_clamped(self):
        """Test that fractions outside [0, 1] behave like the nearest end"""
        tiles = make_tiles(3, {1: RED})
        results = []
        for fraction in (-0.5, 0.0, 0.99, 7.0):
            dest, rect = cell(3)
            draw_partial_block(dest, rect, tiles, 3, 1, 1, 1, fraction)
            results.append(dest)
        assert np.array_equal(results[0], results[1])
        assert np.array_equal(results[2], results[3])

    def test_half_height_side_rows(self):
        """Test that a half step paints the lower half of each side column"""
        tiles = make_tiles(2, {5: RED, 6: GREEN})
        dest, rect = cell(2)
        draw_partial_block(dest, rect, tiles, 2, 5, 5, 6, 0.5)
        walk = north_south(0, 2, 4)
        north = pixels_at(dest, walk)
        assert (north[walk.rows >= 2][:, 3] == 255).all()


class TestFlatRoutines:
    """Items, single faces, floors, solid colour"""

    def test_item_is_unshaded(self):
        """Test that both billboard planes copy the tile as-is"""
        tiles = make_tiles(4, {15: GREEN})
        dest, rect = cell(4)
        draw_item(dest, rect, tiles, 4, 15)
        mask = dest[..., 3] > 0
        assert (dest[mask] == GREEN).all()
        assert (pixels_at(dest, east_west(4, 6, 8)) == GREEN).all()
        assert (pixels_at(dest, north_south(4, 2, 8)) == GREEN).all()

    @pytest.mark.parametrize("face,anchor", [
        (Face.SOUTH, (4, 0)),
        (Face.NORTH, (0, 2)),
        (Face.WEST, (4, 4)),
        (Face.EAST, (0, 2)),
    ])
    def test_single_face_anchor(self, face, anchor):
        """Test that each direction starts at its corner and paints tilesize² pixels"""
        tiles = make_tiles(2, {80: RED})
        dest, rect = cell(2)
        draw_single_face(dest, rect, tiles, 2, 80, face)
        assert painted(dest) == 16
        assert tuple(dest[anchor[1], anchor[0]]) == RED

    def test_east_and_north_lean_opposite_ways(self):
        """Test that E and N share an origin but not a shape"""
        tiles = make_tiles(2, {80: RED})
        north, rect = cell(2)
        east, _ = cell(2)
        draw_single_face(north, rect, tiles, 2, 80, Face.NORTH)
        draw_single_face(east, rect, tiles, 2, 80, Face.EAST)
        assert not np.array_equal(north, east)

    def test_partial_single_face_band(self):
        """Test that a wall sign paints rows [start, end) only"""
        tiles = make_tiles(4, {4: RED})
        dest, rect = cell(4)
        draw_partial_single_face(dest, rect, tiles, 4, 4, Face.WEST, 0.25, 0.75)
        walk = east_west(8, 8, 8)
        band = (walk.rows >= 2) & (walk.rows < 6)
        assert (pixels_at(dest, walk, band) == RED).all()
        assert painted(dest) == int(band.sum())

    def test_partial_single_face_end_is_clamped(self):
        """Test that end=1 still stops one row short of the bottom"""
        tiles = make_tiles(2, {4: RED})
        dest, rect = cell(2)
        draw_partial_single_face(dest, rect, tiles, 2, 4, Face.SOUTH, 0.0, 1.0)
        assert painted(dest) == 12

    def test_floor_is_ceiling_shifted_down(self):
        """Test that floor and ceiling draw the same diamond 2B apart"""
        tiles = gradient_tiles(3, 128)
        floor, rect = cell(3)
        ceiling, _ = cell(3)
        draw_floor(floor, rect, tiles, 3, 128, 1)
        draw_ceiling(ceiling, rect, tiles, 3, 128, 1)
        assert np.array_equal(floor[6:12], ceiling[0:6])
        assert painted(floor[:6]) == 0

    def test_floor_rotation_reads_rotated_source(self):
        """Test that the diamond apex takes the rotation's start corner"""
        apex = {}
        for rotation in range(4):
            tiles = gradient_tiles(2, 112)
            dest, rect = cell(2)
            draw_floor(dest, rect, tiles, 2, 112, rotation)
            apex[rotation] = tuple(dest[4, 3][:2])
        assert apex == {0: (0, 0), 1: (3, 0), 2: (3, 3), 3: (0, 3)}

    def test_solid_color(self):
        """Test the portal colour with shading on N and W"""
        color = (72, 39, 123, 208)
        dest, rect = cell(2)
        draw_solid_block(dest, rect, None, 2, color)
        assert tuple(dest[2, 0]) == (64, 35, 110, 208)
        assert tuple(dest[2, 7]) == (57, 31, 98, 208)
        assert tuple(dest[0, 3]) == color


class TestStairs:
    """Staircases"""

    @pytest.mark.parametrize("scale", range(2, 10))
    def test_row_split_partitions_top_face(self, scale):
        """Test that S/N stair top halves cover every top pixel exactly once"""
        back, front = top_split_rows(scale)
        assert not (back & front).any()
        assert (back | front).all()
        assert int(back.sum()) == 2 * scale * scale

    @pytest.mark.parametrize("scale", range(2, 10))
    def test_column_split_partitions_top_face(self, scale):
        """Test that E/W stair top halves cover every top pixel exactly once"""
        left, right = top_split_columns(scale)
        assert not (left & right).any()
        assert (left | right).all()
        assert int(left.sum()) == 2 * scale * scale

    @pytest.mark.parametrize("scale", [2, 3, 4, 5])
    def test_halves_rebuild_the_diamond(self, scale):
        """Test that both halves of one diamond hit each pixel once, odd or even B"""
        size = 2 * scale
        walk = top(2 * scale - 1, 0, size)
        xs, ys = walk.coords()
        for first, second in (top_split_rows(scale), top_split_columns(scale)):
            hits = np.zeros((2 * scale, 4 * scale), dtype=int)
            np.add.at(hits, (ys[first], xs[first]), 1)
            np.add.at(hits, (ys[second], xs[second]), 1)
            diamond = np.zeros_like(hits)
            diamond[ys, xs] = 1
            assert np.array_equal(hits, diamond)

    def test_even_scale_alternates_cutoff(self):
        """Test that for even B the row cut alternates B-1 / B+1 per column"""
        back, _ = top_split_rows(2)
        assert back.reshape(4, 4).sum(axis=1).tolist() == [1, 3, 1, 3]

    def test_odd_scale_swaps_seam_pixel(self):
        """Test that for odd B the left half trades its last pixel for the next one"""
        left, _ = top_split_columns(3)
        cutoff = 6 * 3
        assert left[cutoff - 2] and not left[cutoff - 1] and left[cutoff] and not left[cutoff + 1]

    @pytest.mark.parametrize("draw", [draw_stairs_south, draw_stairs_north, draw_stairs_east, draw_stairs_west])
    @pytest.mark.parametrize("scale", [2, 3, 4, 5, 6, 7])
    def test_stays_inside_cell(self, draw, scale):
        """Test that every staircase fits its 4B x 4B cell"""
        tiles = make_tiles(scale, {4: RED})
        dest, rect = cell(scale)
        draw(dest, rect, tiles, scale, 4)
        assert painted(dest) > 0

    @pytest.mark.parametrize("draw", [draw_stairs_south, draw_stairs_north, draw_stairs_east, draw_stairs_west])
    def test_uses_only_three_shades(self, draw):
        """Test that stairs only produce unshaded, x0.9 and x0.8 pixels"""
        tiles = make_tiles(3, {16: (200, 100, 50, 255)})
        dest, rect = cell(3)
        draw(dest, rect, tiles, 3, 16)
        colors = {tuple(p) for p in dest[dest[..., 3] > 0]}
        base = np.array((200, 100, 50, 255), dtype=np.uint8)
        allowed = {tuple(base), tuple(darken(base, NORTH_SHADE)), tuple(darken(base, WEST_SHADE))}
        assert colors <= allowed
        assert len(colors) == 3

    def test_orientations_differ(self):
        """Test that the four orientations produce four different images"""
        tiles = gradient_tiles(4, 4)
        images = []
        for draw in (draw_stairs_south, draw_stairs_north, draw_stairs_east, draw_stairs_west):
            dest, rect = cell(4)
            draw(dest, rect, tiles, 4, 4)
            images.append(dest.tobytes())
        assert len(set(images)) == 4


class TestFencesAndSigns:
    """Fence posts, fences, signs"""

    def test_post_geometry(self):
        """Test the 2x2 cap and the two side columns"""
        scale = 3
        tiles = gradient_tiles(scale, 4)
        dest, rect = cell(scale)
        draw_fence_post(dest, rect, tiles, scale, 4)
        assert tuple(dest[2, 5][:2]) == (0, 0)
        assert tuple(dest[3, 6][:2]) == (1, 1)
        for y in range(6):
            assert tuple(dest[4 + y, 5][:2]) == (0, y)
            assert tuple(dest[4 + y, 6][:2]) == (0, y)
        assert painted(dest) == 4 + 2 * 6

    def test_no_rails_is_just_a_post(self):
        """Test that a fence without neighbours equals the post"""
        tiles = make_tiles(4, {4: RED})
        fence, rect = cell(4)
        post, _ = cell(4)
        draw_fence(fence, rect, tiles, 4, 4, False, False, False, False)
        draw_fence_post(post, rect, tiles, 4, 4)
        assert np.array_equal(fence, post)

    @pytest.mark.parametrize("rails", [
        (True, False, False, False),
        (False, True, False, False),
        (False, False, True, False),
        (False, False, False, True),
    ])
    def test_each_rail_adds_pixels(self, rails):
        """Test that every single rail paints beyond the post"""
        tiles = make_tiles(4, {4: RED})
        fence, rect = cell(4)
        post, _ = cell(4)
        draw_fence(fence, rect, tiles, 4, 4, *rails)
        draw_fence_post(post, rect, tiles, 4, 4)
        assert painted(fence) > painted(post)

    def test_back_rails_are_behind_post(self):
        """Test that E and S rails never cover the post"""
        scale = 4
        tiles = gradient_tiles(scale, 4)
        fence, rect = cell(scale)
        post, _ = cell(scale)
        draw_fence(fence, rect, tiles, scale, 4, False, True, True, False)
        draw_fence_post(post, rect, tiles, scale, 4)
        mask = post[..., 3] > 0
        assert np.array_equal(fence[mask], post[mask])

    def test_rail_rows(self):
        """Test that a rail is two thin stripes along its face"""
        scale = 4
        tiles = make_tiles(scale, {4: RED})
        dest, rect = cell(scale)
        draw_fence(dest, rect, tiles, scale, 4, True, False, False, False)
        walk = east_west(scale, scale * 3 // 2, 2 * scale)
        stripe = ((walk.rows * 2) // scale) % 4 == 1
        rail = (walk.columns < scale) & stripe
        assert (pixels_at(dest, walk, rail) == RED).all()
        assert int(rail.sum()) == 2 * scale

    def test_sign_board(self):
        """Test that a sign adds the upper half of the tile at (B, B)"""
        scale = 2
        tiles = gradient_tiles(scale, 4)
        dest, rect = cell(scale)
        draw_sign(dest, rect, tiles, scale, 4)
        assert tuple(dest[2, 2][:2]) == (0, 0)
        assert tuple(dest[3, 2][:2]) == (0, 1)
        assert dest[4, 2, 3] == 0
