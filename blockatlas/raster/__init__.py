"""
Pixel-level rasterization: bitmaps, face walks and block drawing routines.
"""
from .bitmap import ImageRect, new_bitmap, from_image, to_image, darken, blit
from .faces import FaceWalk, Shape, Step
from .draw import (
    Face,
    draw_block,
    draw_partial_block,
    draw_item,
    draw_single_face,
    draw_partial_single_face,
    draw_floor,
    draw_ceiling,
    draw_solid_block,
    draw_stairs_south,
    draw_stairs_north,
    draw_stairs_east,
    draw_stairs_west,
    draw_fence_post,
    draw_fence,
    draw_sign,
)

__all__ = [
    'ImageRect',
    'new_bitmap',
    'from_image',
    'to_image',
    'darken',
    'blit',
    'FaceWalk',
    'Shape',
    'Step',
    'Face',
    'draw_block',
    'draw_partial_block',
    'draw_item',
    'draw_single_face',
    'draw_partial_single_face',
    'draw_floor',
    'draw_ceiling',
    'draw_solid_block',
    'draw_stairs_south',
    'draw_stairs_north',
    'draw_stairs_east',
    'draw_stairs_west',
    'draw_fence_post',
    'draw_fence',
    'draw_sign',
]
