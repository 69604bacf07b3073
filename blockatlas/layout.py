"""
Atlas layout: which routine draws which slot.

The atlas is a grid of 16 cells per row, one cell per slot, each cell
4B x 4B. Slot i sits at column i % 16, row i // 16. DRAW_CALLS lists every
draw in the order it is made; order only matters within a slot, where a
later draw paints over an earlier one. Slots with no draw call stay fully
transparent (0 is the placeholder; 48, 104-109 and 123-126 are fire, levers
and buttons, which have no image yet).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from blockatlas.offsets import BlockOffsets
from blockatlas.raster.bitmap import ImageRect
from blockatlas.raster.draw import (
    Face,
    draw_block,
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
)

NUM_IMAGES = 183

PORTAL_COLOR = (72, 39, 123, 208)

S, N, W, E = Face.SOUTH, Face.NORTH, Face.WEST, Face.EAST


@dataclass(frozen=True)
class DrawCall:
    """One routine invocation against one slot's cell."""
    slot: int
    draw: Callable[..., None]
    args: Tuple[Any, ...]
    label: str

    def apply(self, dest: np.ndarray, tiles: np.ndarray, scale: int) -> None:
        self.draw(dest, slot_rect(self.slot, scale), tiles, scale, *self.args)


def slot_rect(slot: int, scale: int) -> ImageRect:
    rectsize = 4 * scale
    return ImageRect((slot % 16) * rectsize, (slot // 16) * rectsize, rectsize, rectsize)


def atlas_size(scale: int, num_images: int = NUM_IMAGES) -> Tuple[int, int]:
    """(width, height) of an atlas holding num_images slots."""
    rectsize = 4 * scale
    return rectsize * 16, (num_images // 16 + 1) * rectsize


# slot, north, west, up, label (None skips a face)
_BLOCKS = (
    (1, 1, 1, 1, "stone"),
    (2, 3, 3, 0, "grass"),
    (3, 2, 2, 2, "dirt"),
    (4, 16, 16, 16, "cobblestone"),
    (5, 4, 4, 4, "wood"),
    (7, 17, 17, 17, "bedrock"),
    (8, 205, 205, 205, "full water"),
    (157, None, None, 205, "water surface"),
    (178, 205, None, 205, "water missing W"),
    (179, None, 205, 205, "water missing N"),
    (16, 237, 237, 237, "full lava"),
    (20, 18, 18, 18, "sand"),
    (21, 19, 19, 19, "gravel"),
    (22, 32, 32, 32, "gold ore"),
    (23, 33, 33, 33, "iron ore"),
    (24, 34, 34, 34, "coal ore"),
    (25, 20, 20, 21, "log"),
    (26, 52, 52, 52, "leaves"),
    (27, 48, 48, 48, "sponge"),
    (28, 49, 49, 49, "glass"),
    (29, 64, 64, 64, "cloth"),
    (34, 23, 23, 23, "gold block"),
    (35, 22, 22, 22, "iron block"),
    (36, 5, 5, 6, "double step"),
    (38, 7, 7, 7, "brick"),
    (39, 8, 8, 9, "TNT"),
    (40, 35, 35, 4, "bookshelf"),
    (41, 36, 36, 36, "mossy cobblestone"),
    (42, 37, 37, 37, "obsidian"),
    (49, 65, 65, 65, "spawner"),
    (54, 26, 27, 25, "chest facing W"),
    (177, 27, 26, 25, "chest facing N"),
    (173, 26, 41, 25, "double chest N"),
    (174, 26, 42, 25, "double chest S"),
    (175, 41, 26, 25, "double chest E"),
    (176, 42, 26, 25, "double chest W"),
    (56, 50, 50, 50, "diamond ore"),
    (57, 24, 24, 24, "diamond block"),
    (58, 59, 60, 43, "workbench"),
    (67, 2, 2, 87, "soil"),
    (68, 45, 44, 1, "furnace W"),
    (149, 44, 45, 1, "furnace N"),
    (150, 45, 45, 1, "furnace E/S"),
    (69, 45, 61, 1, "lit furnace W"),
    (151, 61, 45, 1, "lit furnace N"),
    (152, 45, 45, 1, "lit furnace E/S"),
    (120, 51, 51, 51, "redstone ore"),
    (128, 67, 67, 67, "ice"),
    (180, None, None, 67, "ice surface"),
    (181, 67, None, 67, "ice missing W"),
    (182, None, 67, 67, "ice missing N"),
    (129, 66, 66, 66, "snow block"),
    (130, 70, 70, 69, "cactus"),
    (131, 72, 72, 72, "clay"),
    (133, 74, 74, 75, "jukebox"),
    (135, 118, 119, 102, "pumpkin facing W"),
    (153, 118, 118, 102, "pumpkin facing E/S"),
    (154, 119, 118, 102, "pumpkin facing N"),
    (136, 103, 103, 103, "netherstone"),
    (137, 104, 104, 104, "mud"),
    (138, 105, 105, 105, "lightstone"),
    (140, 118, 120, 102, "jack-o-lantern W"),
    (155, 118, 118, 102, "jack-o-lantern E/S"),
    (156, 120, 118, 102, "jack-o-lantern N"),
)

# slot, north, west, up, fraction chopped off the top, label
_PARTIAL_BLOCKS = (
    (9, 205, 205, 205, 0.125, "water level 7"),
    (10, 205, 205, 205, 0.25, "water level 6"),
    (11, 205, 205, 205, 0.375, "water level 5"),
    (12, 205, 205, 205, 0.5, "water level 4"),
    (13, 205, 205, 205, 0.625, "water level 3"),
    (14, 205, 205, 205, 0.75, "water level 2"),
    (15, 205, 205, 205, 0.875, "water level 1"),
    (17, 237, 237, 237, 0.25, "lava level 3"),
    (18, 237, 237, 237, 0.5, "lava level 2"),
    (19, 237, 237, 237, 0.75, "lava level 1"),
    (37, 5, 5, 6, 0.5, "single step"),
    (110, 1, 1, 1, 0.875, "stone pressure plate"),
    (119, 4, 4, 4, 0.875, "wood pressure plate"),
    (127, 66, 66, 66, 0.75, "snow"),
)

# slot, tile, label
_ITEMS = (
    (6, 15, "sapling"),
    (30, 13, "yellow flower"),
    (31, 12, "red rose"),
    (32, 29, "brown mushroom"),
    (33, 28, "red mushroom"),
    (43, 80, "torch floor"),
    (59, 95, "wheat level 7"),
    (60, 94, "wheat level 6"),
    (61, 93, "wheat level 5"),
    (62, 92, "wheat level 4"),
    (63, 91, "wheat level 3"),
    (64, 90, "wheat level 2"),
    (65, 89, "wheat level 1"),
    (66, 88, "wheat level 0"),
    (121, 115, "red torch floor off"),
    (122, 99, "red torch floor on"),
    (132, 73, "reeds"),
)

# slot, tile, face, label
_SINGLE_FACES = (
    (44, 80, N, "torch pointing S"),
    (45, 80, S, "torch pointing N"),
    (46, 80, E, "torch pointing W"),
    (47, 80, W, "torch pointing E"),
    (74, 97, E, "wood door S side"),
    (75, 97, W, "wood door N side"),
    (76, 97, S, "wood door W side"),
    (77, 97, N, "wood door E side"),
    (78, 81, E, "wood door top S"),
    (79, 81, W, "wood door top N"),
    (80, 81, S, "wood door top W"),
    (81, 81, N, "wood door top E"),
    (82, 83, W, "ladder E side"),
    (83, 83, E, "ladder W side"),
    (84, 83, S, "ladder N side"),
    (85, 83, N, "ladder S side"),
    (111, 98, E, "iron door S side"),
    (112, 98, W, "iron door N side"),
    (113, 98, S, "iron door W side"),
    (114, 98, N, "iron door E side"),
    (115, 82, E, "iron door top S"),
    (116, 82, W, "iron door top N"),
    (117, 82, S, "iron door top W"),
    (118, 82, N, "iron door top E"),
    (141, 99, N, "red torch S on"),
    (142, 99, S, "red torch N on"),
    (143, 99, E, "red torch W on"),
    (144, 99, W, "red torch E on"),
    (145, 115, N, "red torch S off"),
    (146, 115, S, "red torch N off"),
    (147, 115, E, "red torch W off"),
    (148, 115, W, "red torch E off"),
)

# slot, face, label; all wall signs use the planks tile, middle half of it
_WALL_SIGNS = (
    (100, W, "wall sign facing E"),
    (101, E, "wall sign facing W"),
    (102, S, "wall sign facing N"),
    (103, N, "wall sign facing S"),
)

# slot, routine, tile, label
_STAIRS = (
    (50, draw_stairs_south, 4, "wood stairs asc S"),
    (51, draw_stairs_north, 4, "wood stairs asc N"),
    (52, draw_stairs_west, 4, "wood stairs asc W"),
    (53, draw_stairs_east, 4, "wood stairs asc E"),
    (96, draw_stairs_south, 16, "cobble stairs asc S"),
    (97, draw_stairs_north, 16, "cobble stairs asc N"),
    (98, draw_stairs_west, 16, "cobble stairs asc W"),
    (99, draw_stairs_east, 16, "cobble stairs asc E"),
)

# slot, tile, rotation, label
_FLOORS = (
    (55, 100, 0, "redstone wire"),
    (86, 128, 1, "track EW"),
    (87, 128, 0, "track NS"),
    (88, 128, 0, "track asc S"),
    (89, 128, 0, "track asc N"),
    (90, 128, 1, "track asc E"),
    (91, 128, 1, "track asc W"),
    (92, 112, 1, "track NE corner"),
    (93, 112, 0, "track SE corner"),
    (94, 112, 3, "track SW corner"),
    (95, 112, 2, "track NW corner"),
)

# slot, (north, south, east, west) rails, label
_FENCES = (
    (158, (True, False, False, False), "fence N"),
    (159, (False, True, False, False), "fence S"),
    (160, (True, True, False, False), "fence NS"),
    (161, (False, False, True, False), "fence E"),
    (162, (True, False, True, False), "fence NE"),
    (163, (False, True, True, False), "fence SE"),
    (164, (True, True, True, False), "fence NSE"),
    (165, (False, False, False, True), "fence W"),
    (166, (True, False, False, True), "fence NW"),
    (167, (False, True, False, True), "fence SW"),
    (168, (True, True, False, True), "fence NSW"),
    (169, (False, False, True, True), "fence EW"),
    (170, (True, False, True, True), "fence NEW"),
    (171, (False, True, True, True), "fence SEW"),
    (172, (True, True, True, True), "fence NSEW"),
)

# standing signs are all drawn facing the viewer
_SIGNS = (
    (70, "sign facing N/S"),
    (71, "sign facing NE/SW"),
    (72, "sign facing E/W"),
    (73, "sign facing SE/NW"),
)


def _build_draw_calls() -> Tuple[DrawCall, ...]:
    calls = []
    for slot, north, west, up, label in _BLOCKS:
        calls.append(DrawCall(slot, draw_block, (north, west, up), label))
    for slot, north, west, up, fraction, label in _PARTIAL_BLOCKS:
        calls.append(DrawCall(slot, draw_partial_block, (north, west, up, fraction), label))
    for slot, tile, label in _ITEMS:
        calls.append(DrawCall(slot, draw_item, (tile,), label))
    for slot, tile, face, label in _SINGLE_FACES:
        calls.append(DrawCall(slot, draw_single_face, (tile, face), label))
    for slot, face, label in _WALL_SIGNS:
        calls.append(DrawCall(slot, draw_partial_single_face, (4, face, 0.25, 0.75), label))
    calls.append(DrawCall(139, draw_solid_block, (PORTAL_COLOR,), "portal"))
    for slot, draw, tile, label in _STAIRS:
        calls.append(DrawCall(slot, draw, (tile,), label))
    for slot, tile, rotation, label in _FLOORS:
        calls.append(DrawCall(slot, draw_floor, (tile, rotation), label))
    calls.append(DrawCall(134, draw_fence_post, (4,), "fence post"))
    for slot, rails, label in _FENCES:
        calls.append(DrawCall(slot, draw_fence, (4,) + rails, label))
    for slot, label in _SIGNS:
        calls.append(DrawCall(slot, draw_sign, (4,), label))
    return tuple(calls)


DRAW_CALLS: Tuple[DrawCall, ...] = _build_draw_calls()


@dataclass(frozen=True)
class AtlasLayout:
    """
    Everything needed to draw an atlas and look up its slots.

    Attributes:
        num_images: Number of slots (the atlas version)
        calls: Ordered draw calls
        offsets: (block id, data) -> slot table
    """
    num_images: int = NUM_IMAGES
    calls: Tuple[DrawCall, ...] = DRAW_CALLS
    offsets: BlockOffsets = field(default_factory=BlockOffsets.default)
    _labels: Dict[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for call in self.calls:
            if not 0 <= call.slot < self.num_images:
                raise ValueError(f"Draw call '{call.label}' targets slot {call.slot}, layout has {self.num_images}")
        if self.offsets.max_slot() >= self.num_images:
            raise ValueError(f"Offset table points past slot {self.num_images - 1}")
        object.__setattr__(self, '_labels', {call.slot: call.label for call in self.calls})

    def labels(self) -> Dict[int, str]:
        """slot -> label of the last draw call for that slot"""
        return dict(self._labels)

    def label(self, slot: int) -> Optional[str]:
        return self._labels.get(slot)

    def calls_for(self, slot: int) -> Tuple[DrawCall, ...]:
        return tuple(call for call in self.calls if call.slot == slot)

    def atlas_size(self, scale: int) -> Tuple[int, int]:
        return atlas_size(scale, self.num_images)


_default_layout: Optional[AtlasLayout] = None


def default_layout() -> AtlasLayout:
    global _default_layout
    if _default_layout is None:
        _default_layout = AtlasLayout()
    return _default_layout
