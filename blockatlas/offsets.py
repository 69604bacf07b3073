"""
Block offset table: (block id, block data) -> atlas slot.

The table is dense (256 ids x 16 data values). It starts out pointing every
pair at slot 0, the blank placeholder, then applies OFFSET_RULES in order.
Each rule first points every data value of its block id at one slot (unless
the coarse slot is None), then overrides individual data values. Later rules
win. The downstream map renderer relies on these exact numbers.
"""

from typing import Dict, Iterable, Optional, Tuple

import numpy as np

BLOCK_IDS = 256
DATA_VALUES = 16

OffsetRule = Tuple[int, Optional[int], Dict[int, int]]

OFFSET_RULES: Tuple[OffsetRule, ...] = (
    (1, 1, {}),  # stone
    (2, 2, {}),  # grass
    (3, 3, {}),  # dirt
    (4, 4, {}),  # cobblestone
    (5, 5, {}),  # wood
    (6, 6, {}),  # sapling
    (7, 7, {}),  # bedrock
    (8, 8, {}),  # water
    (9, 8, {}),  # stationary water
    (10, 16, {1: 19, 2: 18, 3: 17}),  # lava
    (11, 16, {1: 19, 2: 18, 3: 17}),  # stationary lava
    (12, 20, {}),  # sand
    (13, 21, {}),  # gravel
    (14, 22, {}),  # gold ore
    (15, 23, {}),  # iron ore
    (16, 24, {}),  # coal ore
    (17, 25, {}),  # log
    (18, 26, {}),  # leaves
    (19, 27, {}),  # sponge
    (20, 28, {}),  # glass
    (35, 29, {}),  # cloth
    (37, 30, {}),  # yellow flower
    (38, 31, {}),  # red rose
    (39, 32, {}),  # brown mushroom
    (40, 33, {}),  # red mushroom
    (41, 34, {}),  # gold block
    (42, 35, {}),  # iron block
    (43, 36, {}),  # double step
    (44, 37, {}),  # step
    (45, 38, {}),  # brick
    (46, 39, {}),  # TNT
    (47, 40, {}),  # bookshelf
    (48, 41, {}),  # mossy cobblestone
    (49, 42, {}),  # obsidian
    (50, 43, {1: 44, 2: 45, 3: 46, 4: 47}),  # torch
    (51, 48, {}),  # fire
    (52, 49, {}),  # spawner
    (53, 50, {1: 51, 2: 52, 3: 53}),  # wood stairs
    (54, 54, {}),  # chest
    (55, 55, {}),  # redstone wire
    (56, 56, {}),  # diamond ore
    (57, 57, {}),  # diamond block
    (58, 58, {}),  # workbench
    (59, 59, {6: 60, 5: 61, 4: 62, 3: 63, 2: 64, 1: 65, 0: 66}),  # crops
    (60, 67, {}),  # soil
    (61, 68, {2: 150, 4: 149, 5: 150}),  # furnace
    (62, 69, {2: 152, 4: 151, 5: 152}),  # lit furnace
    (63, 73, {0: 72, 1: 72, 4: 70, 5: 70, 6: 71, 7: 71,
              8: 72, 9: 72, 12: 70, 13: 70, 14: 71, 15: 71}),  # sign post
    (64, None, {1: 74, 5: 74, 3: 75, 7: 75, 2: 76, 6: 76, 0: 77, 4: 77,
                9: 78, 13: 78, 11: 79, 15: 79, 10: 80, 14: 80, 8: 81, 12: 81}),  # wood door
    (65, 82, {3: 83, 4: 84, 5: 85}),  # ladder
    (66, 86, {1: 87, 2: 88, 3: 89, 4: 90, 5: 91, 6: 92, 7: 93, 8: 94, 9: 95}),  # track
    (67, 96, {1: 97, 2: 98, 3: 99}),  # cobble stairs
    (68, 100, {3: 101, 4: 102, 5: 103}),  # wall sign
    (69, 104, {2: 105, 3: 106, 4: 107, 5: 108, 6: 109,
               10: 105, 11: 106, 12: 107, 13: 108, 14: 109}),  # lever
    (70, 110, {}),  # stone pressure plate
    (71, None, {1: 111, 5: 111, 3: 112, 7: 112, 2: 113, 6: 113, 0: 114, 4: 114,
                9: 115, 13: 115, 11: 116, 15: 116, 10: 117, 14: 117, 8: 118, 12: 118}),  # iron door
    (72, 119, {}),  # wood pressure plate
    (73, 120, {}),  # redstone ore
    (74, 120, {}),  # glowing redstone ore
    (75, 121, {1: 145, 2: 146, 3: 147, 4: 148}),  # redstone torch off
    (76, 122, {1: 141, 2: 142, 3: 143, 4: 144}),  # redstone torch on
    (77, 123, {2: 124, 3: 125, 4: 126, 10: 124, 11: 125, 12: 126}),  # stone button
    (78, 127, {}),  # snow
    (79, 128, {}),  # ice
    (80, 129, {}),  # snow block
    (81, 130, {}),  # cactus
    (82, 131, {}),  # clay
    (83, 132, {}),  # reeds
    (84, 133, {}),  # jukebox
    (85, 134, {}),  # fence
    (86, 135, {0: 153, 1: 153, 3: 154}),  # pumpkin
    (87, 136, {}),  # netherstone
    (88, 137, {}),  # mud
    (89, 138, {}),  # lightstone
    (90, 139, {}),  # portal
    (91, 140, {0: 155, 1: 155, 3: 156}),  # jack-o-lantern
)


class BlockOffsets:
    """
    Immutable (block id, data) -> slot lookup.

    Examples:
        >>> offsets = BlockOffsets.default()
        >>> offsets[10, 2]
        18
        >>> offsets[200, 0]
        0
    """

    def __init__(self, rules: Iterable[OffsetRule] = OFFSET_RULES):
        table = np.zeros(BLOCK_IDS * DATA_VALUES, dtype=np.int32)
        for block_id, slot, overrides in rules:
            start = block_id * DATA_VALUES
            if slot is not None:
                table[start:start + DATA_VALUES] = slot
            for data, data_slot in overrides.items():
                table[start + data] = data_slot
        table.flags.writeable = False
        self._table = table

    _default: Optional["BlockOffsets"] = None

    @classmethod
    def default(cls) -> "BlockOffsets":
        """The shared table built from OFFSET_RULES."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    def __getitem__(self, key: Tuple[int, int]) -> int:
        block_id, data = key
        return self.lookup(block_id, data)

    def lookup(self, block_id: int, data: int) -> int:
        if not (0 <= block_id < BLOCK_IDS and 0 <= data < DATA_VALUES):
            raise IndexError(f"Block ({block_id}, {data}) out of range")
        return int(self._table[block_id * DATA_VALUES + data])

    @property
    def table(self) -> np.ndarray:
        """Read-only flat view, indexed by block_id * 16 + data."""
        return self._table

    def max_slot(self) -> int:
        return int(self._table.max())
