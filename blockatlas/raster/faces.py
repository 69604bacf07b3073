"""
Pixel walks over tile squares and isometric cube faces.

Every drawing routine copies a tile by walking a source square and a
destination face in lockstep: step N of the source lands on step N of the
destination. All walks visit exactly size*size positions, column by column.

Shapes:
    SQUARE       plain square, column-major (source tiles, flat signs)
    NORTH_SOUTH  parallelogram leaning down: every second column starts one
                 row lower (N and S faces)
    EAST_WEST    parallelogram leaning up: every second column starts one
                 row higher (E and W faces)
    ROTATED      square read with a 0/90/180/270 degree rotation
    TOP          the diamond of a cube's top face, walked in zig-zag
                 diagonals; starts at the diamond's top-left apex

For size=4 (B=2) the TOP walk starting at (3, 0) covers:

        . . . 0 4 . . .
        . 2 1 6 5 8 c .
        . 3 7 a 9 e d .
        . . . b f . . .

(positions in hex)
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterator, NamedTuple, Tuple

import numpy as np


class Shape(str, Enum):
    SQUARE = "square"
    NORTH_SOUTH = "north_south"
    EAST_WEST = "east_west"
    ROTATED = "rotated"
    TOP = "top"


_SKEW = {
    Shape.SQUARE: 0,
    Shape.NORTH_SOUTH: 1,
    Shape.EAST_WEST: -1,
}


class Step(NamedTuple):
    pos: int
    x: int
    y: int


def _skewed_steps(size: int, skew: int) -> Iterator[Tuple[int, int]]:
    x = y = 0
    for pos in range(1, size * size + 1):
        yield x, y
        y += 1
        if pos % size == 0:
            x += 1
            y -= size
            if pos % (2 * size) == size:
                y += skew


# start corner and (step, wrap) deltas per rotation:
# 0 = down, then right; 1 = left, then down; 2 = up, then left; 3 = right, then up
def _rotated_steps(size: int, rotation: int) -> Iterator[Tuple[int, int]]:
    last = size - 1
    x, y = ((0, 0), (last, 0), (last, last), (0, last))[rotation]
    for pos in range(1, size * size + 1):
        yield x, y
        if rotation == 0:
            y += 1
            if pos % size == 0:
                x += 1
                y -= size
        elif rotation == 1:
            x -= 1
            if pos % size == 0:
                y += 1
                x += size
        elif rotation == 2:
            y -= 1
            if pos % size == 0:
                x -= 1
                y += size
        else:
            x += 1
            if pos % size == 0:
                y -= 1
                x -= size


def _top_steps(size: int) -> Iterator[Tuple[int, int]]:
    x = y = 0
    for pos in range(size * size):
        yield x, y
        m = pos % size
        if (pos // size) % 2 == 0:
            if m == size - 1:
                x += size - 1
                y -= size // 2
            elif m == size - 2:
                y += 1
            elif m % 2 == 0:
                x -= 1
                y += 1
            else:
                x -= 1
        else:
            if m == 0:
                y += 1
            elif m == size - 1:
                x += size - 1
                y -= size // 2 - 1
            elif m % 2 == 0:
                x -= 1
                y += 1
            else:
                x -= 1


@lru_cache(maxsize=None)
def _relative_coords(shape: Shape, size: int, rotation: int) -> Tuple[np.ndarray, np.ndarray]:
    if shape is Shape.TOP:
        steps = _top_steps(size)
    elif shape is Shape.ROTATED:
        steps = _rotated_steps(size, rotation)
    else:
        steps = _skewed_steps(size, _SKEW[shape])
    xs, ys = zip(*steps)
    xs = np.array(xs, dtype=np.intp)
    ys = np.array(ys, dtype=np.intp)
    xs.flags.writeable = False
    ys.flags.writeable = False
    return xs, ys


@dataclass(frozen=True)
class FaceWalk:
    """
    A finite, restartable walk over size*size pixels.

    Iterating yields Step(pos, x, y); iterating again starts over. For
    vectorised copies use coords(), which returns the same sequence as two
    index arrays.
    """
    shape: Shape
    x: int
    y: int
    size: int
    rotation: int = 0

    def __post_init__(self):
        if self.size < 2 or self.size % 2:
            raise ValueError(f"Walk size must be an even number >= 2, got {self.size}")
        if self.rotation not in (0, 1, 2, 3):
            raise ValueError(f"Rotation must be 0-3, got {self.rotation}")

    def __len__(self) -> int:
        return self.size * self.size

    def __iter__(self) -> Iterator[Step]:
        xs, ys = self.coords()
        for pos, (x, y) in enumerate(zip(xs.tolist(), ys.tolist())):
            yield Step(pos, x, y)

    def coords(self) -> Tuple[np.ndarray, np.ndarray]:
        rx, ry = _relative_coords(self.shape, self.size, self.rotation)
        return rx + self.x, ry + self.y

    @property
    def columns(self) -> np.ndarray:
        """Column number of each step (pos // size)."""
        return np.arange(len(self)) // self.size

    @property
    def rows(self) -> np.ndarray:
        """Row number of each step within its column (pos % size)."""
        return np.arange(len(self)) % self.size


def square(x: int, y: int, size: int) -> FaceWalk:
    return FaceWalk(Shape.SQUARE, x, y, size)


def north_south(x: int, y: int, size: int) -> FaceWalk:
    return FaceWalk(Shape.NORTH_SOUTH, x, y, size)


def east_west(x: int, y: int, size: int) -> FaceWalk:
    return FaceWalk(Shape.EAST_WEST, x, y, size)


def rotated(x: int, y: int, size: int, rotation: int) -> FaceWalk:
    return FaceWalk(Shape.ROTATED, x, y, size, rotation)


def top(x: int, y: int, size: int) -> FaceWalk:
    return FaceWalk(Shape.TOP, x, y, size)


def tile_walk(tile: int, size: int, rotation: int = 0) -> FaceWalk:
    """Walk over resampled tile number `tile` (16 tiles per row)."""
    x, y = (tile % 16) * size, (tile // 16) * size
    if rotation:
        return rotated(x, y, size, rotation)
    return square(x, y, size)
