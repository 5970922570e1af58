"""Wall and cell addressing on an N-dimensional torus.

A cell is a tuple of coordinates, one per axis. A `Wall(position, axis)`
separates `position` from the next cell along `axis`; the wall after the last
cell of an axis is the wall before cell 0.

Walls are flattened in mixed radix (first axis varies fastest) with the axis
as the most significant digit, giving a bijection onto
`range(prod(shape) * len(shape))`.
"""

from dataclasses import dataclass
from math import prod
from typing import List, Sequence, Tuple


Position = Tuple[int, ...]
Shape = Sequence[int]


@dataclass(frozen=True)
class Wall:
    """The boundary between `position` and its positive neighbour on `axis`."""

    position: Position
    axis: int


def cell_count(shape: Shape) -> int:
    return prod(shape)


def wall_count(shape: Shape) -> int:
    return prod(shape) * len(shape)


def wall_index(shape: Shape, wall: Wall) -> int:
    """Flatten a wall into an index of the wall array."""

    index = 0
    stride = 1
    for limit, value in zip(shape, wall.position):
        index += stride * value
        stride *= limit
    index += stride * wall.axis
    return index


def wall_from_index(shape: Shape, index: int) -> Wall:
    """Inverse of `wall_index`."""

    cells = prod(shape)
    axis, rest = divmod(index, cells)
    position: List[int] = []
    for limit in shape:
        rest, value = divmod(rest, limit)
        position.append(value)
    return Wall(tuple(position), axis)


def traverse(shape: Shape, position: Position, axis: int, sign: int) -> Position:
    """Step once along `axis`, positive if `sign > 0`, wrapping at the ends."""

    step = 1 if sign > 0 else -1
    moved = list(position)
    moved[axis] = (moved[axis] + step) % shape[axis]
    return tuple(moved)


def walls_of_cell(shape: Shape, position: Position) -> List[Wall]:
    """Return the 2*D walls touching a cell."""

    walls: List[Wall] = []
    for axis in range(len(shape)):
        walls.append(Wall(tuple(position), axis))
        walls.append(Wall(traverse(shape, position, axis, -1), axis))
    return walls


def neighbour_cells(shape: Shape, wall: Wall) -> Tuple[Position, Position]:
    """Return the two cells on either side of a wall."""

    return (
        tuple(wall.position),
        traverse(shape, wall.position, wall.axis, 1),
    )


def neighbours(shape: Shape, position: Position) -> List[Tuple[Wall, Position]]:
    """For every axis and direction, the wall crossed and the cell reached."""

    result: List[Tuple[Wall, Position]] = []
    for axis in range(len(shape)):
        for sign in (-1, 1):
            other = traverse(shape, position, axis, sign)
            wall_position = tuple(position) if sign > 0 else other
            result.append((Wall(wall_position, axis), other))
    return result


def torus_distance(shape: Shape, a: Position, b: Position) -> int:
    """Taxicab distance where every axis wraps around."""

    total = 0
    for limit, x, y in zip(shape, a, b):
        d = abs(x - y)
        total += min(d, limit - d)
    return total
