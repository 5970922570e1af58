"""Maze generator and solver on an N-dimensional torus.

Basic usage:

    import random
    from mazegen import Maze

    maze = Maze([20, 15, 4])
    maze.generate(random.Random(42))
    path = maze.solve()

Walls are stored as a flat list of booleans (True means closed) addressed
through `walls.wall_index`. Every axis wraps around, so there is no border.
"""

from dataclasses import dataclass
import random
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from binary_heap import IndexedHeap, PushAction
from walls import (
    Position,
    Wall,
    cell_count,
    neighbour_cells,
    neighbours,
    torus_distance,
    traverse,
    wall_count,
    wall_index,
    walls_of_cell,
)


class DimensionError(ValueError):
    """Invalid dimension vector."""

    pass


class NoPathFound(RuntimeError):
    """No route between two cells through open walls."""

    def __init__(self, start: Position, end: Position):
        super().__init__(f"No path from {start} to {end}")
        self.start = start
        self.end = end


@dataclass
class _Node:
    """A* search node; ordered by f-score, identified by position."""

    position: Position
    g_score: int
    f_score: int

    @property
    def key(self) -> Position:
        return self.position

    @property
    def value(self) -> int:
        return self.f_score


class Maze:
    """A maze on a wraparound grid of arbitrary dimension.

    `generate` carves a spanning tree, so between any two cells there is
    exactly one path along open walls. The explorer `position` moves with
    `walk` along one of the two view `axes`.
    """

    dimensions: Tuple[int, ...]
    start: Position
    end: Position
    position: Position
    axes: List[int]
    walls: List[bool]

    def __init__(self, dimensions: Sequence[int]) -> None:
        dims = tuple(dimensions)
        if not dims:
            raise DimensionError("At least one dimension is required")
        for size in dims:
            if not isinstance(size, int) or isinstance(size, bool):
                raise DimensionError(f"Dimension must be an integer: {size!r}")
            if size <= 0:
                raise DimensionError(f"Dimension must be > 0: {size}")

        origin = (0,) * len(dims)
        self.dimensions = dims
        self.start = origin
        self.end = origin
        self.position = origin
        self.axes = [0, min(1, len(dims) - 1)]
        self.walls = [True] * wall_count(dims)

    @property
    def cell_count(self) -> int:
        return cell_count(self.dimensions)

    def _check_position(self, position: Sequence[int]) -> Position:
        pos = tuple(position)
        if len(pos) != len(self.dimensions):
            raise ValueError(
                f"Position {pos} does not have {len(self.dimensions)} axes"
            )
        for size, value in zip(self.dimensions, pos):
            if not 0 <= value < size:
                raise ValueError(f"Position {pos} is outside the maze")
        return pos

    def _check_axis(self, axis: int) -> None:
        if not 0 <= axis < len(self.dimensions):
            raise IndexError(f"Axis {axis} out of range")

    def wall_index(self, wall: Wall) -> int:
        self._check_position(wall.position)
        self._check_axis(wall.axis)
        return wall_index(self.dimensions, wall)

    def get_wall(self, wall: Wall) -> bool:
        """Return True if the wall is closed."""

        return self.walls[self.wall_index(wall)]

    def set_wall(self, wall: Wall, value: bool) -> None:
        self.walls[self.wall_index(wall)] = value

    def reset_walls(self) -> None:
        """Close every wall."""

        self.walls = [True] * wall_count(self.dimensions)

    def open_neighbours(self, position: Position) -> List[Position]:
        """Cells reachable from `position` in one step through open walls."""

        return [
            cell
            for wall, cell in neighbours(self.dimensions, position)
            if not self.get_wall(wall)
        ]

    def _random_cell(self, rng: random.Random) -> Position:
        return tuple(rng.randrange(size) for size in self.dimensions)

    def generate(
        self,
        rng: random.Random,
        *,
        on_step: Optional[Callable[["Maze"], None]] = None,
    ) -> None:
        """Pick start and end, then carve a random spanning tree.

        Frontier walls are drawn uniformly at random. A wall is opened only
        when it leads to at least one unvisited cell; walls between two
        visited cells stay closed so no cycle is ever created.
        """

        self.start = self._random_cell(rng)
        self.end = self._random_cell(rng)
        self.reset_walls()

        visited: Set[Position] = {self.start}
        frontier: List[Wall] = walls_of_cell(self.dimensions, self.start)

        while frontier:
            i = rng.randrange(len(frontier))
            wall = frontier[i]
            frontier[i] = frontier[-1]
            frontier.pop()

            carved = False
            for cell in neighbour_cells(self.dimensions, wall):
                if cell in visited:
                    continue
                for other in walls_of_cell(self.dimensions, cell):
                    if self.get_wall(other):
                        frontier.append(other)
                visited.add(cell)
                carved = True

            if carved:
                self.set_wall(wall, False)
                if on_step is not None:
                    on_step(self)

    def solve(
        self,
        start: Optional[Sequence[int]] = None,
        end: Optional[Sequence[int]] = None,
    ) -> List[Position]:
        """Return the shortest path from start to end using A*.

        Defaults to the maze's own start and end. The path includes both
        endpoints. Raises NoPathFound if the end cannot be reached.
        """

        source = self._check_position(self.start if start is None else start)
        target = self._check_position(self.end if end is None else end)

        open_set: IndexedHeap[_Node] = IndexedHeap()
        open_set.push(
            _Node(source, 0, torus_distance(self.dimensions, source, target))
        )
        closed: Set[Position] = set()
        came_from: Dict[Position, Position] = {}

        while open_set:
            node = open_set.pop()
            assert node is not None
            if node.position == target:
                path: List[Position] = [target]
                while path[-1] != source:
                    path.append(came_from[path[-1]])
                path.reverse()
                return path

            # Finalize before expanding so a self-loop on a size-1 axis is
            # never pushed back.
            closed.add(node.position)

            for cell in self.open_neighbours(node.position):
                if cell in closed:
                    continue
                g_score = node.g_score + 1
                f_score = g_score + torus_distance(self.dimensions, cell, target)
                if open_set.push(
                    _Node(cell, g_score, f_score), PushAction.DECREASE_KEY
                ):
                    came_from[cell] = node.position

        raise NoPathFound(source, target)

    def to_start(self) -> None:
        """Move the explorer back to the start cell."""

        self.position = self.start

    def set_position(self, position: Sequence[int]) -> None:
        self.position = self._check_position(position)

    def walk(self, view_axis: int, sign: int) -> bool:
        """Step along the axis bound to `view_axis` unless a wall blocks it.

        Returns True if the explorer moved.
        """

        axis = self.axes[view_axis]
        target = traverse(self.dimensions, self.position, axis, sign)
        if sign > 0:
            wall = Wall(self.position, axis)
        else:
            wall = Wall(target, axis)
        if self.get_wall(wall):
            return False
        self.position = target
        return True

    def set_view_axis(self, view_axis: int, axis: int) -> bool:
        """Bind one of the two view slots to a maze axis.

        Out-of-range requests are ignored and return False.
        """

        if 0 <= view_axis < 2 and 0 <= axis < len(self.dimensions):
            self.axes[view_axis] = axis
            return True
        return False
