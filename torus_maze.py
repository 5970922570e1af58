from collections import deque
import random
import sys
from pathlib import Path
from typing import (
    Deque,
    Dict,
    List,
    Optional,
    Sequence,
    Set,
)

from mazegen import Maze, NoPathFound
from parsing import Config, ConfigError, read_config
from walls import Position, Wall, traverse


WALL_CHAR = "█"
START_CHAR = "S"
END_CHAR = "E"
EXPLORER_CHAR = "@"
PATH_CHAR = "."


def validate_maze(maze: Maze) -> None:
    """Check that the open walls of `maze` form a spanning tree.

    Checks:
    - Exactly cell_count - 1 walls are open.
    - Every cell is reachable from the start.
    """

    expected = maze.cell_count - 1
    opened = sum(1 for closed in maze.walls if not closed)
    if opened != expected:
        raise RuntimeError(
            f"Invalid maze: {opened} open walls, expected {expected}"
        )

    reachable: Set[Position] = {maze.start}
    q: Deque[Position] = deque([maze.start])
    while q:
        cur = q.popleft()
        for nxt in maze.open_neighbours(cur):
            if nxt in reachable:
                continue
            reachable.add(nxt)
            q.append(nxt)

    if len(reachable) != maze.cell_count:
        raise RuntimeError("Invalid maze: disconnected cells exist")


def path_to_directions(
    dimensions: Sequence[int],
    path: Sequence[Position],
) -> str:
    """Convert a cell path into steps such as "0+ 2- 1+".

    Each token is the axis moved along followed by the direction.
    """

    if len(path) < 2:
        return ""

    out: List[str] = []
    for a, b in zip(path, path[1:]):
        for axis in range(len(dimensions)):
            if traverse(dimensions, a, axis, 1) == b:
                out.append(f"{axis}+")
                break
            if traverse(dimensions, a, axis, -1) == b:
                out.append(f"{axis}-")
                break
        else:
            raise ValueError("Non-adjacent steps in path")
    return " ".join(out)


def render_view(
    maze: Maze,
    rows: int,
    cols: int,
    *,
    path: Optional[Sequence[Position]] = None,
) -> List[str]:
    """Render the plane spanned by the view axes, centred on the explorer.

    Even offsets from the centre are cells, odd offsets are walls. Since the
    maze wraps, the window repeats once it is larger than the maze.
    """

    on_path: Set[Position] = set(path or ())
    vertical, horizontal = maze.axes
    dims = maze.dimensions

    lines: List[str] = []
    for y in range(rows):
        wy = y - rows // 2
        row: List[str] = []
        for x in range(cols):
            wx = x - cols // 2
            ry, rx = wy % 2, wx % 2
            if ry == 1 and rx == 1:
                row.append(WALL_CHAR)
                continue

            cell = list(maze.position)
            cell[vertical] = (cell[vertical] + wy // 2) % dims[vertical]
            cell[horizontal] = (cell[horizontal] + wx // 2) % dims[horizontal]
            pos = tuple(cell)

            if ry == 0 and rx == 0:
                if pos == maze.start:
                    row.append(START_CHAR)
                elif pos == maze.end:
                    row.append(END_CHAR)
                elif pos == maze.position:
                    row.append(EXPLORER_CHAR)
                elif pos in on_path:
                    row.append(PATH_CHAR)
                else:
                    row.append(" ")
            else:
                axis = vertical if ry == 1 else horizontal
                closed = maze.get_wall(Wall(pos, axis))
                row.append(WALL_CHAR if closed else " ")
        lines.append("".join(row))
    return lines


def format_position(position: Sequence[int]) -> str:
    return ", ".join(str(v) for v in position)


def run(config: Config) -> int:
    """Generate and solve the maze, then print the view and directions."""

    maze = Maze(config.dimensions)
    maze.set_view_axis(0, config.view_axes[0])
    maze.set_view_axis(1, config.view_axes[1])

    rng = random.Random(config.seed)
    maze.generate(rng)
    validate_maze(maze)
    maze.to_start()

    path = maze.solve()
    directions = path_to_directions(maze.dimensions, path)

    info: Dict[str, str] = {
        "Dimensions": format_position(maze.dimensions),
        "View axes (vertical, horizontal)": format_position(maze.axes),
        "Start": format_position(maze.start),
        "End": format_position(maze.end),
        "Path length": str(len(path) - 1),
    }
    for label, value in info.items():
        print(f"{label}: {value}")
    print()

    rows, cols = config.view_size
    for line in render_view(maze, rows, cols, path=path):
        print(line)
    print()
    print(directions)
    return 0


def main(argv: Sequence[str]) -> int:
    """CLI entrypoint."""

    if len(argv) != 2:
        print("Usage: python3 torus_maze.py config.txt", file=sys.stderr)
        return 2

    try:
        config = read_config(Path(argv[1]))
        return run(config)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (ConfigError, NoPathFound, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
