"""
Tests for the command line layer: validation, directions, rendering, main.
"""

import random

import pytest

from mazegen import Maze
from torus_maze import (
    END_CHAR,
    EXPLORER_CHAR,
    PATH_CHAR,
    START_CHAR,
    WALL_CHAR,
    main,
    path_to_directions,
    render_view,
    validate_maze,
)
from walls import Wall


class TestValidateMaze:
    def test_generated_maze_passes(self, rng):
        maze = Maze([5, 4, 3])
        maze.generate(rng)
        validate_maze(maze)

    def test_closed_maze_fails(self):
        with pytest.raises(RuntimeError, match="open walls"):
            validate_maze(Maze([3, 3]))

    def test_cycle_fails(self, rng):
        maze = Maze([4, 4])
        maze.generate(rng)
        closed = next(i for i, c in enumerate(maze.walls) if c)
        maze.walls[closed] = False
        with pytest.raises(RuntimeError):
            validate_maze(maze)

    def test_disconnected_fails(self):
        maze = Maze([2, 2])
        # Three open walls, but two of them join the same pair of cells.
        maze.set_wall(Wall((0, 0), 0), False)
        maze.set_wall(Wall((1, 0), 0), False)
        maze.set_wall(Wall((0, 1), 0), False)
        with pytest.raises(RuntimeError, match="disconnected"):
            validate_maze(maze)


class TestPathToDirections:
    def test_short_paths(self):
        assert path_to_directions((3, 3), []) == ""
        assert path_to_directions((3, 3), [(1, 1)]) == ""

    def test_steps_and_wraparound(self):
        path = [(0, 0), (0, 1), (2, 1), (2, 0)]
        assert path_to_directions((3, 3), path) == "1+ 0- 1-"

    def test_non_adjacent(self):
        with pytest.raises(ValueError):
            path_to_directions((5, 5), [(0, 0), (2, 0)])


class TestRenderView:
    def test_size_and_centre(self):
        maze = Maze([4, 4])
        maze.start = (1, 1)
        maze.end = (2, 2)
        maze.set_position((0, 0))
        lines = render_view(maze, 7, 9)
        assert len(lines) == 7
        assert all(len(line) == 9 for line in lines)
        assert lines[3][4] == EXPLORER_CHAR

    def test_closed_maze_draws_walls(self):
        maze = Maze([3, 3])
        maze.start = (1, 1)
        maze.end = (2, 2)
        lines = render_view(maze, 5, 5)
        assert lines[2][3] == WALL_CHAR
        assert lines[3][2] == WALL_CHAR
        assert lines[2][4] == " "
        assert lines[4][4] == START_CHAR

    def test_marks_start_end_and_path(self):
        maze = Maze([5, 5])
        maze.start = (0, 0)
        maze.end = (0, 2)
        maze.set_position((0, 0))
        maze.set_wall(Wall((0, 0), 1), False)
        maze.set_wall(Wall((0, 1), 1), False)
        path = maze.solve()
        lines = render_view(maze, 5, 9, path=path)
        centre = lines[2]
        assert centre[4] == START_CHAR
        assert centre[5] == " "
        assert centre[6] == PATH_CHAR
        assert centre[8] == END_CHAR


class TestMain:
    def test_usage(self, capsys):
        assert main(["torus_maze.py"]) == 2
        assert "Usage" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        path = tmp_path / "config.txt"
        path.write_text("DIMENSIONS=4,,4\n", encoding="utf-8")
        assert main(["torus_maze.py", str(path)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_run(self, tmp_path, capsys):
        path = tmp_path / "config.txt"
        path.write_text(
            "DIMENSIONS=6,7,2\nSEED=5\nVIEW_SIZE=9,13\n", encoding="utf-8"
        )
        assert main(["torus_maze.py", str(path)]) == 0

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Dimensions: 6, 7, 2"
        assert out[1] == "View axes (vertical, horizontal): 0, 1"
        length = int(out[4].split(": ")[1])

        maze = Maze([6, 7, 2])
        maze.generate(random.Random(5))
        assert out[2] == "Start: " + ", ".join(str(v) for v in maze.start)
        assert length == len(maze.solve()) - 1

        view = out[6:15]
        assert all(len(line) == 13 for line in view)
        directions = out[16]
        assert len(directions.split()) == length
