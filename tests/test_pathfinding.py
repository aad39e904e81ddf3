"""Tests for BFS pathfinding on the world map."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wasteland.core.enums import CellType
from wasteland.core.grid import WorldGrid
from wasteland.core.models import GridCell, Vector2
from wasteland.systems.pathfinding import GridPathfinder

_TYPES = {
    "S": CellType.SHELTER,
    "R": CellType.ROAD,
    "P": CellType.EXPLORATION_POINT,
    "O": CellType.OBSTACLE,
    "B": CellType.BUILT,
}


def _grid(*rows: str) -> WorldGrid:
    """Build a grid from text rows; '.' leaves the coordinate off the map."""
    cells = []
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch != ".":
                cells.append(GridCell(Vector2(x, y), _TYPES[ch]))
    return WorldGrid(cells)


def _assert_connected(grid: WorldGrid, start: Vector2, path: list[Vector2]) -> None:
    prev = start
    for step in path:
        assert prev.manhattan(step) == 1, f"{prev} -> {step} is not a 4-neighbour step"
        assert grid.is_walkable(step), f"{step} is not walkable"
        prev = step


class TestFindPathBasic:
    def test_straight_line(self):
        g = _grid("SRRRP")
        path = GridPathfinder(g).find_path(Vector2(0, 0), Vector2(4, 0))
        assert path == [Vector2(1, 0), Vector2(2, 0), Vector2(3, 0), Vector2(4, 0)]

    def test_same_start_and_target_is_empty_path(self):
        g = _grid("SRR")
        assert GridPathfinder(g).find_path(Vector2(1, 0), Vector2(1, 0)) == []

    def test_adjacent_target(self):
        g = _grid("SR")
        assert GridPathfinder(g).find_path(Vector2(0, 0), Vector2(1, 0)) == [Vector2(1, 0)]

    def test_path_excludes_start_includes_target(self):
        g = _grid("SRR")
        path = GridPathfinder(g).find_path(Vector2(0, 0), Vector2(2, 0))
        assert Vector2(0, 0) not in path
        assert path[-1] == Vector2(2, 0)


class TestFindPathBlocked:
    def test_obstacle_blocks_route(self):
        g = _grid("SROR")
        assert GridPathfinder(g).find_path(Vector2(0, 0), Vector2(3, 0)) is None

    def test_built_cells_are_never_walkable(self):
        g = _grid("SRBR")
        assert GridPathfinder(g).find_path(Vector2(0, 0), Vector2(3, 0)) is None

    def test_target_obstacle_is_no_path(self):
        g = _grid("SRO")
        assert GridPathfinder(g).find_path(Vector2(0, 0), Vector2(2, 0)) is None

    def test_out_of_grid_target_is_no_path(self):
        g = _grid("SRR")
        assert GridPathfinder(g).find_path(Vector2(0, 0), Vector2(10, 10)) is None

    def test_gap_in_map_blocks_route(self):
        g = _grid("SR.RR")
        assert GridPathfinder(g).find_path(Vector2(0, 0), Vector2(4, 0)) is None


class TestFindPathShortest:
    def test_detour_around_obstacles(self):
        g = _grid(
            "SROR",
            "RRRR",
        )
        path = GridPathfinder(g).find_path(Vector2(0, 0), Vector2(3, 0))
        assert path is not None
        assert len(path) == 5
        _assert_connected(g, Vector2(0, 0), path)

    def test_picks_shorter_of_two_routes(self):
        g = _grid(
            "SRRRRRR",
            "R.....R",
            "RRRP..R",
            "......R",
        )
        pf = GridPathfinder(g)
        path = pf.find_path(Vector2(0, 0), Vector2(3, 2))
        assert path is not None
        assert len(path) == 5
        _assert_connected(g, Vector2(0, 0), path)

    def test_distance_matches_path_length(self):
        g = _grid(
            "SRRR",
            "O.OR",
            "RRRR",
        )
        pf = GridPathfinder(g)
        assert pf.distance(Vector2(0, 0), Vector2(0, 2)) == 8
        assert pf.distance(Vector2(0, 0), Vector2(0, 0)) == 0

    def test_distance_unreachable_is_none(self):
        g = _grid("SOR")
        assert GridPathfinder(g).distance(Vector2(0, 0), Vector2(2, 0)) is None

    def test_start_cell_need_not_be_walkable(self):
        g = _grid("ORR")
        path = GridPathfinder(g).find_path(Vector2(0, 0), Vector2(2, 0))
        assert path == [Vector2(1, 0), Vector2(2, 0)]


class TestStepAlong:
    def test_moves_to_first_cell(self):
        path = [Vector2(1, 0), Vector2(2, 0)]
        assert GridPathfinder.step_along(Vector2(0, 0), path) == Vector2(1, 0)

    def test_empty_path_stays_put(self):
        assert GridPathfinder.step_along(Vector2(4, 4), []) == Vector2(4, 4)
