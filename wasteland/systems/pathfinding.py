"""Breadth-first pathfinding on the world map.

Every step costs one round, so BFS over 4-connected walkable cells yields a
shortest path in rounds.

Usage:
    pf = GridPathfinder(grid)
    path = pf.find_path(start, target)        # list[Vector2] or None
    pos = pf.step_along(current, path)         # next cell, one per round
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from wasteland.core.models import Vector2

if TYPE_CHECKING:
    from wasteland.core.grid import WorldGrid

# Cardinal directions (no diagonals)
_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GridPathfinder:
    """BFS pathfinder over the sparse world grid.

    Only Road, Shelter and ExplorationPoint cells are walkable; coordinates
    outside the map are treated as blocked.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: WorldGrid) -> None:
        self._grid = grid

    def find_path(self, start: Vector2, target: Vector2) -> list[Vector2] | None:
        """Compute a shortest path from *start* to *target*.

        Returns the cells to walk through (excluding *start*, including
        *target*), ``[]`` when already there, or None if no route exists.
        """
        if start == target:
            return []

        grid = self._grid
        if not grid.is_walkable(target):
            return None

        start_key = (start.x, start.y)
        goal_key = (target.x, target.y)
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        visited: set[tuple[int, int]] = {start_key}
        queue: deque[tuple[int, int]] = deque([start_key])

        while queue:
            cx, cy = queue.popleft()
            if (cx, cy) == goal_key:
                return self._reconstruct(came_from, goal_key)

            for dx, dy in _DIRS:
                nkey = (cx + dx, cy + dy)
                if nkey in visited:
                    continue
                if not grid.is_walkable_xy(*nkey):
                    continue
                visited.add(nkey)
                came_from[nkey] = (cx, cy)
                queue.append(nkey)

        return None

    def distance(self, start: Vector2, target: Vector2) -> int | None:
        """Number of rounds needed to walk from *start* to *target*, or None."""
        path = self.find_path(start, target)
        return None if path is None else len(path)

    @staticmethod
    def step_along(current: Vector2, path: list[Vector2]) -> Vector2:
        """Advance one cell along *path*; stay put when the path is empty."""
        if not path:
            return current
        return path[0]

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
    ) -> list[Vector2]:
        """Walk back through came_from to build the path."""
        path: list[Vector2] = []
        while current in came_from:
            path.append(Vector2(current[0], current[1]))
            current = came_from[current]
        path.reverse()
        return path
