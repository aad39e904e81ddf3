"""World map grid: sparse cells keyed by coordinate."""

from __future__ import annotations

from typing import Iterable, Iterator

from wasteland.core.enums import WALKABLE_CELL_TYPES, CellType
from wasteland.core.models import DeathDrop, GridCell, Vector2
from wasteland.core.parsing import merge_stacks
from wasteland.core.tables import MapCellTemplate


class WorldGrid:
    """The static world map. Coordinates missing from the table do not exist."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[GridCell]) -> None:
        self._cells: dict[tuple[int, int], GridCell] = {(c.pos.x, c.pos.y): c for c in cells}

    @classmethod
    def from_templates(cls, templates: Iterable[MapCellTemplate]) -> WorldGrid:
        return cls(
            GridCell(
                pos=Vector2(t.x, t.y),
                cell_type=t.cell_type,
                exploration_point_id=t.exploration_point_id,
                progress=0 if t.exploration_point_id else None,
            )
            for t in templates
        )

    # -- access --

    def __iter__(self) -> Iterator[GridCell]:
        return iter(self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def get(self, pos: Vector2) -> GridCell | None:
        return self._cells.get((pos.x, pos.y))

    def is_walkable_xy(self, x: int, y: int) -> bool:
        cell = self._cells.get((x, y))
        return cell is not None and cell.cell_type in WALKABLE_CELL_TYPES

    def is_walkable(self, pos: Vector2) -> bool:
        return self.is_walkable_xy(pos.x, pos.y)

    def cell_of_point(self, point_id: str) -> GridCell | None:
        for cell in self._cells.values():
            if cell.exploration_point_id == point_id:
                return cell
        return None

    def shelter(self) -> GridCell | None:
        for cell in self._cells.values():
            if cell.cell_type == CellType.SHELTER:
                return cell
        return None

    @property
    def width(self) -> int:
        return max((x for x, _ in self._cells), default=-1) + 1

    @property
    def height(self) -> int:
        return max((y for _, y in self._cells), default=-1) + 1

    # -- exploration progress --

    def set_progress(self, point_id: str, percent: int) -> None:
        cell = self.cell_of_point(point_id)
        if cell is not None:
            cell.progress = max(0, min(percent, 100))

    def complete_point(self, point_id: str) -> GridCell | None:
        """Mark a point fully explored; the cell becomes an Obstacle and loses its point id."""
        cell = self.cell_of_point(point_id)
        if cell is None:
            return None
        cell.progress = 100
        cell.cell_type = CellType.OBSTACLE
        cell.exploration_point_id = None
        return cell

    # -- death drops --

    def place_death_drop(self, pos: Vector2, drop: DeathDrop) -> None:
        cell = self.get(pos)
        if cell is None:
            return
        if cell.death_drop is None:
            cell.death_drop = drop
        else:
            # A second death on the same cell: keep one drop, newest round and owner
            cell.death_drop = DeathDrop(
                items=merge_stacks(cell.death_drop.items, drop.items),
                death_round=drop.death_round,
                owner_id=drop.owner_id,
            )

    def expire_death_drops(self, current_round: int, expire_rounds: int) -> list[GridCell]:
        """Clear drops older than *expire_rounds*. Returns the cells that were cleared."""
        cleared: list[GridCell] = []
        for cell in self._cells.values():
            drop = cell.death_drop
            if drop is not None and current_round - drop.death_round >= expire_rounds:
                cell.death_drop = None
                cleared.append(cell)
        return cleared
