"""ColonyGrid - fixed square lattice, one building id per cell."""
from __future__ import annotations

from collections.abc import Iterator

from data_colony.types import GridCell, Position

# North, South, East, West
NEIGHBOR_OFFSETS: tuple[Position, ...] = ((0, -1), (0, 1), (1, 0), (-1, 0))


class ColonyGrid:
    """Square grid stored as a flat list indexed by ``y * size + x``."""

    def __init__(self, size: int = 5) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self._size = size
        self._cells: list[GridCell] = [
            GridCell(x, y) for y in range(size) for x in range(size)
        ]

    @property
    def size(self) -> int:
        return self._size

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self._size and 0 <= y < self._size

    def _index(self, pos: Position) -> int | None:
        if not self.in_bounds(pos):
            return None
        return pos[1] * self._size + pos[0]

    def get_cell(self, pos: Position) -> GridCell | None:
        idx = self._index(pos)
        if idx is None:
            return None
        return self._cells[idx]

    def building_at(self, pos: Position) -> str | None:
        cell = self.get_cell(pos)
        return None if cell is None else cell.building_id

    def set_building(self, pos: Position, building_id: str | None) -> bool:
        """Occupy or clear a cell.

        Fails on an invalid position, or when placing onto an occupied cell.
        Clearing a valid cell always succeeds, even if it is already empty.
        """
        idx = self._index(pos)
        if idx is None:
            return False
        cell = self._cells[idx]
        if building_id is not None and cell.building_id is not None:
            return False
        self._cells[idx] = GridCell(cell.x, cell.y, building_id)
        return True

    def get_neighbors(self, pos: Position) -> list[GridCell]:
        """In-bounds orthogonal neighbors, ordered North, South, East, West."""
        x, y = pos
        result: list[GridCell] = []
        for dx, dy in NEIGHBOR_OFFSETS:
            cell = self.get_cell((x + dx, y + dy))
            if cell is not None:
                result.append(cell)
        return result

    def occupied(self) -> Iterator[GridCell]:
        for cell in self._cells:
            if cell.building_id is not None:
                yield cell

    def cells(self) -> list[list[GridCell]]:
        """Rows of cells, ``cells()[y][x]``."""
        return [
            self._cells[row * self._size:(row + 1) * self._size]
            for row in range(self._size)
        ]

    def clear(self) -> None:
        self._cells = [GridCell(c.x, c.y) for c in self._cells]
