"""Terrain grid holding the tile kind of every cell."""

from typing import Any

import numpy as np

from core.types import CARDINALS, Coord, TileKind
from dungeon.grid.grid import Grid2D


class TerrainGrid(Grid2D[TileKind]):
    """Grid of tile kinds, initially all stone.

    Out-of-bounds reads return STONE. Every cell whose kind actually changes is
    remembered until `drain_changes` is called, so a host can redraw only what a
    generation step touched.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height, fill=TileKind.STONE, dtype=np.uint8)
        self._changes: dict[Coord, TileKind] = {}

    def _to_cell(self, value: TileKind) -> Any:
        return int(value)

    def _from_cell(self, value: Any) -> TileKind:
        return TileKind(int(value))

    def set(self, x: int, y: int, value: TileKind) -> None:
        if not self.in_bounds(x, y) or self._cells[y, x] == value:
            return
        self._cells[y, x] = int(value)
        self._changes[(x, y)] = value

    def fill(self, value: TileKind) -> None:
        for y, x in np.argwhere(self._cells != value):
            self._changes[(int(x), int(y))] = value
        super().fill(value)

    def fill_rect(self, x: int, y: int, width: int, height: int, value: TileKind) -> None:
        if not self.in_bounds(x, y) or width <= 0 or height <= 0:
            return
        x_end = min(x + width, self.width)
        y_end = min(y + height, self.height)
        block = self._cells[y:y_end, x:x_end]
        for dy, dx in np.argwhere(block != value):
            self._changes[(x + int(dx), y + int(dy))] = value
        block[...] = int(value)

    def is_open(self, x: int, y: int) -> bool:
        return self.get(x, y).is_open

    def open_neighbour_count(self, x: int, y: int) -> int:
        """Count the non-stone cells among the four cardinal neighbours."""
        return sum(1 for d in CARDINALS if self.get(*d.step(x, y)).is_open)

    def open_mask(self) -> np.ndarray:
        """Boolean array (``[y, x]``) marking every non-stone cell."""
        return self._cells != TileKind.STONE

    def count(self, kind: TileKind) -> int:
        return int(np.count_nonzero(self._cells == kind))

    def drain_changes(self) -> list[tuple[Coord, TileKind]]:
        """Return the cells changed since the last drain, in first-change order."""
        changes = list(self._changes.items())
        self._changes.clear()
        return changes
