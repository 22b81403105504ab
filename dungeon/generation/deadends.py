"""Removal of corridor stubs that lead nowhere."""

import logging

import numpy as np

from core.types import Coord, TileKind
from dungeon.grid.regions import RegionTable
from dungeon.grid.terrain import TerrainGrid


def find_dead_ends(terrain: TerrainGrid) -> list[Coord]:
    """Corridor or door cells with exactly one non-stone cardinal neighbour.

    Returns:
        Dead-end coordinates in row-major order
    """
    cells = terrain.array
    open_cells = np.pad(cells != TileKind.STONE, 1, constant_values=False)
    neighbours = (
        open_cells[:-2, 1:-1].astype(np.int8)
        + open_cells[2:, 1:-1]
        + open_cells[1:-1, :-2]
        + open_cells[1:-1, 2:]
    )
    passage = (cells == TileKind.CORRIDOR) | (cells == TileKind.DOOR)
    return [(int(x), int(y)) for y, x in np.argwhere(passage & (neighbours == 1))]


class DeadEndPruner:
    """Fills dead ends back in, one full-grid pass per step.

    Removing a dead end can expose its neighbour as a new one, so passes repeat
    until a pass removes nothing. Room cells are never touched.
    """

    def __init__(
        self,
        terrain: TerrainGrid,
        regions: RegionTable,
        logger: logging.Logger | None = None,
    ) -> None:
        self.terrain = terrain
        self.regions = regions
        self.logger = logger or logging.getLogger(__name__)
        self.passes = 0
        self.removed = 0

    def step(self) -> bool:
        """Run one pruning pass.

        Returns:
            True when the pass found no dead ends
        """
        dead_ends = find_dead_ends(self.terrain)
        self.passes += 1

        for x, y in dead_ends:
            self.terrain.set(x, y, TileKind.STONE)
            self.regions.clear(x, y)
        self.removed += len(dead_ends)

        self.logger.debug(f"Dead-end pass {self.passes} removed {len(dead_ends)} cells")
        return not dead_ends
