"""Resumable maze carving over the odd-aligned lattice."""

import logging
import random

from core.types import CARDINALS, Coord, Direction, RegionID, TileKind
from dungeon.grid.regions import RegionTable
from dungeon.grid.terrain import TerrainGrid


class MazeCarver:
    """Fills the stone left between rooms with single-width maze corridors.

    Every odd-aligned stone cell seeds a new maze region. A maze grows with an
    iterative walk: carve two cells in a random direction whose target is still
    stone, and remember the new position. When the walk is stuck, a hunt over the
    shuffled visited positions finds one that can still carve and the walk resumes
    there. No recursion is involved, and each call to `step` does one walk or hunt
    move, or finds the next seed.

    Seeds are scanned in random row order, and in random column order within a row.
    """

    def __init__(
        self,
        terrain: TerrainGrid,
        regions: RegionTable,
        rng: random.Random,
        logger: logging.Logger | None = None,
    ) -> None:
        self.terrain = terrain
        self.regions = regions
        self.rng = rng
        self.logger = logger or logging.getLogger(__name__)

        self._pending_rows: list[int] = list(range(1, terrain.height - 1, 2))
        self._scan_row: int | None = None
        self._scan_cols: list[int] = []

        self.walking = False
        self.x = 0
        self.y = 0
        self.current_region: RegionID | None = None
        self.visited: list[Coord] = []

        self.mazes: list[RegionID] = []
        self.cells_carved = 0

    @property
    def done(self) -> bool:
        return not self.walking and not self._pending_rows and self._scan_row is None

    def step(self) -> bool:
        """Advance carving by one move.

        Returns:
            True once every odd-aligned cell has been carved or claimed by a room
        """
        if self.walking:
            self._walk_or_hunt()
            return False

        seed = self._next_seed()
        if seed is None:
            return True

        self._start_maze(*seed)
        return False

    def _next_seed(self) -> Coord | None:
        """Scan rows and columns in random order for the next stone lattice cell."""
        while True:
            if self._scan_row is None:
                if not self._pending_rows:
                    return None
                self.rng.shuffle(self._pending_rows)
                self._scan_row = self._pending_rows.pop(0)
                self._scan_cols = list(range(1, self.terrain.width - 1, 2))
                self.rng.shuffle(self._scan_cols)

            while self._scan_cols:
                x = self._scan_cols.pop(0)
                if self.terrain.get(x, self._scan_row) is TileKind.STONE:
                    return x, self._scan_row

            self._scan_row = None

    def _start_maze(self, x: int, y: int) -> None:
        region = self.regions.mint()
        self.current_region = region.id
        self.mazes.append(region.id)

        self.x, self.y = x, y
        self._carve_cell(x, y)
        self.visited = [(x, y)]
        self.walking = True
        self.logger.debug(f"Maze region {region.id} seeded at ({x}, {y})")

    def _walk_or_hunt(self) -> None:
        if self._walk() or self._hunt():
            return

        finished = self.current_region
        self.walking = False
        self.current_region = None
        if finished is not None:
            self.logger.debug(
                f"Maze region {finished} exhausted, "
                f"{self.regions.grid.cell_count(finished)} cells"
            )

    def _walk(self) -> bool:
        """Carve onward from the cursor in the first open random direction."""
        for direction in self._shuffled_directions():
            if self.can_carve(self.x, self.y, direction):
                self._carve(direction)
                return True
        return False

    def _hunt(self) -> bool:
        """Resume from a previously visited position that can still carve.

        Positions found to be exhausted are dropped from the visited list.
        """
        self.rng.shuffle(self.visited)

        while self.visited:
            self.x, self.y = self.visited[0]
            for direction in self._shuffled_directions():
                if self.can_carve(self.x, self.y, direction):
                    self._carve(direction)
                    return True
            self.visited.pop(0)

        return False

    def _shuffled_directions(self) -> list[Direction]:
        directions = list(CARDINALS)
        self.rng.shuffle(directions)
        return directions

    def can_carve(self, x: int, y: int, direction: Direction) -> bool:
        """A direction is open when the cell two steps away is interior stone."""
        tx, ty = direction.step(x, y, 2)
        if not (1 <= tx < self.terrain.width - 1 and 1 <= ty < self.terrain.height - 1):
            return False
        return self.terrain.get(tx, ty) is TileKind.STONE

    def _carve(self, direction: Direction) -> None:
        self._carve_cell(*direction.step(self.x, self.y, 1))
        self.x, self.y = direction.step(self.x, self.y, 2)
        self._carve_cell(self.x, self.y)
        self.visited.append((self.x, self.y))

    def _carve_cell(self, x: int, y: int) -> None:
        assert self.current_region is not None
        self.terrain.set(x, y, TileKind.CORRIDOR)
        self.regions.assign(x, y, self.current_region)
        self.cells_carved += 1
