"""Randomized placement of non-overlapping rectangular rooms."""

import logging
import random
from collections.abc import Iterator
from dataclasses import dataclass

from core.types import Coord, RegionID, TileKind
from dungeon.grid.regions import RegionTable
from dungeon.grid.terrain import TerrainGrid

ROOM_DIMENSIONS: tuple[int, ...] = (3, 5, 7, 9, 11)
ROOM_SIZES: tuple[tuple[int, int], ...] = tuple(
    (w, h) for w in ROOM_DIMENSIONS for h in ROOM_DIMENSIONS
)


@dataclass(frozen=True)
class Room:
    """Axis-aligned rectangular room and the region it was created with."""

    x: int
    y: int
    width: int
    height: int
    region: RegionID

    def overlaps(self, other: "Room") -> bool:
        x_overlap = self.x < other.x + other.width and self.x + self.width > other.x
        y_overlap = self.y < other.y + other.height and self.y + self.height > other.y
        return x_overlap and y_overlap

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    @property
    def center(self) -> Coord:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def cells(self) -> Iterator[Coord]:
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy


def _random_odd(rng: random.Random, limit: int) -> int:
    """Random odd coordinate in [1, limit) (always 1 when the range is empty)."""
    slots = limit // 2
    if slots <= 0:
        return 1
    return 1 + rng.randrange(slots) * 2


class RoomPlacer:
    """Places rooms by rejection sampling within a fixed attempt budget.

    Sizes come from `ROOM_SIZES` and origins are odd so room edges sit on the maze
    lattice. A candidate is accepted when it stays inside the one-cell border and
    overlaps no accepted room. The phase ends after exactly `max_attempts`
    attempts however many succeeded.
    """

    def __init__(
        self,
        terrain: TerrainGrid,
        regions: RegionTable,
        rng: random.Random,
        max_attempts: int,
        logger: logging.Logger | None = None,
    ) -> None:
        self.terrain = terrain
        self.regions = regions
        self.rng = rng
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)
        self.attempts = 0
        self.rooms: list[Room] = []

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.max_attempts

    def step(self) -> bool:
        """Attempt placements until one room is accepted or the budget runs out.

        Returns:
            True once the attempt budget is spent
        """
        while not self.exhausted:
            self.attempts += 1
            width, height = self.rng.choice(ROOM_SIZES)
            x = _random_odd(self.rng, self.terrain.width)
            y = _random_odd(self.rng, self.terrain.height)

            if self.fits(x, y, width, height):
                self._add_room(x, y, width, height)
                break

        return self.exhausted

    def fits(self, x: int, y: int, width: int, height: int) -> bool:
        """Check the border margin and overlap against every accepted room."""
        if x < 1 or y < 1:
            return False
        if x + width > self.terrain.width - 1 or y + height > self.terrain.height - 1:
            return False

        candidate = Room(x=x, y=y, width=width, height=height, region=RegionID(0))
        return not any(candidate.overlaps(room) for room in self.rooms)

    def _add_room(self, x: int, y: int, width: int, height: int) -> Room:
        region = self.regions.mint()
        room = Room(x=x, y=y, width=width, height=height, region=region.id)
        self.terrain.fill_rect(x, y, width, height, TileKind.ROOM)
        self.regions.assign_rect(x, y, width, height, region.id)
        self.rooms.append(room)
        self.logger.debug(
            f"Room {len(self.rooms)} placed at ({x}, {y}) size {width}x{height} "
            f"region {region.id} after {self.attempts} attempts"
        )
        return room
