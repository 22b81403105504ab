from enum import Enum, IntEnum
from typing import NewType

# IDs
RegionID = NewType("RegionID", int)

# Grid coordinates as (x, y)
Coord = tuple[int, int]


class TileKind(IntEnum):
    """Terrain kind stored in every grid cell."""

    STONE = 0
    ROOM = 1
    CORRIDOR = 2
    DOOR = 3

    @property
    def is_open(self) -> bool:
        """Anything that is not solid stone."""
        return self is not TileKind.STONE

    @property
    def holds_region(self) -> bool:
        """Rooms and corridors belong to a region before connection."""
        return self is TileKind.ROOM or self is TileKind.CORRIDOR


class Direction(Enum):
    """Cardinal directions as (dx, dy) unit steps, y growing downwards."""

    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def step(self, x: int, y: int, distance: int = 1) -> Coord:
        """Return the cell `distance` steps away from (x, y) in this direction."""
        return x + self.dx * distance, y + self.dy * distance


CARDINALS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)
