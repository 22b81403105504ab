"""Detection of stone cells that separate two different regions."""

from dataclasses import dataclass, field

import numpy as np

from core.types import Coord, RegionID, TileKind
from dungeon.grid.grid import Grid2D
from dungeon.grid.regions import RegionTable
from dungeon.grid.terrain import TerrainGrid


@dataclass
class Connector:
    """A cell with a different region on each side of one axis."""

    x: int
    y: int
    region_a: RegionID
    region_b: RegionID

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    def touches(self, region: RegionID) -> bool:
        return self.region_a == region or self.region_b == region

    def joins(self, root: RegionID) -> bool:
        """True when exactly one side belongs to `root`."""
        return (self.region_a == root) != (self.region_b == root)

    def other(self, region: RegionID) -> RegionID:
        """The side that is not `region`."""
        return self.region_b if self.region_a == region else self.region_a

    def replace(self, old: RegionID, new: RegionID) -> None:
        if self.region_a == old:
            self.region_a = new
        if self.region_b == old:
            self.region_b = new


@dataclass
class ConnectorScan:
    """All connectors found in one scan plus a grid marking their cells."""

    connectors: list[Connector] = field(default_factory=list)
    grid: Grid2D[bool] | None = None

    def is_connector(self, x: int, y: int) -> bool:
        return self.grid is not None and self.grid.get(x, y)


def _pair_regions(
    terrain: TerrainGrid, regions: RegionTable, first: Coord, second: Coord
) -> tuple[RegionID, RegionID] | None:
    """Return both regions if the two cells are floor of two different regions."""
    if not (terrain.get(*first).holds_region and terrain.get(*second).holds_region):
        return None
    region_a = regions.region_at(*first)
    region_b = regions.region_at(*second)
    if region_a is None or region_b is None or region_a == region_b:
        return None
    return region_a, region_b


def find_connector(
    terrain: TerrainGrid, regions: RegionTable, x: int, y: int
) -> Connector | None:
    """Test a stone cell's east/west pair, then its north/south pair."""
    if terrain.get(x, y) is not TileKind.STONE:
        return None

    pair = _pair_regions(terrain, regions, (x + 1, y), (x - 1, y))
    if pair is None:
        pair = _pair_regions(terrain, regions, (x, y - 1), (x, y + 1))
    if pair is None:
        return None
    return Connector(x=x, y=y, region_a=pair[0], region_b=pair[1])


def scan_connectors(terrain: TerrainGrid, regions: RegionTable) -> ConnectorScan:
    """Find every interior connector cell in row-major order.

    The scan only reads the grids. Each cell yields at most one record: the
    horizontal pair wins when both axes qualify.
    """
    grid: Grid2D[bool] = Grid2D(terrain.width, terrain.height, fill=False, dtype=np.bool_)
    scan = ConnectorScan(grid=grid)

    for y in range(1, terrain.height - 1):
        for x in range(1, terrain.width - 1):
            connector = find_connector(terrain, regions, x, y)
            if connector is not None:
                grid.set(x, y, True)
                scan.connectors.append(connector)

    return scan
