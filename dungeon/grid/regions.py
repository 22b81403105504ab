"""Region bookkeeping: id minting, per-cell membership and merging."""

import random
from dataclasses import dataclass
from typing import Any

import numpy as np

from core.types import RegionID
from dungeon.grid.grid import Grid2D

# Stored in the region grid for cells that belong to no region
UNASSIGNED = 0

RGB = tuple[int, int, int]
ROOT_COLOR: RGB = (0, 0, 0)


def region_color(region_id: RegionID) -> RGB:
    """Debug colour for a region, derived only from its id.

    Uses a private generator seeded with the id so the dungeon's own random stream is
    never consumed by cosmetic choices.
    """
    rng = random.Random(region_id)
    return (rng.randrange(16, 208), rng.randrange(16, 208), rng.randrange(16, 208))


@dataclass
class Region:
    """A connected group of cells sharing one id (a room or a maze)."""

    id: RegionID
    color: RGB


class RegionGrid(Grid2D[RegionID | None]):
    """Per-cell region ids; `None` means unassigned, as do out-of-bounds reads."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height, fill=None, dtype=np.int32)

    def _to_cell(self, value: RegionID | None) -> Any:
        return UNASSIGNED if value is None else int(value)

    def _from_cell(self, value: Any) -> RegionID | None:
        region = int(value)
        return None if region == UNASSIGNED else RegionID(region)

    def replace(self, old: RegionID, new: RegionID) -> int:
        """Rewrite every cell holding `old` to `new`; returns the number of cells rewritten."""
        mask = self._cells == old
        self._cells[mask] = new
        return int(np.count_nonzero(mask))

    def cell_count(self, region: RegionID) -> int:
        return int(np.count_nonzero(self._cells == region))

    def assigned_mask(self) -> np.ndarray:
        return self._cells != UNASSIGNED


class RegionTable:
    """Owns region metadata and the parallel grid of per-cell region ids.

    Ids are minted monotonically from 1 per table. The grid holds plain ids only;
    merging rewrites the absorbed id everywhere before retiring it, so no stale id
    outlives a merge.
    """

    def __init__(self, width: int, height: int) -> None:
        self.grid = RegionGrid(width, height)
        self._regions: dict[RegionID, Region] = {}
        self._next_id = 1
        self.minted = 0
        self.merged = 0

    def mint(self) -> Region:
        """Create and register a new live region."""
        region_id = RegionID(self._next_id)
        self._next_id += 1
        region = Region(id=region_id, color=region_color(region_id))
        self._regions[region_id] = region
        self.minted += 1
        return region

    def get(self, region_id: RegionID) -> Region | None:
        return self._regions.get(region_id)

    def __contains__(self, region_id: object) -> bool:
        return region_id in self._regions

    def __len__(self) -> int:
        return len(self._regions)

    @property
    def live_count(self) -> int:
        return len(self._regions)

    def live_ids(self) -> list[RegionID]:
        """Live region ids in ascending order."""
        return sorted(self._regions)

    def set_color(self, region_id: RegionID, color: RGB) -> None:
        region = self._regions.get(region_id)
        if region is not None:
            region.color = color

    def assign(self, x: int, y: int, region_id: RegionID) -> None:
        self.grid.set(x, y, region_id)

    def assign_rect(self, x: int, y: int, width: int, height: int, region_id: RegionID) -> None:
        self.grid.fill_rect(x, y, width, height, region_id)

    def clear(self, x: int, y: int) -> None:
        self.grid.set(x, y, None)

    def region_at(self, x: int, y: int) -> RegionID | None:
        return self.grid.get(x, y)

    def merge(self, absorbed: RegionID, into: RegionID) -> int:
        """Fold `absorbed` into `into` and retire it.

        Returns:
            Number of grid cells relabelled

        Raises:
            ValueError: If either region is not live or both ids are the same
        """
        if absorbed == into:
            raise ValueError(f"Cannot merge region {absorbed} into itself")
        if absorbed not in self._regions:
            raise ValueError(f"Region {absorbed} is not live")
        if into not in self._regions:
            raise ValueError(f"Region {into} is not live")

        relabelled = self.grid.replace(absorbed, into)
        del self._regions[absorbed]
        self.merged += 1
        return relabelled
