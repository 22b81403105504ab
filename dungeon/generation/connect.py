"""Merging every region into one by opening doors through connectors."""

import logging
import random

from core.types import CARDINALS, Coord, RegionID, TileKind
from dungeon.generation.connectors import Connector
from dungeon.generation.errors import GenerationError
from dungeon.generation.rooms import Room
from dungeon.grid.regions import ROOT_COLOR, RegionTable
from dungeon.grid.terrain import TerrainGrid


class RegionConnector:
    """Grows a root region until it has absorbed every other region.

    A random room's region becomes the root. Connectors touching the root are
    shuffled and popped one at a time: a candidate next to an existing door is
    set aside, a candidate with exactly one side in the root becomes a door and
    the other side is merged into the root, anything else is discarded. Each merge
    ends a step. When the root list runs dry it is refilled from the remaining
    pool, since earlier merges grow the set of cells the root touches.

    Connectors set aside for touching a door are only reconsidered, with the door
    rule relaxed, when nothing else can join another region.
    """

    def __init__(
        self,
        terrain: TerrainGrid,
        regions: RegionTable,
        rooms: list[Room],
        connectors: list[Connector],
        rng: random.Random,
        strict: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self.terrain = terrain
        self.regions = regions
        self.rng = rng
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)

        self.rooms = list(rooms)
        self.unconnected_rooms: list[Room] = []
        self.root: RegionID | None = None

        self._pool: list[Connector] = list(connectors)
        self._root_connectors: list[Connector] = []
        self._beside_door: list[Connector] = []
        self._relaxed = False

        self.doors: list[Coord] = []
        self.rejected_beside_door = 0
        self.relaxed_doors = 0

    def step(self) -> bool:
        """Perform at most one merge.

        Returns:
            True once a single region remains (or nothing can join the rest)

        Raises:
            GenerationError: If several regions remain with no connector between
                them and `strict` is set
        """
        if self.regions.live_count <= 1:
            return True

        root = self.root if self.root is not None else self._select_root()

        while True:
            if not self._root_connectors and not self._refill(root):
                return self._unjoinable()

            connector = self._root_connectors.pop(0)

            if not self._relaxed and self.is_beside_door(connector):
                self._beside_door.append(connector)
                self.rejected_beside_door += 1
                continue

            if connector.joins(root):
                self._open_door(connector, root)
                return self.regions.live_count <= 1

    def _select_root(self) -> RegionID:
        self.logger.info(
            f"Connecting {self.regions.live_count} regions ({len(self.rooms)} rooms)"
        )

        if self.rooms:
            self.unconnected_rooms = list(self.rooms)
            self.rng.shuffle(self.unconnected_rooms)
            root_room = self.unconnected_rooms.pop()
            root = root_room.region
            self.logger.info(
                f"Room at ({root_room.x}, {root_room.y}) selected as root region {root}"
            )
        else:
            root = self.rng.choice(self.regions.live_ids())
            self.logger.info(f"No rooms placed, region {root} selected as root region")

        self.regions.set_color(root, ROOT_COLOR)
        self.root = root
        return root

    def _refill(self, root: RegionID) -> bool:
        """Refill the root list from the pool, falling back to door-adjacent connectors."""
        self.rng.shuffle(self._pool)
        others: list[Connector] = []
        for connector in self._pool:
            if connector.joins(root):
                self._root_connectors.append(connector)
            else:
                others.append(connector)
        self._pool = others
        self.rng.shuffle(self._root_connectors)

        if self._root_connectors:
            return True

        relaxed = [c for c in self._beside_door if c.joins(root)]
        if not relaxed:
            return False

        self._beside_door = [c for c in self._beside_door if not c.joins(root)]
        self.rng.shuffle(relaxed)
        self._root_connectors = relaxed
        self._relaxed = True
        self.logger.debug(
            f"No free connectors left, reconsidering {len(relaxed)} beside existing doors"
        )
        return True

    def _unjoinable(self) -> bool:
        message = (
            f"{self.regions.live_count} regions remain but no connector can join them "
            f"to root region {self.root}"
        )
        if self.strict:
            raise GenerationError(message)
        self.logger.error(message)
        return True

    def is_beside_door(self, connector: Connector) -> bool:
        """True if any cardinal neighbour of the connector is already a door."""
        return any(
            self.terrain.get(*d.step(connector.x, connector.y)) is TileKind.DOOR
            for d in CARDINALS
        )

    def _open_door(self, connector: Connector, root: RegionID) -> None:
        absorbed = connector.other(root)

        self.terrain.set(connector.x, connector.y, TileKind.DOOR)
        self.regions.assign(connector.x, connector.y, root)
        self.regions.merge(absorbed, into=root)

        for pending in (self._root_connectors, self._pool, self._beside_door):
            for other in pending:
                other.replace(absorbed, root)

        self.unconnected_rooms = [r for r in self.unconnected_rooms if r.region != absorbed]
        self.doors.append(connector.position)
        if self._relaxed:
            self.relaxed_doors += 1
        self._relaxed = False

        self.logger.debug(
            f"Door at ({connector.x}, {connector.y}) merged region {absorbed} into {root}, "
            f"{self.regions.live_count} regions left"
        )
