"""Tests for region connection."""

import logging
import random

import pytest

from core.types import RegionID, TileKind
from dungeon.generation.connect import RegionConnector
from dungeon.generation.connectors import Connector, scan_connectors
from dungeon.generation.errors import GenerationError
from dungeon.generation.rooms import Room
from dungeon.grid.regions import ROOT_COLOR, RegionTable
from dungeon.grid.terrain import TerrainGrid


def single_cell_room(terrain: TerrainGrid, regions: RegionTable, x: int, y: int) -> Room:
    region = regions.mint().id
    terrain.set(x, y, TileKind.ROOM)
    regions.assign(x, y, region)
    return Room(x=x, y=y, width=1, height=1, region=region)


def corridor(terrain: TerrainGrid, regions: RegionTable, x: int, y: int) -> RegionID:
    region = regions.mint().id
    terrain.set(x, y, TileKind.CORRIDOR)
    regions.assign(x, y, region)
    return region


def run_connector(connector: RegionConnector, limit: int = 1000) -> int:
    steps = 1
    while not connector.step():
        steps += 1
        assert steps < limit
    return steps


class TestRegionConnector:
    """Test merging regions through doors."""

    def build_chain(self, seed: int = 1) -> RegionConnector:
        """Room, corridor, room in a row, separated by stone connectors."""
        terrain = TerrainGrid(7, 3)
        regions = RegionTable(7, 3)
        west = single_cell_room(terrain, regions, 1, 1)
        corridor(terrain, regions, 3, 1)
        east = single_cell_room(terrain, regions, 5, 1)
        scan = scan_connectors(terrain, regions)
        return RegionConnector(
            terrain, regions, [west, east], scan.connectors, random.Random(seed)
        )

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_chain_is_merged_with_one_door_per_step(self, seed: int) -> None:
        """Test each step opens one door until one region is left."""
        connector = self.build_chain(seed)

        assert connector.step() is False
        assert connector.regions.live_count == 2
        assert len(connector.doors) == 1

        assert connector.step() is True
        assert connector.regions.live_count == 1
        assert sorted(connector.doors) == [(2, 1), (4, 1)]
        assert connector.terrain.get(2, 1) is TileKind.DOOR
        assert connector.terrain.get(4, 1) is TileKind.DOOR

    def test_root_is_a_room_and_absorbs_everything(self) -> None:
        """Test every open cell ends up in the root region."""
        connector = self.build_chain()
        run_connector(connector)

        root = connector.root
        assert root is not None
        assert root in {room.region for room in connector.rooms}
        assert connector.regions.live_ids() == [root]
        for x in range(1, 6):
            assert connector.regions.region_at(x, 1) == root
        root_region = connector.regions.get(root)
        assert root_region is not None
        assert root_region.color == ROOT_COLOR
        assert connector.unconnected_rooms == []

    def test_single_region_completes_immediately(self) -> None:
        """Test nothing happens when only one region exists."""
        terrain = TerrainGrid(5, 5)
        regions = RegionTable(5, 5)
        room = single_cell_room(terrain, regions, 2, 2)
        connector = RegionConnector(terrain, regions, [room], [], random.Random(1))

        assert connector.step() is True
        assert connector.root is None
        assert connector.doors == []

    def test_no_regions_completes_immediately(self) -> None:
        """Test an empty grid has nothing to connect."""
        connector = RegionConnector(
            TerrainGrid(2, 2), RegionTable(2, 2), [], [], random.Random(1)
        )
        assert connector.step() is True

    def test_root_without_rooms_is_a_live_region(self) -> None:
        """Test maze-only grids still pick a root and connect."""
        terrain = TerrainGrid(5, 3)
        regions = RegionTable(5, 3)
        corridor(terrain, regions, 1, 1)
        corridor(terrain, regions, 3, 1)
        scan = scan_connectors(terrain, regions)
        connector = RegionConnector(terrain, regions, [], scan.connectors, random.Random(3))

        assert connector.step() is True
        assert connector.root in (1, 2)
        assert regions.live_count == 1
        assert terrain.get(2, 1) is TileKind.DOOR

    def test_door_adjacent_connector_is_deferred_then_used(self) -> None:
        """Test a connector next to a door is only used when nothing else can join."""
        terrain = TerrainGrid(5, 5)
        regions = RegionTable(5, 5)
        room = single_cell_room(terrain, regions, 1, 1)
        north = corridor(terrain, regions, 3, 1)
        south = corridor(terrain, regions, 3, 3)
        connectors = [
            Connector(x=2, y=1, region_a=north, region_b=room.region),
            Connector(x=2, y=2, region_a=south, region_b=room.region),
        ]
        connector = RegionConnector(terrain, regions, [room], connectors, random.Random(7))

        run_connector(connector)

        assert regions.live_count == 1
        assert sorted(connector.doors) == [(2, 1), (2, 2)]
        assert connector.rejected_beside_door == 1
        assert connector.relaxed_doors == 1

    def test_door_adjacent_connector_is_skipped_when_not_needed(self) -> None:
        """Test a redundant connector beside a door never becomes a door."""
        terrain = TerrainGrid(5, 5)
        regions = RegionTable(5, 5)
        room = single_cell_room(terrain, regions, 1, 1)
        maze = corridor(terrain, regions, 3, 1)
        terrain.set(3, 2, TileKind.CORRIDOR)
        regions.assign(3, 2, maze)
        connectors = [
            Connector(x=2, y=1, region_a=maze, region_b=room.region),
            Connector(x=2, y=2, region_a=maze, region_b=room.region),
        ]
        connector = RegionConnector(terrain, regions, [room], connectors, random.Random(2))

        assert connector.step() is True
        assert len(connector.doors) == 1
        assert connector.relaxed_doors == 0

    def test_is_beside_door(self) -> None:
        """Test the four-neighbour door check ignores diagonals."""
        terrain = TerrainGrid(5, 5)
        regions = RegionTable(5, 5)
        terrain.set(2, 2, TileKind.DOOR)
        connector = RegionConnector(terrain, regions, [], [], random.Random(1))

        assert connector.is_beside_door(Connector(2, 1, RegionID(1), RegionID(2)))
        assert connector.is_beside_door(Connector(3, 2, RegionID(1), RegionID(2)))
        assert not connector.is_beside_door(Connector(3, 3, RegionID(1), RegionID(2)))

    def build_unjoinable(self, strict: bool) -> RegionConnector:
        terrain = TerrainGrid(7, 3)
        regions = RegionTable(7, 3)
        room = single_cell_room(terrain, regions, 1, 1)
        corridor(terrain, regions, 5, 1)
        return RegionConnector(
            terrain, regions, [room], [], random.Random(1), strict=strict
        )

    def test_unjoinable_regions_raise_when_strict(self) -> None:
        """Test isolated regions are surfaced as an error."""
        connector = self.build_unjoinable(strict=True)

        with pytest.raises(GenerationError, match="no connector can join"):
            connector.step()

    def test_unjoinable_regions_logged_when_lenient(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test isolated regions end the phase with an error log."""
        connector = self.build_unjoinable(strict=False)

        with caplog.at_level(logging.ERROR):
            assert connector.step() is True

        assert connector.regions.live_count == 2
        assert "no connector can join" in caplog.text
