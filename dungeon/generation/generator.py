"""Incremental rooms-and-mazes dungeon generation."""

import logging
import random
from collections.abc import Callable
from typing import Any

import numpy as np

from core.fsm import GenerationPhase, next_phase
from core.types import Coord, RegionID, TileKind
from dungeon.generation.connect import RegionConnector
from dungeon.generation.connectors import ConnectorScan, scan_connectors
from dungeon.generation.deadends import DeadEndPruner
from dungeon.generation.dto.statistics_dto import GenerationStatsDTO
from dungeon.generation.dto.step_result_dto import StepResultDTO, TileUpdateDTO
from dungeon.generation.mazes import MazeCarver
from dungeon.generation.params import GenerationParams
from dungeon.generation.rooms import Room, RoomPlacer
from dungeon.grid.connectivity import count_components
from dungeon.grid.regions import RGB, RegionTable
from dungeon.grid.terrain import TerrainGrid


class MapGenerator:
    """Phased driver turning a blank grid into a connected dungeon.

    Each call to `step` performs one bounded unit of work in the current phase
    and advances to the next phase once the current one reports completion:

        ROOMS -> MAZES -> CONNECTORS -> CONNECTING_REGIONS -> REMOVE_DEAD_ENDS -> DONE

    All randomness comes from one `random.Random` seeded from the params, so the
    same params always reproduce the same dungeon. Once DONE is reached, further
    steps change nothing.
    """

    def __init__(self, params: GenerationParams, logger: logging.Logger | None = None) -> None:
        """Initialize the generator.

        Args:
            params: Generation parameters (Pydantic model, validates on instantiation)
            logger: Logger for progress messages
        """
        self.params = params
        self.logger = logger or logging.getLogger(__name__)
        self.rng = random.Random(params.seed)

        self.terrain = TerrainGrid(params.width, params.height)
        self.regions = RegionTable(params.width, params.height)

        self.room_placer = RoomPlacer(
            self.terrain, self.regions, self.rng, params.max_room_attempts, logger=self.logger
        )
        self.maze_carver = MazeCarver(self.terrain, self.regions, self.rng, logger=self.logger)
        self.connector_scan: ConnectorScan | None = None
        self.region_connector: RegionConnector | None = None
        self.dead_end_pruner = DeadEndPruner(self.terrain, self.regions, logger=self.logger)

        self._phase = GenerationPhase.ROOMS
        self.tick = 0
        self.phase_ticks: dict[GenerationPhase, int] = {}

        self._handlers: dict[GenerationPhase, Callable[[], bool]] = {
            GenerationPhase.ROOMS: self.room_placer.step,
            GenerationPhase.MAZES: self.maze_carver.step,
            GenerationPhase.CONNECTORS: self._scan_connectors,
            GenerationPhase.CONNECTING_REGIONS: self._connect_regions,
            GenerationPhase.REMOVE_DEAD_ENDS: self.dead_end_pruner.step,
        }

        self.logger.info(
            f"Generating {params.width}x{params.height} dungeon with seed {params.seed} "
            f"and {params.max_room_attempts} room attempts"
        )

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        seed: int,
        max_room_attempts: int,
        logger: logging.Logger | None = None,
        **options: Any,
    ) -> "MapGenerator":
        """Validate the inputs and build a generator in one call.

        Raises:
            pydantic.ValidationError: If any parameter is out of range
        """
        params = GenerationParams(
            width=width,
            height=height,
            seed=seed,
            max_room_attempts=max_room_attempts,
            **options,
        )
        return cls(params, logger=logger)

    def step(self) -> StepResultDTO:
        """Perform one unit of work in the current phase.

        Returns:
            StepResultDTO with the phase that ran and every tile it changed
        """
        phase = self._phase
        if phase is GenerationPhase.DONE:
            return StepResultDTO(tick=self.tick, phase=phase, next_phase=phase)

        self.tick += 1
        self.phase_ticks[phase] = self.phase_ticks.get(phase, 0) + 1

        completed = self._handlers[phase]()
        if completed:
            self._advance()

        updates = [
            TileUpdateDTO(x=x, y=y, tile=tile) for (x, y), tile in self.terrain.drain_changes()
        ]
        return StepResultDTO(
            tick=self.tick,
            phase=phase,
            next_phase=self._phase,
            phase_completed=completed,
            tile_updates=updates,
        )

    def run(self, steps: int) -> list[StepResultDTO]:
        """Run a bounded batch of steps, stopping early at DONE."""
        results: list[StepResultDTO] = []
        for _ in range(steps):
            if self.is_done:
                break
            results.append(self.step())
        return results

    def run_to_completion(self, max_steps: int | None = None) -> int:
        """Step until DONE, or until `max_steps` steps have run.

        Returns:
            Number of steps taken by this call
        """
        taken = 0
        while not self.is_done and (max_steps is None or taken < max_steps):
            self.step()
            taken += 1
        return taken

    def _advance(self) -> None:
        finished = self._phase
        self._phase = next_phase(finished)
        self.logger.info(
            f"Phase {finished.name} complete after {self.phase_ticks.get(finished, 0)} steps, "
            f"entering {self._phase.name}"
        )

        if finished is GenerationPhase.ROOMS and not self.room_placer.rooms:
            self.logger.warning(
                f"No rooms placed after {self.room_placer.attempts} attempts, "
                "dungeon will be all maze"
            )
        if self._phase is GenerationPhase.DONE:
            self._log_summary()

    def _scan_connectors(self) -> bool:
        self.connector_scan = scan_connectors(self.terrain, self.regions)
        self.region_connector = RegionConnector(
            self.terrain,
            self.regions,
            self.room_placer.rooms,
            self.connector_scan.connectors,
            self.rng,
            strict=self.params.strict_connectivity,
            logger=self.logger,
        )
        self.logger.info(
            f"Found {len(self.connector_scan.connectors)} connectors between "
            f"{self.regions.live_count} regions"
        )
        return True

    def _connect_regions(self) -> bool:
        assert self.region_connector is not None
        return self.region_connector.step()

    def _log_summary(self) -> None:
        stats = self.stats
        self.logger.info(
            f"Dungeon complete in {stats.ticks} steps: {stats.rooms_placed} rooms, "
            f"{stats.mazes_carved} mazes, {stats.doors_placed} doors, "
            f"{stats.dead_ends_removed} dead-end cells removed, "
            f"{stats.walkable_cells} walkable cells"
        )
        if stats.walkable_components > 1:
            self.logger.warning(
                f"Finished dungeon has {stats.walkable_components} disconnected areas"
            )

    # Queries

    def phase(self) -> GenerationPhase:
        return self._phase

    @property
    def is_done(self) -> bool:
        return self._phase is GenerationPhase.DONE

    @property
    def width(self) -> int:
        return self.params.width

    @property
    def height(self) -> int:
        return self.params.height

    def tile_at(self, x: int, y: int) -> TileKind:
        """Tile kind at (x, y); STONE outside the grid."""
        return self.terrain.get(x, y)

    def region_at(self, x: int, y: int) -> RegionID | None:
        """Region id at (x, y); None for unassigned cells and outside the grid."""
        return self.regions.region_at(x, y)

    def region_color(self, region_id: RegionID) -> RGB | None:
        """Debug colour of a live region, or None if the region is gone."""
        region = self.regions.get(region_id)
        return None if region is None else region.color

    @property
    def rooms(self) -> tuple[Room, ...]:
        return tuple(self.room_placer.rooms)

    @property
    def doors(self) -> tuple[Coord, ...]:
        if self.region_connector is None:
            return ()
        return tuple(self.region_connector.doors)

    @property
    def live_regions(self) -> list[RegionID]:
        return self.regions.live_ids()

    @property
    def root_region(self) -> RegionID | None:
        if self.region_connector is None:
            return None
        return self.region_connector.root

    def terrain_array(self) -> np.ndarray:
        """Copy of the tile kinds as a ``[y, x]`` uint8 array."""
        return self.terrain.to_array()

    def walkable_component_count(self) -> int:
        return count_components(self.terrain.open_mask())

    def is_fully_connected(self) -> bool:
        """True when every non-stone cell is reachable from every other one."""
        return self.walkable_component_count() <= 1

    @property
    def stats(self) -> GenerationStatsDTO:
        return GenerationStatsDTO(
            width=self.params.width,
            height=self.params.height,
            seed=self.params.seed,
            room_attempts=self.room_placer.attempts,
            rooms_placed=len(self.room_placer.rooms),
            mazes_carved=len(self.maze_carver.mazes),
            connectors_found=(
                0 if self.connector_scan is None else len(self.connector_scan.connectors)
            ),
            doors_placed=len(self.doors),
            regions_merged=self.regions.merged,
            dead_ends_removed=self.dead_end_pruner.removed,
            live_regions=self.regions.live_count,
            walkable_cells=int(np.count_nonzero(self.terrain.open_mask())),
            walkable_components=self.walkable_component_count(),
            ticks=self.tick,
            phase_ticks={phase.name: count for phase, count in self.phase_ticks.items()},
        )
