"""DTOs for generation statistics."""

from typing import Any

from pydantic import BaseModel, Field


class GenerationStatsDTO(BaseModel):
    """Summary counters of a generator run.

    Attributes:
        width: Grid width
        height: Grid height
        seed: Seed of the random stream
        room_attempts: Placement attempts spent so far
        rooms_placed: Rooms accepted
        mazes_carved: Maze regions seeded
        connectors_found: Connector cells found by the scan
        doors_placed: Doors opened while connecting regions
        regions_merged: Regions absorbed into the root
        dead_ends_removed: Corridor and door cells filled back in
        live_regions: Regions still holding cells
        walkable_cells: Non-stone cells
        walkable_components: 4-connected components of non-stone cells
        ticks: Steps that did work
        phase_ticks: Steps spent per phase name
    """

    width: int = Field(gt=0, description="Grid width")
    height: int = Field(gt=0, description="Grid height")
    seed: int = Field(description="Seed of the random stream")
    room_attempts: int = Field(ge=0, description="Placement attempts spent")
    rooms_placed: int = Field(ge=0, description="Rooms accepted")
    mazes_carved: int = Field(ge=0, description="Maze regions seeded")
    connectors_found: int = Field(ge=0, description="Connector cells found")
    doors_placed: int = Field(ge=0, description="Doors opened")
    regions_merged: int = Field(ge=0, description="Regions absorbed into the root")
    dead_ends_removed: int = Field(ge=0, description="Dead-end cells removed")
    live_regions: int = Field(ge=0, description="Regions still holding cells")
    walkable_cells: int = Field(ge=0, description="Non-stone cells")
    walkable_components: int = Field(ge=0, description="Components of non-stone cells")
    ticks: int = Field(ge=0, description="Steps that did work")
    phase_ticks: dict[str, int] = Field(
        default_factory=dict, description="Steps spent per phase"
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump()
