"""DTOs for generation step results."""

from typing import Any

from pydantic import BaseModel, Field

from core.fsm import GenerationPhase
from core.types import TileKind


class TileUpdateDTO(BaseModel):
    """A single cell whose tile kind changed during a step.

    Attributes:
        x: Column of the cell.
        y: Row of the cell.
        tile: Tile kind the cell holds after the step.
    """

    x: int = Field(ge=0, description="Cell column")
    y: int = Field(ge=0, description="Cell row")
    tile: TileKind = Field(description="Tile kind after the step")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "tile": self.tile.name}


class StepResultDTO(BaseModel):
    """DTO for the result of one generation step.

    Captures every tile change from a single tick so a renderer can redraw
    only what moved.

    Attributes:
        tick: Number of steps that did work, including this one.
        phase: Phase that ran during the step.
        next_phase: Phase the generator is in after the step.
        phase_completed: True if the step finished `phase`.
        tile_updates: Cells whose tile kind changed, in change order.
    """

    tick: int = Field(ge=0, description="Steps that did work so far")
    phase: GenerationPhase = Field(description="Phase that ran during the step")
    next_phase: GenerationPhase = Field(description="Phase after the step")
    phase_completed: bool = Field(default=False, description="Step finished the phase")
    tile_updates: list[TileUpdateDTO] = Field(
        default_factory=list, description="Tile changes from this step"
    )

    def has_tile_updates(self) -> bool:
        """Check if any tile changed."""
        return len(self.tile_updates) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "tick": self.tick,
            "phase": self.phase.name,
            "next_phase": self.next_phase.name,
            "phase_completed": self.phase_completed,
            "tile_updates": [update.to_dict() for update in self.tile_updates],
        }
