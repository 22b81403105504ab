"""Pydantic model for dungeon generation parameters."""

from pydantic import BaseModel, Field

MIN_SEED = -(2**63)
MAX_SEED = 2**64 - 1


class GenerationParams(BaseModel):
    """Parameters for incremental rooms-and-mazes dungeon generation.

    Validation is declarative: an invalid combination raises
    `pydantic.ValidationError` on instantiation, so the generator itself never
    has to reject its inputs.
    """

    # Map dimensions
    width: int = Field(gt=0, description="Map width in cells")
    height: int = Field(gt=0, description="Map height in cells")

    # Generation seed
    seed: int = Field(ge=MIN_SEED, le=MAX_SEED, description="Seed for the generator's random stream")

    # Room placement
    max_room_attempts: int = Field(ge=0, description="Number of random room placements to try")

    # Connectivity
    strict_connectivity: bool = Field(
        default=True,
        description="Raise when regions remain that no connector can join (otherwise log and stop)",
    )
