"""DTOs for map generation."""

from .statistics_dto import GenerationStatsDTO
from .step_result_dto import StepResultDTO, TileUpdateDTO

__all__ = [
    "GenerationStatsDTO",
    "StepResultDTO",
    "TileUpdateDTO",
]
