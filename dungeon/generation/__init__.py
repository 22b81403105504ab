"""Incremental dungeon generation module."""

from .errors import GenerationError
from .generator import MapGenerator
from .params import GenerationParams

__all__ = ["GenerationError", "GenerationParams", "MapGenerator"]
