"""Generic fixed-size 2D grid backed by a numpy array."""

from collections.abc import Iterator
from typing import Any, Generic, TypeVar, cast

import numpy as np
from numpy.typing import DTypeLike

from core.types import Coord

T = TypeVar("T")


class Grid2D(Generic[T]):
    """Fixed-size grid with bounds-checked access.

    Cells live in a numpy array indexed as ``[y, x]`` (row-major, origin top-left).
    Reads outside the grid return the out-of-bounds sentinel and writes outside the
    grid are ignored, so callers can probe neighbours without range checks.
    """

    def __init__(
        self,
        width: int,
        height: int,
        fill: T,
        dtype: DTypeLike,
        out_of_bounds: T | None = None,
    ) -> None:
        """Initialize the grid.

        Args:
            width: Number of columns, must be positive
            height: Number of rows, must be positive
            fill: Initial value of every cell
            dtype: numpy dtype used for storage
            out_of_bounds: Value returned for reads outside the grid (defaults to `fill`)

        Raises:
            ValueError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._out_of_bounds = fill if out_of_bounds is None else out_of_bounds
        self._cells = np.full((height, width), self._to_cell(fill), dtype=dtype)

    def _to_cell(self, value: T) -> Any:
        """Convert a public value into its stored representation."""
        return value

    def _from_cell(self, value: Any) -> T:
        """Convert a stored numpy scalar into its public value."""
        return cast(T, value.item())

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> T:
        """Get the value at (x, y), or the out-of-bounds sentinel."""
        if not self.in_bounds(x, y):
            return self._out_of_bounds
        return self._from_cell(self._cells[y, x])

    def set(self, x: int, y: int, value: T) -> None:
        """Set the value at (x, y); out-of-bounds writes do nothing."""
        if not self.in_bounds(x, y):
            return
        self._cells[y, x] = self._to_cell(value)

    def fill(self, value: T) -> None:
        """Set every cell to `value`."""
        self._cells.fill(self._to_cell(value))

    def fill_rect(self, x: int, y: int, width: int, height: int, value: T) -> None:
        """Set every cell of a rectangle to `value`.

        Nothing happens when the rectangle's origin lies outside the grid; otherwise
        the part of the rectangle that overhangs the grid is clipped.
        """
        if not self.in_bounds(x, y) or width <= 0 or height <= 0:
            return
        x_end = min(x + width, self.width)
        y_end = min(y + height, self.height)
        self._cells[y:y_end, x:x_end] = self._to_cell(value)

    def coords(self) -> Iterator[Coord]:
        """Iterate over every (x, y) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the underlying storage, indexed ``[y, x]``."""
        view = self._cells.view()
        view.setflags(write=False)
        return view

    def to_array(self) -> np.ndarray:
        """Independent copy of the underlying storage."""
        return self._cells.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"
