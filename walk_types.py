"""
Shared type definitions for the city walk system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Travel direction out of an intersection."""

    NORTH = "north"  # Increasing street number
    SOUTH = "south"  # Decreasing street number
    EAST = "east"  # Towards avenue A
    WEST = "west"  # Away from avenue A
    STOP = "stop"  # Terminal, never moved in


# Directions that can actually be walked
COMPASS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


# =============================================================================
# Errors
# =============================================================================


class CityWalkError(ValueError):
    """Base class for all course configuration errors."""


class DuplicatePlacementError(CityWalkError):
    """A second checkpoint was placed at an occupied intersection."""


class InvalidDirectionError(CityWalkError):
    """A move was requested in something other than a compass direction."""


class UnresolvableDeflectionError(CityWalkError):
    """A deflection checkpoint was reached without a compass heading."""


class MissingStartError(CityWalkError):
    """The course has no start checkpoint."""


class CourseParseError(CityWalkError):
    """A course definition line could not be understood."""


# =============================================================================
# Coordinates
# =============================================================================


@dataclass(frozen=True)
class GridSize:
    """Street grid dimensions."""

    column_count: int
    row_count: int

    def contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.column_count and 0 <= row < self.row_count


# Column/row deltas for one block of travel
_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.EAST: (-1, 0),
    Direction.WEST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.NORTH: (0, 1),
}


@dataclass(frozen=True)
class Position:
    """
    An intersection on the street grid.

    Avenues are columns: A is column 0 at the eastern city limit and the
    column index grows going west. Streets are rows: street 1 is row 0 at the
    southern limit and the row index grows going north.

    Positions compare and hash by (col, row) only; the grid size travels with
    the position so bounds checks need no global state.
    """

    col: int
    row: int
    size: GridSize = field(compare=False, repr=False)

    def __str__(self) -> str:
        return f"{self.row + 1}&{chr(ord('A') + self.col)}"

    def in_bounds(self) -> bool:
        return self.size.contains(self.col, self.row)

    def move_one(self, direction: Direction) -> Position:
        """
        Return the intersection one block away in the given direction.

        Raises:
            InvalidDirectionError: direction is STOP or not a Direction at all
        """
        try:
            dc, dr = _STEPS[direction]
        except (KeyError, TypeError):
            raise InvalidDirectionError(
                f"Cannot move from {self} in direction {direction!r}\n"
                f"  Valid directions: {', '.join(d.value for d in COMPASS)}"
            ) from None
        return Position(self.col + dc, self.row + dr, self.size)
