"""
City walk traversal engine.

A walker starts at the course's start checkpoint and moves one block at a time,
letting each checkpoint it meets pick the next heading, until it reaches a stop
checkpoint, walks off the grid, or repeats an (intersection, heading) pair.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from checkpoints import Checkpoint, CheckpointKind, resolve
from walk_types import (
    Direction,
    DuplicatePlacementError,
    GridSize,
    MissingStartError,
    Position,
)

logger = logging.getLogger(__name__)


class TerminationReason(Enum):
    """Reason why a walk ended."""

    SUCCESS = "success"  # Reached a stop checkpoint
    OUT_OF_BOUNDS = "out_of_bounds"  # Walked off the grid
    INFINITE_LOOP = "infinite_loop"  # Repeated an intersection and heading


# =============================================================================
# Course Definition
# =============================================================================


@dataclass
class Grid:
    """The street grid: checkpoint placements plus the start intersection."""

    size: GridSize
    checkpoints: dict[Position, Checkpoint] = field(default_factory=dict)
    start_position: Position | None = None

    def position(self, col: int, row: int) -> Position:
        """Build a Position bound to this grid's size."""
        return Position(col, row, self.size)

    def place(self, position: Position, checkpoint: Checkpoint) -> None:
        """
        Place a checkpoint. Only one checkpoint per intersection is allowed.

        Raises:
            DuplicatePlacementError: the intersection already has a checkpoint
        """
        existing = self.checkpoints.get(position)
        if existing is not None:
            raise DuplicatePlacementError(
                f"Attempt to place a 2nd checkpoint at intersection {position}\n"
                f"  Existing: {existing.kind.value}\n"
                f"  New: {checkpoint.kind.value}"
            )
        self.checkpoints[position] = checkpoint

    def checkpoint_at(self, position: Position) -> Checkpoint | None:
        """Return the checkpoint at a position, None meaning 'keep going'."""
        return self.checkpoints.get(position)

    def placements(self) -> Iterator[tuple[Position, Checkpoint]]:
        return iter(self.checkpoints.items())

    @property
    def start(self) -> Position:
        """
        The start intersection.

        Raises:
            MissingStartError: no start checkpoint was designated
        """
        if self.start_position is None:
            raise MissingStartError("Course has no start checkpoint")
        return self.start_position


class TraversalHistory:
    """Remembers every (intersection, heading) pair walked so far."""

    def __init__(self) -> None:
        self._seen: set[tuple[Position, Direction]] = set()

    def record(self, position: Position, direction: Direction) -> bool:
        """
        Record a traversal of position towards direction.

        Returns:
            True if this exact traversal was already recorded (a loop),
            False if it is new
        """
        key = (position, direction)
        if key in self._seen:
            return True
        self._seen.add(key)
        return False

    def __contains__(self, key: tuple[Position, Direction]) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)


# =============================================================================
# Walk Output
# =============================================================================


@dataclass(frozen=True)
class WalkEvent:
    """A checkpoint passed during the walk."""

    position: Position
    kind: CheckpointKind
    direction: Direction  # Heading when leaving the checkpoint
    blocks: int  # Blocks walked since the previous checkpoint


@dataclass(frozen=True)
class WalkStatus:
    """How a walk ended."""

    reason: TerminationReason
    position: Position  # Stop checkpoint, off-grid position, or loop start
    distance: int  # Total blocks walked


class WalkResult:
    """
    Iterator over the events of a walk that records how the walk ended.

    Usage:
        result = walk(grid)
        for event in result:
            print(event)
        print(result.status)  # Set once the events are exhausted
    """

    def __init__(self) -> None:
        self.status: WalkStatus | None = None
        self.trail: list[tuple[Position, Direction]] = []
        self.distance = 0
        self._iterator: Iterator[WalkEvent] = iter(())

    def __iter__(self) -> Iterator[WalkEvent]:
        return self

    def __next__(self) -> WalkEvent:
        return next(self._iterator)

    def run(self) -> tuple[list[WalkEvent], WalkStatus]:
        """Drain the remaining events and return them with the final status."""
        events = list(self)
        assert self.status is not None
        return events, self.status


# =============================================================================
# Traversal
# =============================================================================


class Walker:
    """Walks a grid from its start checkpoint."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def walk(self) -> WalkResult:
        """
        Start a walk over the grid.

        Events are produced as the walker reaches each checkpoint; the final
        WalkStatus is available on the result once iteration finishes.

        Raises:
            MissingStartError: the grid has no start, or nothing is placed there
            UnresolvableDeflectionError: (during iteration) a deflection
                checkpoint is the start of the walk
        """
        start = self.grid.start
        if self.grid.checkpoint_at(start) is None:
            raise MissingStartError(f"No checkpoint at start intersection {start}")

        result = WalkResult()
        result._iterator = self._walk_generator(start, result)
        return result

    def _walk_generator(self, start: Position, result: WalkResult) -> Iterator[WalkEvent]:
        """Internal generator for walk(). Do not call directly."""

        def finish(reason: TerminationReason, position: Position) -> None:
            result.status = WalkStatus(reason, position, result.distance)
            logger.info("Walk ended: %s at %s after %d blocks", reason.value, position, result.distance)

        history = TraversalHistory()
        position = start
        direction: Direction | None = None  # Set by the start checkpoint
        segment = 0

        while position.in_bounds():
            checkpoint = self.grid.checkpoint_at(position)
            if checkpoint is not None:
                direction = resolve(checkpoint, direction)
                logger.debug("%s: %s -> %s", position, checkpoint.kind.value, direction.value)
                yield WalkEvent(position, checkpoint.kind, direction, segment)
                segment = 0

            # The start checkpoint always sets a heading before we get here
            assert direction is not None
            result.trail.append((position, direction))
            if history.record(position, direction):
                finish(TerminationReason.INFINITE_LOOP, position)
                return
            if direction == Direction.STOP:
                finish(TerminationReason.SUCCESS, position)
                return

            position = position.move_one(direction)
            segment += 1
            result.distance += 1

        finish(TerminationReason.OUT_OF_BOUNDS, position)


def walk(grid: Grid) -> WalkResult:
    """Walk a grid from its start checkpoint. See Walker.walk()."""
    return Walker(grid).walk()
