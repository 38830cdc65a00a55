"""
Text output for city walks.

Provides two kinds of output:
1. Walk lines - one line per checkpoint passed plus a final status line
2. Course map - the street grid drawn as characters, with checkpoints and the
   trail walked
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

import simple_chalk as chalk  # type: ignore[import-untyped]

from checkpoints import CheckpointKind
from city_walk import Grid, TerminationReason, WalkEvent, WalkResult, WalkStatus
from walk_types import Direction, Position

logger = logging.getLogger(__name__)


# =============================================================================
# Walk Lines
# =============================================================================


def format_event(event: WalkEvent) -> str:
    """Format a checkpoint event, e.g. '2&B: TurnRight checkpoint, 1 blocks walked, now heading east'."""
    return (
        f"{event.position}: {event.kind.label} checkpoint, "
        f"{event.blocks} blocks walked, now heading {event.direction.value}"
    )


def format_status(status: WalkStatus) -> str:
    """Format the final status line of a walk."""
    match status.reason:
        case TerminationReason.SUCCESS:
            return f"    Total number of blocks walked: {status.distance}"
        case TerminationReason.OUT_OF_BOUNDS:
            return f"    Out of course bounds at intersection {status.position}"
        case TerminationReason.INFINITE_LOOP:
            return f"    Start of infinite loop at intersection {status.position}"
    raise ValueError(f"Unknown termination reason: {status.reason}")


def format_walk(result: WalkResult) -> Iterator[str]:
    """Yield an output line per event as the walk proceeds, then the status line."""
    for event in result:
        yield format_event(event)
    assert result.status is not None
    yield format_status(result.status)


# =============================================================================
# Course Map
# =============================================================================

GLYPHS: dict[CheckpointKind, str] = {
    CheckpointKind.START_NORTH: "S",
    CheckpointKind.START_EAST: "S",
    CheckpointKind.START_SOUTH: "S",
    CheckpointKind.START_WEST: "S",
    # Avenue A is drawn on the right, so east points right
    CheckpointKind.GO_NORTH: "^",
    CheckpointKind.GO_EAST: ">",
    CheckpointKind.GO_SOUTH: "v",
    CheckpointKind.GO_WEST: "<",
    CheckpointKind.TURN_LEFT: "L",
    CheckpointKind.TURN_RIGHT: "R",
    CheckpointKind.GO_BACK: "B",
    CheckpointKind.STOP: "X",
}

TRAIL_GLYPH = "*"
EMPTY_GLYPH = "."
WALKER_GLYPH = "@"


def _kind_color(kind: CheckpointKind) -> Callable[[str], str]:
    if kind.is_start:
        return chalk.green
    if kind == CheckpointKind.STOP:
        return chalk.red
    if kind in (CheckpointKind.TURN_LEFT, CheckpointKind.TURN_RIGHT, CheckpointKind.GO_BACK):
        return chalk.yellow
    return chalk.cyan


def render_course(
    grid: Grid,
    trail: Iterable[tuple[Position, Direction]] = (),
    highlight: Position | None = None,
    color: bool = True,
) -> str:
    """
    Render the street grid as text.

    North is at the top and avenue A (the eastern limit) on the right. Street
    numbers run down the left margin and avenue letters along the bottom.

    Args:
        grid: The course to draw
        trail: (position, direction) pairs walked; off-grid entries are ignored
        highlight: Optional intersection to mark as the walker's location
        color: Colorize glyphs with ANSI codes

    Returns:
        The map as a multi-line string
    """
    size = grid.size
    visited = {pos for pos, _ in trail}
    margin = len(str(size.row_count))

    def paint(colorize: Callable[[str], str], text: str) -> str:
        return colorize(text) if color else text

    lines: list[str] = []
    for row in reversed(range(size.row_count)):
        cells: list[str] = []
        for col in reversed(range(size.column_count)):
            pos = grid.position(col, row)
            checkpoint = grid.checkpoint_at(pos)
            if pos == highlight:
                glyph = GLYPHS[checkpoint.kind] if checkpoint is not None else WALKER_GLYPH
                cells.append(paint(chalk.white, glyph))
            elif checkpoint is not None:
                cells.append(paint(_kind_color(checkpoint.kind), GLYPHS[checkpoint.kind]))
            elif pos in visited:
                cells.append(paint(chalk.blue, TRAIL_GLYPH))
            else:
                cells.append(EMPTY_GLYPH)
        lines.append(f"{row + 1:>{margin}} " + " ".join(cells))

    letters = " ".join(chr(ord("A") + col) for col in reversed(range(size.column_count)))
    lines.append(" " * (margin + 1) + letters)

    logger.info("render_course: %d avenues x %d streets", size.column_count, size.row_count)
    return "\n".join(lines)
