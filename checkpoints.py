"""
Checkpoint instructions and the rules that turn an incoming heading into an
outgoing one.

Three shapes of checkpoint exist:
- FixedDirection: start_* and go_* always leave in one direction
- Deflection: turn_left, turn_right and go_back map the incoming heading
  through a fixed table
- Stop: ends the walk
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from walk_types import COMPASS, CourseParseError, Direction, UnresolvableDeflectionError

__all__ = [
    "Checkpoint",
    "CheckpointKind",
    "Deflection",
    "FixedDirection",
    "Stop",
    "checkpoint_for_name",
    "resolve",
]


class CheckpointKind(Enum):
    """Every checkpoint type a course may contain, keyed by its input name."""

    START_NORTH = "start_north"
    START_EAST = "start_east"
    START_SOUTH = "start_south"
    START_WEST = "start_west"
    GO_NORTH = "go_north"
    GO_EAST = "go_east"
    GO_SOUTH = "go_south"
    GO_WEST = "go_west"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    GO_BACK = "go_back"
    STOP = "stop"

    @property
    def label(self) -> str:
        """CamelCase name used in walk output, e.g. 'TurnRight'."""
        return "".join(part.capitalize() for part in self.value.split("_"))

    @property
    def is_start(self) -> bool:
        return self.value.startswith("start_")


# =============================================================================
# Checkpoint Variants
# =============================================================================


@dataclass(frozen=True)
class FixedDirection:
    """A checkpoint that always leaves in the same direction."""

    kind: CheckpointKind
    direction: Direction


@dataclass(frozen=True)
class Deflection:
    """A checkpoint whose outgoing direction depends on the incoming one."""

    kind: CheckpointKind
    rules: tuple[tuple[Direction, Direction], ...]  # (incoming, outgoing)


@dataclass(frozen=True)
class Stop:
    """The end of the walk."""

    kind: CheckpointKind = CheckpointKind.STOP


Checkpoint = FixedDirection | Deflection | Stop


N, E, S, W = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST

TURN_RIGHT_RULES = ((S, W), (W, N), (N, E), (E, S))
TURN_LEFT_RULES = ((S, E), (W, S), (N, W), (E, N))
GO_BACK_RULES = ((S, N), (W, E), (N, S), (E, W))


def _build_table() -> dict[str, Checkpoint]:
    table: dict[str, Checkpoint] = {}
    for direction in COMPASS:
        for prefix in ("start", "go"):
            kind = CheckpointKind(f"{prefix}_{direction.value}")
            table[kind.value] = FixedDirection(kind, direction)
    table["turn_left"] = Deflection(CheckpointKind.TURN_LEFT, TURN_LEFT_RULES)
    table["turn_right"] = Deflection(CheckpointKind.TURN_RIGHT, TURN_RIGHT_RULES)
    table["go_back"] = Deflection(CheckpointKind.GO_BACK, GO_BACK_RULES)
    table["stop"] = Stop()
    return table


# Checkpoints are immutable, so one shared instance per name is enough
CHECKPOINTS: dict[str, Checkpoint] = _build_table()


def checkpoint_for_name(name: str) -> Checkpoint:
    """
    Look up the checkpoint for a course file name such as 'turn_left'.

    Raises:
        CourseParseError: name is not one of the known checkpoint types
    """
    try:
        return CHECKPOINTS[name]
    except KeyError:
        raise CourseParseError(
            f"Unknown checkpoint: '{name}'\n"
            f"  Valid checkpoints: {', '.join(CHECKPOINTS)}"
        ) from None


def resolve(checkpoint: Checkpoint, incoming: Direction | None) -> Direction:
    """
    Return the direction to leave a checkpoint in.

    Args:
        checkpoint: The checkpoint being passed
        incoming: Heading on arrival; None at the start of a walk

    Returns:
        The outgoing direction, STOP for a stop checkpoint

    Raises:
        UnresolvableDeflectionError: a deflection was reached without a
            compass heading, e.g. when used as the start of a walk
    """
    match checkpoint:
        case FixedDirection(direction=direction):
            return direction
        case Stop():
            return Direction.STOP
        case Deflection(kind=kind, rules=rules):
            for old, new in rules:
                if incoming == old:
                    return new
            heading = incoming.value if isinstance(incoming, Direction) else incoming
            raise UnresolvableDeflectionError(
                f"No outgoing direction for incoming direction {heading!r} at {kind.label}\n"
                f"  {kind.label} only deflects {', '.join(old.value for old, _ in rules)}"
            )
        case _:
            raise ValueError(f"Unknown checkpoint type: {checkpoint}")
