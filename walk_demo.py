"""
Interactive replay of a city walk.
Display the course map and step the walker through it with keyboard commands.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from city_walk import Grid, TerminationReason, WalkEvent, WalkStatus, walk
from course_parser import load_course, parse_course
from course_render import format_event, format_status, render_course
from walk_types import Direction, Position


class WalkReplay:
    """Step-by-step replay of a walk over a course."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.console = Console()

        result = walk(grid)
        self.events: list[WalkEvent] = []
        self.event_steps: list[int] = []  # Trail index at which each event was emitted
        for event in result:
            self.events.append(event)
            self.event_steps.append(len(result.trail))
        assert result.status is not None
        self.status: WalkStatus = result.status
        self.trail: list[tuple[Position, Direction]] = result.trail

        self.step = 0
        self.status_message = "Ready"

    @property
    def last_step(self) -> int:
        # Out of bounds walks have one more position than trail entries
        if self.status.reason == TerminationReason.OUT_OF_BOUNDS:
            return len(self.trail)
        return len(self.trail) - 1

    @property
    def finished(self) -> bool:
        return self.step >= self.last_step

    @property
    def walker_position(self) -> Position:
        if self.step < len(self.trail):
            return self.trail[self.step][0]
        return self.status.position

    def visible_events(self) -> list[WalkEvent]:
        return [e for e, at in zip(self.events, self.event_steps) if at <= self.step]

    def generate_display(self) -> Panel:
        """Generate the current display with map, events and status."""
        position = self.walker_position
        map_text = render_course(self.grid, self.trail[: self.step + 1], highlight=position)

        body = Text()
        body.append("Walker: ", style="bold")
        on_grid = "" if position.in_bounds() else " (off the grid)"
        body.append(f"{position}{on_grid}, step {self.step} of {self.last_step}\n\n")

        body.append(Text.from_ansi(map_text))
        body.append("\n\n")

        body.append("Checkpoints:\n", style="bold cyan")
        for event in self.visible_events():
            body.append(f"  {format_event(event)}\n")
        if self.finished:
            style = "bold green" if self.status.reason == TerminationReason.SUCCESS else "bold red"
            body.append(f"{format_status(self.status)}\n", style=style)
        body.append("\n")

        body.append("Keys:\n", style="bold cyan")
        body.append("  N / Space - Next step\n")
        body.append("  P - Previous step\n")
        body.append("  E - Jump to end\n")
        body.append("  R - Reset to start\n")
        body.append("  Q - Quit\n\n")

        body.append("─" * 40 + "\n", style="dim")
        body.append("Status: ", style="bold")
        body.append(self.status_message)

        return Panel(body, title="City Walk Replay", border_style="green", width=80)

    def advance(self, steps: int) -> None:
        """Move the replay forward (or backward for negative steps)."""
        self.step = min(max(self.step + steps, 0), self.last_step)
        if self.finished:
            self.status_message = f"Walk over: {self.status.reason.value}"
        else:
            self.status_message = f"Step {self.step}"

    def reset(self) -> None:
        self.step = 0
        self.status_message = "Back at the start"

    def run(self) -> None:
        """Run the interactive replay."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == "n" or key == " ":
                        self.advance(1)
                    elif key.lower() == "p":
                        self.advance(-1)
                    elif key.lower() == "e":
                        self.advance(self.last_step)
                    elif key.lower() == "r":
                        self.reset()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


COURSES = dict(
    square="""
    2&A, start_north
    3&A, turn_left
    3&C, turn_left
    1&C, turn_left
    1&A, stop
    """,
    loop="""
    1&A, start_west
    1&C, go_back
    """,
)


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    source = sys.argv[1] if len(sys.argv) > 1 else "square"
    grid = parse_course(COURSES[source]) if source in COURSES else load_course(source)
    replay = WalkReplay(grid)

    if len(sys.argv) > 2 and sys.argv[2] == "static":
        # No terminal control - print the final frame only
        replay.advance(replay.last_step)
        replay.console.print(replay.generate_display())
    else:
        replay.run()
