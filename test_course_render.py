"""Tests for walk output lines and the course map."""

from pathlib import Path

from checkpoints import CheckpointKind
from city_walk import TerminationReason, WalkEvent, WalkStatus, walk
from course_parser import load_course, parse_course
from course_render import format_event, format_status, format_walk, render_course
from walk_types import Direction, GridSize, Position

COURSES = Path(__file__).parent / "courses"

DOWNTOWN_OUTPUT = [
    "2&A: StartNorth checkpoint, 0 blocks walked, now heading north",
    "4&A: TurnLeft checkpoint, 2 blocks walked, now heading west",
    "4&D: GoSouth checkpoint, 3 blocks walked, now heading south",
    "1&D: GoEast checkpoint, 3 blocks walked, now heading east",
    "1&B: TurnLeft checkpoint, 2 blocks walked, now heading north",
    "3&B: GoBack checkpoint, 2 blocks walked, now heading south",
    "1&B: TurnLeft checkpoint, 2 blocks walked, now heading east",
    "1&A: Stop checkpoint, 1 blocks walked, now heading stop",
    "    Total number of blocks walked: 15",
]

ROUNDABOUT_OUTPUT = [
    "1&A: StartWest checkpoint, 0 blocks walked, now heading west",
    "1&C: GoNorth checkpoint, 2 blocks walked, now heading north",
    "3&C: TurnRight checkpoint, 2 blocks walked, now heading east",
    "3&A: TurnRight checkpoint, 2 blocks walked, now heading south",
    "1&A: StartWest checkpoint, 2 blocks walked, now heading west",
    "    Start of infinite loop at intersection 1&A",
]


class TestFormatLines:
    """Tests for event and status lines."""

    def test_format_event(self) -> None:
        """Test a checkpoint line."""
        size = GridSize(3, 3)
        event = WalkEvent(Position(1, 1, size), CheckpointKind.TURN_RIGHT, Direction.EAST, 4)
        assert format_event(event) == "2&B: TurnRight checkpoint, 4 blocks walked, now heading east"

    def test_format_success(self) -> None:
        """Test the total distance line."""
        status = WalkStatus(TerminationReason.SUCCESS, Position(0, 0, GridSize(1, 1)), 12)
        assert format_status(status) == "    Total number of blocks walked: 12"

    def test_format_out_of_bounds(self) -> None:
        """Test the out of bounds line, naming the off-grid intersection."""
        status = WalkStatus(TerminationReason.OUT_OF_BOUNDS, Position(-1, 0, GridSize(1, 1)), 1)
        assert format_status(status) == "    Out of course bounds at intersection 1&@"

    def test_format_infinite_loop(self) -> None:
        """Test the loop line."""
        status = WalkStatus(TerminationReason.INFINITE_LOOP, Position(2, 4, GridSize(3, 5)), 9)
        assert format_status(status) == "    Start of infinite loop at intersection 5&C"

    def test_format_walk_downtown(self) -> None:
        """Test the full output of a successful course."""
        lines = list(format_walk(walk(load_course(COURSES / "downtown.txt"))))
        assert lines == DOWNTOWN_OUTPUT

    def test_format_walk_roundabout(self) -> None:
        """Test the full output of a looping course."""
        lines = list(format_walk(walk(load_course(COURSES / "roundabout.txt"))))
        assert lines == ROUNDABOUT_OUTPUT

    def test_format_walk_out_of_bounds(self) -> None:
        """Test that no event follows the last checkpoint when leaving the grid."""
        lines = list(format_walk(walk(parse_course("1&A, start_east"))))
        assert lines == [
            "1&A: StartEast checkpoint, 0 blocks walked, now heading east",
            "    Out of course bounds at intersection 1&@",
        ]


class TestRenderCourse:
    """Tests for the course map."""

    def test_render_plain(self) -> None:
        """Test glyphs and margins without colors."""
        grid = parse_course("1&B, start_north\n2&B, turn_right\n2&A, stop")
        assert render_course(grid, color=False) == "\n".join(
            [
                "2 R X",
                "1 S .",
                "  B A",
            ]
        )

    def test_render_trail(self) -> None:
        """Test that walked intersections without checkpoints are marked."""
        grid = parse_course("1&A, start_north\n3&A, stop\n1&B, go_west")
        result = walk(grid)
        result.run()
        assert render_course(grid, result.trail, color=False) == "\n".join(
            [
                "3 . X",
                "2 . *",
                "1 < S",
                "  B A",
            ]
        )

    def test_render_highlight(self) -> None:
        """Test marking the walker's intersection."""
        grid = parse_course("1&A, start_north\n3&A, stop")
        text = render_course(grid, highlight=grid.position(0, 1), color=False)
        assert text.splitlines()[1] == "2 @"

    def test_render_highlight_on_checkpoint_keeps_glyph(self) -> None:
        """Test that the walker standing on a checkpoint shows the checkpoint."""
        grid = parse_course("1&A, start_north\n3&A, stop")
        text = render_course(grid, highlight=grid.position(0, 2), color=False)
        assert text.splitlines()[0] == "3 X"

    def test_render_all_glyphs(self) -> None:
        """Test every checkpoint glyph, west on the left."""
        grid = parse_course(
            """
            1&A, start_north
            1&B, go_north
            1&C, go_east
            1&D, go_south
            1&E, go_west
            1&F, turn_left
            1&G, turn_right
            1&H, go_back
            1&I, stop
            """
        )
        assert render_course(grid, color=False).splitlines()[0] == "1 X B R L < v > ^ S"

    def test_render_wide_margin(self) -> None:
        """Test that street numbers line up past street 9."""
        grid = parse_course("1&A, start_north\n10&A, stop")
        lines = render_course(grid, color=False).splitlines()
        assert lines[0] == "10 X"
        assert lines[9] == " 1 S"
        assert lines[10] == "   A"

    def test_render_colored(self) -> None:
        """Test that colors wrap glyphs but keep the text."""
        grid = parse_course("1&A, start_north\n2&A, stop")
        text = render_course(grid)
        assert "S" in text
        assert "X" in text
