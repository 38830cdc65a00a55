"""
Course loading for city walks.

A course is a list of checkpoint placements, one per line:

    <intersection>,<checkpoint type>

Intersections are written street first ("3&B") or avenue first ("B&3").
Text after '#' is a comment; blank lines are ignored. Placements may come in
any order, and the grid is sized to the furthest street and avenue mentioned.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from checkpoints import Checkpoint, checkpoint_for_name
from city_walk import Grid
from walk_types import CourseParseError, GridSize

__all__ = ["load_course", "parse_course", "parse_course_lines", "parse_intersection"]

logger = logging.getLogger(__name__)

_STREET_FIRST = re.compile(r"(\d+)&([A-Za-z])")
_AVENUE_FIRST = re.compile(r"([A-Za-z])&(\d+)")


def parse_intersection(text: str) -> tuple[int, int]:
    """
    Parse an intersection into zero-based (col, row).

    Examples:
        "1&A" -> (0, 0)
        "3&b" -> (1, 2)
        "C&2" -> (2, 1)

    Raises:
        CourseParseError: not a street/avenue pair, or street number below 1
    """
    text = text.strip()
    if match := _STREET_FIRST.fullmatch(text):
        street, avenue = match.groups()
    elif match := _AVENUE_FIRST.fullmatch(text):
        avenue, street = match.groups()
    else:
        raise CourseParseError(
            f"Unknown intersection: '{text}'\n"
            f"  Expected <street>&<avenue> (e.g. '3&B') or <avenue>&<street> (e.g. 'B&3')"
        )

    row = int(street) - 1
    if row < 0:
        raise CourseParseError(f"Unknown intersection: '{text}'\n  Streets are numbered from 1")
    col = ord(avenue.upper()) - ord("A")
    return (col, row)


def parse_course_lines(lines: Iterable[str]) -> Grid:
    """
    Parse course lines into a Grid.

    When several start checkpoints are given, the last one wins. A course with
    no start at all still parses; walking it raises MissingStartError.

    Args:
        lines: Course definition lines (trailing newlines allowed)

    Returns:
        Grid sized to the placements, with its start position set

    Raises:
        CourseParseError: a line is malformed
        DuplicatePlacementError: two checkpoints share an intersection
    """
    # First pass: parse every placement so the grid size is known
    placements: list[tuple[int, int, Checkpoint]] = []
    column_count = 0
    row_count = 0

    for line_no, raw_line in enumerate(lines, start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue

        fields = line.split(",")
        if len(fields) != 2:
            raise CourseParseError(
                f"Invalid course line {line_no}: '{line}'\n"
                f"  Expected exactly two fields: <intersection>,<checkpoint type>"
            )

        intersection, name = (f.strip() for f in fields)
        try:
            col, row = parse_intersection(intersection)
            checkpoint = checkpoint_for_name(name)
        except CourseParseError as e:
            raise CourseParseError(f"Invalid course line {line_no}: '{line}'\n  {e}") from e

        placements.append((col, row, checkpoint))
        column_count = max(column_count, col + 1)
        row_count = max(row_count, row + 1)

    # Second pass: place checkpoints on a grid of the final size
    grid = Grid(GridSize(column_count, row_count))
    for col, row, checkpoint in placements:
        position = grid.position(col, row)
        grid.place(position, checkpoint)
        if checkpoint.kind.is_start:
            grid.start_position = position

    logger.debug(
        "Loaded course: %d checkpoints on a %dx%d grid, start %s",
        len(placements),
        column_count,
        row_count,
        grid.start_position,
    )
    return grid


def parse_course(definition: str) -> Grid:
    """Parse a multi-line course definition string. See parse_course_lines()."""
    return parse_course_lines(definition.splitlines())


def load_course(path: str | Path) -> Grid:
    """Load a course definition file."""
    with open(path, encoding="utf-8") as f:
        return parse_course_lines(f)
