#!/usr/bin/env python3
"""
Walk a city course and print every checkpoint passed.

Usage:
    python run_walk.py course.txt
    python run_walk.py < course.txt
    python run_walk.py course.txt --map
"""

from __future__ import annotations

import argparse
import logging
import sys

from city_walk import walk
from course_parser import load_course, parse_course_lines
from course_render import format_walk, render_course
from walk_types import CityWalkError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Traverse the course of a city walking event.")
    parser.add_argument(
        "course",
        nargs="?",
        default="-",
        help="Course definition file, one '<intersection>,<checkpoint>' per line (default: stdin).",
    )
    parser.add_argument("--map", action="store_true", help="Draw the course and the trail walked.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the course map.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each step of the walk.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        grid = parse_course_lines(sys.stdin) if args.course == "-" else load_course(args.course)
        result = walk(grid)
        for line in format_walk(result):
            print(line)
    except CityWalkError as e:
        logger.debug("Walk aborted", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.map:
        print()
        print(render_course(grid, result.trail, color=not args.no_color))
    return 0


if __name__ == "__main__":
    sys.exit(main())
