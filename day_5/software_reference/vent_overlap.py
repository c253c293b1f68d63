#!/usr/bin/env python3
"""
Hydrothermal Venture - Vent Line Overlap Counter

Software reference for the Day 5 puzzle. Each input line describes a line
of hydrothermal vents as a segment between two grid points:

    x1,y1 -> x2,y2

Segments are horizontal, vertical, or diagonal at exactly 45 degrees.

Algorithm:
1. Parse every line into a Segment (fail on the first malformed line)
2. Enumerate the integer grid points covered by each segment
3. Fold all points into a coverage map (point -> number of segments)
4. Count the points covered by two or more segments

Part one only considers horizontal and vertical segments.
Part two considers all of them.
"""

import re
import sys
from collections import Counter
from typing import Dict, Iterable, List, NamedTuple, Optional


SEGMENT_PATTERN = re.compile(r"(\d+),(\d+)\s*->\s*(\d+),(\d+)", re.ASCII)


class SegmentParseError(ValueError):
    """Raised when a line does not match the ``x1,y1 -> x2,y2`` grammar."""

    def __init__(self, line, line_number=None):
        self.line = line
        self.line_number = line_number
        if line_number is None:
            message = f"Invalid segment: {line!r}"
        else:
            message = f"Invalid segment on line {line_number}: {line!r}"
        super().__init__(message)


class InvalidSegmentError(ValueError):
    """Raised for a segment that is neither axis-aligned nor 45-degree diagonal."""


class Point(NamedTuple):
    x: int
    y: int


class Segment(NamedTuple):
    start: Point
    end: Point

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y

    @property
    def is_diagonal(self) -> bool:
        return not (self.is_vertical or self.is_horizontal)

    def reversed(self) -> "Segment":
        return Segment(self.end, self.start)

    def __str__(self):
        return f"{self.start.x},{self.start.y} -> {self.end.x},{self.end.y}"


def parse_segment(line: str) -> Segment:
    """
    Parse a single ``x1,y1 -> x2,y2`` line into a Segment.

    Args:
        line: Text line, optionally surrounded by whitespace

    Returns:
        Segment with the parsed start and end points

    Raises:
        SegmentParseError: If the line does not match the grammar
    """
    match = SEGMENT_PATTERN.fullmatch(line.strip())
    if match is None:
        raise SegmentParseError(line.strip())

    x1, y1, x2, y2 = (int(value) for value in match.groups())
    return Segment(Point(x1, y1), Point(x2, y2))


def parse_segments(lines: Iterable[str]) -> List[Segment]:
    """
    Parse every line into a Segment.

    The first malformed line aborts the whole parse; the raised
    SegmentParseError carries its 1-based line number.
    """
    segments = []
    for line_number, line in enumerate(lines, start=1):
        try:
            segments.append(parse_segment(line))
        except SegmentParseError as e:
            raise SegmentParseError(e.line, line_number) from None
    return segments


def read_input(filename) -> List[Segment]:
    """
    Read input file containing one vent segment per line.

    Args:
        filename: Path to input file

    Returns:
        list: Segments in file order (blank lines are ignored)
    """
    with open(filename) as f:
        return parse_segments(line for line in f if line.strip())


def direction(start: int, end: int) -> int:
    """Step (-1, 0 or +1) that walks from start towards end."""
    if start < end:
        return 1
    if start > end:
        return -1
    return 0


def points_covered(segment: Segment) -> List[Point]:
    """
    Enumerate every grid point covered by a segment, endpoints included.

    Args:
        segment: Horizontal, vertical or 45-degree diagonal segment

    Returns:
        list: Points in order from segment.start to segment.end

    Raises:
        InvalidSegmentError: If the segment has any other slope

    Algorithm:
        1. Compute the per-axis step as sign(end - start)
        2. Number of points is max(|dx|, |dy|) + 1
        3. Starting at start, emit the current point and advance both
           coordinates by their step, that many times
    """
    dx = segment.end.x - segment.start.x
    dy = segment.end.y - segment.start.y

    # The point count formula only holds for these three orientations
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        raise InvalidSegmentError(f"Segment {segment} is not horizontal, vertical or 45-degree diagonal")

    x_step = direction(segment.start.x, segment.end.x)
    y_step = direction(segment.start.y, segment.end.y)
    cover = max(abs(dx), abs(dy)) + 1

    x, y = segment.start
    points = []
    for _ in range(cover):
        points.append(Point(x, y))
        x += x_step
        y += y_step

    return points


def build_coverage(segments: Iterable[Segment]) -> Dict[Point, int]:
    """
    Count how many segments cover each grid point.

    Returns:
        Counter: point -> coverage count (uncovered points are absent)
    """
    coverage = Counter()
    for segment in segments:
        coverage.update(points_covered(segment))
    return coverage


def overlaps_in(coverage: Dict[Point, int]) -> int:
    """Count points of a coverage map covered by at least two segments."""
    return sum(1 for count in coverage.values() if count > 1)


def count_overlaps(segments: Iterable[Segment]) -> int:
    """Count distinct points covered by at least two segments."""
    return overlaps_in(build_coverage(segments))


def axis_aligned(segments: Iterable[Segment]) -> List[Segment]:
    """Keep only horizontal and vertical segments."""
    return [segment for segment in segments if segment.is_vertical or segment.is_horizontal]


def part_one(segments: List[Segment]) -> int:
    return count_overlaps(axis_aligned(segments))


def part_two(segments: List[Segment]) -> int:
    return count_overlaps(segments)


def render_diagram(coverage: Dict[Point, int], width: Optional[int] = None,
                   height: Optional[int] = None) -> str:
    """
    Render a coverage map as the puzzle diagram.

    Top-left corner is 0,0. Each position shows the number of segments
    covering it, or '.' when no segment does.
    """
    if width is None:
        width = max((point.x for point in coverage), default=-1) + 1
    if height is None:
        height = max((point.y for point in coverage), default=-1) + 1

    rows = []
    for y in range(height):
        row = ""
        for x in range(width):
            count = coverage.get(Point(x, y), 0)
            row += str(count) if count else "."
        rows.append(row)
    return "\n".join(rows)


def main():
    """Command-line interface for the vent overlap counter."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Count points where at least two lines of vents overlap'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                        default=sys.stdin,
                        help='Input file with one segment per line (default: stdin)')
    parser.add_argument('--part', '-p', type=int, choices=(1, 2),
                        help='Only solve the given part (default: both)')
    parser.add_argument('--diagram', '-d', action='store_true',
                        help='Print the coverage diagram')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print segment statistics')
    args = parser.parse_args()

    lines = [line.strip() for line in args.input_file if line.strip()]

    try:
        segments = parse_segments(lines)
        parts = [args.part] if args.part else [1, 2]
        selections = {
            1: axis_aligned(segments),
            2: segments,
        }
        coverages = {part: build_coverage(selections[part]) for part in parts}
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        diagonal = sum(1 for segment in segments if segment.is_diagonal)
        print(f"Segments: {len(segments)}", file=sys.stderr)
        print(f"  Axis-aligned: {len(segments) - diagonal}", file=sys.stderr)
        print(f"  Diagonal: {diagonal}", file=sys.stderr)

    for part in parts:
        coverage = coverages[part]
        overlaps = overlaps_in(coverage)
        print(overlaps)

        if args.verbose:
            print(f"\nPart {part}:", file=sys.stderr)
            print(f"  Points covered: {sum(coverage.values())}", file=sys.stderr)
            print(f"  Distinct points: {len(coverage)}", file=sys.stderr)
            print(f"  Overlapping points: {overlaps}", file=sys.stderr)

        if args.diagram:
            print(render_diagram(coverage), file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
