"""
Property-based tests for the vent overlap counter using Hypothesis.

This module verifies the segment parser, point enumerator and overlap
counter by testing invariant properties that must hold for all valid
segments, plus the worked puzzle example.
"""

import io
import os
import sys

import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.strategies import integers, lists

from day_5.software_reference.vent_overlap import (
    InvalidSegmentError, Point, Segment, SegmentParseError, axis_aligned, build_coverage,
    count_overlaps, main, overlaps_in, parse_segment, parse_segments, part_one, part_two,
    points_covered, read_input, render_diagram,
)


EXAMPLE_FILE = os.path.join(os.path.dirname(__file__), "..", "testcases", "example_input.txt")

coordinates = integers(min_value=0, max_value=1000)


# Strategy for generating horizontal, vertical or 45-degree segments
@st.composite
def valid_segment(draw):
    """Generate a segment whose slope is 0, infinite or +/-1."""
    x1 = draw(coordinates)
    y1 = draw(coordinates)
    kind = draw(st.sampled_from(["horizontal", "vertical", "diagonal"]))

    if kind == "horizontal":
        return Segment(Point(x1, y1), Point(draw(coordinates), y1))
    if kind == "vertical":
        return Segment(Point(x1, y1), Point(x1, draw(coordinates)))

    x2 = draw(coordinates)
    length = abs(x2 - x1)
    y_step = draw(st.sampled_from([-1, 1]))
    # Keep the end point non-negative
    if y1 - length < 0:
        y_step = 1
    return Segment(Point(x1, y1), Point(x2, y1 + y_step * length))


segments_strategy = lists(valid_segment(), min_size=0, max_size=20)


def brute_force_overlaps(segments):
    """Count overlaps by checking every point against every segment."""
    covered = [set(points_covered(segment)) for segment in segments]
    all_points = set().union(*covered)
    return sum(1 for point in all_points if sum(point in points for points in covered) > 1)


# Property 1: Degenerate segment covers a single point
@given(coordinates, coordinates)
def test_single_point_segment(x, y):
    """
    Property: A segment with start == end covers exactly its start point.
    """
    point = Point(x, y)
    assert points_covered(Segment(point, point)) == [point]


# Property 2: Endpoints and length
@given(valid_segment())
@settings(max_examples=500)
def test_endpoints_and_length(segment):
    """
    Property: Enumeration starts at start, ends at end and yields
    max(|dx|, |dy|) + 1 points.
    """
    points = points_covered(segment)
    dx = segment.end.x - segment.start.x
    dy = segment.end.y - segment.start.y

    assert points[0] == segment.start
    assert points[-1] == segment.end
    assert len(points) == max(abs(dx), abs(dy)) + 1


# Property 3: Consecutive points are grid neighbours
@given(valid_segment())
def test_points_are_contiguous(segment):
    """
    Property: Consecutive points differ by at most one step on each axis.
    """
    points = points_covered(segment)
    for a, b in zip(points, points[1:]):
        assert abs(a.x - b.x) <= 1 and abs(a.y - b.y) <= 1
        assert a != b


# Property 4: Reversal symmetry
@given(valid_segment())
def test_reversed_segment(segment):
    """
    Property: Reversing a segment reverses its point sequence.
    """
    assert points_covered(segment.reversed()) == list(reversed(points_covered(segment)))


# Property 5: Order independence
@given(segments_strategy, st.randoms())
@settings(max_examples=200)
def test_order_independence(segments, random):
    """
    Property: The overlap count does not depend on segment order.
    """
    shuffled = list(segments)
    random.shuffle(shuffled)

    assert count_overlaps(segments) == count_overlaps(shuffled)


# Property 6: Single segment never overlaps
@given(valid_segment())
def test_single_segment_no_overlap(segment):
    """
    Property: A single segment cannot cover any point twice.
    """
    assert count_overlaps([segment]) == 0


# Property 7: Coverage counts match a brute-force count
@given(segments_strategy)
@settings(max_examples=100)
def test_matches_brute_force(segments):
    """
    Property: count_overlaps agrees with an independent brute-force count.
    """
    assert count_overlaps(segments) == brute_force_overlaps(segments)


# Property 8: Coverage map totals
@given(segments_strategy)
def test_coverage_totals(segments):
    """
    Property: Coverage counts are positive and sum to the number of
    enumerated points.
    """
    coverage = build_coverage(segments)

    assert all(count >= 1 for count in coverage.values())
    assert sum(coverage.values()) == sum(len(points_covered(s)) for s in segments)


# Property 9: Parsing the printed form gives the segment back
@given(valid_segment())
def test_parse_printed_segment(segment):
    assert parse_segment(str(segment)) == segment


# Property 10: Part one is part two restricted to axis-aligned segments
@given(segments_strategy)
def test_part_one_ignores_diagonals(segments):
    assert part_one(segments) == part_two(axis_aligned(segments))


# Concrete test cases for the puzzle example and edge cases
def test_example_part_one():
    """Horizontal and vertical lines of the example overlap at 5 points."""
    assert part_one(read_input(EXAMPLE_FILE)) == 5


def test_example_part_two():
    """All lines of the example overlap at 12 points."""
    assert part_two(read_input(EXAMPLE_FILE)) == 12


def test_example_axis_aligned_selection():
    segments = read_input(EXAMPLE_FILE)
    assert [str(s) for s in axis_aligned(segments)] == [
        "0,9 -> 5,9", "9,4 -> 3,4", "2,2 -> 2,1", "7,0 -> 7,4", "0,9 -> 2,9", "3,4 -> 1,4",
    ]


def test_example_diagram():
    segments = read_input(EXAMPLE_FILE)
    diagram = render_diagram(build_coverage(axis_aligned(segments)), width=10, height=10)

    assert diagram.split("\n") == [
        ".......1..",
        "..1....1..",
        "..1....1..",
        ".......1..",
        ".112111211",
        "..........",
        "..........",
        "..........",
        "..........",
        "222111....",
    ]


def test_full_example_diagram():
    diagram = render_diagram(build_coverage(read_input(EXAMPLE_FILE)))

    assert diagram.split("\n") == [
        "1.1....11.",
        ".111...2..",
        "..2.1.111.",
        "...1.2.2..",
        ".112313211",
        "...1.2....",
        "..1...1...",
        ".1.....1..",
        "1.......1.",
        "222111....",
    ]


def test_empty_diagram():
    assert render_diagram({}) == ""


def test_points_covered_examples():
    """Worked examples from the puzzle text."""
    assert points_covered(parse_segment("1,1 -> 1,3")) == [Point(1, 1), Point(1, 2), Point(1, 3)]
    assert points_covered(parse_segment("9,7 -> 7,7")) == [Point(9, 7), Point(8, 7), Point(7, 7)]
    assert points_covered(parse_segment("1,1 -> 3,3")) == [Point(1, 1), Point(2, 2), Point(3, 3)]
    assert points_covered(parse_segment("9,7 -> 7,9")) == [Point(9, 7), Point(8, 8), Point(7, 9)]


def test_orientation():
    assert parse_segment("7,0 -> 7,4").is_vertical
    assert parse_segment("9,4 -> 3,4").is_horizontal
    assert parse_segment("8,0 -> 0,8").is_diagonal
    assert not parse_segment("3,3 -> 3,3").is_diagonal


@pytest.mark.parametrize("line", [
    "0,9 -> 5,9",
    "0,9->5,9",
    "  0,9   ->   5,9\n",
    "123456789,0 -> 123456789,5",
])
def test_parse_accepts(line):
    segment = parse_segment(line)
    assert segment.start.y == segment.end.y or segment.start.x == segment.end.x


@pytest.mark.parametrize("line", [
    "",
    "0,9 - 5,9",
    "0,9 -> 5",
    "0 ,9 -> 5,9",
    "-1,9 -> 5,9",
    "0,9 -> 5,9 -> 6,9",
    "a,b -> c,d",
    "0.5,9 -> 5,9",
    "٣,0 -> ５,0",
    "0,0 ->\u20035,0",
])
def test_parse_rejects(line):
    with pytest.raises(SegmentParseError):
        parse_segment(line)


def test_parse_error_reports_line_number():
    with pytest.raises(SegmentParseError) as excinfo:
        parse_segments(["0,9 -> 5,9", "8,0 -> 0,8", "oops"])

    assert excinfo.value.line_number == 3
    assert "line 3" in str(excinfo.value)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_segments(["0,9 -> 5,9", "garbage"])


def test_invalid_slope_rejected():
    with pytest.raises(InvalidSegmentError):
        points_covered(parse_segment("0,0 -> 2,1"))


def test_empty_input():
    assert count_overlaps([]) == 0
    assert parse_segments([]) == []


def test_parse_error_shows_stripped_line(tmp_path):
    input_file = tmp_path / "input.txt"
    input_file.write_text("0,0 -> 1,1\nbad\n")

    with pytest.raises(SegmentParseError) as excinfo:
        read_input(input_file)

    assert excinfo.value.line == "bad"
    assert str(excinfo.value) == "Invalid segment on line 2: 'bad'"


def test_overlaps_in_coverage_map():
    coverage = {Point(0, 0): 1, Point(1, 1): 2, Point(2, 2): 5}
    assert overlaps_in(coverage) == 2
    assert overlaps_in({}) == 0


# Command-line interface
def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["vent_overlap", *args])
    return main()


def test_cli_both_parts(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE) == 0

    out, err = capsys.readouterr()
    assert out == "5\n12\n"
    assert err == ""


def test_cli_part_one(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE, "--part", "1") == 0
    assert capsys.readouterr().out == "5\n"


def test_cli_diagram_on_stderr(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE, "--part", "2", "--diagram") == 0

    out, err = capsys.readouterr()
    assert out == "12\n"
    assert err.split("\n")[:3] == ["1.1....11.", ".111...2..", "..2.1.111."]


def test_cli_verbose_on_stderr(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE, "--verbose") == 0

    out, err = capsys.readouterr()
    assert out == "5\n12\n"
    assert "Segments: 10" in err
    assert "Diagonal: 4" in err
    assert "Overlapping points: 12" in err


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("0,0 -> 2,2\n2,0 -> 0,2\n\n"))

    assert run_main(monkeypatch) == 0
    assert capsys.readouterr().out == "0\n1\n"


def test_cli_parse_error(monkeypatch, capsys, tmp_path):
    input_file = tmp_path / "input.txt"
    input_file.write_text("0,0 -> 1,1\nbad\n")

    assert run_main(monkeypatch, str(input_file)) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err == "Error: Invalid segment on line 2: 'bad'\n"


if __name__ == "__main__":
    # Run pytest
    pytest.main([__file__, "-v", "--tb=short"])
