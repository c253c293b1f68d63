"""
OverlapCounter RTL testbench.

Streams vent segments into the hardware rasterizer and compares the
overlap count with the software reference, for both puzzle parts.

Usage:
    python3 -m day_5.amaranth_benchs.rtl_overlap_counter_tests [test_file] [--vcd FILE]

Default test file: day_5/testcases/example_input.txt
"""

import os
import sys

from amaranth.sim import Simulator
from hypothesis import given, settings, strategies as st

from day_5.rtl.overlap_counter import OverlapCounter
from day_5.software_reference.vent_overlap import (
    Point, Segment, axis_aligned, count_overlaps, points_covered, read_input,
)


EXAMPLE_FILE = os.path.join(os.path.dirname(__file__), "..", "testcases", "example_input.txt")


def simulate_overlap_counter(segments, diagonals, grid_size=16, vcd_file=None, max_cycles=200000):
    """
    Simulate the overlap counter hardware on a list of segments.

    Args:
        segments: Segments with coordinates smaller than grid_size
        diagonals: Rasterize diagonal segments (Part 2) when True
        grid_size: Width and height of the hardware coverage grid
        vcd_file: Optional path of a VCD waveform dump
        max_cycles: Simulation budget before giving up

    Returns:
        dict: overlap_count, points_covered and cycles spent
    """
    coord_width = max(1, (grid_size - 1).bit_length())
    dut = OverlapCounter(grid_size=grid_size, coord_width=coord_width)
    result = {}

    async def testbench(ctx):
        cycles = 0

        async def wait_ready():
            nonlocal cycles
            while not ctx.get(dut.ready):
                await ctx.tick()
                cycles += 1
                if cycles > max_cycles:
                    raise RuntimeError(f"Timeout after {max_cycles} cycles")

        ctx.set(dut.diagonals, int(diagonals))

        for segment in segments:
            await wait_ready()
            ctx.set(dut.x1_in, segment.start.x)
            ctx.set(dut.y1_in, segment.start.y)
            ctx.set(dut.x2_in, segment.end.x)
            ctx.set(dut.y2_in, segment.end.y)
            ctx.set(dut.valid_in, 1)
            await ctx.tick()
            cycles += 1
            ctx.set(dut.valid_in, 0)

        # Wait for the last segment to be rasterized
        await wait_ready()

        result["overlap_count"] = ctx.get(dut.overlap_count)
        result["points_covered"] = ctx.get(dut.points_covered)
        result["cycles"] = cycles

    sim = Simulator(dut)
    sim.add_clock(1e-6)
    sim.add_testbench(testbench)

    if vcd_file:
        with sim.write_vcd(vcd_file):
            sim.run()
    else:
        sim.run()

    return result


@st.composite
def grid_segment(draw, grid_size=8):
    """Generate a horizontal, vertical or 45-degree segment inside the grid."""
    x1 = draw(st.integers(min_value=0, max_value=grid_size - 1))
    y1 = draw(st.integers(min_value=0, max_value=grid_size - 1))
    kind = draw(st.sampled_from(["horizontal", "vertical", "diagonal"]))

    if kind == "horizontal":
        x2, y2 = draw(st.integers(min_value=0, max_value=grid_size - 1)), y1
    elif kind == "vertical":
        x2, y2 = x1, draw(st.integers(min_value=0, max_value=grid_size - 1))
    else:
        x_step = draw(st.sampled_from([-1, 1]))
        y_step = draw(st.sampled_from([-1, 1]))
        x_room = grid_size - 1 - x1 if x_step > 0 else x1
        y_room = grid_size - 1 - y1 if y_step > 0 else y1
        length = draw(st.integers(min_value=0, max_value=min(x_room, y_room)))
        x2, y2 = x1 + x_step * length, y1 + y_step * length

    return Segment(Point(x1, y1), Point(x2, y2))


def example_segments():
    return read_input(EXAMPLE_FILE)


def test_example_part_one():
    segments = example_segments()
    hw = simulate_overlap_counter(segments, diagonals=False, grid_size=10)

    assert hw["overlap_count"] == 5
    assert hw["points_covered"] == sum(len(points_covered(s)) for s in axis_aligned(segments))


def test_example_part_two():
    segments = example_segments()
    hw = simulate_overlap_counter(segments, diagonals=True, grid_size=10)

    assert hw["overlap_count"] == 12
    assert hw["points_covered"] == sum(len(points_covered(s)) for s in segments)


def test_single_segment_has_no_overlap():
    hw = simulate_overlap_counter([Segment(Point(0, 0), Point(7, 7))], diagonals=True, grid_size=8)

    assert hw["overlap_count"] == 0
    assert hw["points_covered"] == 8


def test_repeated_segment_overlaps_every_point():
    segment = Segment(Point(6, 1), Point(1, 1))
    hw = simulate_overlap_counter([segment, segment, segment], diagonals=False, grid_size=8)

    # Saturating cells count each point once, however many segments cover it
    assert hw["overlap_count"] == 6


def test_diagonals_dropped_in_part_one():
    segments = [Segment(Point(0, 0), Point(3, 3)), Segment(Point(3, 0), Point(0, 3))]
    hw = simulate_overlap_counter(segments, diagonals=False, grid_size=4)

    assert hw["overlap_count"] == 0
    assert hw["points_covered"] == 0
    assert hw["cycles"] == len(segments)


def test_two_cycles_per_point():
    segments = [Segment(Point(0, 2), Point(5, 2)), Segment(Point(2, 0), Point(2, 5))]
    hw = simulate_overlap_counter(segments, diagonals=False, grid_size=8)

    assert hw["overlap_count"] == 1
    assert hw["cycles"] == len(segments) + 2 * hw["points_covered"]


@given(st.lists(grid_segment(), min_size=0, max_size=8), st.booleans())
@settings(max_examples=25, deadline=None)
def test_matches_software_reference(segments, diagonals):
    """
    Property: hardware overlap count equals the software reference count
    for the same part.
    """
    selected = segments if diagonals else axis_aligned(segments)
    hw = simulate_overlap_counter(segments, diagonals=diagonals, grid_size=8)

    assert hw["overlap_count"] == count_overlaps(selected), \
        f"Mismatch for {[str(s) for s in segments]}: HW={hw['overlap_count']}"


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Compare OverlapCounter RTL against software reference')
    parser.add_argument('test_file', nargs='?', default=EXAMPLE_FILE,
                        help='Input file with one segment per line')
    parser.add_argument('--vcd', help='Write a VCD waveform of the Part 2 simulation')
    args = parser.parse_args()

    print("=" * 80)
    print("OverlapCounter RTL Verification")
    print("=" * 80)

    print("\n[1] Loading input data...")
    print(f"    File: {args.test_file}")
    segments = read_input(args.test_file)
    print(f"    Loaded {len(segments)} segments")

    grid_size = max(max(s.start.x, s.start.y, s.end.x, s.end.y) for s in segments) + 1
    print(f"    Grid size: {grid_size} x {grid_size}")

    all_match = True
    for part, diagonals in ((1, False), (2, True)):
        print(f"\n[{part + 1}] Part {part}...")
        selected = segments if diagonals else axis_aligned(segments)
        sw_count = count_overlaps(selected)
        print(f"    Software: {sw_count} overlapping points")

        vcd_file = args.vcd if diagonals else None
        hw = simulate_overlap_counter(segments, diagonals, grid_size=grid_size, vcd_file=vcd_file)
        print(f"    Hardware: {hw['overlap_count']} overlapping points "
              f"({hw['points_covered']} points, {hw['cycles']} cycles)")

        if hw["overlap_count"] == sw_count:
            print("    [OK] Hardware and software agree")
        else:
            print(f"    [BAD] Mismatch! HW={hw['overlap_count']}, SW={sw_count}")
            all_match = False

    return 0 if all_match else 1


if __name__ == "__main__":
    sys.exit(main())
