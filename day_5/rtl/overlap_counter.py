"""
Vent Overlap Counter - Hardware RTL Implementation using Amaranth HDL

Rasterizes a stream of vent line segments into an on-chip coverage grid
and counts the grid cells covered by two or more segments.

Architecture:
    Input (segments) → Rasterizer FSM → Coverage BRAM → Overlap counter

Components:
    1. Coverage BRAM: grid_size * grid_size cells of 2-bit saturating
       counters (0 = free, 1 = one segment, 2 = two or more)
       addressed as y * grid_size + x

    2. Rasterizer FSM: walks every point of the current segment
       - READ:  present the cell address to the read port
       - WRITE: store the saturated increment of the read value
       - Both axes step by sign(end - start) until the end point

    3. Overlap counter: increments on every 1 → 2 cell transition,
       so it always equals the number of cells with coverage >= 2

Part selection:
    - diagonals = 0: diagonal segments are accepted and dropped (Part 1)
    - diagonals = 1: every segment is rasterized (Part 2)

Performance:
    2 cycles per covered point, 1 cycle per accepted segment
"""

from amaranth import *
from amaranth.lib.memory import Memory


class OverlapCounter(Elaboratable):
    """
    Hardware module that counts grid points covered by two or more segments.

    Ports:
        Input:
            - x1_in, y1_in: Segment start point
            - x2_in, y2_in: Segment end point
            - valid_in: Segment input valid signal
            - diagonals: Rasterize diagonal segments (Part 2) when high

        Output:
            - overlap_count: Number of cells covered at least twice
            - points_covered: Number of points rasterized so far
            - ready: Module ready to accept a segment
    """

    def __init__(self, grid_size=1000, coord_width=10, count_width=20):
        """
        Initialize the Overlap Counter module.

        Args:
            grid_size: Width and height of the coverage grid (coordinates must be smaller)
            coord_width: Bit width for coordinates (default: 10)
            count_width: Bit width for the output counters (default: 20)
        """
        if grid_size > 2 ** coord_width:
            raise ValueError(f"grid_size {grid_size} does not fit in {coord_width}-bit coordinates")

        self.grid_size = grid_size
        self.coord_width = coord_width
        self.count_width = count_width

        # Input interface
        self.x1_in = Signal(coord_width)
        self.y1_in = Signal(coord_width)
        self.x2_in = Signal(coord_width)
        self.y2_in = Signal(coord_width)
        self.valid_in = Signal()
        self.diagonals = Signal()

        # Output interface
        self.overlap_count = Signal(count_width)
        self.points_covered = Signal(count_width)

        # Control
        self.ready = Signal()

    def elaborate(self, platform):
        m = Module()

        # Coverage grid: 2-bit saturating counter per cell
        m.submodules.coverage = coverage = Memory(
            shape=unsigned(2), depth=self.grid_size * self.grid_size, init=[])
        cell_rd = coverage.read_port()
        cell_wr = coverage.write_port()

        # Current point and end point of the segment being rasterized
        x = Signal(self.coord_width)
        y = Signal(self.coord_width)
        x_end = Signal(self.coord_width)
        y_end = Signal(self.coord_width)

        address = Signal(range(self.grid_size * self.grid_size))
        at_end = Signal()
        is_diagonal = Signal()

        m.d.comb += [
            address.eq(y * self.grid_size + x),
            at_end.eq((x == x_end) & (y == y_end)),
            is_diagonal.eq((self.x1_in != self.x2_in) & (self.y1_in != self.y2_in)),
            cell_rd.addr.eq(address),
            cell_wr.addr.eq(address),
        ]

        with m.FSM():
            with m.State("IDLE"):
                m.d.comb += self.ready.eq(1)

                # Diagonal segments are consumed without rasterizing in Part 1
                with m.If(self.valid_in & (self.diagonals | ~is_diagonal)):
                    m.d.sync += [
                        x.eq(self.x1_in),
                        y.eq(self.y1_in),
                        x_end.eq(self.x2_in),
                        y_end.eq(self.y2_in),
                    ]
                    m.next = "READ"

            with m.State("READ"):
                # Cell value is on cell_rd.data next cycle
                m.next = "WRITE"

            with m.State("WRITE"):
                m.d.comb += [
                    cell_wr.data.eq(Mux(cell_rd.data >= 2, 2, cell_rd.data + 1)),
                    cell_wr.en.eq(1),
                ]
                m.d.sync += self.points_covered.eq(self.points_covered + 1)

                # Count each cell once, when it becomes an overlap
                with m.If(cell_rd.data == 1):
                    m.d.sync += self.overlap_count.eq(self.overlap_count + 1)

                with m.If(at_end):
                    m.next = "IDLE"
                with m.Else():
                    with m.If(x < x_end):
                        m.d.sync += x.eq(x + 1)
                    with m.Elif(x > x_end):
                        m.d.sync += x.eq(x - 1)

                    with m.If(y < y_end):
                        m.d.sync += y.eq(y + 1)
                    with m.Elif(y > y_end):
                        m.d.sync += y.eq(y - 1)

                    m.next = "READ"

        return m
