#!/usr/bin/env python3
"""
Sonar Sweep - Count Depth Increases

Part one counts how many depth measurements are larger than the
previous measurement. Part two does the same on the sums of a
three-measurement sliding window, which filters out noise.
"""

import sys


def read_input(filename):
    """
    Read input file containing one depth measurement per line.

    Args:
        filename: Path to input file

    Returns:
        list: Depth measurements as integers (blank lines are ignored)
    """
    with open(filename) as f:
        return [int(line) for line in f if line.strip()]


def count_increases(values):
    """Count values strictly larger than the value before them."""
    return sum(1 for previous, current in zip(values, values[1:]) if current > previous)


def window_sums(values, size=3):
    """
    Sum every full sliding window of the given size.

    Args:
        values: List of integers
        size: Window length (default: 3)

    Returns:
        list: len(values) - size + 1 sums, or none if there are fewer values than size
    """
    if size < 1:
        raise ValueError(f"Window size must be positive, got {size}")

    return [sum(values[i:i + size]) for i in range(len(values) - size + 1)]


def count_window_increases(values, size=3):
    return count_increases(window_sums(values, size))


def annotate(values, noun="measurement"):
    """
    Describe how each value compares with the previous one.

    Yields lines such as "200 (increased)"; the first value has no
    predecessor and is marked N/A.
    """
    for i, value in enumerate(values):
        if i == 0:
            yield f"{value} (N/A - no previous {noun})"
        elif value > values[i - 1]:
            yield f"{value} (increased)"
        elif value < values[i - 1]:
            yield f"{value} (decreased)"
        else:
            yield f"{value} (no change)"


def main():
    """Command-line interface for the sonar sweep."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Count how often the sea floor depth increases'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                        default=sys.stdin,
                        help='Input file with one depth per line (default: stdin)')
    parser.add_argument('--window', '-w', type=int, default=3,
                        help='Sliding window size for part two (default: 3)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print the annotated measurement reports')
    args = parser.parse_args()

    try:
        depths = [int(line) for line in args.input_file if line.strip()]
        sums = window_sums(depths, args.window)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(count_increases(depths))
    print(count_increases(sums))

    if args.verbose:
        print("\nMeasurements:", file=sys.stderr)
        for line in annotate(depths, "measurement"):
            print(f"  {line}", file=sys.stderr)
        print("\nWindow sums:", file=sys.stderr)
        for line in annotate(sums, "sum"):
            print(f"  {line}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
